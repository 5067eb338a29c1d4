"""配置模块

提供配置管理功能：
- NestedSetSettings: 树行为配置（根节点名称、不变式校验）
- LoggingSettings: 日志配置
- ConfigLoader / load_yaml_config: YAML 配置加载

配置优先级: 显式参数 > YAML 文件 > 环境变量 > 默认值
"""

from .settings import (
    NestedSetSettings,
    LoggingSettings,
)

from .loader import (
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    "NestedSetSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_yaml_config",
]
