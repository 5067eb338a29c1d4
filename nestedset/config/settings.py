"""
配置模块
提供库的默认配置，使用方可以继承并覆盖
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class NestedSetSettings(BaseSettings):
    """嵌套集合配置

    使用示例:
        from nestedset import NestedSet
        from nestedset.config import NestedSetSettings

        settings = NestedSetSettings(root_name="catalog", check_invariants=True)
        ns = NestedSet(settings=settings)

    配置说明:
        - root_name: 新建空树时根节点的名称
        - check_invariants: 开启后，批量导入和每次结构修改完成后都会调用 validate()，
                            标号不一致时抛出 InvalidTreeError。每次检查为 O(n log n)，
                            适合测试和排查问题时开启
    """
    root_name: str = Field(default="root", description="根节点名称")
    check_invariants: bool = Field(default=False, description="每次修改后校验全部不变式")

    class Config:
        env_prefix = "NESTEDSET_"


class LoggingSettings(BaseSettings):
    """日志配置

    使用示例:
        from nestedset.config import LoggingSettings
        from nestedset.log import setup_logging

        setup_logging(LoggingSettings(level="DEBUG", file_path="logs/tree.log"))
    """
    level: str = Field(default="WARNING", description="日志级别")
    file_path: str = Field(default="", description="日志文件路径，为空表示不写文件")
    enable_console: bool = Field(default=True, description="是否启用控制台输出")
    log_format: str = Field(default="", description="日志格式，为空使用默认格式")
    use_microseconds: bool = Field(default=True, description="时间戳是否精确到微秒")

    class Config:
        env_prefix = "NESTEDSET_LOG_"
