"""
nestedset - 嵌套集合（Nested Set）树

用 (level, left, right) 三个整数标号保存树结构，祖先、子孙、子树和
兄弟顺序的判断只需整数比较。提供插入、级联删除、移动、同级调整和
子树提取五种结构操作，并保证每次操作后标号恰好是 0..2N-1 的排列。
"""

from .version import __version__, __author__, __description__

# 核心
from .node import Node
from .nested_set import NestedSet

# 异常
from .exceptions import (
    Err,
    ErrorCode,
    NestedSetException,
    ParentNotFound,
    NodeNotFound,
    NodeAlreadyExists,
    LevelMismatch,
    OutOfParentBounds,
    CannotDeleteRoot,
    CycleNotAllowed,
    InvalidTreeError,
)

# 配置
from .config import (
    NestedSetSettings,
    LoggingSettings,
    load_yaml_config,
)

# 日志
from .log import (
    get_logger,
    setup_logger,
    setup_logging,
)

# 工具函数
from .tree_utils import (
    nodes_from_records,
    load_records,
    to_records,
    build_tree_list,
    from_tree_list,
)

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    # 核心
    "Node",
    "NestedSet",
    # 异常
    "Err",
    "ErrorCode",
    "NestedSetException",
    "ParentNotFound",
    "NodeNotFound",
    "NodeAlreadyExists",
    "LevelMismatch",
    "OutOfParentBounds",
    "CannotDeleteRoot",
    "CycleNotAllowed",
    "InvalidTreeError",
    # 配置
    "NestedSetSettings",
    "LoggingSettings",
    "load_yaml_config",
    # 日志
    "get_logger",
    "setup_logger",
    "setup_logging",
    # 工具函数
    "nodes_from_records",
    "load_records",
    "to_records",
    "build_tree_list",
    "from_tree_list",
]
