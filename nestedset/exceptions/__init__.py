"""异常模块

提供树结构操作的异常类体系。所有异常都在修改任何标号之前抛出，
捕获后树保持操作前的状态。

使用示例:
    from nestedset import NestedSet, Node
    from nestedset.exceptions import NestedSetException, CycleNotAllowed

    try:
        ns.move(parent, child)
    except CycleNotAllowed as e:
        print(e.code, e.extra)
"""

from .exceptions import (
    # ===== 推荐使用 =====
    Err,                            # 异常快捷创建类
    ErrorCode,                      # 错误代码枚举
    ErrorCodeType,

    # ===== 异常类 =====
    NestedSetException,             # 异常基类
    ParentNotFound,
    NodeNotFound,
    NodeAlreadyExists,
    LevelMismatch,
    OutOfParentBounds,
    CannotDeleteRoot,
    CycleNotAllowed,
    InvalidTreeError,
)

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorCodeType",
    "NestedSetException",
    "ParentNotFound",
    "NodeNotFound",
    "NodeAlreadyExists",
    "LevelMismatch",
    "OutOfParentBounds",
    "CannotDeleteRoot",
    "CycleNotAllowed",
    "InvalidTreeError",
]
