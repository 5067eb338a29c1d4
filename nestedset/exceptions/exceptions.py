"""树操作异常类定义

定义嵌套集合各项结构操作使用的异常类体系。
"""

import copy
from typing import Optional, List, Any, Dict, Union
from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用和比较。

    使用示例:
        from nestedset import ErrorCode, NodeNotFound

        try:
            ns.delete(node)
        except NodeNotFound as e:
            if e.code == ErrorCode.NODE_NOT_FOUND:
                ...
    """

    # ==================== 通用错误 ====================
    TREE_ERROR = "TREE_ERROR"
    INVALID_TREE = "INVALID_TREE"

    # ==================== 节点查找 ====================
    PARENT_NOT_FOUND = "PARENT_NOT_FOUND"
    NODE_NOT_FOUND = "NODE_NOT_FOUND"
    NODE_ALREADY_EXISTS = "NODE_ALREADY_EXISTS"

    # ==================== 结构约束 ====================
    LEVEL_MISMATCH = "LEVEL_MISMATCH"
    OUT_OF_PARENT_BOUNDS = "OUT_OF_PARENT_BOUNDS"
    CANNOT_DELETE_ROOT = "CANNOT_DELETE_ROOT"
    CYCLE_NOT_ALLOWED = "CYCLE_NOT_ALLOWED"


# 类型别名，支持枚举和字符串
ErrorCodeType = Union[str, ErrorCode]


class NestedSetException(Exception):
    """树操作异常基类

    所有结构操作抛出的异常都继承此类。异常总是在任何标号被修改之前抛出，
    因此捕获后树仍保持调用前的状态。

    属性:
        message: 错误消息
        code: 错误代码（ErrorCode 枚举或字符串）
        details: 详细错误信息列表
        extra: 额外的上下文信息（如 node_id）
    """

    default_message: str = "树操作失败"
    default_code: ErrorCodeType = ErrorCode.TREE_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[ErrorCodeType] = None,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or []
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式

        Returns:
            包含异常信息的字典
        """
        return {
            "message": self.message,
            "code": self.code,
            # 返回深拷贝，调用方修改返回值不影响异常对象
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r})"
        )


class ParentNotFound(NestedSetException):
    """指定的父节点未在树中注册"""

    default_message = "父节点不存在"
    default_code = ErrorCode.PARENT_NOT_FOUND


class NodeNotFound(NestedSetException):
    """指定的节点未在树中注册"""

    default_message = "节点不存在"
    default_code = ErrorCode.NODE_NOT_FOUND


class NodeAlreadyExists(NestedSetException):
    """节点已经注册在树中，不能重复添加

    同样用于节点 id 与树中另一个节点冲突的情况。
    """

    default_message = "节点已存在"
    default_code = ErrorCode.NODE_ALREADY_EXISTS


class LevelMismatch(NestedSetException):
    """shift 的两个节点不在同一层级"""

    default_message = "节点层级不一致"
    default_code = ErrorCode.LEVEL_MISMATCH


class OutOfParentBounds(NestedSetException):
    """shift 的参照节点不在被移动节点的父节点范围内（不是兄弟节点）"""

    default_message = "参照节点不在父节点范围内"
    default_code = ErrorCode.OUT_OF_PARENT_BOUNDS


class CannotDeleteRoot(NestedSetException):
    """根节点不能被删除"""

    default_message = "不能删除根节点"
    default_code = ErrorCode.CANNOT_DELETE_ROOT


class CycleNotAllowed(NestedSetException):
    """不能将节点移动到自身或其子孙节点下"""

    default_message = "不能将节点移动到其自身或子孙节点下"
    default_code = ErrorCode.CYCLE_NOT_ALLOWED


class InvalidTreeError(NestedSetException):
    """标号不满足嵌套集合不变式

    由 NestedSet.validate() 抛出，details 中列出每一处违规。
    """

    default_message = "树结构标号无效"
    default_code = ErrorCode.INVALID_TREE


class Err:
    """异常快捷创建类

    使用示例:
        from nestedset import Err

        raise Err.node_not_found(node_id=12)
        raise Err.cycle("不能移动到子节点下", node_id=3, parent_id=7)
    """

    @staticmethod
    def parent_not_found(message: str = None, **kwargs) -> ParentNotFound:
        """父节点不存在"""
        return ParentNotFound(message, **kwargs)

    @staticmethod
    def node_not_found(message: str = None, **kwargs) -> NodeNotFound:
        """节点不存在"""
        return NodeNotFound(message, **kwargs)

    @staticmethod
    def already_exists(message: str = None, **kwargs) -> NodeAlreadyExists:
        """节点已存在"""
        return NodeAlreadyExists(message, **kwargs)

    @staticmethod
    def level_mismatch(message: str = None, **kwargs) -> LevelMismatch:
        """层级不一致"""
        return LevelMismatch(message, **kwargs)

    @staticmethod
    def out_of_bounds(message: str = None, **kwargs) -> OutOfParentBounds:
        """超出父节点范围"""
        return OutOfParentBounds(message, **kwargs)

    @staticmethod
    def delete_root(message: str = None, **kwargs) -> CannotDeleteRoot:
        """删除根节点"""
        return CannotDeleteRoot(message, **kwargs)

    @staticmethod
    def cycle(message: str = None, **kwargs) -> CycleNotAllowed:
        """循环移动"""
        return CycleNotAllowed(message, **kwargs)

    @staticmethod
    def invalid(message: str = None, **kwargs) -> InvalidTreeError:
        """不变式被破坏"""
        return InvalidTreeError(message, **kwargs)
