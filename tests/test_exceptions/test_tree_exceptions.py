"""测试树操作异常类"""

import pytest

from nestedset.exceptions import (
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


class TestNestedSetException:
    """测试 NestedSetException 基类"""

    def test_basic_exception(self):
        exc = NestedSetException("测试错误")

        assert str(exc) == "测试错误"
        assert exc.message == "测试错误"
        assert exc.code == "TREE_ERROR"
        assert exc.details == []
        assert exc.extra == {}

    def test_default_message(self):
        exc = NestedSetException()

        assert exc.message == "树操作失败"

    def test_exception_with_extra(self):
        exc = NestedSetException("测试错误", node_id=3, parent_id=7)

        assert exc.extra == {"node_id": 3, "parent_id": 7}

    def test_exception_to_dict(self):
        exc = NestedSetException("测试错误", code="CUSTOM", details=["d"], node_id=1)

        assert exc.to_dict() == {
            "message": "测试错误",
            "code": "CUSTOM",
            "details": ["d"],
            "extra": {"node_id": 1},
        }

    def test_to_dict_does_not_share_mutable_references(self):
        """测试 to_dict 返回值与异常内部状态解耦"""
        exc = NestedSetException("测试错误", details=["原始"], meta={"k": "v"})

        data = exc.to_dict()
        data["details"].append("外部修改")
        data["extra"]["meta"]["k"] = "mutated"

        assert exc.details == ["原始"]
        assert exc.extra["meta"]["k"] == "v"

    def test_exception_repr(self):
        exc = NestedSetException("测试错误", code="TEST_ERROR")

        repr_str = repr(exc)

        assert "NestedSetException" in repr_str
        assert "message='测试错误'" in repr_str
        assert "code='TEST_ERROR'" in repr_str


class TestErrorKinds:
    """测试各类错误可区分"""

    @pytest.mark.parametrize("exc_class, code", [
        (ParentNotFound, ErrorCode.PARENT_NOT_FOUND),
        (NodeNotFound, ErrorCode.NODE_NOT_FOUND),
        (NodeAlreadyExists, ErrorCode.NODE_ALREADY_EXISTS),
        (LevelMismatch, ErrorCode.LEVEL_MISMATCH),
        (OutOfParentBounds, ErrorCode.OUT_OF_PARENT_BOUNDS),
        (CannotDeleteRoot, ErrorCode.CANNOT_DELETE_ROOT),
        (CycleNotAllowed, ErrorCode.CYCLE_NOT_ALLOWED),
        (InvalidTreeError, ErrorCode.INVALID_TREE),
    ])
    def test_default_code(self, exc_class, code):
        exc = exc_class()

        assert isinstance(exc, NestedSetException)
        assert exc.code == code
        assert exc.message

    def test_error_code_is_str(self):
        assert ErrorCode.NODE_NOT_FOUND == "NODE_NOT_FOUND"


class TestErr:
    """测试 Err 快捷创建"""

    @pytest.mark.parametrize("factory, exc_class", [
        (Err.parent_not_found, ParentNotFound),
        (Err.node_not_found, NodeNotFound),
        (Err.already_exists, NodeAlreadyExists),
        (Err.level_mismatch, LevelMismatch),
        (Err.out_of_bounds, OutOfParentBounds),
        (Err.delete_root, CannotDeleteRoot),
        (Err.cycle, CycleNotAllowed),
        (Err.invalid, InvalidTreeError),
    ])
    def test_factory(self, factory, exc_class):
        exc = factory(node_id=5)

        assert type(exc) is exc_class
        assert exc.extra == {"node_id": 5}

    def test_factory_with_message(self):
        exc = Err.cycle("不能移动到子节点下")

        assert exc.message == "不能移动到子节点下"
        assert exc.code == ErrorCode.CYCLE_NOT_ALLOWED

    def test_invalid_with_details(self):
        exc = Err.invalid(details=["a", "b"])

        assert exc.details == ["a", "b"]
