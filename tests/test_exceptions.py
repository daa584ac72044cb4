"""
测试异常体系
"""
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fish_tree.exceptions import (
    BaseError, TreeError, NodeError, IndexOutOfRangeError, NotFoundError,
    InvalidStateError, VariantNotFoundError, VariantError, TreeImportError
)


def test_exception_creation():
    """测试异常创建"""
    error = IndexOutOfRangeError(5, 2, operation="replace_child_at")

    assert error.code == "INDEX_OUT_OF_RANGE"
    assert "5" in str(error)
    assert str(error).startswith("[INDEX_OUT_OF_RANGE]")
    assert error.details == {"index": 5, "size": 2, "operation": "replace_child_at"}


def test_exception_inheritance():
    """测试异常继承关系"""
    assert issubclass(NotFoundError, NodeError)
    assert issubclass(NodeError, TreeError)
    assert issubclass(InvalidStateError, BaseError)
    assert issubclass(VariantNotFoundError, VariantError)
    assert issubclass(TreeImportError, BaseError)


def test_exception_to_dict():
    """测试异常序列化"""
    error = NotFoundError(node_id="A")
    data = error.to_dict()

    assert data["code"] == "CHILD_NOT_FOUND"
    assert data["message"] == "Child not found"
    assert data["details"] == {"node_id": "A"}
    assert "timestamp" in data
