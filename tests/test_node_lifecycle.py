"""
测试节点生命周期 - destroy 与销毁后的状态保护
"""
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fish_tree.core.node.entity import TreeNode
from fish_tree.exceptions import InvalidStateError, NotFoundError


class TestDestroy:
    """测试 destroy"""

    def test_new_node_is_live(self, root):
        assert not root.is_destroyed()
        assert root.get_parent() is None
        assert root.get_children() == []

    def test_destroy_removes_from_parent(self, root, a, b):
        root.add_child(a)
        root.add_child(b)

        a.destroy()

        assert a.is_destroyed()
        assert root.get_children() == [b]

    def test_destroy_orphans_children(self, root, a, b):
        root.add_child(a)
        a.add_child(b)

        a.destroy()

        assert not b.is_destroyed()
        assert b.get_parent() is None
        assert root.get_children() == []

    def test_destroy_cascade(self, root, a, b, c):
        root.add_child(a)
        a.add_child(b)
        b.add_child(c)

        a.destroy(cascade=True)

        assert a.is_destroyed()
        assert b.is_destroyed()
        assert c.is_destroyed()
        assert root.get_children() == []

    def test_destroy_root(self, root, a):
        root.add_child(a)
        root.destroy()

        assert root.is_destroyed()
        assert a.get_parent() is None

    def test_destroyed_node_keeps_nothing(self, root, a):
        root.add_child(a)
        root.destroy()

        data = root.to_dict()
        assert data['children'] == []
        assert data['parent_id'] is None
        assert data['destroyed'] is True
        assert data['destroyed_at'] is not None

    def test_destroy_with_inconsistent_parent(self, root, a):
        root.add_child(a)
        # 直接篡改内部列表，父节点记录不一致
        root.get_children().clear()

        with pytest.raises(NotFoundError):
            a.destroy()


class TestDestroyedState:
    """测试销毁后的操作保护"""

    @pytest.fixture
    def dead(self):
        node = TreeNode(node_id="dead")
        node.destroy()
        return node

    def test_destroy_twice(self, dead):
        with pytest.raises(InvalidStateError):
            dead.destroy()

    @pytest.mark.parametrize("operation, args", [
        ("get_children", ()),
        ("get_parent", ()),
        ("get_child_at", (0,)),
        ("remove_child_at", (0,)),
        ("get_ancestors", ()),
        ("get_descendants", ()),
        ("get_root", ()),
    ])
    def test_operations_fail(self, dead, operation, args):
        with pytest.raises(InvalidStateError):
            getattr(dead, operation)(*args)

    def test_mutators_with_child_fail(self, dead, a):
        with pytest.raises(InvalidStateError):
            dead.add_child(a)
        with pytest.raises(InvalidStateError):
            dead.remove_child(a)
        with pytest.raises(InvalidStateError):
            dead.get_child_index(a)
        with pytest.raises(InvalidStateError):
            dead.replace_child_at(a, 0)

    def test_destroyed_node_cannot_be_reused(self, dead, root, a):
        with pytest.raises(InvalidStateError):
            root.add_child(dead)

        root.add_child(a)
        with pytest.raises(InvalidStateError):
            root.replace_child_at(dead, 0)
        assert root.get_children() == [a]

    def test_is_destroyed_still_works(self, dead):
        assert dead.is_destroyed() is True

    def test_error_details(self, dead):
        with pytest.raises(InvalidStateError) as exc_info:
            dead.get_children()

        error = exc_info.value
        assert error.code == "INVALID_STATE"
        assert error.details["node_id"] == "dead"
        assert error.details["operation"] == "get_children"
