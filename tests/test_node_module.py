"""
测试节点工厂和节点仓库
"""
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fish_tree.core.node import TreeNode, NodeFactory, NodeRepository
from fish_tree.data.variants import RedFish, TwoFish
from fish_tree.exceptions import (
    NodeNotFoundError, TreeError, InvalidArgumentError, VariantNotFoundError, NodeError
)


class TestNodeFactory:

    @pytest.fixture
    def factory(self):
        return NodeFactory()

    def test_create_node_without_payload(self, factory):
        node = factory.create_node()
        assert node.payload is None
        assert node.variant is None
        assert factory.get_node(node.node_id) is node

    def test_create_node_with_payload_args(self, factory):
        node = factory.create_node("two_fish", "a", "b", node_id="tf")
        assert node.node_id == "tf"
        assert isinstance(node.payload, TwoFish)
        assert node.payload.first == "a"

    def test_two_arg_variant_with_one_arg(self, factory):
        with pytest.raises(InvalidArgumentError):
            factory.create_node("two_fish", "a")
        assert factory.get_node_count() == 0

    def test_unknown_variant(self, factory):
        with pytest.raises(VariantNotFoundError):
            factory.create_node("green_fish")

    def test_create_child_node(self, factory):
        parent = factory.create_node("one_fish")
        child = factory.create_child_node(parent, "red_fish", x=5)

        assert parent.get_children() == [child]
        assert child.payload.x == 5

    def test_find_by_variant_and_forget(self, factory):
        red = factory.create_node("red_fish")
        factory.create_node("blue_fish")

        assert factory.find_nodes_by_variant("red_fish") == [red]
        factory.forget_node(red.node_id)
        assert factory.find_nodes_by_variant("red_fish") == []

        with pytest.raises(NodeNotFoundError):
            factory.forget_node(red.node_id)

    def test_register_external_node(self, factory):
        node = TreeNode(node_id="ext")
        assert factory.register_node(node) is True
        assert factory.get_node("ext") is node

    def test_register_node_does_not_overwrite(self, factory):
        original = factory.create_node(node_id="dup")

        assert factory.register_node(TreeNode(node_id="dup")) is False
        assert factory.get_node("dup") is original


class TestNodeRepository:

    @pytest.fixture
    def repo(self):
        """R -> [A -> [C], B]"""
        root = TreeNode(node_id="R", payload=RedFish())
        a = TreeNode(node_id="A")
        b = TreeNode(node_id="B")
        c = TreeNode(node_id="C")
        root.add_child(a)
        root.add_child(b)
        a.add_child(c)
        return NodeRepository(root)

    def test_registers_existing_subtree(self, repo):
        assert repo.get_node_count() == 4
        assert repo.get_tree_depth() == 2
        assert repo.require_node("C").get_parent() is repo.get_node("A")

    def test_require_missing_node(self, repo):
        with pytest.raises(NodeNotFoundError):
            repo.require_node("Z")

    def test_traverse_orders(self, repo):
        ids = lambda nodes: [n.node_id for n in nodes]
        assert ids(repo.traverse()) == ["R", "A", "C", "B"]
        assert ids(repo.traverse("postorder")) == ["C", "A", "B", "R"]
        assert ids(repo.traverse("breadth")) == ["R", "A", "B", "C"]

        with pytest.raises(ValueError):
            repo.traverse("inorder")

    def test_add_node(self, repo):
        d = TreeNode(node_id="D")
        repo.add_node(d, parent_id="B")

        assert repo.get_node("D") is d
        assert d.get_parent() is repo.get_node("B")

    def test_add_node_without_parent_when_root_exists(self, repo):
        with pytest.raises(TreeError):
            repo.add_node(TreeNode(node_id="D"))

    def test_add_duplicate_id(self, repo):
        with pytest.raises(NodeError):
            repo.add_node(TreeNode(node_id="A"), parent_id="B")
        assert repo.get_node("B").get_children() == []

    def test_add_duplicate_id_in_subtree_registers_nothing(self, repo):
        d = TreeNode(node_id="D")
        d.add_child(TreeNode(node_id="C"))

        with pytest.raises(NodeError):
            repo.add_node(d, parent_id="B")
        assert repo.get_node("D") is None
        assert repo.get_node_count() == 4

    def test_add_node_under_own_descendant_keeps_index(self, repo):
        a = repo.get_node("A")
        c = repo.get_node("C")

        with pytest.raises(InvalidArgumentError):
            repo.add_node(a, parent_id="C")

        assert repo.get_node("A") is a
        assert repo.get_node("C") is c
        assert repo.get_node_count() == 4
        assert a.get_parent() is repo.root

    def test_detach_node(self, repo):
        a = repo.detach_node("A")

        assert a.get_parent() is None
        assert not a.is_destroyed()
        assert repo.get_node("A") is None
        assert repo.get_node("C") is None
        assert [n.node_id for n in repo.root.get_children()] == ["B"]

    def test_detach_root(self, repo):
        with pytest.raises(TreeError):
            repo.detach_node("R")

    def test_destroy_node_orphans(self, repo):
        orphans = repo.destroy_node("A")

        assert [n.node_id for n in orphans] == ["C"]
        assert orphans[0].get_parent() is None
        assert repo.get_node_count() == 2

    def test_destroy_node_cascade(self, repo):
        c = repo.get_node("C")
        assert repo.destroy_node("A", cascade=True) == []
        assert c.is_destroyed()

    def test_destroy_root_empties_repository(self, repo):
        repo.destroy_node("R", cascade=True)
        assert repo.root is None
        assert repo.get_node_count() == 0
        assert repo.traverse() == []

    def test_move_node(self, repo):
        repo.move_node("C", "B")
        assert repo.get_node("C").get_parent() is repo.get_node("B")
        assert repo.get_node("A").get_children() == []

    def test_move_into_descendant(self, repo):
        with pytest.raises(InvalidArgumentError):
            repo.move_node("A", "C")

    def test_replace_child(self, repo):
        d = TreeNode(node_id="D")
        old = repo.replace_child("R", 0, d)

        assert old.node_id == "A"
        assert repo.get_node("A") is None
        assert repo.get_node("C") is None
        assert repo.get_node("D") is d
        assert repo.root.get_child_at(0) is d

    def test_find_nodes(self, repo):
        assert [n.node_id for n in repo.find_nodes(variant="red_fish")] == ["R"]
        assert [n.node_id for n in repo.find_nodes(variant=None)] == ["A", "C", "B"]

    def test_dict_round_trip_keeps_order(self, repo):
        repo.root.get_child_at(0).add_child(TreeNode(node_id="E"))
        restored = NodeRepository.from_dict(repo.to_dict())

        assert [n.node_id for n in restored.traverse()] == ["R", "A", "C", "E", "B"]
        assert restored.root.payload == RedFish()


class TestDeepChain:
    """深链上的遍历和销毁不依赖递归"""

    DEPTH = 2000

    @pytest.fixture
    def chain(self):
        nodes = [TreeNode(node_id=f"n{i}") for i in range(self.DEPTH)]
        for parent, child in zip(nodes, nodes[1:]):
            parent.add_child(child)
        return nodes

    def test_descendants(self, chain):
        descendants = chain[0].get_descendants()
        assert len(descendants) == self.DEPTH - 1
        assert descendants[-1] is chain[-1]

    def test_repository_walks(self, chain):
        repo = NodeRepository(chain[0])

        assert repo.get_node_count() == self.DEPTH
        assert repo.get_tree_depth() == self.DEPTH - 1
        assert repo.traverse()[-1] is chain[-1]
        assert repo.traverse("postorder")[0] is chain[-1]
        assert len(repo.traverse("breadth")) == self.DEPTH

        repo.detach_node("n1")
        assert repo.get_node_count() == 1

    def test_cascade_destroy(self, chain):
        chain[0].destroy(cascade=True)
        assert all(node.is_destroyed() for node in chain)
