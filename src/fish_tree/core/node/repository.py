"""
节点仓库模块
管理一棵树的节点索引、查询和遍历
"""

import logging
from typing import Optional, Dict, Any, List
from collections import deque
from datetime import datetime

from .entity import TreeNode
from ...data.variants.registry import VariantRegistry
from ...exceptions import NodeNotFoundError, NodeError, TreeError

logger = logging.getLogger(__name__)


class NodeRepository:
    """节点仓库，管理以单个根节点为顶点的树"""

    def __init__(self, root_node: Optional[TreeNode] = None):
        """
        初始化节点仓库

        Args:
            root_node: 根节点，如果为None则创建一个空的仓库
        """
        self._root: Optional[TreeNode] = None
        self._nodes: Dict[str, TreeNode] = {}

        if root_node:
            self.set_root(root_node)

    def _register_node_and_descendants(self, node: TreeNode) -> List[TreeNode]:
        """
        注册节点及其所有后代

        先检查整棵子树的ID冲突，全部通过后才写入索引。

        Returns:
            本次新注册的节点（已在索引中的节点不计入）
        """
        subtree = [node] + node.get_descendants()
        for candidate in subtree:
            existing = self._nodes.get(candidate.node_id)
            if existing is not None and existing is not candidate:
                raise NodeError(f"节点ID重复: {candidate.node_id}", code="DUPLICATE_NODE_ID")

        added = [candidate for candidate in subtree if candidate.node_id not in self._nodes]
        for candidate in added:
            self._nodes[candidate.node_id] = candidate
        return added

    def _unregister_node_and_descendants(self, node: TreeNode) -> None:
        """注销节点及其所有后代"""
        for candidate in [node] + node.get_descendants():
            self._nodes.pop(candidate.node_id, None)

    @property
    def root(self) -> Optional[TreeNode]:
        """获取根节点"""
        return self._root

    def set_root(self, root_node: TreeNode) -> None:
        """设置根节点"""
        if self._root is not None:
            raise TreeError("根节点已设置")
        if root_node.get_parent() is not None:
            raise TreeError(f"根节点不能有父节点: {root_node.node_id}")

        self._register_node_and_descendants(root_node)
        self._root = root_node

    def get_node(self, node_id: str) -> Optional[TreeNode]:
        """根据ID获取节点"""
        return self._nodes.get(node_id)

    def require_node(self, node_id: str) -> TreeNode:
        """根据ID获取节点，不存在时抛出 NodeNotFoundError"""
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id=node_id)
        return node

    def contains(self, node_id: str) -> bool:
        return node_id in self._nodes

    def add_node(self, node: TreeNode, parent_id: Optional[str] = None) -> TreeNode:
        """
        添加节点（连同其子树）

        Args:
            node: 节点
            parent_id: 父节点ID；为None时作为根节点

        Raises:
            NodeNotFoundError: 父节点不存在
            TreeError: 未指定父节点但根节点已存在
        """
        if parent_id is None:
            self.set_root(node)
            return node

        parent = self.require_node(parent_id)
        added = self._register_node_and_descendants(node)
        try:
            parent.add_child(node)
        except Exception:
            # 只回滚本次注册的节点，已在树中的节点保持原样
            for registered in added:
                self._nodes.pop(registered.node_id, None)
            raise
        return node

    def detach_node(self, node_id: str) -> TreeNode:
        """
        把节点（连同子树）从树中摘除，节点本身不销毁

        Returns:
            被摘除的节点
        """
        node = self.require_node(node_id)
        if node is self._root:
            raise TreeError("不能摘除根节点，请使用 destroy_node")

        node.get_parent().remove_child(node)
        self._unregister_node_and_descendants(node)
        return node

    def destroy_node(self, node_id: str, cascade: bool = False) -> List[TreeNode]:
        """
        销毁节点

        Args:
            node_id: 节点ID
            cascade: 是否同时销毁后代

        Returns:
            因此成为孤儿的子节点（cascade=True 时为空列表）
        """
        node = self.require_node(node_id)
        orphans = [] if cascade else list(node.get_children())

        self._unregister_node_and_descendants(node)
        node.destroy(cascade=cascade)

        if node is self._root:
            self._root = None

        logger.debug(f"销毁节点: {node_id}, 孤儿节点 {len(orphans)} 个")
        return orphans

    def move_node(self, node_id: str, new_parent_id: str) -> TreeNode:
        """把节点移动到新父节点的末尾"""
        node = self.require_node(node_id)
        new_parent = self.require_node(new_parent_id)
        if node is self._root:
            raise TreeError("不能移动根节点")

        new_parent.add_child(node)
        return node

    def replace_child(self, parent_id: str, index: int, new_node: TreeNode) -> TreeNode:
        """
        替换父节点指定位置的子节点

        Returns:
            被替换下来的节点（已从仓库注销）
        """
        parent = self.require_node(parent_id)
        if new_node.node_id in self._nodes and self._nodes[new_node.node_id] is not new_node:
            raise NodeError(f"节点ID重复: {new_node.node_id}", code="DUPLICATE_NODE_ID")

        old_child = parent.replace_child_at(new_node, index)
        if old_child is not new_node:
            self._unregister_node_and_descendants(old_child)
            self._register_node_and_descendants(new_node)
        return old_child

    def get_all_nodes(self) -> List[TreeNode]:
        """获取所有节点"""
        return list(self._nodes.values())

    def get_node_count(self) -> int:
        """获取节点数量"""
        return len(self._nodes)

    def get_tree_depth(self) -> int:
        """获取树的最大深度"""
        if not self._root:
            return 0

        max_depth = 0
        stack = [(self._root, 0)]
        while stack:
            node, depth = stack.pop()
            max_depth = max(max_depth, depth)
            stack.extend((child, depth + 1) for child in node.get_children())
        return max_depth

    def find_nodes(self, **criteria) -> List[TreeNode]:
        """
        根据条件查找节点

        Args:
            **criteria: 查找条件，如 variant="red_fish"

        Returns:
            匹配的节点列表（前序）
        """
        results = []

        for node in self.traverse():
            match = True

            for key, value in criteria.items():
                if not hasattr(node, key):
                    match = False
                    break

                node_value = getattr(node, key)
                if callable(node_value):
                    node_value = node_value()

                if node_value != value:
                    match = False
                    break

            if match:
                results.append(node)

        return results

    def traverse(self, order: str = "preorder") -> List[TreeNode]:
        """
        遍历树

        Args:
            order: 遍历顺序，可选 "preorder"（前序）, "postorder"（后序）, "breadth"（层序）

        Returns:
            节点列表
        """
        if not self._root:
            return []

        result = []

        if order == "preorder":
            result = [self._root] + self._root.get_descendants()
        elif order == "postorder":
            # 根在前、子节点从左到右压栈，出栈序列反转即为后序
            stack = [self._root]
            while stack:
                node = stack.pop()
                result.append(node)
                stack.extend(node.get_children())
            result.reverse()
        elif order == "breadth":
            queue = deque([self._root])
            while queue:
                node = queue.popleft()
                result.append(node)
                queue.extend(node.get_children())
        else:
            raise ValueError(f"不支持的遍历顺序: {order}")

        return result

    # ===== 序列化 =====

    def to_dict(self) -> Dict[str, Any]:
        """导出整棵树，子节点顺序保存在每个节点的 children 列表中"""
        return {
            'root_id': self._root.node_id if self._root else None,
            'nodes': {node.node_id: node.to_dict() for node in self.traverse()},
            'metadata': {
                'node_count': self.get_node_count(),
                'tree_depth': self.get_tree_depth(),
                'saved_at': datetime.now().isoformat()
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry: Optional[VariantRegistry] = None) -> 'NodeRepository':
        """从 to_dict 的结果重建树"""
        root_id = data.get('root_id')
        nodes_dict = data.get('nodes', {})
        if root_id is None:
            return cls()
        if root_id not in nodes_dict:
            raise TreeError(f"找不到根节点: {root_id}")

        registry = registry or VariantRegistry()

        # 第一遍：创建所有节点对象
        temp_nodes = {
            node_id: TreeNode.from_dict(node_data, registry=registry)
            for node_id, node_data in nodes_dict.items()
        }

        # 第二遍：按保存的顺序建立父子关系
        for node_id, node_data in nodes_dict.items():
            parent = temp_nodes[node_id]
            for child_id in node_data.get('children', []):
                if child_id not in temp_nodes:
                    raise NodeNotFoundError(node_id=child_id)
                parent.add_child(temp_nodes[child_id])

        return cls(temp_nodes[root_id])
