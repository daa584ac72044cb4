"""
节点工厂 - 创建和管理节点
"""
import logging
from typing import Dict, Optional, List

from ...data.variants.registry import VariantRegistry
from ...exceptions import NodeNotFoundError
from .entity import TreeNode

logger = logging.getLogger(__name__)


class NodeFactory:
    """节点工厂，负责创建节点并挂载载荷"""

    def __init__(self, registry: Optional[VariantRegistry] = None):
        """
        初始化节点工厂

        Args:
            registry: 变体注册表，默认使用内置变体
        """
        self._registry = registry or VariantRegistry()
        self._nodes: Dict[str, TreeNode] = {}  # node_id -> TreeNode

    @property
    def registry(self) -> VariantRegistry:
        return self._registry

    def create_node(
            self,
            variant: Optional[str] = None,
            *args,
            node_id: Optional[str] = None,
            **kwargs
    ) -> TreeNode:
        """
        创建独立节点（无父节点，无子节点）

        Args:
            variant: 变体名称，None表示无载荷
            *args, **kwargs: 载荷构造参数
            node_id: 指定节点ID

        Raises:
            VariantNotFoundError: 变体不存在
            InvalidArgumentError: 载荷构造参数不足
        """
        payload = None
        if variant is not None:
            payload = self._registry.create_payload(variant, *args, **kwargs)

        node = TreeNode(node_id=node_id, payload=payload)
        self.register_node(node)
        logger.debug(f"创建节点: {node.node_id} ({variant})")
        return node

    def create_child_node(
            self,
            parent: TreeNode,
            variant: Optional[str] = None,
            *args,
            node_id: Optional[str] = None,
            **kwargs
    ) -> TreeNode:
        """创建节点并追加为 parent 的最后一个子节点"""
        node = self.create_node(variant, *args, node_id=node_id, **kwargs)
        parent.add_child(node)
        return node

    def register_node(self, node: TreeNode) -> bool:
        """
        把外部创建的节点（如导入的节点）加入索引

        ID 已被另一个节点占用时不覆盖。

        Returns:
            是否已加入索引
        """
        existing = self._nodes.get(node.node_id)
        if existing is not None and existing is not node:
            logger.warning(f"节点ID已被占用，跳过注册: {node.node_id}")
            return False
        self._nodes[node.node_id] = node
        return True

    def get_node(self, node_id: str) -> Optional[TreeNode]:
        """根据ID获取节点"""
        return self._nodes.get(node_id)

    def forget_node(self, node_id: str) -> TreeNode:
        """从索引中移除节点（不改变树结构）"""
        if node_id not in self._nodes:
            raise NodeNotFoundError(node_id=node_id)
        return self._nodes.pop(node_id)

    def get_all_nodes(self) -> List[TreeNode]:
        """获取所有节点"""
        return list(self._nodes.values())

    def get_node_count(self) -> int:
        """获取节点数量"""
        return len(self._nodes)

    def find_nodes_by_variant(self, variant: Optional[str]) -> List[TreeNode]:
        """根据变体查找节点"""
        return [node for node in self._nodes.values() if node.variant == variant]
