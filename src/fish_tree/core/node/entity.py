"""
树节点实体模块
定义有序树节点：子节点有序，每个子节点只知道唯一的父节点
"""

import logging
import numbers
import uuid
from typing import Optional, Dict, Any, List
from datetime import datetime

from ...interfaces import INode
from ...data.variants.base import BaseVariant
from ...data.variants.registry import VariantRegistry
from ...exceptions import (
    NotFoundError, InvalidArgumentError, IndexOutOfRangeError, InvalidStateError
)

logger = logging.getLogger(__name__)


class TreeNode(INode):
    """
    树节点 - 拥有有序子节点序列的节点

    每个节点包含：
    1. 身份信息：node_id
    2. 树关系：parent（关系而非所有权），children（有序，按引用比较）
    3. 载荷：可选的变体数据（OneFish、TwoFish……），与树行为无关
    4. 生命周期：Live -> Destroyed，单向

    节点一旦销毁，除 is_destroyed()/to_dict() 外的所有操作都会抛出 InvalidStateError。
    """

    def __init__(self, node_id: Optional[str] = None, payload: Optional[BaseVariant] = None):
        """
        初始化树节点

        Args:
            node_id: 节点唯一标识，默认自动生成
            payload: 载荷变体实例
        """
        # ========== 身份信息 ==========
        self._node_id = node_id or self._generate_node_id()
        self.payload = payload

        # ========== 树结构关系 ==========
        self._parent: Optional['TreeNode'] = None
        self._children: List['TreeNode'] = []

        # ========== 生命周期管理 ==========
        self._destroyed = False
        self.created_at: datetime = datetime.now()
        self.destroyed_at: Optional[datetime] = None

    @staticmethod
    def _generate_node_id() -> str:
        """生成唯一的节点ID"""
        return uuid.uuid4().hex[:8]

    # ========== 属性 ==========

    @property
    def node_id(self) -> str:
        return self._node_id

    @property
    def variant(self) -> Optional[str]:
        """载荷变体名称，无载荷时为None"""
        return self.payload.variant_name if self.payload is not None else None

    @property
    def parent(self) -> Optional['TreeNode']:
        return self.get_parent()

    @property
    def children(self) -> List['TreeNode']:
        return self.get_children()

    # ========== 内部校验 ==========

    def _check_alive(self, operation: str) -> None:
        if self._destroyed:
            raise InvalidStateError(node_id=self._node_id, operation=operation)

    def _check_child(self, child: Any, operation: str) -> None:
        """校验作为子节点传入的参数"""
        if not isinstance(child, TreeNode):
            raise InvalidArgumentError(
                f"{operation} 需要 TreeNode 参数",
                argument="child",
                value=child
            )
        if child._destroyed:
            raise InvalidStateError(node_id=child.node_id, operation=operation)

        # 自身或祖先不能成为子节点
        current = self
        while current is not None:
            if current is child:
                raise InvalidArgumentError(
                    f"{operation} 会形成环: {child.node_id}",
                    argument="child",
                    value=child.node_id
                )
            current = current._parent

    def _validate_index(self, index: Any, operation: str) -> int:
        """校验索引，合法范围为 0 <= index < len(children)"""
        if index is None or isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise InvalidArgumentError(
                "index is missing or invalid",
                argument="index",
                value=index
            )

        index = int(index)
        if index < 0 or index >= len(self._children):
            raise IndexOutOfRangeError(index, len(self._children), operation=operation)
        return index

    # ========== 树结构管理 ==========

    def add_child(self, child: 'TreeNode') -> None:
        """
        在末尾添加子节点

        子节点若已有父节点，先从原父节点中摘除，保证一个节点只出现在一个父节点下。

        Raises:
            InvalidStateError: 本节点或子节点已销毁
            InvalidArgumentError: 参数不是节点，或会形成环
        """
        self._check_alive("add_child")
        self._check_child(child, "add_child")

        if child._parent is not None:
            child._parent.remove_child(child)

        self._children.append(child)
        child._parent = self

    def get_child_index(self, child: 'TreeNode') -> int:
        """按引用查找子节点位置"""
        self._check_alive("get_child_index")

        for i, existing in enumerate(self._children):
            if existing is child:
                return i

        raise NotFoundError(node_id=getattr(child, 'node_id', None))

    def remove_child(self, child: 'TreeNode') -> 'TreeNode':
        """移除子节点，不存在时抛出 NotFoundError"""
        self._check_alive("remove_child")
        index = self.get_child_index(child)
        return self.remove_child_at(index)

    def get_child_at(self, index: int) -> 'TreeNode':
        """获取指定位置的子节点"""
        self._check_alive("get_child_at")
        index = self._validate_index(index, "get_child_at")
        return self._children[index]

    def replace_child_at(self, new_child: 'TreeNode', index: int) -> 'TreeNode':
        """
        替换指定位置的子节点

        原位置上的节点被摘除（parent置空），新节点从原父节点摘除后放入该位置并指向本节点。
        其它子节点位置不变。

        Args:
            new_child: 新子节点
            index: 位置，0 <= index < len(children)

        Returns:
            被替换下来的子节点

        Raises:
            InvalidArgumentError: 索引缺失，或新节点已经是本节点的其它子节点
            IndexOutOfRangeError: 索引越界
        """
        self._check_alive("replace_child_at")
        index = self._validate_index(index, "replace_child_at")
        self._check_child(new_child, "replace_child_at")

        old_child = self._children[index]
        if old_child is new_child:
            return old_child

        if any(existing is new_child for existing in self._children):
            raise InvalidArgumentError(
                f"节点已是子节点，不能重复占位: {new_child.node_id}",
                argument="new_child",
                value=new_child.node_id
            )

        if new_child._parent is not None:
            new_child._parent.remove_child(new_child)

        old_child._parent = None
        self._children[index] = new_child
        new_child._parent = self
        return old_child

    def remove_child_at(self, index: int) -> 'TreeNode':
        """移除指定位置的子节点，后续子节点左移"""
        self._check_alive("remove_child_at")
        index = self._validate_index(index, "remove_child_at")

        child = self._children.pop(index)
        child._parent = None
        return child

    def get_children(self) -> List['TreeNode']:
        """返回内部子节点列表本身（不是副本）"""
        self._check_alive("get_children")
        return self._children

    def get_parent(self) -> Optional['TreeNode']:
        self._check_alive("get_parent")
        return self._parent

    def get_ancestors(self) -> List['TreeNode']:
        """获取所有祖先节点（从根到父节点）"""
        self._check_alive("get_ancestors")
        ancestors = []
        current = self._parent
        while current:
            ancestors.insert(0, current)
            current = current._parent
        return ancestors

    def get_descendants(self) -> List['TreeNode']:
        """获取所有后代节点（前序）"""
        self._check_alive("get_descendants")
        descendants = []
        stack = list(reversed(self._children))
        while stack:
            node = stack.pop()
            descendants.append(node)
            stack.extend(reversed(node._children))
        return descendants

    def get_root(self) -> 'TreeNode':
        """获取根节点"""
        self._check_alive("get_root")
        root = self
        while root._parent:
            root = root._parent
        return root

    def get_depth(self) -> int:
        """根节点深度为0"""
        return len(self.get_ancestors())

    # ========== 生命周期管理 ==========

    def destroy(self, cascade: bool = False) -> None:
        """
        销毁节点

        先从父节点摘除（父节点记录不一致时抛出 NotFoundError），再清空子节点。
        默认子节点成为孤儿；cascade=True 时整棵子树一起销毁。
        """
        self._check_alive("destroy")

        if self._parent is not None:
            self._parent.remove_child(self)

        if cascade:
            # 后代先于祖先释放
            for node in reversed(self.get_descendants()):
                node._release()
        else:
            for child in self._children:
                child._parent = None

        self._release()
        logger.debug(f"节点已销毁: {self._node_id} (cascade={cascade})")

    def _release(self) -> None:
        """清空关系并标记为已销毁"""
        self._children = []
        self._parent = None
        self._destroyed = True
        self.destroyed_at = datetime.now()

    def is_destroyed(self) -> bool:
        return self._destroyed

    # ========== 序列化 ==========

    def to_dict(self, include_children: bool = True, include_payload: bool = True) -> Dict[str, Any]:
        """
        序列化节点

        Args:
            include_children: 是否包含子节点ID列表
            include_payload: 是否包含载荷数据

        Returns:
            可JSON序列化的字典
        """
        result = {
            'node_id': self._node_id,
            'variant': self.variant,
            'parent_id': self._parent.node_id if self._parent else None,
            'created_at': self.created_at.isoformat(),
            'destroyed_at': self.destroyed_at.isoformat() if self.destroyed_at else None,
            'destroyed': self._destroyed,
        }

        if include_children:
            result['children'] = [child.node_id for child in self._children]

        if include_payload:
            result['payload'] = self.payload.to_dict() if self.payload is not None else None

        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry: Optional[VariantRegistry] = None) -> 'TreeNode':
        """
        反序列化创建节点

        注意：父子关系需要在树重建时设置
        """
        payload = None
        variant = data.get('variant')
        if variant:
            registry = registry or VariantRegistry()
            payload = registry.payload_from_dict(variant, data.get('payload') or {})

        node = cls(node_id=data['node_id'], payload=payload)
        if data.get('created_at'):
            node.created_at = datetime.fromisoformat(data['created_at'])
        return node

    # ========== 特殊方法 ==========

    def __repr__(self) -> str:
        status = "✗" if self._destroyed else "✓"
        return f"TreeNode({self._node_id}, variant={self.variant}, children={len(self._children)})[{status}]"
