"""
节点接口定义
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any


class INode(ABC):
    """节点接口 - 定义有序树节点的基本行为"""

    @property
    @abstractmethod
    def node_id(self) -> str:
        """节点唯一标识"""
        pass

    @abstractmethod
    def add_child(self, child: 'INode') -> None:
        """在末尾添加子节点"""
        pass

    @abstractmethod
    def get_child_index(self, child: 'INode') -> int:
        """按引用查找子节点位置"""
        pass

    @abstractmethod
    def remove_child(self, child: 'INode') -> 'INode':
        """移除子节点"""
        pass

    @abstractmethod
    def get_child_at(self, index: int) -> 'INode':
        """获取指定位置的子节点"""
        pass

    @abstractmethod
    def replace_child_at(self, new_child: 'INode', index: int) -> 'INode':
        """替换指定位置的子节点"""
        pass

    @abstractmethod
    def remove_child_at(self, index: int) -> 'INode':
        """移除指定位置的子节点"""
        pass

    @abstractmethod
    def get_children(self) -> List['INode']:
        """子节点列表"""
        pass

    @abstractmethod
    def get_parent(self) -> Optional['INode']:
        """父节点"""
        pass

    @abstractmethod
    def destroy(self, cascade: bool = False) -> None:
        """
        销毁节点

        Args:
            cascade: 是否同时销毁所有后代，否则后代成为孤儿
        """
        pass

    @abstractmethod
    def is_destroyed(self) -> bool:
        """节点是否已销毁"""
        pass

    @abstractmethod
    def to_dict(self, include_children: bool = True,
                include_payload: bool = True) -> Dict[str, Any]:
        """
        转换为字典

        Args:
            include_children: 是否包含子节点ID列表
            include_payload: 是否包含载荷数据

        Returns:
            节点字典表示
        """
        pass
