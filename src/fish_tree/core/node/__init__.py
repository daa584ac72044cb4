"""
节点模块 - 树结构和节点管理
"""

from .entity import TreeNode
from .factory import NodeFactory
from .repository import NodeRepository

__all__ = ['TreeNode', 'NodeFactory', 'NodeRepository']
