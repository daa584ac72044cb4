"""
有序树节点库 - 子节点有序、父子关系严格一致的树节点及其管理层
"""

__version__ = "1.0.0"

from .core.node import TreeNode, NodeFactory, NodeRepository
from .data.variants import OneFish, TwoFish, RedFish, BlueFish, VariantRegistry
from .system import FishTreeSystem

__all__ = [
    'TreeNode',
    'NodeFactory',
    'NodeRepository',
    'OneFish',
    'TwoFish',
    'RedFish',
    'BlueFish',
    'VariantRegistry',
    'FishTreeSystem',
]
