"""
核心模块包
包含节点实体、节点工厂和节点仓库
"""

from .node import TreeNode, NodeFactory, NodeRepository

__all__ = [
    'TreeNode',
    'NodeFactory',
    'NodeRepository',
]
