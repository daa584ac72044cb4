"""
接口定义包
"""

from .inode import INode
from .ivariant import IVariant

__all__ = [
    'INode',
    'IVariant',
]
