"""
变体模块
挂载在树节点上的惰性载荷
"""

from .base import BaseVariant
from .one_fish import OneFish
from .two_fish import TwoFish
from .red_fish import RedFish
from .blue_fish import BlueFish
from .registry import VariantRegistry

__all__ = [
    'BaseVariant',
    'OneFish',
    'TwoFish',
    'RedFish',
    'BlueFish',
    'VariantRegistry'
]
