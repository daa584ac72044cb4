"""
数据模块
"""

from .variants import (
    BaseVariant, OneFish, TwoFish, RedFish, BlueFish, VariantRegistry
)

__all__ = [
    'BaseVariant',
    'OneFish',
    'TwoFish',
    'RedFish',
    'BlueFish',
    'VariantRegistry',
]
