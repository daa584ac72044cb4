"""
BlueFish 载荷
"""
from dataclasses import dataclass

from .base import BaseVariant


@dataclass
class BlueFish(BaseVariant):
    """没有任何字段的载荷"""

    variant_name = "blue_fish"
