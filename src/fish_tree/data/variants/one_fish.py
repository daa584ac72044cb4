"""
OneFish 载荷
"""
from dataclasses import dataclass

from .base import BaseVariant


@dataclass
class OneFish(BaseVariant):
    """带一个布尔标志和构造标记的载荷"""

    variant_name = "one_fish"

    some_prop: bool = False
    was_constructor_called: bool = True
