"""
RedFish 载荷
"""
from dataclasses import dataclass
from typing import Any

from .base import BaseVariant


@dataclass
class RedFish(BaseVariant):
    """携带三元坐标的载荷"""

    variant_name = "red_fish"

    x: Any = 0
    y: Any = 1
    z: Any = -1

    def set_something(self, x: Any, y: Any, z: Any) -> None:
        """一次性覆盖三个坐标"""
        self.x = x
        self.y = y
        self.z = z
