"""
TwoFish 载荷
构造时必须提供两个参数
"""
from dataclasses import dataclass
from typing import Any

from .base import BaseVariant
from ...exceptions import InvalidArgumentError


@dataclass
class TwoFish(BaseVariant):
    """需要两个构造参数的载荷"""

    variant_name = "two_fish"

    first: Any = None
    second: Any = None
    post_constructor_called: bool = False

    def __post_init__(self):
        # 与 if (!a || !b) 一致：任一参数为假值即失败
        if not self.first or not self.second:
            raise InvalidArgumentError(
                "TwoFish constructor needs two args",
                argument="first" if not self.first else "second",
                value=(self.first, self.second)
            )
