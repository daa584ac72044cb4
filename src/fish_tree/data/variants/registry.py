"""
变体注册表
管理所有可用的载荷变体
"""
from typing import Dict, List, Type, Any

from .base import BaseVariant
from .one_fish import OneFish
from .two_fish import TwoFish
from .red_fish import RedFish
from .blue_fish import BlueFish
from ...exceptions import VariantNotFoundError, VariantValidationError


class VariantRegistry:
    """变体注册表，按名称管理载荷类"""

    def __init__(self):
        """初始化变体注册表"""
        self._variants: Dict[str, Type[BaseVariant]] = {}

        # 注册内置变体
        self._register_builtin_variants()

    def _register_builtin_variants(self):
        """注册内置变体"""
        self.register(OneFish)
        self.register(TwoFish)
        self.register(RedFish)
        self.register(BlueFish)

    def register(self, variant_class: Type[BaseVariant]) -> None:
        """
        注册变体类

        Args:
            variant_class: 载荷类，必须继承 BaseVariant

        Raises:
            VariantValidationError: 变体验证失败
        """
        if not isinstance(variant_class, type) or not issubclass(variant_class, BaseVariant):
            raise VariantValidationError(
                variant_name=str(variant_class),
                value=variant_class,
                reason="必须继承BaseVariant"
            )

        name = variant_class.variant_name
        if name in self._variants:
            raise VariantValidationError(
                variant_name=name,
                value=variant_class,
                reason="变体名称已存在"
            )

        self._variants[name] = variant_class

    def unregister(self, name: str) -> None:
        """注销变体"""
        if name not in self._variants:
            raise VariantNotFoundError(variant_name=name)
        del self._variants[name]

    def get_variant(self, name: str) -> Type[BaseVariant]:
        """
        获取变体类

        Raises:
            VariantNotFoundError: 变体不存在
        """
        if name not in self._variants:
            raise VariantNotFoundError(variant_name=name)

        return self._variants[name]

    def create_payload(self, name: str, *args, **kwargs) -> BaseVariant:
        """
        创建载荷实例

        Args:
            name: 变体名称
            *args, **kwargs: 载荷构造参数

        Raises:
            VariantNotFoundError: 变体不存在
            InvalidArgumentError: 载荷构造参数不足（由载荷类抛出）
        """
        return self.get_variant(name)(*args, **kwargs)

    def payload_from_dict(self, name: str, data: Dict[str, Any]) -> BaseVariant:
        """按名称从字典恢复载荷"""
        return self.get_variant(name).from_dict(data)

    def has_variant(self, name: str) -> bool:
        """检查变体是否存在"""
        return name in self._variants

    def list_variants(self) -> List[str]:
        """列出所有变体名称"""
        return sorted(self._variants.keys())

    def __contains__(self, name: str) -> bool:
        return self.has_variant(name)

    def __len__(self) -> int:
        return len(self._variants)
