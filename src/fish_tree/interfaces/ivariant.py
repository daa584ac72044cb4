"""
载荷变体接口定义
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class IVariant(ABC):
    """载荷变体接口 - 挂载在节点上的惰性数据"""

    variant_name: str = ""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """导出载荷字段"""
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IVariant':
        """从字典恢复载荷"""
        pass
