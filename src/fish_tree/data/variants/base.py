"""
载荷变体基类
"""
from dataclasses import asdict, fields
from typing import Any, Dict

from ...interfaces import IVariant


class BaseVariant(IVariant):
    """载荷基类，子类以dataclass声明字段"""

    variant_name = "base"

    def to_dict(self) -> Dict[str, Any]:
        """导出载荷字段"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseVariant':
        """从字典恢复载荷，忽略未知字段"""
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in valid_keys})

    def get_metadata(self) -> Dict[str, Any]:
        """获取变体元数据"""
        return {
            "variant": self.variant_name,
            "fields": [f.name for f in fields(self)],
        }
