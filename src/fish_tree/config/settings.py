"""
系统配置设置
"""
import os
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict

from ..exceptions import ConfigError


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_EXPORT_FORMATS = ["csv", "xlsx"]


@dataclass
class TreeSettings:
    """
    系统配置类
    使用dataclass确保配置的类型安全
    """

    # 系统基本配置
    system_name: str = "fish_tree"
    version: str = "1.0.0"

    # 日志配置
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    enable_logging: bool = True

    # 树结构配置
    max_tree_depth: int = 10
    max_children_per_node: int = 100

    # 节点生命周期
    cascade_destroy: bool = False
    default_variant: Optional[str] = None

    # 导入导出
    export_format: str = "csv"

    def __post_init__(self):
        """初始化后处理，验证配置"""
        self._validate_settings()
        self._set_defaults()

    def _validate_settings(self):
        """验证配置值"""
        if not isinstance(self.log_level, str) or self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigError(
                message=f"无效的日志级别: {self.log_level}",
                config_key="log_level"
            )
        self.log_level = self.log_level.upper()

        if not isinstance(self.max_tree_depth, int) or not 1 <= self.max_tree_depth <= 64:
            raise ConfigError(
                message=f"树深度必须在1-64之间: {self.max_tree_depth}",
                config_key="max_tree_depth"
            )

        if not isinstance(self.max_children_per_node, int) or self.max_children_per_node <= 0:
            raise ConfigError(
                message=f"每个节点的子节点上限必须为正整数: {self.max_children_per_node}",
                config_key="max_children_per_node"
            )

        if self.export_format not in VALID_EXPORT_FORMATS:
            raise ConfigError(
                message=f"无效的导出格式: {self.export_format}",
                config_key="export_format"
            )

    def _set_defaults(self):
        """设置默认值"""
        # 确保日志目录存在
        if self.log_file and self.enable_logging:
            log_dir = os.path.dirname(self.log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'TreeSettings':
        """从字典创建配置"""
        # 过滤无效的配置键
        valid_keys = {field.name for field in cls.__dataclass_fields__.values()}
        filtered_config = {k: v for k, v in config_dict.items() if k in valid_keys}

        return cls(**filtered_config)
