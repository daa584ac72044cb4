"""
配置验证器
"""
import re
from typing import Dict, Any, List

from ..exceptions import ValidationError, ConfigError
from .settings import VALID_LOG_LEVELS, VALID_EXPORT_FORMATS


class ConfigValidator:
    """配置验证器"""

    def __init__(self):
        self._id_pattern = re.compile(r'^[A-Za-z0-9_\-]+$')
        self._variant_pattern = re.compile(r'^[a-z][a-z0-9_]*$')

    def validate_system_config(self, config: Dict[str, Any]) -> bool:
        """验证系统配置"""
        try:
            if 'log_level' in config and str(config['log_level']).upper() not in VALID_LOG_LEVELS:
                raise ValidationError(
                    message=f"无效的日志级别: {config['log_level']}",
                    field="log_level",
                    value=config['log_level'],
                    reason=f"必须是 {VALID_LOG_LEVELS} 之一"
                )

            if 'export_format' in config and config['export_format'] not in VALID_EXPORT_FORMATS:
                raise ValidationError(
                    message=f"无效的导出格式: {config['export_format']}",
                    field="export_format",
                    value=config['export_format'],
                    reason=f"必须是 {VALID_EXPORT_FORMATS} 之一"
                )

            for key in ('max_tree_depth', 'max_children_per_node'):
                if key in config:
                    value = config[key]
                    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                        raise ValidationError(
                            message=f"{key} 必须是正整数",
                            field=key,
                            value=value,
                            reason="invalid_type"
                        )

            if config.get('default_variant') is not None:
                self.validate_variant_name(config['default_variant'])

            return True

        except ValidationError:
            raise
        except Exception as e:
            raise ConfigError(f"配置验证失败: {str(e)}")

    def validate_tree_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """验证并清理树配置"""
        validated_config = {}

        if 'tree_id' not in config:
            raise ValidationError(
                message="树配置缺少ID",
                field="tree_id",
                reason="required_field_missing"
            )

        tree_id = config['tree_id']
        if not self.validate_identifier(tree_id):
            raise ValidationError(
                message="树ID只能包含字母、数字、下划线和连字符",
                field="tree_id",
                value=tree_id,
                reason="invalid_format"
            )
        validated_config['tree_id'] = tree_id

        # 树描述（可选）
        if 'description' in config:
            desc = config['description']
            if isinstance(desc, str) and len(desc) <= 500:
                validated_config['description'] = desc

        # 根节点变体（可选）
        if config.get('variant') is not None:
            validated_config['variant'] = self.validate_variant_name(config['variant'])

        if 'payload' in config:
            payload = config['payload']
            if not isinstance(payload, dict):
                raise ValidationError(
                    message="载荷参数必须是字典",
                    field="payload",
                    value=payload,
                    reason="invalid_type"
                )
            validated_config['payload'] = payload

        return validated_config

    def validate_variant_names(self, names: List[str]) -> List[str]:
        """验证变体名称列表"""
        return [self.validate_variant_name(name) for name in names]

    def validate_variant_name(self, name: str) -> str:
        """验证变体名称格式（小写蛇形命名）"""
        if not isinstance(name, str) or not self._variant_pattern.match(name):
            raise ValidationError(
                message=f"无效的变体名称格式: {name}",
                field="variant",
                value=name,
                reason="invalid_format"
            )
        return name

    def validate_identifier(self, value: Any) -> bool:
        """验证ID格式"""
        return isinstance(value, str) and 1 <= len(value) <= 100 and bool(self._id_pattern.match(value))
