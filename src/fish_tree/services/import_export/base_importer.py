"""
数据导入器基类
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Any

from fish_tree.exceptions import TreeImportError, ValidationError


class DataImporter(ABC):
    """数据导入器抽象基类"""

    def __init__(self, config: Dict[str, Any] = None):
        self.config = config or {}
        self._validate_config()

    def _validate_config(self):
        """验证配置参数，子类可在此基础上检查各自的配置项"""
        if not isinstance(self.config, dict):
            raise ValidationError(
                "导入器配置必须是字典",
                field="config",
                value=type(self.config).__name__
            )

    @abstractmethod
    def validate_file(self, file_path: str) -> bool:
        """验证文件是否可导入"""
        pass

    @abstractmethod
    def extract_metadata(self, file_path: str) -> Dict[str, Any]:
        """提取文件元数据"""
        pass

    @abstractmethod
    def parse_data(self, file_path: str) -> List[Dict[str, Any]]:
        """读取文件为原始行记录"""
        pass

    @abstractmethod
    def convert_to_tree_nodes(self, data: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """把原始行记录规范化为建树用的节点记录"""
        pass

    def import_data(self, file_path: str) -> List[Dict[str, Any]]:
        """
        导入流程：校验文件，读取行记录，规范化为节点记录
        """
        if not self.validate_file(file_path):
            raise TreeImportError(f"文件验证失败: {file_path}", source=file_path)

        data = self.parse_data(file_path)
        return self.convert_to_tree_nodes(data)
