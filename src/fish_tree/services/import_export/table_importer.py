"""
树结构表格导入器
读取 TreeTableExporter 写出的 CSV / Excel，重建整棵树
"""
import json
import logging
import os
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional

import pandas as pd

from .base_importer import DataImporter
from .table_exporter import TABLE_COLUMNS
from fish_tree.core.node.entity import TreeNode
from fish_tree.data.variants.registry import VariantRegistry
from fish_tree.exceptions import (
    TreeImportError, ValidationError, VariantError, InvalidArgumentError
)

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = ('.csv', '.xlsx', '.xls')
REQUIRED_COLUMNS = ['node_id', 'parent_id', 'position']
TEXT_COLUMNS = {'node_id': str, 'parent_id': str, 'variant': str, 'payload': str}


class TreeTableImporter(DataImporter):
    """
    表格导入器

    流程：
    1. 读取表格（CSV 或 Excel）
    2. 规范化每行：空值转为None，payload 从JSON文本解析
    3. 按 parent_id 分组、position 排序，依次 add_child 重建树
    """

    def __init__(self, registry: Optional[VariantRegistry] = None, config: Dict = None):
        """
        Args:
            registry: 变体注册表
            config: 读取选项
                - sheet_name: Excel 工作表名或序号，默认 0
                - encoding: CSV 编码，默认 utf-8
        """
        super().__init__(config)
        self.registry = registry or VariantRegistry()

        # 统计信息
        self.stats = {
            'files_processed': 0,
            'rows_parsed': 0,
            'nodes_created': 0,
        }

    def _validate_config(self):
        super()._validate_config()

        sheet_name = self.config.setdefault('sheet_name', 0)
        if isinstance(sheet_name, bool) or not isinstance(sheet_name, (int, str)):
            raise ValidationError(
                "sheet_name 必须是工作表名或序号",
                field="sheet_name",
                value=sheet_name
            )

        encoding = self.config.setdefault('encoding', 'utf-8')
        if not isinstance(encoding, str) or not encoding:
            raise ValidationError("encoding 必须是非空字符串", field="encoding", value=encoding)

    # ============ 抽象方法实现 ============

    def validate_file(self, file_path: str) -> bool:
        """检查文件存在且后缀受支持"""
        path = Path(file_path)
        return path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES

    def extract_metadata(self, file_path: str) -> Dict[str, Any]:
        """提取文件元数据"""
        metadata = {
            'file_path': str(file_path),
            'file_name': Path(file_path).name,
            'import_time': datetime.now().isoformat(),
            'config': self.config
        }

        if os.path.exists(file_path):
            file_stat = os.stat(file_path)
            metadata.update({
                'file_size': file_stat.st_size,
                'modified_time': datetime.fromtimestamp(file_stat.st_mtime).isoformat()
            })

        return metadata

    def parse_data(self, file_path: str) -> List[Dict[str, Any]]:
        """读取文件为原始行记录"""
        if not self.validate_file(file_path):
            raise TreeImportError(f"无效的文件: {file_path}", source=str(file_path))

        if Path(file_path).suffix.lower() == '.csv':
            df = pd.read_csv(
                file_path, dtype=TEXT_COLUMNS, keep_default_na=False,
                encoding=self.config['encoding']
            )
        else:
            df = pd.read_excel(
                file_path, dtype=TEXT_COLUMNS, keep_default_na=False,
                sheet_name=self.config['sheet_name']
            )

        self.stats['files_processed'] += 1
        return self.parse_dataframe(df, source=str(file_path))

    def parse_dataframe(self, df: pd.DataFrame, source: Optional[str] = None) -> List[Dict[str, Any]]:
        """把 DataFrame 转为原始行记录"""
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise TreeImportError(f"缺少必需列: {', '.join(missing)}", source=source)

        columns = [col for col in TABLE_COLUMNS if col in df.columns]
        rows = df[columns].to_dict(orient='records')
        self.stats['rows_parsed'] += len(rows)
        return rows

    def convert_to_tree_nodes(self, data: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """规范化行记录"""
        records = []
        for row_index, row in enumerate(data):
            node_id = self._clean_text(row.get('node_id'))
            if node_id is None:
                raise TreeImportError(f"第{row_index}行缺少 node_id")

            try:
                position = int(float(row.get('position')))
            except (TypeError, ValueError):
                raise TreeImportError(f"第{row_index}行 position 无效: {row.get('position')}")

            payload_text = self._clean_text(row.get('payload'))
            try:
                payload = json.loads(payload_text) if payload_text else {}
            except json.JSONDecodeError as e:
                raise TreeImportError(f"第{row_index}行 payload 不是有效JSON: {e}")

            records.append({
                'node_id': node_id,
                'parent_id': self._clean_text(row.get('parent_id')),
                'position': position,
                'variant': self._clean_text(row.get('variant')),
                'payload': payload,
            })
        return records

    # ============ 重建树 ============

    def build_tree(self, records: List[Dict[str, Any]]) -> TreeNode:
        """
        根据规范化记录重建树

        Returns:
            根节点

        Raises:
            TreeImportError: 节点ID重复、载荷无法构造、父节点不存在、根节点不唯一、
                父子关系成环
        """
        nodes: Dict[str, TreeNode] = {}
        for record in records:
            if record['node_id'] in nodes:
                raise TreeImportError(f"节点ID重复: {record['node_id']}")

            payload = None
            if record['variant']:
                try:
                    payload = self.registry.payload_from_dict(record['variant'], record['payload'])
                except (VariantError, InvalidArgumentError) as e:
                    raise TreeImportError(f"节点 {record['node_id']} 的载荷无效: {e}") from e
            nodes[record['node_id']] = TreeNode(node_id=record['node_id'], payload=payload)

        roots = [r['node_id'] for r in records if r['parent_id'] is None]
        if len(roots) != 1:
            raise TreeImportError(f"必须有且只有一个根节点，实际: {len(roots)}")

        grouped = defaultdict(list)
        for record in records:
            if record['parent_id'] is None:
                continue
            if record['parent_id'] not in nodes:
                raise TreeImportError(
                    f"父节点不存在: {record['parent_id']} (子节点 {record['node_id']})"
                )
            grouped[record['parent_id']].append(record)

        for parent_id, children in grouped.items():
            parent = nodes[parent_id]
            for record in sorted(children, key=lambda r: r['position']):
                try:
                    parent.add_child(nodes[record['node_id']])
                except InvalidArgumentError as e:
                    raise TreeImportError(f"节点 {record['node_id']} 的父子关系成环: {e}") from e

        root = nodes[roots[0]]
        reachable = 1 + len(root.get_descendants())
        if reachable != len(nodes):
            raise TreeImportError(f"有 {len(nodes) - reachable} 个节点无法从根节点 {roots[0]} 到达")

        self.stats['nodes_created'] += len(nodes)
        logger.info(f"重建树完成: 根节点 {roots[0]}, 共 {len(nodes)} 个节点")
        return root

    def import_tree(self, file_path: str) -> TreeNode:
        """从文件导入并返回根节点"""
        return self.build_tree(self.import_data(file_path))

    def import_dataframe(self, df: pd.DataFrame) -> TreeNode:
        """从 DataFrame 导入并返回根节点"""
        return self.build_tree(self.convert_to_tree_nodes(self.parse_dataframe(df)))

    @staticmethod
    def _clean_text(value: Any) -> Optional[str]:
        """空字符串和缺失值统一为None"""
        if value is None:
            return None
        if not isinstance(value, str) and pd.isna(value):
            return None
        text = str(value).strip()
        return text or None
