"""
树结构表格导出器
把一棵树按前序展开为 DataFrame，每行一个节点
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Any, Union

import pandas as pd

from fish_tree.core.node.entity import TreeNode
from fish_tree.exceptions import ValidationError

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ['node_id', 'parent_id', 'position', 'depth', 'variant', 'payload']


class TreeTableExporter:
    """
    树结构导出器

    列说明：
    - node_id / parent_id: 节点和父节点ID，根节点 parent_id 为空
    - position: 在父节点子节点列表中的位置
    - depth: 根节点为0
    - variant / payload: 载荷变体名称和JSON文本
    """

    def __init__(self, export_format: str = "csv"):
        self.export_format = export_format

    def to_records(self, root: TreeNode) -> List[Dict[str, Any]]:
        """前序展开节点"""
        records = []
        stack = [(root, None, 0, 0)]
        while stack:
            node, parent_id, position, depth = stack.pop()
            records.append({
                'node_id': node.node_id,
                'parent_id': parent_id,
                'position': position,
                'depth': depth,
                'variant': node.variant,
                'payload': self._encode_payload(node),
            })
            children = node.get_children()
            for i in range(len(children) - 1, -1, -1):
                stack.append((children[i], node.node_id, i, depth + 1))
        return records

    def to_dataframe(self, root: TreeNode) -> pd.DataFrame:
        """导出为 DataFrame"""
        return pd.DataFrame(self.to_records(root), columns=TABLE_COLUMNS)

    def save(self, root: TreeNode, file_path: Union[str, Path]) -> Path:
        """
        保存到文件，按后缀选择格式，无后缀时使用 export_format

        Returns:
            实际写入的文件路径
        """
        path = Path(file_path)
        suffix = path.suffix.lower().lstrip('.')
        if not suffix:
            suffix = self.export_format
            path = path.with_suffix(f".{suffix}")

        df = self.to_dataframe(root)
        path.parent.mkdir(parents=True, exist_ok=True)

        if suffix == "csv":
            df.to_csv(path, index=False)
        elif suffix == "xlsx":
            df.to_excel(path, index=False)
        else:
            raise ValidationError(
                message=f"不支持的导出格式: {suffix}",
                field="export_format",
                value=suffix,
                reason="必须是 csv 或 xlsx"
            )

        logger.info(f"导出树结构: {path} ({len(df)} 个节点)")
        return path

    @staticmethod
    def _encode_payload(node: TreeNode) -> str:
        if node.payload is None:
            return ""
        return json.dumps(node.payload.to_dict(), ensure_ascii=False, default=str)
