"""
导入导出模块
"""

from .base_importer import DataImporter
from .table_exporter import TreeTableExporter, TABLE_COLUMNS
from .table_importer import TreeTableImporter

__all__ = ['DataImporter', 'TreeTableExporter', 'TreeTableImporter', 'TABLE_COLUMNS']
