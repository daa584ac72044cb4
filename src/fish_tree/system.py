"""
有序树系统主入口
集成变体模块、节点模块、导入导出模块，提供完整的管理接口
"""

import logging
from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path

import pandas as pd

from .exceptions import TreeError, TreeNotFoundError, TreeLimitError
from .config.settings import TreeSettings
from .config.validator import ConfigValidator
from .core.node import NodeFactory, NodeRepository, TreeNode
from .data.variants import VariantRegistry
from .services.import_export import TreeTableExporter, TreeTableImporter


class FishTreeSystem:
    """
    有序树系统主类
    管理多棵以 tree_id 区分的树，并执行深度/宽度限制
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        初始化系统

        Args:
            config: 系统配置字典
        """
        # 加载配置
        self.validator = ConfigValidator()
        if config:
            self.validator.validate_system_config(config)
        self.settings = TreeSettings.from_dict(config) if config else TreeSettings()

        # 初始化日志
        self._setup_logging()
        self.logger = logging.getLogger(__name__)

        # 核心组件
        self._registry = VariantRegistry()
        self._node_factory = NodeFactory(self._registry)
        self._exporter = TreeTableExporter(export_format=self.settings.export_format)
        self._importer = TreeTableImporter(registry=self._registry)

        # 数据容器
        self._trees: Dict[str, NodeRepository] = {}  # tree_id -> NodeRepository
        self._tree_metadata: Dict[str, Dict[str, Any]] = {}

        self._start_time = datetime.now()
        self.logger.info(f"{self.settings.system_name} 初始化完成")

    def _setup_logging(self):
        """配置日志系统"""
        if not self.settings.enable_logging:
            return

        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if self.settings.log_file:
            handlers.append(logging.FileHandler(self.settings.log_file, encoding="utf-8"))

        logging.basicConfig(
            level=getattr(logging, self.settings.log_level),
            format=self.settings.log_format,
            handlers=handlers
        )

    @property
    def registry(self) -> VariantRegistry:
        return self._registry

    @property
    def node_factory(self) -> NodeFactory:
        """全局节点索引，只包含仍挂在某棵树上的节点"""
        return self._node_factory

    # ========== 树管理 ==========

    def create_tree(
            self,
            tree_id: str,
            variant: Optional[str] = None,
            *args,
            description: str = "",
            **kwargs
    ) -> TreeNode:
        """
        创建新树

        Args:
            tree_id: 树ID（唯一标识）
            variant: 根节点变体，默认使用 settings.default_variant
            *args, **kwargs: 根节点载荷参数
            description: 树描述

        Returns:
            根节点
        """
        self.validator.validate_tree_config({'tree_id': tree_id, 'description': description})
        if tree_id in self._trees:
            raise TreeError(f"树已存在: {tree_id}")

        try:
            root = self._node_factory.create_node(self._resolve_variant(variant), *args, **kwargs)
            self._register_tree(tree_id, NodeRepository(root), description)
            self.logger.info(f"创建树成功: {tree_id}")
            return root

        except Exception as e:
            self.logger.error(f"创建树失败: {tree_id}, 错误: {e}")
            raise

    def _register_tree(self, tree_id: str, repository: NodeRepository, description: str = "") -> None:
        self._trees[tree_id] = repository
        self._tree_metadata[tree_id] = {
            "id": tree_id,
            "description": description,
            "created_at": datetime.now().isoformat(),
            "root_node_id": repository.root.node_id if repository.root else None,
        }

    def get_tree(self, tree_id: str) -> NodeRepository:
        """获取树仓库"""
        if tree_id not in self._trees:
            raise TreeNotFoundError(tree_id=tree_id)
        return self._trees[tree_id]

    def delete_tree(self, tree_id: str) -> Dict[str, Any]:
        """删除树并级联销毁所有节点"""
        repository = self.get_tree(tree_id)

        if repository.root is not None:
            self._forget_nodes(repository.get_all_nodes())
            repository.destroy_node(repository.root.node_id, cascade=True)

        del self._trees[tree_id]
        del self._tree_metadata[tree_id]

        self.logger.info(f"删除树成功: {tree_id}")

        return {
            "success": True,
            "tree_id": tree_id,
            "deleted_at": datetime.now().isoformat()
        }

    def list_trees(self) -> List[Dict[str, Any]]:
        """列出所有树"""
        trees = []
        for tree_id, metadata in self._tree_metadata.items():
            repo = self._trees[tree_id]
            trees.append({
                "tree_id": tree_id,
                "description": metadata.get("description", ""),
                "created_at": metadata["created_at"],
                "node_count": repo.get_node_count(),
                "tree_depth": repo.get_tree_depth(),
                "root_node": repo.root.node_id if repo.root else None
            })
        return trees

    # ========== 节点管理 ==========

    def add_node(
            self,
            tree_id: str,
            parent_node_id: str,
            variant: Optional[str] = None,
            *args,
            **kwargs
    ) -> TreeNode:
        """在父节点末尾添加新节点"""
        repository = self.get_tree(tree_id)
        parent = repository.require_node(parent_node_id)
        self._check_limits(parent, subtree_height=0)

        node = None
        try:
            node = self._node_factory.create_node(self._resolve_variant(variant), *args, **kwargs)
            repository.add_node(node, parent_id=parent_node_id)
            self.logger.debug(f"添加节点成功: {node.node_id} 到树 {tree_id}")
            return node

        except Exception as e:
            if node is not None:
                self._forget_nodes([node])
            self.logger.error(f"添加节点失败: 父节点 {parent_node_id}, 错误: {e}")
            raise

    def get_node(self, tree_id: str, node_id: str) -> Optional[TreeNode]:
        """获取节点"""
        return self.get_tree(tree_id).get_node(node_id)

    def move_node(self, tree_id: str, node_id: str, new_parent_id: str) -> TreeNode:
        """把节点移动到同一棵树中的新父节点下"""
        repository = self.get_tree(tree_id)
        node = repository.require_node(node_id)
        new_parent = repository.require_node(new_parent_id)

        if node.get_parent() is not new_parent:
            self._check_limits(new_parent, subtree_height=self._subtree_height(node))

        return repository.move_node(node_id, new_parent_id)

    def remove_node(self, tree_id: str, node_id: str) -> TreeNode:
        """摘除节点（连同子树），节点本身保持可用，但不再出现在节点工厂索引中"""
        node = self.get_tree(tree_id).detach_node(node_id)
        self._forget_nodes([node] + node.get_descendants())
        self.logger.debug(f"摘除节点: {node_id} 从树 {tree_id}")
        return node

    def destroy_node(self, tree_id: str, node_id: str, cascade: Optional[bool] = None) -> List[TreeNode]:
        """
        销毁节点

        Args:
            cascade: 是否级联销毁，None 时使用 settings.cascade_destroy

        Returns:
            成为孤儿的子节点
        """
        repository = self.get_tree(tree_id)
        cascade = self.settings.cascade_destroy if cascade is None else cascade

        node = repository.require_node(node_id)
        doomed = [node] + (node.get_descendants() if cascade else [])
        orphans = repository.destroy_node(node_id, cascade=cascade)
        self._forget_nodes(doomed)

        self.logger.info(f"销毁节点: {node_id} (cascade={cascade}, 孤儿 {len(orphans)} 个)")
        return orphans

    # ========== 导入导出 ==========

    def export_tree(self, tree_id: str, file_path: Optional[str] = None) -> pd.DataFrame:
        """导出树结构为 DataFrame，指定 file_path 时同时写文件"""
        repository = self.get_tree(tree_id)
        if repository.root is None:
            raise TreeError(f"树为空: {tree_id}")

        if file_path:
            self._exporter.save(repository.root, file_path)
        return self._exporter.to_dataframe(repository.root)

    def import_tree(self, tree_id: str, source: Any, description: str = "") -> TreeNode:
        """
        导入树

        Args:
            tree_id: 新树ID
            source: 文件路径或 DataFrame

        Returns:
            根节点
        """
        self.validator.validate_tree_config({'tree_id': tree_id, 'description': description})
        if tree_id in self._trees:
            raise TreeError(f"树已存在: {tree_id}")

        if isinstance(source, pd.DataFrame):
            root = self._importer.import_dataframe(source)
        else:
            root = self._importer.import_tree(str(Path(source)))

        repository = NodeRepository(root)
        self._check_tree_limits(repository)

        self._register_tree(tree_id, repository, description)
        for node in repository.traverse():
            self._node_factory.register_node(node)
        self.logger.info(f"导入树成功: {tree_id} ({repository.get_node_count()} 个节点)")
        return root

    # ========== 系统信息 ==========

    def get_system_info(self) -> Dict[str, Any]:
        """获取系统信息"""
        return {
            "system_name": self.settings.system_name,
            "version": self.settings.version,
            "start_time": self._start_time.isoformat(),
            "tree_count": len(self._trees),
            "node_count": sum(repo.get_node_count() for repo in self._trees.values()),
            "variants": self._registry.list_variants(),
            "settings": self.settings.to_dict(),
        }

    # ========== 内部方法 ==========

    def _resolve_variant(self, variant: Optional[str]) -> Optional[str]:
        return variant if variant is not None else self.settings.default_variant

    def _forget_nodes(self, nodes: List[TreeNode]) -> None:
        """从节点工厂索引中移除节点"""
        for node in nodes:
            if self._node_factory.get_node(node.node_id) is node:
                self._node_factory.forget_node(node.node_id)

    def _check_limits(self, parent: TreeNode, subtree_height: int) -> None:
        """在 parent 下挂一棵高度为 subtree_height 的子树前检查限制"""
        children_count = len(parent.get_children()) + 1
        if children_count > self.settings.max_children_per_node:
            raise TreeLimitError("max_children_per_node", self.settings.max_children_per_node, children_count)

        depth = parent.get_depth() + 1 + subtree_height
        if depth > self.settings.max_tree_depth:
            raise TreeLimitError("max_tree_depth", self.settings.max_tree_depth, depth)

    def _check_tree_limits(self, repository: NodeRepository) -> None:
        """检查一整棵树（如导入的树）是否满足深度和宽度限制"""
        depth = repository.get_tree_depth()
        if depth > self.settings.max_tree_depth:
            raise TreeLimitError("max_tree_depth", self.settings.max_tree_depth, depth)

        for node in repository.traverse():
            children_count = len(node.get_children())
            if children_count > self.settings.max_children_per_node:
                raise TreeLimitError(
                    "max_children_per_node", self.settings.max_children_per_node, children_count
                )

    @staticmethod
    def _subtree_height(node: TreeNode) -> int:
        height = 0
        stack = [(node, 0)]
        while stack:
            current, level = stack.pop()
            height = max(height, level)
            stack.extend((child, level + 1) for child in current.get_children())
        return height
