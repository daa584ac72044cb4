"""
有序树节点库异常体系
"""
from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """所有异常的基类"""
    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.context = context or {}
        self.timestamp = datetime.now()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典，便于序列化"""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# ==================== 配置和验证异常 ====================
class ConfigError(BaseError):
    """配置错误"""
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details, **kwargs)


class ValidationError(BaseError):
    """数据验证错误"""
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        reason: Optional[str] = None,
        **kwargs
    ):
        details = {
            "field": field,
            "value": value,
            "reason": reason
        }
        super().__init__(message, code="VALIDATION_ERROR", details=details, **kwargs)


# ==================== 树结构相关异常 ====================
class TreeError(BaseError):
    """树结构错误基类"""
    pass


class TreeNotFoundError(TreeError):
    """树不存在"""
    def __init__(self, tree_id: str, **kwargs):
        super().__init__(
            message=f"树不存在: {tree_id}",
            code="TREE_NOT_FOUND",
            details={"tree_id": tree_id},
            **kwargs
        )


class TreeLimitError(TreeError):
    """超出树的深度或宽度限制"""
    def __init__(self, limit_name: str, limit: int, actual: int, **kwargs):
        super().__init__(
            message=f"超出树结构限制 {limit_name}: {actual} > {limit}",
            code="TREE_LIMIT_EXCEEDED",
            details={"limit_name": limit_name, "limit": limit, "actual": actual},
            **kwargs
        )


class NodeError(TreeError):
    """节点操作错误"""
    pass


class NodeNotFoundError(NodeError):
    """节点不存在（按ID查找）"""
    def __init__(self, node_id: Optional[str] = None, **kwargs):
        message = "节点不存在"
        if node_id:
            message += f": id={node_id}"
        super().__init__(
            message,
            code="NODE_NOT_FOUND",
            details={"node_id": node_id} if node_id else {},
            **kwargs
        )


class NotFoundError(NodeError):
    """子节点不在当前节点的子节点列表中"""
    def __init__(self, message: str = "Child not found", node_id: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            code="CHILD_NOT_FOUND",
            details={"node_id": node_id},
            **kwargs
        )


class InvalidArgumentError(NodeError):
    """参数缺失或类型无效"""
    def __init__(self, message: str, argument: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(
            message,
            code="INVALID_ARGUMENT",
            details={"argument": argument, "value": value},
            **kwargs
        )


class IndexOutOfRangeError(NodeError):
    """索引越界"""
    def __init__(self, index: int, size: int, operation: Optional[str] = None, **kwargs):
        message = f"Index {index} is out of bounds."
        if operation:
            message = f"Index {index} is out of bounds for {operation} (size={size})."
        super().__init__(
            message,
            code="INDEX_OUT_OF_RANGE",
            details={"index": index, "size": size, "operation": operation},
            **kwargs
        )


class InvalidStateError(NodeError):
    """节点已销毁后仍被操作"""
    def __init__(self, node_id: Optional[str] = None, operation: Optional[str] = None, **kwargs):
        message = "节点已销毁"
        if operation:
            message += f"，无法执行 {operation}"
        if node_id:
            message += f": id={node_id}"
        super().__init__(
            message,
            code="INVALID_STATE",
            details={"node_id": node_id, "operation": operation},
            **kwargs
        )


# ==================== 载荷变体相关异常 ====================
class VariantError(BaseError):
    """载荷变体错误基类"""
    pass


class VariantNotFoundError(VariantError):
    """变体不存在"""
    def __init__(self, variant_name: str, **kwargs):
        super().__init__(
            message=f"变体不存在: {variant_name}",
            code="VARIANT_NOT_FOUND",
            details={"variant_name": variant_name},
            **kwargs
        )


class VariantValidationError(VariantError):
    """变体注册或载荷验证失败"""
    def __init__(self, variant_name: str, value: Any, reason: str, **kwargs):
        super().__init__(
            message=f"变体'{variant_name}'验证失败: {reason}",
            code="VARIANT_VALIDATION_ERROR",
            details={
                "variant_name": variant_name,
                "value": value,
                "reason": reason
            },
            **kwargs
        )


# ==================== 导入导出异常 ====================
class TreeImportError(BaseError):
    """导入过程异常"""
    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            code="TREE_IMPORT_ERROR",
            details={"source": source} if source else {},
            **kwargs
        )
