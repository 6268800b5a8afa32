"""
Custom Exceptions
自定义异常类
"""
from typing import Any, Dict, Optional


class ArchiveSearchError(Exception):
    """档案检索基础异常类"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TransportError(ArchiveSearchError):
    """传输层错误 (网络 / HTTP 状态码)"""

    def __init__(self, message: str, source: str = None, status: Optional[int] = None, **kwargs):
        super().__init__(message, kwargs)
        self.source = source
        self.status = status


class MalformedResponseError(TransportError):
    """响应缺少 items / total"""
    pass


class AggregateError(ArchiveSearchError):
    """
    对调用方可见的唯一错误类型
    只携带查询词和简短的原因字符串，不携带原始异常对象
    """

    def __init__(self, query: str, cause: str, **kwargs):
        self.query = query
        self.cause = cause
        super().__init__(f"Search for '{query}' failed: {cause}", kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "query": self.query,
            "cause": self.cause,
        }


class SearchValidationError(AggregateError):
    """参数校验错误 (在任何外部调用之前抛出)"""
    pass
