"""
Utils Module
通用工具函数
"""
from .logger import setup_logger, bind_package_loggers
from .exceptions import (
    ArchiveSearchError,
    TransportError,
    MalformedResponseError,
    AggregateError,
    SearchValidationError,
)

__all__ = [
    "setup_logger",
    "bind_package_loggers",
    "ArchiveSearchError",
    "TransportError",
    "MalformedResponseError",
    "AggregateError",
    "SearchValidationError",
]
