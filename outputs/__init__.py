"""
Outputs Module
输出层 - 媒体分组、Markdown 报告与 JSON 结构
"""

from .grouping import (
    UNKNOWN_GROUP,
    media_group_key,
    group_media_by_provenance,
)
from .renderers import (
    build_category_hint,
    render_search_report,
    build_search_payload,
)

__all__ = [
    # Grouping
    "UNKNOWN_GROUP",
    "media_group_key",
    "group_media_by_provenance",
    # Renderers
    "build_category_hint",
    "render_search_report",
    "build_search_payload",
]
