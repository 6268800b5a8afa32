"""
Data Models
"""
from .schemas import (
    ContentType,
    UNKNOWN_TYPE,
    type_tag_from_class_uris,
    RawResultItem,
    ResultPage,
    SearchStats,
    SourceInfo,
    NormalizedRecord,
    MediaRecord,
    PersonRecord,
    BookRecord,
    CategoryBucket,
    AggregateResult,
    MediaGroup,
)

__all__ = [
    "ContentType",
    "UNKNOWN_TYPE",
    "type_tag_from_class_uris",
    "RawResultItem",
    "ResultPage",
    "SearchStats",
    "SourceInfo",
    "NormalizedRecord",
    "MediaRecord",
    "PersonRecord",
    "BookRecord",
    "CategoryBucket",
    "AggregateResult",
    "MediaGroup",
]
