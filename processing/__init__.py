"""
Processing Module
结果处理模块 - 属性读取、规范化、图片解析
"""
from .attributes import Vocab, first_value, all_values, coerce_int
from .normalizer import (
    RECORD_PREFIX,
    CategoryDescriptor,
    CATEGORY_DESCRIPTORS,
    ALL_CATEGORIES,
    FANOUT_CATEGORIES,
    to_canonical_url,
    normalize_item,
)
from .image_resolver import (
    ProviderRule,
    PROVIDER_RULES,
    extract_media_id,
    resolve_image_url,
)

__all__ = [
    # Attributes
    "Vocab",
    "first_value",
    "all_values",
    "coerce_int",
    # Normalizer
    "RECORD_PREFIX",
    "CategoryDescriptor",
    "CATEGORY_DESCRIPTORS",
    "ALL_CATEGORIES",
    "FANOUT_CATEGORIES",
    "to_canonical_url",
    "normalize_item",
    # Image resolver
    "ProviderRule",
    "PROVIDER_RULES",
    "extract_media_id",
    "resolve_image_url",
]
