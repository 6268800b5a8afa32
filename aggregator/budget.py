"""
Category Budget Planner
在没有分类过滤时，把结果预算分配到各分类

后端没有 "按分类拆分的全局总数" 接口，这里用一次小规模预览采样估算分布，
搜索完成后再按实际返回条数把预览总数按比例摊到各分类 (估算值，不是精确计数)。
"""
from collections import Counter
import math
from typing import Dict, Mapping, Optional, Sequence

from models import RawResultItem
from processing import ALL_CATEGORIES, FANOUT_CATEGORIES
from utils.exceptions import SearchValidationError


DEFAULT_MIN_PER_CATEGORY = 3


def even_split(count: int, categories: Sequence[str] = FANOUT_CATEGORIES) -> Dict[str, int]:
    """平均分配 (向上取整)，每个分类相同"""
    if not categories:
        return {}
    share = math.ceil(count / len(categories))
    return {category: share for category in categories}


def plan_category_budget(
    count: int,
    preview_items: Optional[Sequence[RawResultItem]] = None,
    categories: Sequence[str] = FANOUT_CATEGORIES,
    min_per_category: int = DEFAULT_MIN_PER_CATEGORY,
) -> Dict[str, int]:
    """
    计算每个分类的请求条数

    Args:
        count: 请求总数
        preview_items: 无过滤的预览样本 (可为空)
        categories: 参与分配的分类 (有序)
        min_per_category: 有预览时每个分类的最小分配数

    Returns:
        分类 -> 请求条数，总和约等于 count
    """
    if not preview_items:
        return even_split(count, categories)

    sampled = len(preview_items)
    occurrences = Counter(item.type_tag for item in preview_items)

    allocation: Dict[str, int] = {}
    for category in categories:
        frequency = occurrences.get(category, 0) / sampled
        # 样本中未出现的分类也保底，保证探索性覆盖
        allocation[category] = max(min_per_category, math.ceil(count * frequency))
    return allocation


def estimate_reported_totals(
    preview_total: int,
    returned_counts: Mapping[str, int],
) -> Optional[Dict[str, int]]:
    """
    按各分类实际返回条数，把预览总数按比例分摊

    Returns:
        分类 -> 估算总数；所有分类都没有返回时为 None (不做除零)
    """
    denominator = sum(returned_counts.values())
    if denominator <= 0:
        return None
    return {
        category: int(round(preview_total * returned / denominator))
        for category, returned in returned_counts.items()
    }


def validate_count(count: object, max_count: int, query: str = "") -> int:
    """校验请求条数，超出范围直接拒绝 (不做截断)"""
    if isinstance(count, bool) or not isinstance(count, int):
        raise SearchValidationError(query, f"count must be an integer, got {count!r}")
    if count < 1 or count > max_count:
        raise SearchValidationError(query, f"count must be between 1 and {max_count}, got {count}")
    return count


def resolve_category(category: Optional[str], query: str = "") -> Optional[str]:
    """
    把分类名映射到规范名称 (大小写不敏感)

    Returns:
        规范分类名；未指定时为 None
    """
    if category is None:
        return None
    wanted = str(category).strip()
    if not wanted:
        return None
    for name in ALL_CATEGORIES:
        if name.lower() == wanted.lower():
            return name
    raise SearchValidationError(
        query,
        f"unknown category '{category}', expected one of: {', '.join(ALL_CATEGORIES)}",
    )
