"""
Output Renderers
将聚合结果渲染为 Markdown 报告 / JSON 结构
"""

from __future__ import annotations

from datetime import datetime
import re
from typing import Any, Dict, List, Optional

from models import AggregateResult, NormalizedRecord
from .grouping import group_media_by_provenance


DEFAULT_HINT_THRESHOLD = 10


def _truncate_text(value: str, max_len: int = 280) -> str:
    text = re.sub(r"\s+", " ", str(value or "")).strip()
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def _elapsed_seconds(
    started_at: Optional[datetime],
    finished_at: Optional[datetime],
) -> Optional[float]:
    if started_at is None or finished_at is None:
        return None
    return round(max(0.0, (finished_at - started_at).total_seconds()), 3)


def _non_empty_categories(result: AggregateResult) -> List[str]:
    return [name for name, bucket in result.buckets.items() if bucket.reported_total > 0]


def build_category_hint(
    result: AggregateResult,
    threshold: int = DEFAULT_HINT_THRESHOLD,
) -> Optional[str]:
    """
    结果较多时给出按分类缩小范围的提示

    Returns:
        提示文本；总数不超过阈值时为 None
    """
    if result.total_items <= threshold:
        return None
    listed = ", ".join(
        f"{name} ({result.buckets[name].reported_total})"
        for name in _non_empty_categories(result)
    )
    return (
        f"Found about {result.total_items} records across categories: {listed}. "
        "Narrow the search by repeating it with one of these categories as type filter."
    )


def _render_record(index: int, record: NormalizedRecord) -> List[str]:
    lines = [f"{index}. **{record.title}**"]
    if record.description:
        lines.append(f"   {_truncate_text(record.description)}")
    if record.webpage_url:
        lines.append(f"   - Original source: {record.webpage_url}")
    lines.append(f"   - Record: {record.url}")
    if record.creator:
        lines.append(f"   - Creator: {record.creator}")
    if record.date:
        lines.append(f"   - Date: {record.date}")
    copyright_holder = getattr(record, "copyright_holder", None)
    if copyright_holder:
        lines.append(f"   - Copyright: {copyright_holder}")
    if record.image_url:
        lines.append(f"   - Image: ![{record.title}]({record.image_url})")
    return lines


def render_search_report(
    query: str,
    result: AggregateResult,
    started_at: Optional[datetime] = None,
    finished_at: Optional[datetime] = None,
    hint_threshold: int = DEFAULT_HINT_THRESHOLD,
) -> str:
    """
    渲染 Markdown 检索报告

    分类按固定顺序输出，只输出估算总数大于 0 的分类。
    除处理耗时外输出是确定的。
    """
    scope = result.category or "all categories"
    parts: List[str] = [
        f"# Oorlogsbronnen search: {query or '(empty query)'}",
        "",
        f"_Scope: {scope} | Requested: {result.requested_count} | "
        f"Returned: {result.returned_items} | Estimated total: {result.total_items}_",
        "",
    ]

    categories = _non_empty_categories(result)
    if not categories:
        parts.extend(["_No records found._", ""])

    for name in categories:
        bucket = result.buckets[name]
        parts.append(f"## {name} ({bucket.reported_total})")
        parts.append("")
        if not bucket.items:
            parts.extend(["_No records returned for this category._", ""])
            continue
        for index, record in enumerate(bucket.items, start=1):
            parts.extend(_render_record(index, record))
        parts.append("")

    if result.errors:
        parts.append("## Skipped categories")
        parts.append("")
        for name, cause in result.errors.items():
            parts.append(f"- {name}: {cause}")
        parts.append("")

    hint = build_category_hint(result, threshold=hint_threshold)
    if hint:
        parts.extend([f"> {hint}", ""])

    elapsed = _elapsed_seconds(started_at, finished_at)
    if elapsed is not None:
        parts.extend([f"_Processing time: {elapsed:.2f}s_", ""])

    return "\n".join(parts).strip() + "\n"


def build_search_payload(
    query: str,
    result: AggregateResult,
    started_at: Optional[datetime] = None,
    finished_at: Optional[datetime] = None,
    hint_threshold: int = DEFAULT_HINT_THRESHOLD,
) -> Dict[str, Any]:
    """
    构建可直接 json.dumps 的结果结构 (含媒体分组和已恢复的错误)
    """
    payload: Dict[str, Any] = {
        "query": query,
        "category": result.category,
        "requested_count": result.requested_count,
        "total_items": result.total_items,
        "returned_items": result.returned_items,
        "preview_used": result.preview_used,
        "allocation": dict(result.allocation),
        "categories": {
            name: {
                "reported_total": bucket.reported_total,
                "items": [record.model_dump(mode="json") for record in bucket.items],
            }
            for name, bucket in result.buckets.items()
        },
        "media_groups": [
            group.model_dump(mode="json") for group in group_media_by_provenance(result)
        ],
        "errors": dict(result.errors),
        "hint": build_category_hint(result, threshold=hint_threshold),
    }

    elapsed = _elapsed_seconds(started_at, finished_at)
    if elapsed is not None:
        payload["started_at"] = started_at.isoformat()
        payload["finished_at"] = finished_at.isoformat()
        payload["processing_seconds"] = elapsed
    return payload
