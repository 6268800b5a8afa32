"""
Attribute Normalizer
把异构属性包规范化为按分类区分的统一记录
"""
from dataclasses import dataclass
import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from models import (
    BookRecord,
    ContentType,
    MediaRecord,
    NormalizedRecord,
    PersonRecord,
    RawResultItem,
    SourceInfo,
)
from .attributes import Vocab, all_values, coerce_int, first_value


logger = logging.getLogger(__name__)

RECORD_PREFIX = "https://www.oorlogsbronnen.nl/record/"
UNTITLED = "Untitled"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


def to_canonical_url(record_id: str, prefix: str = RECORD_PREFIX) -> str:
    """
    由记录 ID 生成公开链接 (幂等)

    - 以前缀开头且剩余部分本身是 URL: 去掉前缀 (可能重复多层)
    - 本身是绝对 URL: 原样返回
    - 否则加上前缀
    """
    value = str(record_id or "").strip()
    while value.startswith(prefix) and _ABSOLUTE_URL.match(value[len(prefix):]):
        value = value[len(prefix):]
    if _ABSOLUTE_URL.match(value):
        return value
    return f"{prefix}{value}"


def _common_fields(item: RawResultItem, type_tag: str) -> Dict[str, Any]:
    attrs = item.attributes
    return {
        "id": item.id,
        "title": first_value(attrs, Vocab.NAME, Vocab.TITLE) or UNTITLED,
        "type": type_tag,
        "description": first_value(attrs, Vocab.DESCRIPTION, Vocab.DESCRIPTION_ALT),
        "url": to_canonical_url(item.id),
        "date": first_value(attrs, Vocab.DATE, Vocab.DATE_ALT),
        "creator": first_value(attrs, Vocab.CREATOR, Vocab.CREATOR_ALT),
        "language": first_value(attrs, Vocab.LANGUAGE, Vocab.LANGUAGE_ALT),
        "webpage_url": first_value(attrs, Vocab.SOURCE, Vocab.URL),
    }


def build_plain_record(attrs: Mapping[str, Any], common: Dict[str, Any]) -> NormalizedRecord:
    return NormalizedRecord(**common)


def _media_builder(with_duration: bool) -> Callable[[Mapping[str, Any], Dict[str, Any]], MediaRecord]:
    def build(attrs: Mapping[str, Any], common: Dict[str, Any]) -> MediaRecord:
        return MediaRecord(
            **common,
            image_url=first_value(attrs, Vocab.IMAGE, Vocab.CONTENT_URL),
            thumbnail_url=first_value(attrs, Vocab.THUMBNAIL, Vocab.THUMBNAIL_URL),
            mime_type=first_value(attrs, Vocab.ENCODING_FORMAT),
            width=coerce_int(first_value(attrs, Vocab.WIDTH)),
            height=coerce_int(first_value(attrs, Vocab.HEIGHT)),
            duration=first_value(attrs, Vocab.DURATION) if with_duration else None,
            license=first_value(attrs, Vocab.LICENSE),
            keywords=all_values(attrs, Vocab.KEYWORDS),
            copyright_holder=first_value(attrs, Vocab.COPYRIGHT_HOLDER),
            source=SourceInfo(
                name=first_value(attrs, Vocab.PROVIDER, Vocab.PUBLISHER),
                url=common.get("webpage_url"),
            ),
        )
    return build


def build_person_record(attrs: Mapping[str, Any], common: Dict[str, Any]) -> PersonRecord:
    job_titles = all_values(attrs, Vocab.JOB_TITLE)
    return PersonRecord(
        **common,
        birth_place=first_value(attrs, Vocab.BIRTH_PLACE),
        death_place=first_value(attrs, Vocab.DEATH_PLACE),
        job_title=", ".join(job_titles) if job_titles else None,
        preferred_name=first_value(attrs, Vocab.PREFERRED_NAME),
    )


def build_book_record(attrs: Mapping[str, Any], common: Dict[str, Any]) -> BookRecord:
    return BookRecord(
        **common,
        author=first_value(attrs, Vocab.AUTHOR, Vocab.CREATOR),
        publisher=first_value(attrs, Vocab.PUBLISHER, Vocab.PUBLISHER_ALT),
        subject=all_values(attrs, Vocab.SUBJECT),
    )


@dataclass(frozen=True)
class CategoryDescriptor:
    """
    分类描述: 名称 + 记录构建函数
    fan_out=False 的分类只在显式请求时才搜索
    """
    name: str
    build: Callable[[Mapping[str, Any], Dict[str, Any]], NormalizedRecord]
    fan_out: bool = True


# 固定顺序，决定结果桶的顺序
CATEGORY_DESCRIPTORS: Tuple[CategoryDescriptor, ...] = (
    CategoryDescriptor(ContentType.PERSON.value, build_person_record),
    CategoryDescriptor(ContentType.PHOTOGRAPH.value, _media_builder(with_duration=False)),
    CategoryDescriptor(ContentType.ARTICLE.value, build_plain_record),
    CategoryDescriptor(ContentType.VIDEO_OBJECT.value, _media_builder(with_duration=True)),
    CategoryDescriptor(ContentType.THING.value, build_plain_record),
    CategoryDescriptor(ContentType.PLACE.value, build_plain_record),
    CategoryDescriptor(ContentType.CREATIVE_WORK.value, _media_builder(with_duration=False)),
    CategoryDescriptor(ContentType.BOOK.value, build_book_record, fan_out=False),
)

DESCRIPTORS_BY_NAME: Dict[str, CategoryDescriptor] = {d.name: d for d in CATEGORY_DESCRIPTORS}

ALL_CATEGORIES: Tuple[str, ...] = tuple(d.name for d in CATEGORY_DESCRIPTORS)
FANOUT_CATEGORIES: Tuple[str, ...] = tuple(d.name for d in CATEGORY_DESCRIPTORS if d.fan_out)


def normalize_item(item: RawResultItem, category: Optional[str] = None) -> NormalizedRecord:
    """
    规范化单条结果，不抛异常

    Args:
        item: 原始结果
        category: 分类标签 (默认取 item 自身 class URI 的最后一段)

    Returns:
        对应分类的记录；未知分类返回基础记录
    """
    type_tag = item.type_tag
    descriptor = DESCRIPTORS_BY_NAME.get(category or type_tag) or DESCRIPTORS_BY_NAME.get(type_tag)
    common = _common_fields(item, type_tag)
    if descriptor is None:
        return NormalizedRecord(**common)
    try:
        return descriptor.build(item.attributes, common)
    except Exception as e:
        # 扩展字段异常时退回基础记录
        logger.warning(f"[{descriptor.name}] Falling back to plain record for {item.id}: {e}")
        return NormalizedRecord(**common)
