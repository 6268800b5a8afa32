"""
Attribute Bag Access
属性包读取 - 后端对单值/多值字段不一致，统一按 "取第一个" 处理
"""
from typing import Any, Iterable, List, Mapping, Optional


SCHEMA = "http://schema.org/"
DC = "http://purl.org/dc/elements/1.1/"
NIOD = "https://data.niod.nl/"


class Vocab:
    """用到的属性 URI"""
    NAME = SCHEMA + "name"
    TITLE = DC + "title"
    DESCRIPTION = DC + "description"
    DESCRIPTION_ALT = SCHEMA + "description"
    DATE = DC + "date"
    DATE_ALT = SCHEMA + "dateCreated"
    CREATOR = DC + "creator"
    CREATOR_ALT = SCHEMA + "creator"
    LANGUAGE = DC + "language"
    LANGUAGE_ALT = SCHEMA + "inLanguage"
    SOURCE = DC + "source"
    URL = SCHEMA + "url"
    PUBLISHER = DC + "publisher"
    PUBLISHER_ALT = SCHEMA + "publisher"
    SUBJECT = DC + "subject"

    # media
    IMAGE = SCHEMA + "image"
    CONTENT_URL = SCHEMA + "contentUrl"
    THUMBNAIL = SCHEMA + "thumbnail"
    THUMBNAIL_URL = SCHEMA + "thumbnailUrl"
    ENCODING_FORMAT = SCHEMA + "encodingFormat"
    WIDTH = SCHEMA + "width"
    HEIGHT = SCHEMA + "height"
    DURATION = SCHEMA + "duration"
    LICENSE = SCHEMA + "license"
    KEYWORDS = SCHEMA + "keywords"
    COPYRIGHT_HOLDER = SCHEMA + "copyrightHolder"
    PROVIDER = SCHEMA + "provider"

    # person
    BIRTH_PLACE = SCHEMA + "birthPlace"
    DEATH_PLACE = SCHEMA + "deathPlace"
    JOB_TITLE = SCHEMA + "jobTitle"
    PREFERRED_NAME = NIOD + "preferredName"

    # book
    AUTHOR = SCHEMA + "author"


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (dict, list, tuple, set)):
        return None
    text = str(value).strip()
    return text or None


def _iter_values(value: Any) -> Iterable[Any]:
    if isinstance(value, (list, tuple)):
        return value
    return (value,)


def first_value(attributes: Mapping[str, Any], *keys: str) -> Optional[str]:
    """
    按顺序尝试多个 key，返回第一个非空标量 (字符串形式)

    Args:
        attributes: 原始属性包
        keys: 主 key 在前，备用 key 在后

    Returns:
        第一个非空值，或 None
    """
    if not isinstance(attributes, Mapping):
        return None
    for key in keys:
        for value in _iter_values(attributes.get(key)):
            text = _as_text(value)
            if text is not None:
                return text
    return None


def all_values(attributes: Mapping[str, Any], *keys: str) -> List[str]:
    """返回所有 key 下的全部非空标量，去重并保持顺序"""
    if not isinstance(attributes, Mapping):
        return []
    out: List[str] = []
    seen = set()
    for key in keys:
        for value in _iter_values(attributes.get(key)):
            text = _as_text(value)
            if text is None or text in seen:
                continue
            seen.add(text)
            out.append(text)
    return out


def coerce_int(value: Optional[str]) -> Optional[int]:
    """
    尽力转换为 int ("640" / "640px" / "640.0")，失败返回 None
    """
    if value is None:
        return None
    digits = str(value).strip().lower().replace("px", "").strip()
    if not digits:
        return None
    try:
        return int(float(digits))
    except (TypeError, ValueError, OverflowError):
        return None
