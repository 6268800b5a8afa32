"""
Image URL Resolver
为结果挑选 "最佳可用" 图片地址

优先级 (先命中者胜出):
1. 直接图片字段，其次 contentUrl
2. 缩略图字段
3. 按来源 URL 的提供方规则重建 (规则表，按顺序匹配)
4. 都不命中返回 None -- 表示没有图片，不是错误
"""
from dataclasses import dataclass
import logging
import re
from typing import Any, Callable, Mapping, Optional, Tuple

from .attributes import Vocab, all_values, first_value


logger = logging.getLogger(__name__)

MEDIA_ID_PATTERN = re.compile(r"/media/([0-9a-fA-F-]+)")


def extract_media_id(source_url: str) -> Optional[str]:
    """从 /media/<id> 路径段提取媒体 ID"""
    match = MEDIA_ID_PATTERN.search(source_url or "")
    return match.group(1) if match else None


def _thumbnail(attributes: Mapping[str, Any]) -> Optional[str]:
    return first_value(attributes, Vocab.THUMBNAIL, Vocab.THUMBNAIL_URL)


@dataclass(frozen=True)
class ProviderRule:
    """
    单个提供方规则

    matches: 来源 URL 是否属于该提供方
    resolve: (来源 URL, 属性包) -> 图片地址或 None
    """
    name: str
    matches: Callable[[str], bool]
    resolve: Callable[[str, Mapping[str, Any]], Optional[str]]


def _memorix_thumb(template: str) -> Callable[[str, Mapping[str, Any]], Optional[str]]:
    def build(source_url: str, attributes: Mapping[str, Any]) -> Optional[str]:
        media_id = extract_media_id(source_url)
        if not media_id:
            return None
        return template.format(media_id=media_id)
    return build


def _domain(domain: str) -> Callable[[str], bool]:
    return lambda url: domain in url


PROVIDER_RULES: Tuple[ProviderRule, ...] = (
    ProviderRule(
        name="beeldbankwo2",
        matches=_domain("beeldbankwo2.nl"),
        resolve=_memorix_thumb("https://images.memorix.nl/niod/thumb/1000x1000/{media_id}.jpg"),
    ),
    ProviderRule(
        name="cultureelerfgoed",
        matches=_domain("beeldbank.cultureelerfgoed.nl"),
        resolve=_memorix_thumb("https://images.memorix.nl/rce/thumb/1600x1600/{media_id}.jpg"),
    ),
    # 该站点 URL 中没有可用的媒体 ID，只能用缩略图
    ProviderRule(
        name="historischcentrumleeuwarden",
        matches=_domain("historischcentrumleeuwarden.nl"),
        resolve=lambda source_url, attributes: _thumbnail(attributes),
    ),
)


def resolve_image_url(attributes: Mapping[str, Any]) -> Optional[str]:
    """
    解析最佳可用图片 URL

    Args:
        attributes: 原始属性包

    Returns:
        图片 URL，无图片时为 None
    """
    direct = first_value(attributes, Vocab.IMAGE, Vocab.CONTENT_URL)
    if direct:
        return direct

    thumbnail = _thumbnail(attributes)
    if thumbnail:
        return thumbnail

    # 来源字段可能有多个值，逐个匹配规则表
    for source_url in all_values(attributes, Vocab.SOURCE, Vocab.URL):
        for rule in PROVIDER_RULES:
            if not rule.matches(source_url):
                continue
            resolved = rule.resolve(source_url, attributes)
            if resolved:
                logger.debug(f"[{rule.name}] Reconstructed image URL from {source_url}")
                return resolved
            break

    return None
