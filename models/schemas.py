"""
Data Models / Schemas
定义统一的数据结构
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny


class ContentType(str, Enum):
    """内容分类 (对应 schema.org 类名)"""
    PERSON = "Person"
    PHOTOGRAPH = "Photograph"
    ARTICLE = "Article"
    VIDEO_OBJECT = "VideoObject"
    THING = "Thing"
    PLACE = "Place"
    CREATIVE_WORK = "CreativeWork"
    BOOK = "Book"


UNKNOWN_TYPE = "unknown"


def type_tag_from_class_uris(class_uris: List[str]) -> str:
    """取第一个 class URI 的最后一段作为分类标签"""
    if not class_uris:
        return UNKNOWN_TYPE
    first = str(class_uris[0] or "").rstrip("/")
    tag = first.rsplit("/", 1)[-1].rsplit("#", 1)[-1]
    return tag or UNKNOWN_TYPE


class RawResultItem(BaseModel):
    """后端返回的原始结果 (属性包)"""
    model_config = ConfigDict(frozen=True)

    rank: float = Field(default=0.0, description="后端排序值")
    probability: float = Field(default=0.0, description="后端相关概率")
    id: str = Field(..., description="记录标识")
    class_uris: List[str] = Field(default_factory=list, description="schema.org class URI 列表")
    attributes: Dict[str, Any] = Field(default_factory=dict, description="URI -> 标量或标量列表")

    @property
    def type_tag(self) -> str:
        return type_tag_from_class_uris(self.class_uris)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "RawResultItem":
        """
        从 Spinque 的 {rank, probability, tuple: [{id, class, attributes}]} 结构构建
        """
        entries = payload.get("tuple") or []
        if not entries or not isinstance(entries[0], dict):
            raise ValueError("result item has no tuple entry")
        entry = entries[0]
        classes = entry.get("class") or []
        if isinstance(classes, str):
            classes = [classes]
        return cls(
            rank=payload.get("rank") or 0.0,
            probability=payload.get("probability") or 0.0,
            id=str(entry.get("id") or ""),
            class_uris=[str(c) for c in classes],
            attributes=dict(entry.get("attributes") or {}),
        )


class ResultPage(BaseModel):
    """一页搜索结果"""
    offset: int = Field(default=0)
    count: int = Field(default=0)
    items: List[RawResultItem] = Field(default_factory=list)


class SearchStats(BaseModel):
    """搜索统计 (后端报告的总数)"""
    total: int = Field(default=0, ge=0)


class SourceInfo(BaseModel):
    """原始来源 (提供方名称 + 原始页面)"""
    name: Optional[str] = None
    url: Optional[str] = None


class NormalizedRecord(BaseModel):
    """统一的结果记录"""
    id: str = Field(..., description="原始标识")
    title: str = Field(..., min_length=1, description="标题，永不为空")
    type: str = Field(..., description="分类标签")
    description: Optional[str] = None
    url: str = Field(..., description="公开记录链接")
    date: Optional[str] = None
    creator: Optional[str] = None
    language: Optional[str] = None
    webpage_url: Optional[str] = Field(None, description="原始来源页面")
    image_url: Optional[str] = Field(None, description="最佳可用图片")


class MediaRecord(NormalizedRecord):
    """照片 / 视频 / 创作作品"""
    thumbnail_url: Optional[str] = None
    mime_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[str] = Field(None, description="仅 VideoObject")
    license: Optional[str] = None
    keywords: List[str] = Field(default_factory=list, description="去重后的关键词")
    copyright_holder: Optional[str] = None
    source: SourceInfo = Field(default_factory=SourceInfo)


class PersonRecord(NormalizedRecord):
    """人物记录"""
    birth_place: Optional[str] = None
    death_place: Optional[str] = None
    job_title: Optional[str] = None
    preferred_name: Optional[str] = None


class BookRecord(NormalizedRecord):
    """书籍记录"""
    author: Optional[str] = None
    publisher: Optional[str] = None
    subject: List[str] = Field(default_factory=list)


class CategoryBucket(BaseModel):
    """单个分类的结果桶"""
    reported_total: int = Field(default=0, ge=0, description="估算总数")
    items: List[SerializeAsAny[NormalizedRecord]] = Field(default_factory=list)


class AggregateResult(BaseModel):
    """多分类聚合结果"""
    query: str = Field(..., description="查询词")
    category: Optional[str] = Field(None, description="分类过滤 (无则为全分类)")
    requested_count: int = Field(..., description="请求结果数")
    buckets: Dict[str, CategoryBucket] = Field(default_factory=dict)
    allocation: Dict[str, int] = Field(default_factory=dict, description="每个分类的请求数")
    errors: Dict[str, str] = Field(default_factory=dict, description="已恢复的分类错误")
    preview_used: bool = Field(default=False)

    @property
    def total_items(self) -> int:
        """估算总数之和"""
        return sum(bucket.reported_total for bucket in self.buckets.values())

    @property
    def returned_items(self) -> int:
        return sum(len(bucket.items) for bucket in self.buckets.values())


class MediaGroup(BaseModel):
    """按作者 / 提供方聚合的媒体"""
    group_key: str
    primary_items: List[SerializeAsAny[NormalizedRecord]] = Field(default_factory=list)
    related_items: List[SerializeAsAny[NormalizedRecord]] = Field(default_factory=list)
