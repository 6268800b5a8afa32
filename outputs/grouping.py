"""
Media Grouping
按作者 / 提供方聚合媒体记录
"""
from typing import Dict, List

from models import AggregateResult, ContentType, MediaGroup, MediaRecord


UNKNOWN_GROUP = "Unknown"

PRIMARY_MEDIA_TYPES = (ContentType.PHOTOGRAPH.value, ContentType.VIDEO_OBJECT.value)


def media_group_key(record: MediaRecord) -> str:
    """creator -> source.name -> Unknown"""
    return record.creator or record.source.name or UNKNOWN_GROUP


def group_media_by_provenance(result: AggregateResult) -> List[MediaGroup]:
    """
    把所有分类中的媒体记录按来源分组

    照片 / 视频放入 primary_items，其它媒体 (CreativeWork 等) 放入 related_items。
    分组顺序按首次出现的顺序，非媒体记录忽略。
    """
    groups: Dict[str, MediaGroup] = {}
    for category, bucket in result.buckets.items():
        for record in bucket.items:
            if not isinstance(record, MediaRecord):
                continue
            key = media_group_key(record)
            group = groups.get(key)
            if group is None:
                group = groups[key] = MediaGroup(group_key=key)
            if category in PRIMARY_MEDIA_TYPES or record.type in PRIMARY_MEDIA_TYPES:
                group.primary_items.append(record)
            else:
                group.related_items.append(record)
    return list(groups.values())
