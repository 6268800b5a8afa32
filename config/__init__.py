"""
Configuration Management Module
统一配置管理，实现API配置解耦
"""
from .settings import (
    Settings,
    ArchiveSettings,
    SearchSettings,
    GeneralSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "ArchiveSettings",
    "SearchSettings",
    "GeneralSettings",
    "get_settings",
]
