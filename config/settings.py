"""
Settings Configuration
使用 Pydantic 进行配置验证和管理
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ArchiveSettings(BaseSettings):
    """Oorlogsbronnen / Spinque REST API 配置"""
    base_url: str = Field(
        default="https://rest.spinque.com/4/oorlogsbronnen/api",
        description="Spinque API 根地址",
    )
    api_version: str = Field(default="in10", description="API 版本段")
    config: str = Field(default="production", description="Spinque config 参数 (production / test)")
    requests_per_second: float = Field(default=10.0, description="请求速率上限")

    class Config:
        env_prefix = "OORLOGSBRONNEN_"


class SearchSettings(BaseSettings):
    """搜索与预算分配配置"""
    default_count: int = Field(default=10, description="默认返回结果数")
    max_count: int = Field(default=100, description="允许的最大结果数")
    preview_count: int = Field(default=20, description="预览采样条数 (无分类过滤)")
    min_per_category: int = Field(default=3, description="每个分类的最小分配数")
    hint_threshold: int = Field(default=10, description="超过该结果数时附加分类提示")

    class Config:
        env_prefix = "SEARCH_"


class GeneralSettings(BaseSettings):
    """通用设置"""
    request_timeout: int = Field(default=30, description="请求超时时间(秒)")
    log_level: str = Field(default="INFO", description="日志级别")


class Settings(BaseSettings):
    """主配置类 - 聚合所有子配置"""

    archive: ArchiveSettings = Field(default_factory=ArchiveSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    general: GeneralSettings = Field(default_factory=GeneralSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """从指定的 .env 文件加载配置"""
        if env_path is None:
            # 默认查找 config/.env
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            archive=ArchiveSettings(),
            search=SearchSettings(),
            general=GeneralSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """获取全局配置单例"""
    return Settings.load_from_env_file()

