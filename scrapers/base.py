"""
Base Scraper
所有抓取器的抽象基类
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple
import asyncio
import logging
import time

from config import Settings, get_settings
from models import ResultPage, SearchStats


logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    抓取器抽象基类
    聚合器只依赖 search() 契约，测试中可以用任意实现替换
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._session = None

    @property
    @abstractmethod
    def name(self) -> str:
        """返回抓取器名称"""
        pass

    @abstractmethod
    async def search(
        self,
        query: str,
        category: Optional[str] = None,
        count: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[ResultPage, SearchStats]:
        """
        搜索接口

        Args:
            query: 搜索关键词 (允许为空)
            category: 分类过滤 (schema.org 类名)，None 表示不过滤
            count: 返回条数
            offset: 偏移量

        Returns:
            (结果页, 统计)

        Raises:
            TransportError: 网络或 HTTP 错误
            MalformedResponseError: 响应缺少 items / total
        """
        pass

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()

    async def close(self):
        """清理资源"""
        if self._session:
            await self._session.close()
            self._session = None

    def _log_search(self, query: str, category: Optional[str], count: int, total: int):
        """记录搜索日志"""
        scope = category or "all"
        logger.info(f"[{self.name}] Search '{query}' ({scope}) returned {count} of {total} results")

    def _log_error(self, message: str, error: Exception):
        """记录错误日志"""
        logger.error(f"[{self.name}] {message}: {error}")


class RateLimitedScraper(BaseScraper):
    """
    带速率限制的抓取器基类
    """

    def __init__(self, requests_per_second: float = 1.0, settings: Optional[Settings] = None):
        super().__init__(settings)
        self._rate_limit = max(0.1, float(requests_per_second))
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()

    async def _wait_for_rate_limit(self):
        """等待满足速率限制"""
        async with self._lock:
            current_time = time.monotonic()
            time_since_last = current_time - self._last_request_time
            min_interval = 1.0 / self._rate_limit

            if time_since_last < min_interval:
                await asyncio.sleep(min_interval - time_since_last)

            self._last_request_time = time.monotonic()
