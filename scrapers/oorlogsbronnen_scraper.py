"""
Oorlogsbronnen Scraper
荷兰二战档案 (Netwerk Oorlogsbronnen) 搜索
API: Spinque REST, 路径段查询语言
示例:
https://rest.spinque.com/4/oorlogsbronnen/api/in10/e/integrated_search/p/topic/roermond/q/class:FILTER/p/value/1.0(http%3A%2F%2Fschema.org%2FPerson)/results,count?count=5&offset=0&config=production
"""
import asyncio
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote
import logging

import aiohttp
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from config import Settings, get_settings
from models import RawResultItem, ResultPage, SearchStats
from utils.exceptions import MalformedResponseError, TransportError
from .base import RateLimitedScraper


logger = logging.getLogger(__name__)


class OorlogsbronnenScraper(RateLimitedScraper):
    """
    Oorlogsbronnen 抓取器

    特性:
    - 全文搜索，可按 schema.org 分类过滤
    - 返回 [结果页, 统计] 二元组
    - 网络错误自动重试 (指数退避)
    - 无需 API Key
    """

    SEARCH_PATH = "e/integrated_search/p/topic/{query}"
    CATEGORY_FILTER = "/q/class:FILTER/p/value/1.0({class_uri})"
    RESULTS_SUFFIX = "/results,count"
    SCHEMA_BASE = "http://schema.org/"

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        super().__init__(
            requests_per_second=settings.archive.requests_per_second,
            settings=settings,
        )

    @property
    def name(self) -> str:
        return "Oorlogsbronnen"

    @property
    def base_url(self) -> str:
        archive = self.settings.archive
        return f"{archive.base_url.rstrip('/')}/{archive.api_version}"

    def build_search_url(self, query: str, category: Optional[str] = None) -> str:
        """
        拼接搜索 URL (不含查询参数)

        Args:
            query: 搜索词，整体作为一个路径段编码
            category: schema.org 类名，例如 "Person"
        """
        url = f"{self.base_url}/" + self.SEARCH_PATH.format(query=quote(query or "", safe=""))
        if category:
            class_uri = quote(f"{self.SCHEMA_BASE}{category}", safe="")
            url += self.CATEGORY_FILTER.format(class_uri=class_uri)
        return url + self.RESULTS_SUFFIX

    def build_params(self, count: int, offset: int = 0) -> Dict[str, Any]:
        return {
            "count": count,
            "offset": offset,
            "config": self.settings.archive.config,
        }

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取或创建 HTTP 会话"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.settings.general.request_timeout),
            )
        return self._session

    @retry(
        retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _fetch_json(self, url: str, params: Dict[str, Any]) -> Any:
        await self._wait_for_rate_limit()
        session = await self._get_session()
        async with session.get(url, params=params) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

    async def search(
        self,
        query: str,
        category: Optional[str] = None,
        count: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[ResultPage, SearchStats]:
        """
        搜索档案

        Args:
            query: 搜索关键词
            category: 分类过滤 (Person / Photograph / ...)
            count: 返回条数 (默认取配置)
            offset: 偏移量

        Returns:
            (结果页, 统计)
        """
        if count is None:
            count = self.settings.search.default_count

        url = self.build_search_url(query, category)
        params = self.build_params(count, offset)
        logger.debug(f"[{self.name}] GET {url} {params}")

        try:
            payload = await self._fetch_json(url, params)
        except aiohttp.ClientResponseError as e:
            self._log_error("Search failed", e)
            raise TransportError(
                f"HTTP error {e.status} from search endpoint",
                source=self.name,
                status=e.status,
                url=url,
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._log_error("Search failed", e)
            raise TransportError(
                f"Failed to fetch search results: {str(e) or type(e).__name__}",
                source=self.name,
                url=url,
            ) from e
        except ValueError as e:
            raise MalformedResponseError(
                "Search endpoint returned invalid JSON",
                source=self.name,
                url=url,
            ) from e

        page, stats = self.parse_response(payload, offset=offset)
        self._log_search(query, category, len(page.items), stats.total)
        return page, stats

    def parse_response(self, payload: Any, offset: int = 0) -> Tuple[ResultPage, SearchStats]:
        """
        解析 [结果页, 统计] 响应

        Raises:
            MalformedResponseError: 结构不符 / 缺少 items 或 total
        """
        if not isinstance(payload, (list, tuple)) or len(payload) < 2:
            raise MalformedResponseError("Expected a [results, stats] pair", source=self.name)

        page_data, stats_data = payload[0], payload[1]
        if not isinstance(page_data, dict) or not isinstance(page_data.get("items"), list):
            raise MalformedResponseError("Invalid response format: missing items", source=self.name)
        if not isinstance(stats_data, dict) or "total" not in stats_data:
            raise MalformedResponseError("Invalid response format: missing total", source=self.name)

        try:
            total = max(0, int(stats_data["total"]))
        except (TypeError, ValueError, OverflowError) as e:
            raise MalformedResponseError(
                f"Invalid total: {stats_data['total']!r}", source=self.name
            ) from e

        items: List[RawResultItem] = []
        for raw in page_data["items"]:
            if not isinstance(raw, dict):
                continue
            try:
                items.append(RawResultItem.from_api(raw))
            except (ValueError, ValidationError) as e:
                logger.warning(f"[{self.name}] Skipping malformed result item: {e}")

        try:
            page = ResultPage(
                offset=page_data.get("offset") or offset,
                count=page_data.get("count") or len(items),
                items=items,
            )
        except ValidationError as e:
            raise MalformedResponseError(
                f"Invalid page header: offset={page_data.get('offset')!r} count={page_data.get('count')!r}",
                source=self.name,
            ) from e
        return page, SearchStats(total=total)

