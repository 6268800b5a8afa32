"""
Archive Search Aggregator
按分类并发检索并聚合 Oorlogsbronnen 的结果
"""
import asyncio
from typing import List, Optional, Sequence, Tuple
import logging

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config import Settings, get_settings
from models import AggregateResult, CategoryBucket, NormalizedRecord, RawResultItem, SearchStats
from processing import FANOUT_CATEGORIES, normalize_item, resolve_image_url
from scrapers import BaseScraper, OorlogsbronnenScraper
from utils.exceptions import AggregateError
from .budget import estimate_reported_totals, plan_category_budget, resolve_category, validate_count


logger = logging.getLogger(__name__)
console = Console(stderr=True)


class ArchiveSearchAggregator:
    """
    档案检索聚合器

    - 指定分类: 单次过滤搜索
    - 未指定分类: 预览采样 -> 预算分配 -> 各分类并发搜索
    单个分类失败不影响其它分类，错误记录在 result.errors
    """

    def __init__(
        self,
        scraper: Optional[BaseScraper] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._owns_scraper = scraper is None
        self.scraper = scraper or OorlogsbronnenScraper(settings=self.settings)

    @staticmethod
    def _to_record(item: RawResultItem, category: str) -> NormalizedRecord:
        record = normalize_item(item, category)
        record.image_url = resolve_image_url(item.attributes)
        return record

    @staticmethod
    def _empty_result(
        query: str,
        category: Optional[str],
        count: int,
        categories: Sequence[str],
    ) -> AggregateResult:
        # 按固定顺序预先建好所有桶，后续只按分类键写入
        return AggregateResult(
            query=query,
            category=category,
            requested_count=count,
            buckets={name: CategoryBucket() for name in categories},
        )

    async def run_search(
        self,
        query: str,
        category: Optional[str] = None,
        count: Optional[int] = None,
        show_progress: bool = False,
    ) -> AggregateResult:
        """
        执行检索

        Args:
            query: 搜索词 (允许为空)
            category: 分类过滤，None 表示全部分类
            count: 请求结果数 (默认取配置)
            show_progress: 是否显示进度

        Returns:
            聚合结果

        Raises:
            AggregateError: 参数非法或检索失败
        """
        search_settings = self.settings.search
        if count is None:
            count = search_settings.default_count
        count = validate_count(count, search_settings.max_count, query)
        category = resolve_category(category, query)

        try:
            if category:
                return await self._search_single(query, category, count)
            return await self._search_all(query, count, show_progress)
        except AggregateError:
            raise
        except Exception as e:
            cause = str(e) or type(e).__name__
            logger.error(f"Search for '{query}' failed: {cause}")
            raise AggregateError(query, cause) from None

    async def _search_single(self, query: str, category: str, count: int) -> AggregateResult:
        categories = list(FANOUT_CATEGORIES)
        if category not in categories:
            categories.append(category)
        result = self._empty_result(query, category, count, categories)
        result.allocation = {category: count}

        page, stats = await self.scraper.search(query, category=category, count=count)

        bucket = result.buckets[category]
        bucket.reported_total = stats.total
        bucket.items = [self._to_record(item, category) for item in page.items]
        return result

    async def _preview(self, query: str) -> Tuple[List[RawResultItem], Optional[SearchStats]]:
        """无过滤预览，失败时返回空样本"""
        try:
            page, stats = await self.scraper.search(
                query, count=self.settings.search.preview_count
            )
        except Exception as e:
            logger.warning(f"Preview search failed, using even split: {e}")
            return [], None
        return list(page.items), stats

    async def _fill_bucket(
        self,
        result: AggregateResult,
        query: str,
        category: str,
        count: int,
    ) -> None:
        try:
            page, stats = await self.scraper.search(query, category=category, count=count)
        except Exception as e:
            logger.warning(f"{category} search skipped: {e}")
            result.errors[category] = str(e) or type(e).__name__
            return

        bucket = result.buckets[category]
        bucket.reported_total = stats.total
        bucket.items = [self._to_record(item, category) for item in page.items]

    async def _search_all(self, query: str, count: int, show_progress: bool) -> AggregateResult:
        result = self._empty_result(query, None, count, FANOUT_CATEGORIES)

        preview_items, preview_stats = await self._preview(query)
        result.preview_used = bool(preview_items)
        result.allocation = plan_category_budget(
            count,
            preview_items,
            categories=FANOUT_CATEGORIES,
            min_per_category=self.settings.search.min_per_category,
        )

        tasks = [
            self._fill_bucket(result, query, name, allocated)
            for name, allocated in result.allocation.items()
        ]

        # 并行执行所有分类搜索
        if show_progress:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f"[cyan]Searching {len(tasks)} categories...",
                    total=None,
                )
                await asyncio.gather(*tasks, return_exceptions=True)
                progress.update(task, completed=True)
        else:
            await asyncio.gather(*tasks, return_exceptions=True)

        if result.preview_used and preview_stats is not None:
            estimates = estimate_reported_totals(
                preview_stats.total,
                {name: len(bucket.items) for name, bucket in result.buckets.items()},
            )
            if estimates is not None:
                for name, estimate in estimates.items():
                    result.buckets[name].reported_total = estimate

        if show_progress:
            self._print_summary(result)

        return result

    def _print_summary(self, result: AggregateResult):
        """打印结果摘要"""
        table = Table(title=f"📊 Results for '{result.query}'")
        table.add_column("Category", style="cyan")
        table.add_column("Requested", justify="right")
        table.add_column("Returned", justify="right", style="green")
        table.add_column("Total", justify="right")

        for name, bucket in result.buckets.items():
            requested = result.allocation.get(name, 0)
            status = str(len(bucket.items)) if name not in result.errors else "[red]error[/red]"
            table.add_row(name, str(requested), status, str(bucket.reported_total))

        console.print(table)

    async def close(self):
        """关闭抓取器"""
        if self._owns_scraper:
            await self.scraper.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


# 便捷函数
async def run_search(
    query: str,
    category: Optional[str] = None,
    count: Optional[int] = None,
    **kwargs,
) -> AggregateResult:
    """
    便捷函数：检索档案

    Usage:
        result = await run_search("roermond", "Person", 5)
        print(f"Found {result.total_items} records")
    """
    async with ArchiveSearchAggregator(**kwargs) as aggregator:
        return await aggregator.run_search(query, category, count)
