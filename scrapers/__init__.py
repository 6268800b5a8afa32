"""
Scrapers Module
"""
from .base import BaseScraper, RateLimitedScraper
from .oorlogsbronnen_scraper import OorlogsbronnenScraper

__all__ = [
    # Base
    "BaseScraper",
    "RateLimitedScraper",
    # Oorlogsbronnen
    "OorlogsbronnenScraper",
]
