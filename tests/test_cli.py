"""Tests for the command line entrypoint (transport replaced)."""

from __future__ import annotations

import json

import pytest

import main as cli
from aggregator.data_aggregator import ArchiveSearchAggregator
from models import RawResultItem, ResultPage, SearchStats
from scrapers import BaseScraper


class _StaticScraper(BaseScraper):
    name = "Static"

    async def search(self, query, category=None, count=None, offset=0):
        items = [
            RawResultItem(
                id="https://www.oorlogsbronnen.nl/record/https://example.org/p/1",
                class_uris=["http://schema.org/Person"],
                attributes={"http://schema.org/name": "Jan de Vries"},
            )
        ]
        return ResultPage(count=1, items=items), SearchStats(total=3)


@pytest.fixture
def static_aggregator(monkeypatch):
    def _factory(settings=None):
        return ArchiveSearchAggregator(scraper=_StaticScraper(settings), settings=settings)

    monkeypatch.setattr(cli, "ArchiveSearchAggregator", _factory)


def test_cli_markdown(static_aggregator, capsys):
    exit_code = cli.main(["roermond", "--type", "person", "--count", "5", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "## Person (3)" in out
    assert "- Record: https://example.org/p/1" in out


def test_cli_json(static_aggregator, capsys):
    exit_code = cli.main(["roermond", "--type", "Person", "--format", "json", "--log-level", "WARNING"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["category"] == "Person"
    assert payload["categories"]["Person"]["items"][0]["title"] == "Jan de Vries"
    assert "processing_seconds" in payload


def test_cli_validation_error(static_aggregator, capsys):
    exit_code = cli.main(["roermond", "--count", "500", "--format", "json", "--log-level", "WARNING"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["error"] == "SearchValidationError"
    assert payload["query"] == "roermond"
