"""
Tests for the outputs module (grouping / report / payload)
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import json

from models import (
    AggregateResult,
    CategoryBucket,
    MediaRecord,
    NormalizedRecord,
    PersonRecord,
    SourceInfo,
)


def _record(cls, record_id, record_type, **fields):
    return cls(
        id=record_id,
        title=fields.pop("title", record_id),
        type=record_type,
        url=f"https://www.oorlogsbronnen.nl/record/{record_id}",
        **fields,
    )


def _result() -> AggregateResult:
    buckets = {
        "Person": CategoryBucket(
            reported_total=40,
            items=[_record(PersonRecord, "p1", "Person", title="Jan de Vries", birth_place="Roermond")],
        ),
        "Photograph": CategoryBucket(
            reported_total=12,
            items=[
                _record(
                    MediaRecord,
                    "f1",
                    "Photograph",
                    title="Dam, mei 1945",
                    description="Bevrijdingsfeest op de Dam",
                    webpage_url="https://www.beeldbankwo2.nl/detail/media/abc",
                    creator="Cas Oorthuys",
                    date="1945-05-07",
                    copyright_holder="NIOD",
                    image_url="https://images.memorix.nl/niod/thumb/1000x1000/abc.jpg",
                ),
                _record(
                    MediaRecord,
                    "f2",
                    "Photograph",
                    source=SourceInfo(name="Beeldbank WO2"),
                ),
            ],
        ),
        "Article": CategoryBucket(),
        "VideoObject": CategoryBucket(
            reported_total=1,
            items=[_record(MediaRecord, "v1", "VideoObject", duration="PT1M")],
        ),
        "Thing": CategoryBucket(),
        "Place": CategoryBucket(),
        "CreativeWork": CategoryBucket(
            reported_total=2,
            items=[_record(MediaRecord, "c1", "CreativeWork", creator="Cas Oorthuys")],
        ),
    }
    return AggregateResult(
        query="amsterdam",
        requested_count=10,
        buckets=buckets,
        allocation={name: 2 for name in buckets},
        errors={"Place": "HTTP error 503 from search endpoint"},
        preview_used=True,
    )


def test_group_media_by_provenance():
    from outputs import group_media_by_provenance

    groups = group_media_by_provenance(_result())

    assert [g.group_key for g in groups] == ["Cas Oorthuys", "Beeldbank WO2", "Unknown"]
    oorthuys = groups[0]
    assert [r.id for r in oorthuys.primary_items] == ["f1"]
    assert [r.id for r in oorthuys.related_items] == ["c1"]
    assert [r.id for r in groups[2].primary_items] == ["v1"]


def test_group_media_ignores_non_media_records():
    from outputs import group_media_by_provenance

    result = AggregateResult(
        query="x",
        requested_count=1,
        buckets={"Article": CategoryBucket(reported_total=1, items=[_record(NormalizedRecord, "a1", "Article")])},
    )

    assert group_media_by_provenance(result) == []


def test_category_hint_threshold():
    from outputs import build_category_hint

    result = _result()
    hint = build_category_hint(result, threshold=10)

    assert hint is not None
    assert "Person (40), Photograph (12), VideoObject (1), CreativeWork (2)" in hint
    assert "Article" not in hint
    assert build_category_hint(result, threshold=100) is None


def test_render_search_report():
    from outputs import render_search_report

    started = datetime(2024, 5, 5, 12, 0, 0, tzinfo=timezone.utc)
    md = render_search_report(
        "amsterdam",
        _result(),
        started_at=started,
        finished_at=started + timedelta(seconds=1.5),
    )

    assert md.startswith("# Oorlogsbronnen search: amsterdam")
    assert "## Person (40)" in md
    assert "## Article" not in md
    assert md.index("## Person") < md.index("## Photograph") < md.index("## VideoObject")
    assert "1. **Dam, mei 1945**" in md
    assert "Bevrijdingsfeest op de Dam" in md
    assert "- Original source: https://www.beeldbankwo2.nl/detail/media/abc" in md
    assert "- Record: https://www.oorlogsbronnen.nl/record/f1" in md
    assert "- Creator: Cas Oorthuys" in md
    assert "- Date: 1945-05-07" in md
    assert "- Copyright: NIOD" in md
    assert "![Dam, mei 1945](https://images.memorix.nl/niod/thumb/1000x1000/abc.jpg)" in md
    assert "- Place: HTTP error 503" in md
    assert "> Found about 55 records" in md
    assert "_Processing time: 1.50s_" in md


def test_render_search_report_is_deterministic_without_timestamps():
    from outputs import render_search_report

    first = render_search_report("amsterdam", _result())
    second = render_search_report("amsterdam", _result())

    assert first == second
    assert "Processing time" not in first


def test_render_search_report_empty():
    from outputs import render_search_report

    result = AggregateResult(query="", requested_count=5, buckets={"Person": CategoryBucket()})
    md = render_search_report("", result)

    assert "No records found" in md
    assert "> Found" not in md


def test_build_search_payload_is_json_ready():
    from outputs import build_search_payload

    started = datetime(2024, 5, 5, 12, 0, 0, tzinfo=timezone.utc)
    payload = build_search_payload(
        "amsterdam",
        _result(),
        started_at=started,
        finished_at=started + timedelta(seconds=2),
    )

    json.dumps(payload)
    assert payload["total_items"] == 55
    assert payload["returned_items"] == 5
    assert list(payload["categories"])[:2] == ["Person", "Photograph"]
    person = payload["categories"]["Person"]["items"][0]
    assert person["birth_place"] == "Roermond"
    photo = payload["categories"]["Photograph"]["items"][0]
    assert photo["copyright_holder"] == "NIOD"
    assert payload["media_groups"][0]["group_key"] == "Cas Oorthuys"
    assert payload["media_groups"][0]["primary_items"][0]["image_url"].endswith("abc.jpg")
    assert payload["errors"] == {"Place": "HTTP error 503 from search endpoint"}
    assert payload["processing_seconds"] == 2.0
    assert payload["hint"]
