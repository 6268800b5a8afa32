"""Unit tests for image URL resolution."""

from processing import extract_media_id, resolve_image_url
from processing.attributes import Vocab


MEDIA_ID = "5c0d2a3e-8f1b-11e3-b0aa-00155d012a0a"


def test_direct_image_wins():
    attrs = {
        Vocab.IMAGE: "https://example.org/full.jpg",
        Vocab.CONTENT_URL: "https://example.org/content.jpg",
        Vocab.THUMBNAIL: "https://example.org/thumb.jpg",
        Vocab.SOURCE: f"https://www.beeldbankwo2.nl/nl/beelden/detail/media/{MEDIA_ID}",
    }

    assert resolve_image_url(attrs) == "https://example.org/full.jpg"


def test_content_url_before_thumbnail():
    attrs = {
        Vocab.CONTENT_URL: "https://example.org/content.jpg",
        Vocab.THUMBNAIL_URL: "https://example.org/thumb.jpg",
    }

    assert resolve_image_url(attrs) == "https://example.org/content.jpg"


def test_thumbnail_before_provider_rules():
    attrs = {
        Vocab.THUMBNAIL: ["https://example.org/thumb.jpg"],
        Vocab.SOURCE: f"https://www.beeldbankwo2.nl/nl/beelden/detail/media/{MEDIA_ID}",
    }

    assert resolve_image_url(attrs) == "https://example.org/thumb.jpg"


def test_beeldbankwo2_reconstruction():
    attrs = {Vocab.SOURCE: f"https://www.beeldbankwo2.nl/nl/beelden/detail/media/{MEDIA_ID}"}

    assert resolve_image_url(attrs) == (
        f"https://images.memorix.nl/niod/thumb/1000x1000/{MEDIA_ID}.jpg"
    )


def test_cultureelerfgoed_reconstruction_from_schema_url():
    attrs = {Vocab.URL: f"https://beeldbank.cultureelerfgoed.nl/rce-mediabank/detail/media/{MEDIA_ID}"}

    assert resolve_image_url(attrs) == (
        f"https://images.memorix.nl/rce/thumb/1600x1600/{MEDIA_ID}.jpg"
    )


def test_provider_without_media_id_gives_none():
    attrs = {Vocab.SOURCE: "https://www.beeldbankwo2.nl/nl/beelden/zoeken"}

    assert resolve_image_url(attrs) is None


def test_leeuwarden_without_thumbnail_gives_none():
    attrs = {Vocab.SOURCE: "https://www.historischcentrumleeuwarden.nl/fotos/12345"}

    assert resolve_image_url(attrs) is None


def test_unknown_provider_gives_none():
    assert resolve_image_url({Vocab.SOURCE: "https://example.org/item/1"}) is None
    assert resolve_image_url({}) is None


def test_extract_media_id():
    assert extract_media_id(f"https://x.nl/detail/media/{MEDIA_ID}?lang=nl") == MEDIA_ID
    assert extract_media_id("https://x.nl/detail/photo/1") is None
    assert extract_media_id("") is None


def test_later_source_value_can_match_provider():
    attrs = {
        Vocab.SOURCE: [
            "https://example.org/collection/item/9",
            f"https://www.beeldbankwo2.nl/nl/beelden/detail/media/{MEDIA_ID}",
        ]
    }

    assert resolve_image_url(attrs) == (
        f"https://images.memorix.nl/niod/thumb/1000x1000/{MEDIA_ID}.jpg"
    )


def test_schema_url_used_when_dc_source_has_no_provider():
    attrs = {
        Vocab.SOURCE: "https://www.beeldbankwo2.nl/nl/beelden/zoeken",
        Vocab.URL: f"https://beeldbank.cultureelerfgoed.nl/detail/media/{MEDIA_ID}",
    }

    assert resolve_image_url(attrs) == (
        f"https://images.memorix.nl/rce/thumb/1600x1600/{MEDIA_ID}.jpg"
    )
