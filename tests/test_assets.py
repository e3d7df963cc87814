from datetime import datetime, timezone

from monsterinc.models.assets import Asset, AssetType, Target, URLSource


def test_asset_type_values():
    assert AssetType.LINK.value == "a"
    assert AssetType.STYLE.value == "link"
    assert AssetType("script") is AssetType.SCRIPT


def test_minimal_asset_dict():
    asset = Asset(absolute_url="http://example.com/app.js")
    assert asset.to_dict() == {"absolute_url": "http://example.com/app.js"}


def test_full_asset_dict():
    when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    asset = Asset(
        absolute_url="http://example.com/logo.png",
        source_tag="img",
        source_attr="src",
        type=AssetType.IMAGE,
        discovered_at=when,
        discovered_from="http://example.com/",
    )
    data = asset.to_dict()
    assert data["type"] == "img"
    assert data["source_attr"] == "src"
    assert data["discovered_from"] == "http://example.com/"
    assert datetime.fromisoformat(data["discovered_at"]) == when


def test_url_source_is_hashable():
    sources = {URLSource("a", "href"), URLSource("a", "href"), URLSource("img", "src")}
    assert len(sources) == 2


def test_target_default_normalized():
    target = Target(original_url="example.com")
    assert target.normalized_url == ""
    assert target.original_url == "example.com"