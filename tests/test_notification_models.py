import json
from datetime import datetime, timezone

from monsterinc.models.notification_models import (
    AllowedMentions,
    DiscordEmbed,
    DiscordEmbedAuthor,
    DiscordEmbedField,
    DiscordEmbedFooter,
    DiscordEmbedImage,
    DiscordMessagePayload,
    FileChangeInfo,
    MonitorFetchErrorInfo,
    ScanStatus,
    ScanSummaryData,
    default_scan_summary_data,
)
from monsterinc.models.report_data import SecretStats


def test_empty_payload_has_no_keys():
    assert DiscordMessagePayload().to_dict() == {}


def test_payload_keeps_set_fields_and_serialises():
    payload = DiscordMessagePayload(content="hi", username="bot", embeds=[DiscordEmbed(title="T")])
    data = payload.to_dict()
    assert data == {"content": "hi", "username": "bot", "embeds": [{"title": "T"}]}
    assert json.loads(json.dumps(data)) == data


def test_allowed_mentions_pointer_kept_even_when_empty():
    data = DiscordMessagePayload(allowed_mentions=AllowedMentions()).to_dict()
    assert data == {"allowed_mentions": {}}


def test_allowed_mentions_fields():
    mentions = AllowedMentions(parse=["users"], replied_user=True)
    data = DiscordMessagePayload(allowed_mentions=mentions).to_dict()
    assert data["allowed_mentions"] == {"parse": ["users"], "replied_user": True}


def test_embed_required_nested_fields_kept():
    embed = DiscordEmbed(
        footer=DiscordEmbedFooter(),
        image=DiscordEmbedImage(url="https://example.com/a.png"),
        author=DiscordEmbedAuthor(name="scanner"),
        fields=[DiscordEmbedField(name="n", value="")],
    )
    data = embed.to_dict()
    assert data["footer"] == {"text": ""}
    assert data["image"] == {"url": "https://example.com/a.png"}
    assert data["author"] == {"name": "scanner"}
    assert data["fields"] == [{"name": "n", "value": ""}]


def test_embed_zero_color_omitted_and_inline_kept():
    embed = DiscordEmbed(color=0, fields=[DiscordEmbedField(name="a", value="b", inline=True)])
    data = embed.to_dict()
    assert "color" not in data
    assert data["fields"][0]["inline"] is True


def test_embed_color_kept_when_set():
    assert DiscordEmbed(color=255).to_dict()["color"] == 255


def test_fetch_error_to_dict():
    when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    info = MonitorFetchErrorInfo(url="https://example.com/a.js", error="boom", source="fetch", occurred_at=when)
    data = info.to_dict()
    assert data["url"] == "https://example.com/a.js"
    assert data["source"] == "fetch"
    assert datetime.fromisoformat(data["occurred_at"]) == when


def test_default_scan_summary():
    summary = default_scan_summary_data()
    assert summary.target_source == "Unknown"
    assert summary.scan_mode == "Unknown"
    assert summary.status == ScanStatus.UNKNOWN.value
    assert summary.targets == []
    assert summary.secret_stats == SecretStats()


def test_scan_status_value():
    assert ScanStatus.INTERRUPTED.value == "INTERRUPTED"
    assert ScanStatus("COMPLETED_WITH_ISSUES") is ScanStatus.COMPLETED_WITH_ISSUES


def test_summaries_do_not_share_lists():
    first = ScanSummaryData()
    second = ScanSummaryData()
    first.targets.append("https://example.com")
    assert second.targets == []


def test_file_change_defaults():
    change = FileChangeInfo(url="https://example.com/app.js")
    assert change.diff_report_path is None
    assert change.extracted_paths == []