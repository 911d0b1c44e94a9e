from datetime import datetime
from zoneinfo import ZoneInfo

from mention_digest.core.models import ChannelSummary
from mention_digest.notify.report import (
    build_mention_report,
    build_not_found_message,
    format_cell,
    format_channel_line,
    format_sheet_message,
)


def test_mention_report_structure():
    channels = [ChannelSummary(id="C1", name="dev"), ChannelSummary(id="C2", name="general")]

    text = build_mention_report("2024-05-01", 12, channels)
    lines = text.split("\n")

    assert lines[0] == "📅 *昨日（2024-05-01）のメンション集計*"
    assert "合計 12 件" in lines[1]
    assert "• #dev (<https://slack.com/archives/C1|開く>)" in lines
    assert "• #general (<https://slack.com/archives/C2|開く>)" in lines
    assert lines.index("• #dev (<https://slack.com/archives/C1|開く>)") < lines.index(
        "• #general (<https://slack.com/archives/C2|開く>)"
    )
    assert text.endswith("確認漏れがないかチェックしましょう！🚀")


def test_mention_report_with_timestamp():
    generated_at = datetime(2024, 5, 2, 8, 3, 9, tzinfo=ZoneInfo("Asia/Tokyo"))

    text = build_mention_report("2024-05-01", 1, [ChannelSummary(id="C1", name="dev")], generated_at=generated_at)

    assert text.endswith("_集計日時: 2024/05/02 08:03:09_")


def test_channel_line_uses_archive_url():
    line = format_channel_line(ChannelSummary(id="C9", name="ops"), "https://example.slack.com/archives/")

    assert line == "• #ops (<https://example.slack.com/archives/C9|開く>)"


def test_not_found_message_is_short():
    text = build_not_found_message("2024-05-01")

    assert "2024-05-01" in text
    assert "見つかりませんでした" in text
    assert "\n" not in text


def test_format_cell():
    assert format_cell(0.256) == "25.6%"
    assert format_cell(1234) == "1,234人"
    assert format_cell(12.0) == "12人"
    assert format_cell(3.14159) == "3.14"
    assert format_cell(0) == "0人"
    assert format_cell("東京") == "東京"
    assert format_cell(True) == "True"
    assert format_cell(None) == ""


def test_sheet_message():
    generated_at = datetime(2024, 5, 2, 9, 30, 0, tzinfo=ZoneInfo("Asia/Tokyo"))

    text = format_sheet_message([["東京", 1500, 0.5], ["大阪", 800, 0.25]], generated_at)
    lines = text.split("\n")

    assert lines[0] == "📊 *スプレッドシート更新通知*"
    assert "*Row 1:* 東京 | 1,500人 | 50.0%" in lines
    assert "*Row 2:* 大阪 | 800人 | 25.0%" in lines
    assert lines[-1] == "_最終更新: 2024/05/02 09:30:00_"
