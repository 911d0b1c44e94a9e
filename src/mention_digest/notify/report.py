"""
通知メッセージ整形モジュール

メンション集計レポートとスプレッドシート通知の本文を作成する。
"""

from collections.abc import Sequence
from datetime import datetime

from mention_digest.core.models import ChannelSummary

DEFAULT_ARCHIVE_URL = "https://slack.com/archives"
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


# =============================================================================
# メンション集計レポート
# =============================================================================


def format_channel_line(channel: ChannelSummary, archive_url: str = DEFAULT_ARCHIVE_URL) -> str:
    """チャンネル1件を箇条書きの1行にする"""
    return f"• #{channel.name} (<{archive_url.rstrip('/')}/{channel.id}|開く>)"


def build_mention_report(
    date_label: str,
    match_count: int,
    channels: Sequence[ChannelSummary],
    archive_url: str = DEFAULT_ARCHIVE_URL,
    generated_at: datetime | None = None,
) -> str:
    """
    メンション集計レポートを作成

    Args:
        date_label: 集計対象日 (YYYY-MM-DD)
        match_count: ヒットしたメッセージ数
        channels: 集計済みチャンネル（この順で出力する）
        archive_url: チャンネルへのリンクのベースURL
        generated_at: 指定した場合、作成日時の行を末尾に追加する

    Returns:
        Slack mrkdwn 形式のテキスト
    """
    lines = [
        f"📅 *昨日（{date_label}）のメンション集計*",
        f"以下のチャンネルでメンションが届いていました（合計 {match_count} 件）：\n",
    ]
    lines.extend(format_channel_line(ch, archive_url) for ch in channels)
    lines.append("\n確認漏れがないかチェックしましょう！🚀")

    if generated_at is not None:
        lines.append(f"_集計日時: {generated_at.strftime(TIMESTAMP_FORMAT)}_")

    return "\n".join(lines)


def build_not_found_message(date_label: str) -> str:
    """メンションが見つからなかった場合のメッセージ"""
    return (
        f"昨日（{date_label}）のメンションは検索で見つかりませんでした。"
        "詳細な設定やログを確認してください。☕"
    )


# =============================================================================
# スプレッドシート通知
# =============================================================================


def format_cell(value: object) -> str:
    """
    セルの値を表示用に整形

    - 0〜1 の小数はパーセント表示
    - 整数は桁区切り + 「人」
    - その他の数値は小数点以下2桁
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        if 0 < value < 1:
            return f"{value * 100:.1f}%"
        if isinstance(value, int) or value.is_integer():
            return f"{int(value):,}人"
        return f"{value:.2f}"
    if value is None:
        return ""
    return str(value)


def format_sheet_message(rows: Sequence[Sequence[object]], generated_at: datetime) -> str:
    """
    スプレッドシートの行データを通知用テキストに整形

    Args:
        rows: 行データ（ヘッダー行を除く）
        generated_at: 最終更新として表示する日時
    """
    lines = ["📊 *スプレッドシート更新通知*\n"]

    for row_number, row in enumerate(rows, 1):
        formatted = " | ".join(format_cell(cell) for cell in row)
        lines.append(f"*Row {row_number}:* {formatted}")

    lines.append(f"\n_最終更新: {generated_at.strftime(TIMESTAMP_FORMAT)}_")

    return "\n".join(lines)
