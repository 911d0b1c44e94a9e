"""
チャンネル集計モジュール

検索結果からチャンネルの一覧（重複なし・名前順）を作成する。
"""

import logging
import unicodedata
from collections.abc import Iterable

from mention_digest.core.models import AggregateOutcome, ChannelSummary, MessageMatch

logger = logging.getLogger(__name__)


def placeholder_channel_name(channel_id: str) -> str:
    """チャンネル名が伏せられている場合（プライベート等）の代替名"""
    return f"private-channel-{channel_id}"


def channel_sort_key(channel: ChannelSummary) -> tuple[str, str, str]:
    """
    名前順のソートキー（アクセント記号・大文字小文字を区別しない）

    NFKD 分解して結合文字を除き casefold した文字列で比較する。
    プロセスのロケール設定には依存しない。
    同じキーの場合は元の名前、ID の順で比較する。
    """
    decomposed = unicodedata.normalize("NFKD", channel.name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), channel.name, channel.id


def aggregate_channels(matches: Iterable[MessageMatch]) -> AggregateOutcome:
    """
    検索結果からユニークなチャンネルリストを作成

    チャンネルIDのないメッセージはスキップする。
    同じIDが複数回現れた場合は最後に見た名前を使う。
    """
    channel_map: dict[str, str] = {}
    skipped = 0

    for match in matches:
        if match.channel is None or not match.channel.id:
            skipped += 1
            continue
        channel_id = match.channel.id
        channel_map[channel_id] = match.channel.name or placeholder_channel_name(channel_id)

    if skipped:
        logger.debug(f"チャンネルIDなしのメッセージをスキップ: {skipped}件")

    channels = [ChannelSummary(id=channel_id, name=name) for channel_id, name in channel_map.items()]
    channels.sort(key=channel_sort_key)

    return AggregateOutcome(channels=channels, skipped=skipped)
