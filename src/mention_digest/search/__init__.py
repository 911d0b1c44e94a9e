"""
検索（Search）モジュール

Slack 検索APIからメンションを取得し、チャンネル単位に集計する。
"""

from mention_digest.search.aggregator import (
    aggregate_channels,
    channel_sort_key,
    placeholder_channel_name,
)
from mention_digest.search.query import build_mention_query
from mention_digest.search.slack_client import SearchError, SlackSearchClient, search_messages

__all__ = [
    "SlackSearchClient",
    "SearchError",
    "search_messages",
    "build_mention_query",
    "aggregate_channels",
    "channel_sort_key",
    "placeholder_channel_name",
]
