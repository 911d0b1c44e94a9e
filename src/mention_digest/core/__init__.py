"""
コアモジュール

設定、時計、モデル定義を提供する。
"""

from mention_digest.core.clock import Clock, FixedClock, SystemClock, yesterday_range
from mention_digest.core.config import (
    MentionReportConfig,
    Settings,
    SheetNotifyConfig,
    settings,
)
from mention_digest.core.models import (
    AggregateOutcome,
    ChannelSummary,
    MessageMatch,
    PostOutcome,
    ReportRunResult,
    SearchOutcome,
    SearchResponse,
    SheetRunResult,
    SlackChannelRef,
    Trigger,
)

__all__ = [
    "settings",
    "Settings",
    "MentionReportConfig",
    "SheetNotifyConfig",
    "Clock",
    "SystemClock",
    "FixedClock",
    "yesterday_range",
    "AggregateOutcome",
    "ChannelSummary",
    "MessageMatch",
    "PostOutcome",
    "ReportRunResult",
    "SearchOutcome",
    "SearchResponse",
    "SheetRunResult",
    "SlackChannelRef",
    "Trigger",
]
