"""
通知（Notify）モジュール

Slack Webhook 通知と定期実行ジョブを提供する。
"""

from mention_digest.notify.report import (
    build_mention_report,
    build_not_found_message,
    format_cell,
    format_channel_line,
    format_sheet_message,
)
from mention_digest.notify.runner import (
    HANDLERS,
    MentionReportRunner,
    report_yesterday_mentions,
    run_mention_report,
    run_sheet_notification,
    send_sheet_notification,
)
from mention_digest.notify.sender import NotificationError, post_to_webhook, send_webhook

__all__ = [
    "NotificationError",
    "send_webhook",
    "post_to_webhook",
    "build_mention_report",
    "build_not_found_message",
    "format_cell",
    "format_channel_line",
    "format_sheet_message",
    "MentionReportRunner",
    "report_yesterday_mentions",
    "send_sheet_notification",
    "run_mention_report",
    "run_sheet_notification",
    "HANDLERS",
]
