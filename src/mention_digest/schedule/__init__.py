"""
スケジュール（Schedule）モジュール

時間主導型トリガーの登録・削除を提供する。
"""

from mention_digest.schedule.triggers import (
    HANDLER_MENTION_REPORT,
    HANDLER_SHEET_NOTIFY,
    InMemoryTriggerStore,
    TriggerError,
    TriggerStore,
    YamlTriggerStore,
    delete_triggers,
    due_triggers,
    install_daily_mention_trigger,
    install_daily_trigger,
    install_interval_trigger,
    install_sheet_notifier_trigger,
    uninstall_mention_trigger,
    uninstall_sheet_notifier_trigger,
)

__all__ = [
    "HANDLER_MENTION_REPORT",
    "HANDLER_SHEET_NOTIFY",
    "TriggerStore",
    "TriggerError",
    "InMemoryTriggerStore",
    "YamlTriggerStore",
    "delete_triggers",
    "due_triggers",
    "install_daily_trigger",
    "install_interval_trigger",
    "install_daily_mention_trigger",
    "install_sheet_notifier_trigger",
    "uninstall_mention_trigger",
    "uninstall_sheet_notifier_trigger",
]
