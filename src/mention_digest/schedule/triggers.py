"""
トリガー管理モジュール

時間主導型トリガーの登録・削除を提供する。
ハンドラ名ごとに既存トリガーを削除してから1件だけ登録するため、何度実行しても結果は同じ。
"""

import logging
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import ValidationError

from mention_digest.core.models import Trigger

logger = logging.getLogger(__name__)


class TriggerError(Exception):
    """トリガー操作エラー"""
    pass


class TriggerStore(Protocol):
    """トリガーの保存先"""

    def get_triggers(self) -> list[Trigger]: ...

    def delete_trigger(self, trigger_id: str) -> None: ...

    def create_trigger(self, trigger: Trigger) -> None: ...


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _new_trigger_id() -> str:
    return uuid.uuid4().hex


# =============================================================================
# 保存先の実装
# =============================================================================


class InMemoryTriggerStore:
    """メモリ上のトリガー一覧"""

    def __init__(self, triggers: Iterable[Trigger] = ()):
        self._triggers: list[Trigger] = list(triggers)

    def get_triggers(self) -> list[Trigger]:
        return list(self._triggers)

    def delete_trigger(self, trigger_id: str) -> None:
        self._triggers = [t for t in self._triggers if t.id != trigger_id]

    def create_trigger(self, trigger: Trigger) -> None:
        self._triggers.append(trigger)


class YamlTriggerStore:
    """YAMLファイルに保存するトリガー一覧"""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> list[Trigger]:
        if not self.path.exists():
            return []

        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        try:
            return [Trigger.model_validate(t) for t in data.get("triggers", [])]
        except (ValidationError, AttributeError) as e:
            raise TriggerError(f"トリガー定義ファイルが不正です: {self.path}: {e}") from e

    def _save(self, triggers: list[Trigger]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"triggers": [t.model_dump(mode="json", exclude_none=True) for t in triggers]}
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)

    def get_triggers(self) -> list[Trigger]:
        return self._load()

    def delete_trigger(self, trigger_id: str) -> None:
        self._save([t for t in self._load() if t.id != trigger_id])

    def create_trigger(self, trigger: Trigger) -> None:
        triggers = self._load()
        triggers.append(trigger)
        self._save(triggers)


# =============================================================================
# トリガー操作
# =============================================================================


def delete_triggers(store: TriggerStore, handler: str) -> int:
    """
    ハンドラに紐付いたトリガーをすべて削除

    Returns:
        削除した件数
    """
    deleted_count = 0
    for trigger in store.get_triggers():
        if trigger.handler == handler:
            store.delete_trigger(trigger.id)
            deleted_count += 1

    logger.info(f"🗑️ {deleted_count} 件の既存トリガーを削除しました。({handler})")
    return deleted_count


def install_daily_trigger(store: TriggerStore, handler: str, hour: int) -> Trigger:
    """既存トリガーを削除してから、毎日 hour 時に実行するトリガーを登録"""
    if not 0 <= hour <= 23:
        raise TriggerError(f"hour は 0〜23 で指定してください: {hour}")

    delete_triggers(store, handler)

    trigger = Trigger(
        id=_new_trigger_id(),
        handler=handler,
        kind="daily",
        at_hour=hour,
        created_at=_now_utc(),
    )
    store.create_trigger(trigger)
    logger.info(f"✅ 毎日{hour}時のトリガーを登録しました。({handler})")
    return trigger


def install_interval_trigger(store: TriggerStore, handler: str, minutes: int) -> Trigger:
    """既存トリガーを削除してから、minutes 分間隔のトリガーを登録"""
    if minutes < 1:
        raise TriggerError(f"minutes は 1 以上で指定してください: {minutes}")

    delete_triggers(store, handler)

    trigger = Trigger(
        id=_new_trigger_id(),
        handler=handler,
        kind="minutes",
        every_minutes=minutes,
        created_at=_now_utc(),
    )
    store.create_trigger(trigger)
    logger.info(f"✅ {minutes}分間隔トリガーを登録しました。({handler})")
    return trigger


def due_triggers(triggers: Iterable[Trigger], now: datetime) -> list[Trigger]:
    """
    now（分単位）に実行すべきトリガーを返す

    - daily: now の時が at_hour で、分が 0 のとき
    - minutes: 0時からの経過分が every_minutes で割り切れるとき
    """
    minute_of_day = now.hour * 60 + now.minute
    due = []
    for trigger in triggers:
        if trigger.kind == "daily":
            if trigger.at_hour == now.hour and now.minute == 0:
                due.append(trigger)
        elif trigger.every_minutes and minute_of_day % trigger.every_minutes == 0:
            due.append(trigger)
    return due


# =============================================================================
# ハンドラ別のトリガー設定
# =============================================================================

HANDLER_MENTION_REPORT = "report_yesterday_mentions"
HANDLER_SHEET_NOTIFY = "send_sheet_notification"


def install_daily_mention_trigger(store: TriggerStore, hour: int = 8) -> Trigger:
    """メンション集計を毎朝実行するトリガーを登録"""
    return install_daily_trigger(store, HANDLER_MENTION_REPORT, hour)


def install_sheet_notifier_trigger(store: TriggerStore, minutes: int = 5) -> Trigger:
    """スプレッドシート通知を一定間隔で実行するトリガーを登録"""
    return install_interval_trigger(store, HANDLER_SHEET_NOTIFY, minutes)


def uninstall_sheet_notifier_trigger(store: TriggerStore) -> int:
    return delete_triggers(store, HANDLER_SHEET_NOTIFY)


def uninstall_mention_trigger(store: TriggerStore) -> int:
    return delete_triggers(store, HANDLER_MENTION_REPORT)
