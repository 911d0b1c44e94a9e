"""
時刻取得モジュール

現在時刻の取得を Clock に集約し、テストで固定できるようにする。
"""

from datetime import datetime, timedelta, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """現在時刻を返すもの"""

    def now(self, tz: tzinfo) -> datetime: ...


class SystemClock:
    """システム時計"""

    def now(self, tz: tzinfo) -> datetime:
        return datetime.now(tz)


class FixedClock:
    """固定時刻を返す時計"""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            raise ValueError("instant はタイムゾーン付きで指定してください")
        self.instant = instant

    def now(self, tz: tzinfo) -> datetime:
        return self.instant.astimezone(tz)


def yesterday_range(clock: Clock, timezone: str = "Asia/Tokyo") -> tuple[str, str]:
    """
    昨日と今日の日付（YYYY-MM-DD）を返す

    Returns:
        (昨日, 今日) のタプル。検索クエリの after: / before: に使う
    """
    today = clock.now(ZoneInfo(timezone)).date()
    yesterday = today - timedelta(days=1)
    return yesterday.strftime("%Y-%m-%d"), today.strftime("%Y-%m-%d")
