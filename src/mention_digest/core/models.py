"""
データモデル定義

Slack検索APIのレスポンススキーマ、集計結果、各処理の実行結果を定義する。
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# トークン無効・期限切れを示す Slack のエラーコード
AUTH_ERRORS = frozenset({"invalid_auth", "token_expired", "token_revoked", "not_authed"})


# =============================================================================
# Slack search.messages レスポンスモデル
# =============================================================================


class SlackChannelRef(BaseModel):
    """メッセージが属するチャンネル"""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None


class MessageMatch(BaseModel):
    """検索でヒットしたメッセージ1件"""

    model_config = ConfigDict(extra="ignore")

    channel: SlackChannelRef | None = None
    text: str = ""
    ts: str | None = None
    username: str | None = None
    permalink: str | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _null_text_as_empty(cls, value: object) -> object:
        # ファイル共有などは text が null で返る
        return "" if value is None else value


class SearchPagination(BaseModel):
    """ページ情報"""

    model_config = ConfigDict(extra="ignore")

    page_count: int = 0
    total_count: int = 0
    page: int | None = None


class SearchMessages(BaseModel):
    """messages フィールド"""

    model_config = ConfigDict(extra="ignore")

    matches: list[MessageMatch] = Field(default_factory=list)
    pagination: SearchPagination = Field(default_factory=SearchPagination)


class SearchResponse(BaseModel):
    """search.messages レスポンス"""

    model_config = ConfigDict(extra="ignore")

    ok: bool
    error: str | None = None
    messages: SearchMessages | None = None


# =============================================================================
# 集計モデル
# =============================================================================


class ChannelSummary(BaseModel):
    """集計結果のチャンネル"""

    id: str
    name: str


# =============================================================================
# 実行結果モデル
# =============================================================================


class SearchOutcome(BaseModel):
    """検索結果

    ok=False の場合、matches はエラー発生までに取得できた分のみ。
    """

    matches: list[MessageMatch] = Field(default_factory=list)
    ok: bool = True
    error: str | None = None
    pages_fetched: int = 0
    total_count: int = 0
    truncated: bool = False

    @property
    def auth_failed(self) -> bool:
        return self.error in AUTH_ERRORS


class AggregateOutcome(BaseModel):
    """チャンネル集計結果"""

    channels: list[ChannelSummary] = Field(default_factory=list)
    skipped: int = 0


class PostOutcome(BaseModel):
    """Webhook送信結果"""

    ok: bool
    status_code: int | None = None
    body: str = ""
    error: str | None = None


ReportStatus = Literal[
    "ok",
    "not_found",
    "config_error",
    "search_error",
    "delivery_error",
    "failed",
]


class ReportRunResult(BaseModel):
    """メンション集計の実行結果"""

    status: ReportStatus
    date_label: str | None = None
    match_count: int = 0
    channel_count: int = 0
    posted: bool = False
    message: str | None = None
    error: str | None = None


SheetStatus = Literal["ok", "config_error", "no_data", "delivery_error", "failed"]


class SheetRunResult(BaseModel):
    """スプレッドシート通知の実行結果"""

    status: SheetStatus
    row_count: int = 0
    posted: bool = False
    message: str | None = None
    error: str | None = None


# =============================================================================
# トリガーモデル
# =============================================================================


class Trigger(BaseModel):
    """時間主導型トリガー"""

    id: str
    handler: str
    kind: Literal["daily", "minutes"]
    at_hour: int | None = Field(default=None, ge=0, le=23)
    every_minutes: int | None = Field(default=None, ge=1)
    created_at: datetime
