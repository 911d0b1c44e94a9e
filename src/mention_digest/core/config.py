"""
設定管理モジュール

環境変数と設定ファイルからの設定読み込みを管理する。
エントリポイントには Settings から組み立てた明示的な設定オブジェクトを渡す。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ログ
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="ログレベル",
    )

    # シークレット
    slack_webhook_url: str | None = Field(
        default=None,
        description="Slack Webhook URL",
    )
    slack_user_token: str | None = Field(
        default=None,
        description="Slack ユーザートークン（search:read）",
    )
    slack_user_id: str | None = Field(
        default=None,
        description="メンション対象のユーザーID",
    )

    # Slack 検索API設定
    slack_search_url: str = Field(
        default="https://slack.com/api/search.messages",
        description="Slack search.messages エンドポイント",
    )
    slack_archive_url: str = Field(
        default="https://slack.com/archives",
        description="チャンネルへのリンクのベースURL",
    )
    search_page_size: int = Field(
        default=100,
        le=100,
        description="1ページあたりの取得件数",
    )
    search_max_pages: int = Field(
        default=5,
        ge=1,
        description="取得ページ数の上限",
    )
    search_request_timeout: float = Field(
        default=30.0,
        description="リクエストタイムアウト（秒）",
    )
    search_max_attempts: int = Field(
        default=1,
        ge=1,
        description="通信エラー時の試行回数（1 = リトライなし）",
    )
    mention_names: list[str] = Field(
        default_factory=list,
        description="検索クエリに OR で追加する名前",
    )

    # スケジュール
    mention_report_hour: int = Field(
        default=8,
        ge=0,
        le=23,
        description="メンション集計の実行時刻（時）",
    )
    sheet_notify_interval_minutes: int = Field(
        default=5,
        ge=1,
        description="スプレッドシート通知の実行間隔（分）",
    )
    triggers_path: Path = Field(
        default=Path("data/triggers.yml"),
        description="トリガー定義ファイル",
    )

    # スプレッドシート
    spreadsheet_path: Path = Field(
        default=Path("data/spreadsheet"),
        description="スプレッドシート（CSVシートのディレクトリ）",
    )
    sheet_name: str = Field(
        default="Sheet1",
        description="対象シート名",
    )

    # タイムゾーン
    timezone: str = Field(
        default="Asia/Tokyo",
        description="表示用タイムゾーン",
    )


# グローバル設定インスタンス
settings = Settings()


# =============================================================================
# エントリポイント用の設定
# =============================================================================


@dataclass(frozen=True)
class MentionReportConfig:
    """メンション集計の設定"""

    webhook_url: str | None
    user_token: str | None
    user_id: str | None
    search_url: str = "https://slack.com/api/search.messages"
    archive_url: str = "https://slack.com/archives"
    page_size: int = 100
    max_pages: int = 5
    request_timeout: float = 30.0
    max_attempts: int = 1
    mention_names: tuple[str, ...] = field(default_factory=tuple)
    timezone: str = "Asia/Tokyo"

    @classmethod
    def from_settings(cls, s: Settings) -> "MentionReportConfig":
        return cls(
            webhook_url=s.slack_webhook_url,
            user_token=s.slack_user_token,
            user_id=s.slack_user_id,
            search_url=s.slack_search_url,
            archive_url=s.slack_archive_url,
            page_size=s.search_page_size,
            max_pages=s.search_max_pages,
            request_timeout=s.search_request_timeout,
            max_attempts=s.search_max_attempts,
            mention_names=tuple(s.mention_names),
            timezone=s.timezone,
        )

    def missing_keys(self) -> list[str]:
        """未設定のシークレット名を返す"""
        missing = []
        if not self.user_token:
            missing.append("SLACK_USER_TOKEN")
        if not self.user_id:
            missing.append("SLACK_USER_ID")
        if not self.webhook_url:
            missing.append("SLACK_WEBHOOK_URL")
        return missing


@dataclass(frozen=True)
class SheetNotifyConfig:
    """スプレッドシート通知の設定"""

    webhook_url: str | None
    sheet_name: str = "Sheet1"
    timezone: str = "Asia/Tokyo"

    @classmethod
    def from_settings(cls, s: Settings) -> "SheetNotifyConfig":
        return cls(
            webhook_url=s.slack_webhook_url,
            sheet_name=s.sheet_name,
            timezone=s.timezone,
        )
