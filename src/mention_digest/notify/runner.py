"""
定期実行ジョブモジュール

トリガーから呼び出されるエントリポイント（メンション集計、スプレッドシート通知）を提供する。
エントリポイントは例外を送出せず、結果を実行結果モデルで返す。
"""

import logging
from collections.abc import Callable
from zoneinfo import ZoneInfo

from mention_digest.core.clock import Clock, SystemClock, yesterday_range
from mention_digest.core.config import (
    MentionReportConfig,
    Settings,
    SheetNotifyConfig,
    settings,
)
from mention_digest.core.models import (
    PostOutcome,
    ReportRunResult,
    SearchOutcome,
    SheetRunResult,
)
from mention_digest.notify.report import (
    build_mention_report,
    build_not_found_message,
    format_sheet_message,
)
from mention_digest.notify.sender import post_to_webhook
from mention_digest.schedule.triggers import HANDLER_MENTION_REPORT, HANDLER_SHEET_NOTIFY
from mention_digest.search.aggregator import aggregate_channels
from mention_digest.search.query import build_mention_query
from mention_digest.search.slack_client import search_messages
from mention_digest.sheet.source import CsvWorkbook, Workbook

logger = logging.getLogger(__name__)

SearchFunc = Callable[[str, str], SearchOutcome]
PostFunc = Callable[[str, str], PostOutcome]


class MentionReportRunner:
    """メンション集計の実行クラス"""

    def __init__(
        self,
        config: MentionReportConfig,
        clock: Clock | None = None,
        search: SearchFunc | None = None,
        post: PostFunc | None = None,
    ):
        self.config = config
        self.clock = clock or SystemClock()
        self.search = search or self._default_search
        self.post = post or post_to_webhook

    def _default_search(self, token: str, query: str) -> SearchOutcome:
        return search_messages(
            token,
            query,
            search_url=self.config.search_url,
            page_size=self.config.page_size,
            max_pages=self.config.max_pages,
            timeout=self.config.request_timeout,
            max_attempts=self.config.max_attempts,
        )

    def run(self, dry_run: bool = False) -> ReportRunResult:
        """
        昨日メンションが届いたチャンネルをリスト化して送信

        Args:
            dry_run: Trueの場合、Webhookへの送信をスキップ
        """
        config = self.config

        missing = config.missing_keys()
        if missing:
            logger.error(f"エラー: 設定（{', '.join(missing)}）が不足しています。")
            return ReportRunResult(
                status="config_error",
                error=f"missing: {', '.join(missing)}",
            )

        # 期間の設定（昨日 0:00 〜 23:59）
        date_label, today_label = yesterday_range(self.clock, config.timezone)

        query = build_mention_query(
            config.user_id,
            after=date_label,
            before=today_label,
            names=config.mention_names,
        )
        logger.info(f"[DEBUG] Search Query Initiated: {query}")

        outcome = self.search(config.user_token, query)

        if not outcome.matches:
            if outcome.ok:
                logger.info("[DEBUG] No messages found for the query.")
            else:
                logger.error(f"検索に失敗したため、結果は0件として扱います: {outcome.error}")
            message = build_not_found_message(date_label)
            return self._deliver(
                message,
                status="not_found" if outcome.ok else "search_error",
                date_label=date_label,
                match_count=0,
                channel_count=0,
                error=outcome.error,
                dry_run=dry_run,
            )

        if not outcome.ok:
            logger.warning(
                f"検索が途中で失敗しました。取得済みの{len(outcome.matches)}件で集計します: "
                f"{outcome.error}"
            )

        aggregated = aggregate_channels(outcome.matches)

        message = build_mention_report(
            date_label,
            len(outcome.matches),
            aggregated.channels,
            archive_url=config.archive_url,
            generated_at=self.clock.now(ZoneInfo(config.timezone)),
        )

        return self._deliver(
            message,
            status="ok",
            date_label=date_label,
            match_count=len(outcome.matches),
            channel_count=len(aggregated.channels),
            error=outcome.error,
            dry_run=dry_run,
        )

    def _deliver(
        self,
        message: str,
        status: str,
        date_label: str,
        match_count: int,
        channel_count: int,
        error: str | None,
        dry_run: bool,
    ) -> ReportRunResult:
        """メッセージを送信して実行結果を作成"""
        if dry_run:
            logger.info(f"[ドライラン] 通知スキップ: {len(message)}文字")
            return ReportRunResult(
                status=status,
                date_label=date_label,
                match_count=match_count,
                channel_count=channel_count,
                message=message,
                error=error,
            )

        posted = self.post(self.config.webhook_url, message)
        if not posted.ok:
            status = "delivery_error"
            error = posted.error

        return ReportRunResult(
            status=status,
            date_label=date_label,
            match_count=match_count,
            channel_count=channel_count,
            posted=posted.ok,
            message=message,
            error=error,
        )


def report_yesterday_mentions(
    config: MentionReportConfig,
    clock: Clock | None = None,
    search: SearchFunc | None = None,
    post: PostFunc | None = None,
    dry_run: bool = False,
) -> ReportRunResult:
    """
    メンション集計のエントリポイント

    毎朝のトリガー実行を想定。例外は送出しない。
    """
    try:
        runner = MentionReportRunner(config, clock=clock, search=search, post=post)
        return runner.run(dry_run=dry_run)
    except Exception as e:
        logger.exception(f"メンション集計エラー: {e}")
        return ReportRunResult(status="failed", error=str(e))


def send_sheet_notification(
    config: SheetNotifyConfig,
    workbook: Workbook,
    clock: Clock | None = None,
    post: PostFunc | None = None,
    dry_run: bool = False,
) -> SheetRunResult:
    """
    スプレッドシートのデータを整形して通知するエントリポイント

    例外は送出しない。
    """
    clock = clock or SystemClock()
    post = post or post_to_webhook

    try:
        if not config.webhook_url:
            logger.error(
                "エラー: SLACK_WEBHOOK_URL が設定されていません。"
                "環境変数または .env から登録してください。"
            )
            return SheetRunResult(status="config_error", error="missing: SLACK_WEBHOOK_URL")

        sheet = workbook.get_sheet(config.sheet_name)
        if sheet is None:
            logger.error(f"エラー: シート \"{config.sheet_name}\" が見つかりません。")
            return SheetRunResult(status="config_error", error=f"sheet not found: {config.sheet_name}")

        if sheet.last_row() < 2:
            logger.warning("データが存在しません（ヘッダー行のみ）。")
            return SheetRunResult(status="no_data")

        rows = sheet.data_rows()
        message = format_sheet_message(rows, clock.now(ZoneInfo(config.timezone)))

        if dry_run:
            logger.info(f"[ドライラン] 通知スキップ: {len(rows)}行")
            return SheetRunResult(status="ok", row_count=len(rows), message=message)

        posted = post(config.webhook_url, message)
        return SheetRunResult(
            status="ok" if posted.ok else "delivery_error",
            row_count=len(rows),
            posted=posted.ok,
            message=message,
            error=posted.error,
        )

    except Exception as e:
        logger.exception(f"スプレッドシート通知エラー: {e}")
        return SheetRunResult(status="failed", error=str(e))


# =============================================================================
# トリガーから呼び出すハンドラ
# =============================================================================


def run_mention_report(s: Settings = settings, dry_run: bool = False) -> ReportRunResult:
    """設定からメンション集計を実行"""
    return report_yesterday_mentions(MentionReportConfig.from_settings(s), dry_run=dry_run)


def run_sheet_notification(s: Settings = settings, dry_run: bool = False) -> SheetRunResult:
    """設定からスプレッドシート通知を実行"""
    return send_sheet_notification(
        SheetNotifyConfig.from_settings(s),
        CsvWorkbook(s.spreadsheet_path),
        dry_run=dry_run,
    )


HANDLERS: dict[str, Callable[..., ReportRunResult | SheetRunResult]] = {
    HANDLER_MENTION_REPORT: run_mention_report,
    HANDLER_SHEET_NOTIFY: run_sheet_notification,
}
