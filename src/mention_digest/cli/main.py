"""
CLI メインモジュール

mention-digest コマンドのエントリーポイント。
"""

import logging
import sys
from zoneinfo import ZoneInfo

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mention_digest.core import SystemClock, settings
from mention_digest.notify import HANDLERS, post_to_webhook, run_mention_report, run_sheet_notification
from mention_digest.schedule import (
    HANDLER_MENTION_REPORT,
    HANDLER_SHEET_NOTIFY,
    YamlTriggerStore,
    delete_triggers,
    due_triggers,
    install_daily_mention_trigger,
    install_sheet_notifier_trigger,
)

console = Console()
clock = SystemClock()


def setup_logging(level: str = "INFO") -> None:
    """ログ設定"""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@click.group()
@click.option("--debug", is_flag=True, help="デバッグモードを有効化")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Slack メンション集計・通知 CLI"""
    ctx.ensure_object(dict)
    log_level = "DEBUG" if debug else settings.log_level
    setup_logging(log_level)


# =============================================================================
# report / sheet-notify コマンド
# =============================================================================


@cli.command()
@click.option("--dry-run", is_flag=True, help="Webhookへの送信をスキップして本文を表示")
def report(dry_run: bool) -> None:
    """昨日のメンションを集計して通知"""
    if dry_run:
        console.print("[yellow]ドライラン モード[/yellow]")

    result = run_mention_report(dry_run=dry_run)

    if dry_run and result.message:
        console.print(result.message, markup=False)

    if result.status in ("ok", "not_found") and (dry_run or result.posted):
        console.print(f"[green]✓[/green] メンション集計: {result.status}")
        console.print(f"  対象日: {result.date_label}")
        console.print(f"  メッセージ: {result.match_count}件")
        console.print(f"  チャンネル: {result.channel_count}件")
    else:
        console.print(f"[red]✗[/red] メンション集計が失敗しました: {result.status}")
        console.print(f"  エラー: {result.error or '不明'}")
        sys.exit(1)


@cli.command("sheet-notify")
@click.option("--dry-run", is_flag=True, help="Webhookへの送信をスキップして本文を表示")
def sheet_notify(dry_run: bool) -> None:
    """スプレッドシートの内容を通知"""
    if dry_run:
        console.print("[yellow]ドライラン モード[/yellow]")

    result = run_sheet_notification(dry_run=dry_run)

    if dry_run and result.message:
        console.print(result.message, markup=False)

    if result.status == "ok":
        console.print(f"[green]✓[/green] スプレッドシート通知: {result.row_count}行")
    elif result.status == "no_data":
        console.print("[dim]データがありません（スキップ）[/dim]")
    else:
        console.print(f"[red]✗[/red] スプレッドシート通知が失敗しました: {result.status}")
        console.print(f"  エラー: {result.error or '不明'}")
        sys.exit(1)


# =============================================================================
# notify コマンドグループ
# =============================================================================


@cli.group()
def notify() -> None:
    """通知の管理"""
    pass


@notify.command("test")
@click.option("--text", "-t", default="🔔 テスト通知です", help="送信するテキスト")
@click.option("--webhook-url", default=None, help="Webhook URL（省略時は SLACK_WEBHOOK_URL）")
def notify_test(text: str, webhook_url: str | None) -> None:
    """通知のテスト送信"""
    url = webhook_url or settings.slack_webhook_url
    if not url:
        console.print("[red]エラー:[/red] SLACK_WEBHOOK_URL が設定されていません")
        sys.exit(1)

    console.print("[dim]テスト通知を送信中...[/dim]")
    outcome = post_to_webhook(url, text)

    if outcome.ok:
        console.print("[green]✓[/green] テスト通知を送信しました")
    else:
        console.print(f"[red]エラー:[/red] {outcome.error}")
        sys.exit(1)


# =============================================================================
# trigger コマンドグループ
# =============================================================================


@cli.group()
def trigger() -> None:
    """トリガーの管理"""
    pass


def _store() -> YamlTriggerStore:
    return YamlTriggerStore(settings.triggers_path)


@trigger.command("install-daily")
@click.option("--hour", type=click.IntRange(0, 23), default=None, help="実行時刻（時）")
def trigger_install_daily(hour: int | None) -> None:
    """メンション集計の毎日トリガーを登録"""
    try:
        t = install_daily_mention_trigger(
            _store(),
            hour=settings.mention_report_hour if hour is None else hour,
        )
        console.print(f"[green]✓[/green] 毎日{t.at_hour}時のトリガーを登録しました: {t.handler}")
    except Exception as e:
        console.print(f"[red]エラー:[/red] {e}")
        sys.exit(1)


@trigger.command("install-sheet")
@click.option("--minutes", type=click.IntRange(min=1), default=None, help="実行間隔（分）")
def trigger_install_sheet(minutes: int | None) -> None:
    """スプレッドシート通知の間隔トリガーを登録"""
    try:
        t = install_sheet_notifier_trigger(
            _store(),
            minutes=settings.sheet_notify_interval_minutes if minutes is None else minutes,
        )
        console.print(f"[green]✓[/green] {t.every_minutes}分間隔トリガーを登録しました: {t.handler}")
    except Exception as e:
        console.print(f"[red]エラー:[/red] {e}")
        sys.exit(1)


@trigger.command("delete")
@click.option(
    "--handler",
    type=click.Choice([HANDLER_MENTION_REPORT, HANDLER_SHEET_NOTIFY]),
    required=True,
    help="削除対象のハンドラ",
)
def trigger_delete(handler: str) -> None:
    """ハンドラに紐付いたトリガーを削除"""
    try:
        count = delete_triggers(_store(), handler)
        console.print(f"[green]✓[/green] {count}件のトリガーを削除しました: {handler}")
    except Exception as e:
        console.print(f"[red]エラー:[/red] {e}")
        sys.exit(1)


@trigger.command("list")
def trigger_list() -> None:
    """トリガー一覧を表示"""
    try:
        triggers = _store().get_triggers()

        if not triggers:
            console.print("[dim]トリガーがありません[/dim]")
            return

        table = Table(title="トリガー一覧")
        table.add_column("ID", style="dim")
        table.add_column("ハンドラ", style="cyan", no_wrap=True)
        table.add_column("種類")
        table.add_column("スケジュール")
        table.add_column("登録日時")

        for t in triggers:
            schedule = f"毎日 {t.at_hour}時" if t.kind == "daily" else f"{t.every_minutes}分ごと"
            table.add_row(t.id[:8], t.handler, t.kind, schedule, t.created_at.strftime("%Y-%m-%d %H:%M"))

        console.print(table)

    except Exception as e:
        console.print(f"[red]エラー:[/red] {e}")
        sys.exit(1)


@trigger.command("tick")
@click.option("--dry-run", is_flag=True, help="Webhookへの送信をスキップ")
def trigger_tick(dry_run: bool) -> None:
    """現在時刻（分）に実行すべきトリガーを実行（cron から毎分呼び出す想定）"""
    try:
        now = clock.now(ZoneInfo(settings.timezone))
        due = due_triggers(_store().get_triggers(), now)
    except Exception as e:
        console.print(f"[red]エラー:[/red] {e}")
        sys.exit(1)

    if not due:
        console.print(f"[dim]実行対象のトリガーはありません ({now:%H:%M})[/dim]")
        return

    for t in due:
        handler = HANDLERS.get(t.handler)
        if handler is None:
            console.print(f"[yellow]未知のハンドラ:[/yellow] {t.handler}")
            continue
        result = handler(dry_run=dry_run)
        console.print(f"  {t.handler}: {result.status}")


# =============================================================================
# エントリーポイント
# =============================================================================


def main() -> None:
    """CLIエントリーポイント"""
    cli()


if __name__ == "__main__":
    main()
