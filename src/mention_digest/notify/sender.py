"""
通知モジュール

Slack Incoming Webhook へのテキスト送信を提供する。
"""

import logging

import httpx

from mention_digest.core.models import PostOutcome

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """通知エラー"""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def send_webhook(
    webhook_url: str,
    text: str,
    timeout: float = 30,
    transport: httpx.BaseTransport | None = None,
) -> int:
    """
    Webhookにメッセージを送信

    Returns:
        HTTPステータスコード

    Raises:
        NotificationError: ステータスが200以外、または通信に失敗した場合
    """
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.post(webhook_url, json={"text": text})
    except httpx.HTTPError as e:
        raise NotificationError(f"Slack通信エラー: {e}") from e

    if response.status_code != 200:
        raise NotificationError(
            f"Slack API error: {response.status_code} - {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    return response.status_code


def post_to_webhook(
    webhook_url: str,
    text: str,
    timeout: float = 30,
    transport: httpx.BaseTransport | None = None,
) -> PostOutcome:
    """
    Webhookにメッセージを送信し、結果を返す（例外は送出しない）
    """
    try:
        status_code = send_webhook(webhook_url, text, timeout=timeout, transport=transport)
    except NotificationError as e:
        if e.status_code is not None:
            logger.error(
                f"❌ Slack通知の送信に失敗しました。ステータスコード: {e.status_code}, "
                f"レスポンス: {e.body}"
            )
        else:
            logger.error(f"❌ Slack通知の送信に失敗しました。{e}")
        return PostOutcome(ok=False, status_code=e.status_code, body=e.body, error=str(e))

    logger.info("✅ Slack通知の送信に成功しました。")
    return PostOutcome(ok=True, status_code=status_code)
