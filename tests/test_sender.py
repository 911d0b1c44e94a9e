import json
import logging

import httpx
import pytest

from mention_digest.notify.sender import NotificationError, post_to_webhook, send_webhook

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"


def transport_returning(status_code: int, text: str, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, text=text)

    return httpx.MockTransport(handler)


def test_post_success_logs_and_sends_json(caplog):
    seen = []

    with caplog.at_level(logging.INFO):
        outcome = post_to_webhook(WEBHOOK_URL, "こんにちは", transport=transport_returning(200, "ok", seen))

    assert outcome.ok
    assert outcome.status_code == 200
    assert "送信に成功しました" in caplog.text

    request = seen[0]
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"text": "こんにちは"}


def test_post_failure_logs_status_and_body_without_raising(caplog):
    with caplog.at_level(logging.ERROR):
        outcome = post_to_webhook(WEBHOOK_URL, "hi", transport=transport_returning(403, "invalid_token"))

    assert not outcome.ok
    assert outcome.status_code == 403
    assert outcome.body == "invalid_token"
    assert "403" in caplog.text
    assert "invalid_token" in caplog.text


def test_post_transport_error_is_logged(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with caplog.at_level(logging.ERROR):
        outcome = post_to_webhook(WEBHOOK_URL, "hi", transport=httpx.MockTransport(handler))

    assert not outcome.ok
    assert outcome.status_code is None
    assert "Slack通信エラー" in caplog.text


def test_send_webhook_raises_on_non_200():
    with pytest.raises(NotificationError) as exc_info:
        send_webhook(WEBHOOK_URL, "hi", transport=transport_returning(500, "oops"))

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "oops"
