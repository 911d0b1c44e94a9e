"""
Slack 検索APIクライアント

search.messages をページ単位で呼び出し、ヒットしたメッセージを集める。
"""

import logging

import httpx
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from mention_digest.core.models import AUTH_ERRORS, MessageMatch, SearchOutcome, SearchResponse

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://slack.com/api/search.messages"


class SearchError(Exception):
    """Slack 検索APIエラー"""

    def __init__(self, message: str, error_code: str, status_code: int | None = None):
        super().__init__(message)
        self.error_code = error_code
        self.status_code = status_code


class SlackSearchClient:
    """Slack 検索APIクライアント"""

    def __init__(
        self,
        token: str,
        search_url: str = DEFAULT_SEARCH_URL,
        page_size: int = 100,
        max_pages: int = 5,
        timeout: float = 30.0,
        max_attempts: int = 1,
        transport: httpx.BaseTransport | None = None,
    ):
        if not token:
            raise ValueError("token が空です")
        self.search_url = search_url
        self.page_size = min(page_size, 100)
        self.max_pages = max_pages
        self.max_attempts = max_attempts
        self._client = httpx.Client(
            timeout=timeout,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, params: dict[str, str]) -> httpx.Response:
        """GETリクエストを実行（通信エラー時のみ max_attempts まで試行）"""

        @retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        def _fetch() -> httpx.Response:
            return self._client.get(self.search_url, params=params)

        return _fetch()

    def fetch_page(self, query: str, page: int) -> SearchResponse:
        """
        1ページ分を取得

        Raises:
            SearchError: 通信失敗、レスポンス不正、ok=false の場合
        """
        params = {"query": query, "count": str(self.page_size), "page": str(page)}

        try:
            response = self._get(params)
        except httpx.HTTPError as e:
            raise SearchError(f"Slack通信エラー: {e}", error_code="transport_error") from e

        logger.debug(f"Slack API response: page={page}, status={response.status_code}")

        try:
            parsed = SearchResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise SearchError(
                f"レスポンス不正: HTTP {response.status_code}: {response.text[:200]}",
                error_code="invalid_response",
                status_code=response.status_code,
            ) from e

        if not parsed.ok:
            error_code = parsed.error or "unknown_error"
            raise SearchError(
                f"Slack API Error: {error_code}",
                error_code=error_code,
                status_code=response.status_code,
            )

        if parsed.messages is None:
            raise SearchError(
                "レスポンスに messages がありません",
                error_code="invalid_response",
                status_code=response.status_code,
            )

        return parsed

    def search(self, query: str) -> SearchOutcome:
        """
        全ページを取得（上限 max_pages）

        途中でエラーになった場合も、それまでに取得した分を返す。
        """
        matches: list[MessageMatch] = []
        page = 1
        page_count = 1
        total_count = 0
        truncated = False

        logger.info(f"[DEBUG] Starting Slack Search with query: {query}")

        while True:
            try:
                response = self.fetch_page(query, page)
            except SearchError as e:
                logger.error(f"[ERROR] {e}")
                if e.error_code in AUTH_ERRORS:
                    logger.error("[ERROR] Token may be invalid or expired.")
                return SearchOutcome(
                    matches=matches,
                    ok=False,
                    error=e.error_code,
                    pages_fetched=page - 1,
                    total_count=total_count,
                )

            messages = response.messages
            if page == 1:
                total_count = messages.pagination.total_count
                logger.info(f"[DEBUG] Total hits on Slack: {total_count}")

            logger.info(f"[DEBUG] Page {page}: Found {len(messages.matches)} matches.")
            if page == 1 and messages.matches:
                sample = messages.matches[0]
                channel = sample.channel
                logger.info(
                    f"[DEBUG] Sample Match - Channel: {channel.name if channel else None} "
                    f"({channel.id if channel else None}), Text fragment: {sample.text[:30]}..."
                )

            matches.extend(messages.matches)
            page_count = messages.pagination.page_count
            page += 1

            # API制限を考慮し、極端に多い場合は max_pages で切り上げる
            if page > self.max_pages:
                logger.warning(
                    f"[WARN] Reached maximum page limit ({self.max_pages}). Cutting off."
                )
                truncated = page <= page_count
                break

            if page > page_count:
                break

        logger.info(f"[DEBUG] Completed search. Total messages collected: {len(matches)}")

        return SearchOutcome(
            matches=matches,
            ok=True,
            pages_fetched=page - 1,
            total_count=total_count,
            truncated=truncated,
        )


def search_messages(token: str, query: str, **kwargs) -> SearchOutcome:
    """クライアントを生成して検索を1回実行"""
    with SlackSearchClient(token, **kwargs) as client:
        return client.search(query)
