"""認証付き HTTP トランスポート（OAuth2 Client Credentials）"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from .config import PayPalClientConfig
from .exceptions import DecodingError, PayPalClientErrorCodes, TransportError
from .json_codec import marshal, unmarshal
from .models import AccessToken, ErrorResponse

logger = structlog.get_logger(__name__)

TOKEN_PATH = "/v1/oauth2/token"


class AuthenticatedTransport:
    """httpx を使った PayPal REST API トランスポート。

    アクセストークンをキャッシュし、期限切れ前に自動更新する。
    リトライは行わず、失敗はすべて TransportError として呼び出し元に返す。
    """

    def __init__(self, config: PayPalClientConfig) -> None:
        self._config = config
        self._cached_token: AccessToken | None = None
        self._token_lock = asyncio.Lock()

    @property
    def config(self) -> PayPalClientConfig:
        return self._config

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.api_base,
            headers={"Accept": "application/json"},
            timeout=self._config.timeout_seconds,
        )

    def _parse_error(self, resp: httpx.Response) -> ErrorResponse | None:
        if not resp.content:
            return None
        try:
            return unmarshal(resp.content, ErrorResponse)
        except DecodingError:
            return None

    def _handle_error(self, resp: httpx.Response, context: str) -> None:
        if resp.status_code < 400:
            return
        error_response = self._parse_error(resp)
        if resp.status_code == 401:
            code = PayPalClientErrorCodes.UNAUTHORIZED
            # 次回の呼び出しでトークンを取り直す
            self._cached_token = None
        elif resp.status_code == 404:
            code = PayPalClientErrorCodes.NOT_FOUND
        else:
            code = PayPalClientErrorCodes.HTTP_ERROR
        raise TransportError(
            code=code,
            message=f"{context}: HTTP {resp.status_code}: {resp.text}",
            status_code=resp.status_code,
            error_response=error_response,
        )

    async def get_access_token(self) -> AccessToken:
        """新しいアクセストークンを取得する。"""
        try:
            async with self._make_client() as client:
                resp = await client.post(
                    TOKEN_PATH,
                    auth=(self._config.client_id, self._config.secret),
                    data={"grant_type": "client_credentials"},
                )
        except httpx.HTTPError as e:
            raise TransportError(
                code=PayPalClientErrorCodes.TOKEN_REQUEST_FAILED,
                message=f"Token request failed: {e}",
                cause=e,
            ) from e
        if resp.status_code >= 400:
            raise TransportError(
                code=PayPalClientErrorCodes.TOKEN_REQUEST_FAILED,
                message=f"Token request failed: HTTP {resp.status_code}",
                status_code=resp.status_code,
                error_response=self._parse_error(resp),
            )
        token: AccessToken = unmarshal(resp.content, AccessToken)
        logger.debug("paypal access token acquired", app_id=token.app_id)
        return token

    async def get_cached_token(self) -> AccessToken:
        """キャッシュされたトークンを返す（期限切れの場合は更新）。"""
        async with self._token_lock:
            token = self._cached_token
            if token is None or token.is_expired(self._config.token_refresh_buffer_seconds):
                token = await self.get_access_token()
                self._cached_token = token
            return token

    async def send(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, str] | None = None,
        result: type[Any] | None = None,
    ) -> Any:
        """認証ヘッダを付けてリクエストを送信し、レスポンスをデコードする。

        body は送信前にエンコードするため、エンコードに失敗した場合は
        通信を行わずに EncodingError を送出する。

        Returns:
            result を指定した場合はデコード結果。指定しない場合は None。

        Raises:
            DecodingError: result を指定したがレスポンスが空、または不正な場合
        """
        content = marshal(body) if body is not None else None
        token = await self.get_cached_token()
        headers = {"Authorization": f"Bearer {token.access_token}"}
        if content is not None:
            headers["Content-Type"] = "application/json"
        context = f"{method} {path}"
        try:
            async with self._make_client() as client:
                resp = await client.request(
                    method,
                    path,
                    content=content,
                    params=params,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            raise TransportError(
                code=PayPalClientErrorCodes.HTTP_ERROR,
                message=f"{context} failed: {e}",
                cause=e,
            ) from e
        logger.debug(
            "paypal request sent",
            method=method,
            path=path,
            status=resp.status_code,
            debug_id=resp.headers.get("paypal-debug-id", ""),
        )
        self._handle_error(resp, context)
        if result is None:
            return None
        if not resp.content:
            raise DecodingError(
                f"{context}: empty response body, expected {result.__name__}"
            )
        return unmarshal(resp.content, result)
