"""Webhook 署名検証リクエストの組み立て

暗号処理は行わない。受信したヘッダとボディから PayPal の
verify-webhook-signature API に送るペイロードを組み立てるだけ。
"""

from __future__ import annotations

import io
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, Protocol

import httpx

from .exceptions import InputError
from .json_codec import RawMessage
from .models import VerifyWebhookSignatureRequest

HEADER_AUTH_ALGO = "PAYPAL-AUTH-ALGO"
HEADER_CERT_URL = "PAYPAL-CERT-URL"
HEADER_TRANSMISSION_ID = "PAYPAL-TRANSMISSION-ID"
HEADER_TRANSMISSION_SIG = "PAYPAL-TRANSMISSION-SIG"
HEADER_TRANSMISSION_TIME = "PAYPAL-TRANSMISSION-TIME"

HeaderTypes = httpx.Headers | Mapping[str, str] | Sequence[tuple[str, str]]


class InboundRequest(Protocol):
    """受信した Webhook リクエスト。body は読み出し後に差し替えられる。"""

    headers: HeaderTypes
    body: IO[bytes] | None


@dataclass
class InboundWebhookRequest:
    """InboundRequest の最小実装。"""

    headers: HeaderTypes = field(default_factory=dict)
    body: IO[bytes] | None = None

    @classmethod
    def from_bytes(cls, headers: HeaderTypes, body: bytes) -> InboundWebhookRequest:
        return cls(headers=headers, body=io.BytesIO(body))


def read_body(request: InboundRequest) -> bytes:
    """ボディを全て読み出し、同じバイト列の新しいストリームに差し替える。

    呼び出し後も request.body から元のボディを読み出せる。

    Raises:
        InputError: ボディが無い、または読み出せない場合
    """
    if request.body is None:
        raise InputError("cannot verify webhook for HTTP request with empty body")
    try:
        body = request.body.read()
    except OSError as e:
        raise InputError(f"failed to read webhook request body: {e}", cause=e) from e
    if not isinstance(body, (bytes, bytearray)):
        raise InputError(
            f"webhook request body must be a binary stream, got {type(body).__name__}"
        )
    body = bytes(body)
    request.body = io.BytesIO(body)
    return body


def _first(headers: httpx.Headers, name: str) -> str:
    values = headers.get_list(name)
    return values[0] if values else ""


def build_verify_request(
    body: bytes,
    headers: HeaderTypes,
    webhook_id: str,
) -> VerifyWebhookSignatureRequest:
    """署名ヘッダとボディから検証リクエストを組み立てる。

    ヘッダ名の比較は大文字小文字を区別しない。body は変換せずに
    webhook_event として格納する。
    """
    h = headers if isinstance(headers, httpx.Headers) else httpx.Headers(headers)
    return VerifyWebhookSignatureRequest(
        auth_algo=_first(h, HEADER_AUTH_ALGO),
        cert_url=_first(h, HEADER_CERT_URL),
        transmission_id=_first(h, HEADER_TRANSMISSION_ID),
        transmission_sig=_first(h, HEADER_TRANSMISSION_SIG),
        transmission_time=_first(h, HEADER_TRANSMISSION_TIME),
        webhook_id=webhook_id,
        webhook_event=RawMessage(body),
    )
