"""署名検証リクエスト組み立てのユニットテスト"""

import io

import httpx
import pytest
from k1s0_paypal_client.exceptions import InputError
from k1s0_paypal_client.json_codec import marshal
from k1s0_paypal_client.verification import (
    InboundWebhookRequest,
    build_verify_request,
    read_body,
)

HEADERS = {
    "PAYPAL-AUTH-ALGO": "SHA256withRSA",
    "PAYPAL-CERT-URL": "https://api.paypal.com/v1/notifications/certs/CERT-1",
    "PAYPAL-TRANSMISSION-ID": "tx-123",
    "PAYPAL-TRANSMISSION-SIG": "c2lnbmF0dXJl",
    "PAYPAL-TRANSMISSION-TIME": "2024-01-01T00:00:00Z",
}


def test_build_verify_request_fields() -> None:
    """ヘッダの値がそのまま、ボディが変換されずに格納されること。"""
    body = b'{"id":"evt_1"}'
    request = build_verify_request(body, HEADERS, "WH-1")
    assert request.auth_algo == "SHA256withRSA"
    assert request.cert_url == "https://api.paypal.com/v1/notifications/certs/CERT-1"
    assert request.transmission_id == "tx-123"
    assert request.transmission_sig == "c2lnbmF0dXJl"
    assert request.transmission_time == "2024-01-01T00:00:00Z"
    assert request.webhook_id == "WH-1"
    assert bytes(request.webhook_event) == body


def test_build_verify_request_payload_keeps_body_bytes() -> None:
    """エンコード後の webhook_event が受信ボディとバイト単位で一致すること。"""
    body = b'{"id":"evt_1"}'
    payload = marshal(build_verify_request(body, HEADERS, "WH-1"))
    assert payload == (
        b'{"auth_algo":"SHA256withRSA",'
        b'"cert_url":"https://api.paypal.com/v1/notifications/certs/CERT-1",'
        b'"transmission_id":"tx-123",'
        b'"transmission_sig":"c2lnbmF0dXJl",'
        b'"transmission_time":"2024-01-01T00:00:00Z",'
        b'"webhook_id":"WH-1",'
        b'"webhook_event":{"id":"evt_1"}}'
    )


def test_build_verify_request_whitespace_preserved() -> None:
    body = b'{\n  "id": "evt_1",\n  "summary": "<b>&</b>"\n}'
    payload = marshal(build_verify_request(body, HEADERS, "WH-1"))
    assert payload.endswith(b'"webhook_event":' + body + b"}")


def test_build_verify_request_case_insensitive_headers() -> None:
    headers = [(name.lower(), value) for name, value in HEADERS.items()]
    request = build_verify_request(b"{}", headers, "WH-1")
    assert request.transmission_id == "tx-123"
    assert request.auth_algo == "SHA256withRSA"


def test_build_verify_request_accepts_httpx_headers() -> None:
    request = build_verify_request(b"{}", httpx.Headers(HEADERS), "WH-1")
    assert request.cert_url.endswith("CERT-1")


def test_build_verify_request_omits_missing_fields() -> None:
    """空のフィールドは送信ボディに含まれないこと。"""
    payload = marshal(build_verify_request(b"", {}, ""))
    assert payload == b"{}"


def test_read_body_restores_stream() -> None:
    """読み出し後も同じバイト列を再度読み出せること。"""
    body = b'{"id":"evt_1"}'
    request = InboundWebhookRequest.from_bytes(HEADERS, body)
    assert read_body(request) == body
    assert request.body is not None
    assert request.body.read() == body


def test_read_body_twice() -> None:
    request = InboundWebhookRequest.from_bytes(HEADERS, b"payload")
    assert read_body(request) == b"payload"
    assert read_body(request) == b"payload"


def test_read_body_missing() -> None:
    with pytest.raises(InputError) as exc_info:
        read_body(InboundWebhookRequest(headers=HEADERS, body=None))
    assert exc_info.value.code == "INVALID_INPUT"


class _BrokenStream(io.RawIOBase):
    def read(self, size: int = -1) -> bytes:
        raise OSError("connection reset")


def test_read_body_stream_error() -> None:
    with pytest.raises(InputError):
        read_body(InboundWebhookRequest(headers=HEADERS, body=_BrokenStream()))


def test_read_body_text_stream() -> None:
    """テキストモードのストリームは InputError になること。"""
    with pytest.raises(InputError):
        read_body(InboundWebhookRequest(headers=HEADERS, body=io.StringIO('{"id":"evt_1"}')))
