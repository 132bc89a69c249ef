"""PayPal Webhook HTTP クライアント実装"""

from __future__ import annotations

from urllib.parse import quote

from .client import WebhookClient
from .config import PayPalClientConfig
from .models import (
    AnchorType,
    CreateWebhookRequest,
    ListWebhookResponse,
    VerifyWebhookResponse,
    Webhook,
    WebhookEventTypesResponse,
    WebhookField,
)
from .transport import AuthenticatedTransport
from .verification import HeaderTypes, InboundRequest, build_verify_request, read_body

WEBHOOKS_PATH = "/v1/notifications/webhooks"
VERIFY_WEBHOOK_SIGNATURE_PATH = "/v1/notifications/verify-webhook-signature"
WEBHOOK_EVENT_TYPES_PATH = "/v1/notifications/webhooks-event-types"


def _webhook_path(webhook_id: str) -> str:
    return f"{WEBHOOKS_PATH}/{quote(webhook_id, safe='')}"


class HttpWebhookClient(WebhookClient):
    """AuthenticatedTransport を使った PayPal Webhook クライアント。"""

    def __init__(
        self,
        config: PayPalClientConfig,
        transport: AuthenticatedTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport or AuthenticatedTransport(config)

    async def create_webhook(self, request: CreateWebhookRequest) -> Webhook:
        return await self._transport.send("POST", WEBHOOKS_PATH, body=request, result=Webhook)

    async def get_webhook(self, webhook_id: str) -> Webhook:
        return await self._transport.send("GET", _webhook_path(webhook_id), result=Webhook)

    async def update_webhook(self, webhook_id: str, fields: list[WebhookField]) -> Webhook:
        """フィールド更新指示を指定順のまま PATCH で送信する。"""
        return await self._transport.send(
            "PATCH", _webhook_path(webhook_id), body=list(fields), result=Webhook
        )

    async def list_webhooks(
        self, anchor_type: AnchorType | str = AnchorType.APPLICATION
    ) -> ListWebhookResponse:
        if not anchor_type:
            anchor_type = AnchorType.APPLICATION
        return await self._transport.send(
            "GET",
            WEBHOOKS_PATH,
            params={"anchor_type": str(anchor_type)},
            result=ListWebhookResponse,
        )

    async def delete_webhook(self, webhook_id: str) -> None:
        await self._transport.send("DELETE", _webhook_path(webhook_id))

    async def verify_webhook_signature(
        self, request: InboundRequest, webhook_id: str
    ) -> VerifyWebhookResponse:
        """受信リクエストからボディとヘッダを取り出して検証する。

        ボディは読み出し後に差し替えられるため、呼び出し元は
        引き続き request.body を読み出せる。

        Raises:
            InputError: ボディが無い場合（通信は行わない）
        """
        body = read_body(request)
        return await self.verify_webhook_signature_raw(body, request.headers, webhook_id)

    async def verify_webhook_signature_raw(
        self, body: bytes, headers: HeaderTypes, webhook_id: str
    ) -> VerifyWebhookResponse:
        verify_request = build_verify_request(body, headers, webhook_id)
        return await self._transport.send(
            "POST",
            VERIFY_WEBHOOK_SIGNATURE_PATH,
            body=verify_request,
            result=VerifyWebhookResponse,
        )

    async def get_webhook_event_types(self) -> WebhookEventTypesResponse:
        return await self._transport.send(
            "GET", WEBHOOK_EVENT_TYPES_PATH, result=WebhookEventTypesResponse
        )
