"""WebhookClient 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import (
    AnchorType,
    CreateWebhookRequest,
    ListWebhookResponse,
    VerifyWebhookResponse,
    Webhook,
    WebhookEventTypesResponse,
    WebhookField,
)
from .verification import HeaderTypes, InboundRequest


class WebhookClient(ABC):
    """PayPal Webhook 管理クライアント抽象基底クラス。"""

    @abstractmethod
    async def create_webhook(self, request: CreateWebhookRequest) -> Webhook:
        """Webhook リスナーをイベントに登録する。"""
        ...

    @abstractmethod
    async def get_webhook(self, webhook_id: str) -> Webhook:
        """ID を指定して Webhook を取得する。"""
        ...

    @abstractmethod
    async def update_webhook(self, webhook_id: str, fields: list[WebhookField]) -> Webhook:
        """指定したフィールドだけを更新する。"""
        ...

    @abstractmethod
    async def list_webhooks(
        self, anchor_type: AnchorType | str = AnchorType.APPLICATION
    ) -> ListWebhookResponse:
        """Webhook 一覧を取得する。空文字列は APPLICATION として扱う。"""
        ...

    @abstractmethod
    async def delete_webhook(self, webhook_id: str) -> None:
        """Webhook を削除する。"""
        ...

    @abstractmethod
    async def verify_webhook_signature(
        self, request: InboundRequest, webhook_id: str
    ) -> VerifyWebhookResponse:
        """受信リクエストの署名を検証する。"""
        ...

    @abstractmethod
    async def verify_webhook_signature_raw(
        self, body: bytes, headers: HeaderTypes, webhook_id: str
    ) -> VerifyWebhookResponse:
        """ボディとヘッダを直接渡して署名を検証する。"""
        ...

    @abstractmethod
    async def get_webhook_event_types(self) -> WebhookEventTypesResponse:
        """利用可能なイベントタイプ一覧を取得する。"""
        ...
