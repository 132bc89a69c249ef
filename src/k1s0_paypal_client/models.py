"""PayPal webhook クライアントデータモデル"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .json_codec import RawMessage


class AnchorType(StrEnum):
    """Webhook 一覧取得のスコープ。"""

    APPLICATION = "APPLICATION"
    ACCOUNT = "ACCOUNT"


class VerificationStatus(StrEnum):
    """署名検証結果。"""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass
class Link:
    """HATEOAS リンク。"""

    href: str
    rel: str = ""
    method: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Link:
        return cls(
            href=data["href"],
            rel=data.get("rel", ""),
            method=data.get("method", ""),
        )


@dataclass
class WebhookEventType:
    """Webhook イベントタイプ。"""

    name: str
    description: str = ""
    status: str = ""
    resource_versions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WebhookEventType:
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            status=data.get("status", ""),
            resource_versions=list(data.get("resource_versions", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.description:
            result["description"] = self.description
        if self.status:
            result["status"] = self.status
        if self.resource_versions:
            result["resource_versions"] = list(self.resource_versions)
        return result


@dataclass
class Webhook:
    """Webhook サブスクリプション。"""

    id: str
    url: str
    event_types: list[WebhookEventType] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Webhook:
        """API レスポンス辞書から Webhook を生成する。"""
        return cls(
            id=data["id"],
            url=data.get("url", ""),
            event_types=[WebhookEventType.from_dict(e) for e in data.get("event_types", [])],
            links=[Link.from_dict(link) for link in data.get("links", [])],
        )


@dataclass
class CreateWebhookRequest:
    """Webhook 作成リクエスト。"""

    url: str
    event_types: list[WebhookEventType]

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "event_types": [e.to_dict() for e in self.event_types],
        }


@dataclass
class WebhookField:
    """Webhook の部分更新指示（JSON Patch の 1 操作）。"""

    operation: str
    path: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.operation, "path": self.path, "value": self.value}


@dataclass
class ListWebhookResponse:
    """Webhook 一覧レスポンス。"""

    webhooks: list[Webhook] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListWebhookResponse:
        return cls(webhooks=[Webhook.from_dict(w) for w in data.get("webhooks", [])])


@dataclass
class WebhookEventTypesResponse:
    """イベントタイプ一覧レスポンス。"""

    event_types: list[WebhookEventType] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WebhookEventTypesResponse:
        return cls(
            event_types=[WebhookEventType.from_dict(e) for e in data.get("event_types", [])]
        )


@dataclass
class VerifyWebhookSignatureRequest:
    """署名検証リクエスト。

    webhook_event は受信したボディそのもの。再シリアライズすると
    PayPal 側の署名検証が失敗する。
    """

    auth_algo: str = ""
    cert_url: str = ""
    transmission_id: str = ""
    transmission_sig: str = ""
    transmission_time: str = ""
    webhook_id: str = ""
    webhook_event: RawMessage = field(default_factory=RawMessage)

    def to_dict(self) -> dict[str, Any]:
        """空のフィールドを除いた辞書を返す。"""
        result: dict[str, Any] = {}
        for key in (
            "auth_algo",
            "cert_url",
            "transmission_id",
            "transmission_sig",
            "transmission_time",
            "webhook_id",
        ):
            value = getattr(self, key)
            if value:
                result[key] = value
        if self.webhook_event:
            result["webhook_event"] = self.webhook_event
        return result


@dataclass
class VerifyWebhookResponse:
    """署名検証レスポンス。"""

    verification_status: str

    @property
    def verified(self) -> bool:
        return self.verification_status == VerificationStatus.SUCCESS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VerifyWebhookResponse:
        return cls(verification_status=data["verification_status"])


@dataclass
class AccessToken:
    """OAuth2 アクセストークン。"""

    access_token: str
    token_type: str
    expires_at: float  # Unix timestamp
    app_id: str = ""
    scope: str = ""
    nonce: str = ""

    def is_expired(self, buffer_seconds: float = 30.0) -> bool:
        """トークンの有効期限が切れているか確認する（バッファ付き）。"""
        return time.time() >= (self.expires_at - buffer_seconds)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccessToken:
        """OAuth2 レスポンス辞書から AccessToken を生成する。"""
        expires_in = int(data.get("expires_in", 0))
        return cls(
            access_token=data["access_token"],
            token_type=data.get("token_type", "Bearer"),
            expires_at=time.time() + expires_in,
            app_id=data.get("app_id", ""),
            scope=data.get("scope", ""),
            nonce=data.get("nonce", ""),
        )


@dataclass
class ErrorDetail:
    """エラー詳細。"""

    field: str = ""
    issue: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorDetail:
        return cls(
            field=data.get("field", ""),
            issue=data.get("issue", ""),
            description=data.get("description", ""),
        )


@dataclass
class ErrorResponse:
    """PayPal のエラーレスポンス。"""

    name: str = ""
    message: str = ""
    debug_id: str = ""
    information_link: str = ""
    details: list[ErrorDetail] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorResponse:
        # OAuth エンドポイントは error / error_description 形式で返す
        return cls(
            name=data.get("name", data.get("error", "")),
            message=data.get("message", data.get("error_description", "")),
            debug_id=data.get("debug_id", ""),
            information_link=data.get("information_link", ""),
            details=[ErrorDetail.from_dict(d) for d in data.get("details", [])],
        )
