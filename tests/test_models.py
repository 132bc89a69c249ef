"""データモデルのユニットテスト"""

import time

from k1s0_paypal_client.models import (
    AccessToken,
    CreateWebhookRequest,
    ErrorResponse,
    ListWebhookResponse,
    VerifyWebhookResponse,
    VerifyWebhookSignatureRequest,
    Webhook,
    WebhookEventType,
    WebhookField,
)


def test_webhook_from_dict() -> None:
    webhook = Webhook.from_dict(
        {
            "id": "0EH40505U7160970P",
            "url": "https://example.com/example_webhook",
            "event_types": [
                {
                    "name": "PAYMENT.AUTHORIZATION.CREATED",
                    "description": "A payment authorization was created.",
                },
                {"name": "PAYMENT.AUTHORIZATION.VOIDED"},
            ],
            "links": [
                {
                    "href": "https://api-m.paypal.com/v1/notifications/webhooks/0EH40505U7160970P",
                    "rel": "self",
                    "method": "GET",
                }
            ],
        }
    )
    assert webhook.id == "0EH40505U7160970P"
    assert len(webhook.event_types) == 2
    assert webhook.event_types[1].description == ""
    assert webhook.links[0].rel == "self"


def test_create_webhook_request_to_dict() -> None:
    request = CreateWebhookRequest(
        url="https://example.com/hook",
        event_types=[WebhookEventType(name="PAYMENT.SALE.COMPLETED")],
    )
    assert request.to_dict() == {
        "url": "https://example.com/hook",
        "event_types": [{"name": "PAYMENT.SALE.COMPLETED"}],
    }


def test_webhook_field_to_dict() -> None:
    field = WebhookField(operation="replace", path="/url", value="https://example.com/hook")
    assert field.to_dict() == {"op": "replace", "path": "/url", "value": "https://example.com/hook"}


def test_list_webhook_response_empty() -> None:
    assert ListWebhookResponse.from_dict({}).webhooks == []


def test_verify_webhook_signature_request_omits_empty() -> None:
    request = VerifyWebhookSignatureRequest(transmission_id="tx", webhook_id="WH-1")
    assert request.to_dict() == {"transmission_id": "tx", "webhook_id": "WH-1"}


def test_verify_webhook_response_verified() -> None:
    assert VerifyWebhookResponse.from_dict({"verification_status": "SUCCESS"}).verified
    assert not VerifyWebhookResponse.from_dict({"verification_status": "FAILURE"}).verified


def test_access_token_expiry() -> None:
    token = AccessToken.from_dict(
        {"access_token": "A21AA", "token_type": "Bearer", "expires_in": 32400, "app_id": "APP-1"}
    )
    assert token.app_id == "APP-1"
    assert not token.is_expired()
    expired = AccessToken(access_token="old", token_type="Bearer", expires_at=time.time() + 10)
    assert expired.is_expired(buffer_seconds=30.0)


def test_error_response_from_dict() -> None:
    error = ErrorResponse.from_dict(
        {
            "name": "VALIDATION_ERROR",
            "message": "Invalid request",
            "debug_id": "abc123",
            "details": [{"field": "url", "issue": "INVALID_URL"}],
        }
    )
    assert error.name == "VALIDATION_ERROR"
    assert error.details[0].issue == "INVALID_URL"


def test_error_response_oauth_form() -> None:
    error = ErrorResponse.from_dict(
        {"error": "invalid_client", "error_description": "Client Authentication failed"}
    )
    assert error.name == "invalid_client"
    assert error.message == "Client Authentication failed"
