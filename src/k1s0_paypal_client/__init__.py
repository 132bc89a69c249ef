"""k1s0 paypal_client library."""

from .client import WebhookClient
from .config import API_BASE_LIVE, API_BASE_SANDBOX, PayPalClientConfig, load_config
from .exceptions import (
    DecodingError,
    EncodingError,
    FileReadError,
    InputError,
    PayPalClientError,
    PayPalClientErrorCodes,
    TransportError,
)
from .http_client import HttpWebhookClient
from .json_codec import RawMessage
from .models import (
    AccessToken,
    AnchorType,
    CreateWebhookRequest,
    ErrorDetail,
    ErrorResponse,
    Link,
    ListWebhookResponse,
    VerificationStatus,
    VerifyWebhookResponse,
    VerifyWebhookSignatureRequest,
    Webhook,
    WebhookEventType,
    WebhookEventTypesResponse,
    WebhookField,
)
from .transport import AuthenticatedTransport
from .verification import InboundRequest, InboundWebhookRequest, build_verify_request

__all__ = [
    "WebhookClient",
    "HttpWebhookClient",
    "AuthenticatedTransport",
    "PayPalClientConfig",
    "load_config",
    "API_BASE_SANDBOX",
    "API_BASE_LIVE",
    "RawMessage",
    "InboundRequest",
    "InboundWebhookRequest",
    "build_verify_request",
    "AccessToken",
    "AnchorType",
    "CreateWebhookRequest",
    "ErrorDetail",
    "ErrorResponse",
    "Link",
    "ListWebhookResponse",
    "VerificationStatus",
    "VerifyWebhookResponse",
    "VerifyWebhookSignatureRequest",
    "Webhook",
    "WebhookEventType",
    "WebhookEventTypesResponse",
    "WebhookField",
    "PayPalClientError",
    "PayPalClientErrorCodes",
    "InputError",
    "EncodingError",
    "DecodingError",
    "FileReadError",
    "TransportError",
]
