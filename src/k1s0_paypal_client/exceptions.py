"""paypal_client ライブラリの例外型定義"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ErrorResponse


class PayPalClientError(Exception):
    """paypal_client ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class PayPalClientErrorCodes:
    """PayPalClientError のエラーコード定数。"""

    INVALID_INPUT: str = "INVALID_INPUT"
    ENCODE_FAILED: str = "ENCODE_FAILED"
    DECODE_FAILED: str = "DECODE_FAILED"
    READ_FILE: str = "READ_FILE"
    HTTP_ERROR: str = "HTTP_ERROR"
    UNAUTHORIZED: str = "UNAUTHORIZED"
    NOT_FOUND: str = "NOT_FOUND"
    TOKEN_REQUEST_FAILED: str = "TOKEN_REQUEST_FAILED"
    READ_CONFIG: str = "READ_CONFIG"
    PARSE_CONFIG: str = "PARSE_CONFIG"
    INVALID_CONFIG: str = "INVALID_CONFIG"


class InputError(PayPalClientError):
    """呼び出し側の入力が使用できない。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(PayPalClientErrorCodes.INVALID_INPUT, message, cause)


class EncodingError(PayPalClientError):
    """JSON エンコード失敗。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(PayPalClientErrorCodes.ENCODE_FAILED, message, cause)


class DecodingError(PayPalClientError):
    """JSON デコード失敗（不正な JSON またはスキーマ不一致）。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(PayPalClientErrorCodes.DECODE_FAILED, message, cause)


class FileReadError(PayPalClientError):
    """ローカルファイルの読み込み失敗。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(PayPalClientErrorCodes.READ_FILE, message, cause)


class TransportError(PayPalClientError):
    """ネットワーク・認証・HTTP ステータスのエラー。

    status_code はレスポンスを受信できた場合のみ設定される。
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        error_response: ErrorResponse | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)
        self.status_code = status_code
        self.error_response = error_response
