"""PayPal クライアント設定"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import PayPalClientError, PayPalClientErrorCodes

API_BASE_SANDBOX = "https://api-m.sandbox.paypal.com"
API_BASE_LIVE = "https://api-m.paypal.com"


class PayPalClientConfig(BaseModel):
    """PayPal REST API クライアント設定。"""

    client_id: str
    secret: str
    api_base: str = API_BASE_SANDBOX
    timeout_seconds: float = Field(default=30.0, gt=0)
    # 有効期限のこの秒数前にトークンを更新する
    token_refresh_buffer_seconds: float = Field(default=30.0, ge=0)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PayPalClientError(
            code=PayPalClientErrorCodes.READ_CONFIG,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise PayPalClientError(
            code=PayPalClientErrorCodes.PARSE_CONFIG,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise PayPalClientError(
            code=PayPalClientErrorCodes.PARSE_CONFIG,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def load_config(path: Path, env_path: Path | None = None) -> PayPalClientConfig:
    """YAML から PayPalClientConfig を読み込む。

    設定は `paypal:` セクション配下に置く。env_path が存在する場合は
    ベース設定にマージする。
    """
    data = _read_yaml(path)
    if env_path is not None and env_path.exists():
        data = _deep_merge(data, _read_yaml(env_path))
    try:
        return PayPalClientConfig.model_validate(data.get("paypal", {}))
    except ValidationError as e:
        raise PayPalClientError(
            code=PayPalClientErrorCodes.INVALID_CONFIG,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
