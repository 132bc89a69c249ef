"""設定ローダーのユニットテスト"""

from pathlib import Path

import pytest
from k1s0_paypal_client.config import API_BASE_SANDBOX, load_config
from k1s0_paypal_client.exceptions import PayPalClientError, PayPalClientErrorCodes


def test_load_minimal_config(tmp_path: Path) -> None:
    """最小設定ファイルの読み込み。"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("paypal:\n  client_id: cid\n  secret: sec\n")
    config = load_config(config_file)
    assert config.client_id == "cid"
    assert config.api_base == API_BASE_SANDBOX
    assert config.timeout_seconds == 30.0


def test_load_with_env_override(tmp_path: Path) -> None:
    """環境別設定のマージ確認。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text("paypal:\n  client_id: cid\n  secret: sec\n  timeout_seconds: 5\n")
    env_file = tmp_path / "prod.yaml"
    env_file.write_text("paypal:\n  api_base: https://api-m.paypal.com\n")
    config = load_config(base_file, env_file)
    assert config.client_id == "cid"
    assert config.timeout_seconds == 5.0
    assert config.api_base == "https://api-m.paypal.com"


def test_load_env_not_exists(tmp_path: Path) -> None:
    base_file = tmp_path / "base.yaml"
    base_file.write_text("paypal:\n  client_id: cid\n  secret: sec\n")
    config = load_config(base_file, tmp_path / "nonexistent.yaml")
    assert config.secret == "sec"


def test_load_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(PayPalClientError) as exc_info:
        load_config(tmp_path / "missing.yaml")
    assert exc_info.value.code == PayPalClientErrorCodes.READ_CONFIG


def test_load_invalid_yaml(tmp_path: Path) -> None:
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("paypal: {invalid: yaml: content:\n")
    with pytest.raises(PayPalClientError) as exc_info:
        load_config(bad_file)
    assert exc_info.value.code == PayPalClientErrorCodes.PARSE_CONFIG


def test_load_non_mapping_root(tmp_path: Path) -> None:
    bad_file = tmp_path / "list.yaml"
    bad_file.write_text("- a\n- b\n")
    with pytest.raises(PayPalClientError) as exc_info:
        load_config(bad_file)
    assert exc_info.value.code == PayPalClientErrorCodes.PARSE_CONFIG


def test_load_validation_error(tmp_path: Path) -> None:
    """バリデーション失敗で INVALID_CONFIG になること。"""
    bad_config = tmp_path / "bad_config.yaml"
    bad_config.write_text("paypal:\n  client_id: cid\n  secret: sec\n  timeout_seconds: 0\n")
    with pytest.raises(PayPalClientError) as exc_info:
        load_config(bad_config)
    assert exc_info.value.code == PayPalClientErrorCodes.INVALID_CONFIG


def test_load_missing_credentials(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("paypal:\n  client_id: cid\n")
    with pytest.raises(PayPalClientError) as exc_info:
        load_config(config_file)
    assert exc_info.value.code == PayPalClientErrorCodes.INVALID_CONFIG
