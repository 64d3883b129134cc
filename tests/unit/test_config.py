"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from shiftpay.core.config import AppSettings, DynamoDBConfig, PosterConfig, RateLimitConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.log_level == "INFO"
    assert settings.allowed_origins == ["*"]


def test_poster_config_defaults():
    config = PosterConfig()
    assert config.base_url == "https://joinposter.com"
    assert config.api_domain == "joinposter.com"
    assert config.timeout == 30


def test_rate_limit_defaults():
    config = RateLimitConfig()
    assert config.enabled is True
    assert config.window_seconds == 900
    assert config.max_requests == 100


def test_dynamodb_env_override(monkeypatch):
    monkeypatch.setenv("SHIFTPAY_DYNAMO_TABLE_SUFFIX", "-uat")
    monkeypatch.setenv("SHIFTPAY_DYNAMO_ENDPOINT_URL", "http://localhost:4566")
    config = DynamoDBConfig()
    assert config.table_suffix == "-uat"
    assert config.endpoint_url == "http://localhost:4566"


def test_rate_limit_env_override(monkeypatch):
    monkeypatch.setenv("SHIFTPAY_RATE_LIMIT_MAX_REQUESTS", "5")
    assert RateLimitConfig().max_requests == 5
