"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class PosterConfig(BaseSettings):
    """Poster POS API and OAuth application configuration."""

    model_config = {"env_prefix": "SHIFTPAY_POSTER_"}

    base_url: str = "https://joinposter.com"
    api_domain: str = "joinposter.com"  # per-account host: {account}.{api_domain}
    app_id: str = ""
    app_secret: str = ""
    redirect_uri: str = ""
    timeout: int = 30


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "SHIFTPAY_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "eu-central-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis configuration (rate-limit counters)."""

    model_config = {"env_prefix": "SHIFTPAY_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class RateLimitConfig(BaseSettings):
    """Fixed-window rate limit applied to /api/ routes."""

    model_config = {"env_prefix": "SHIFTPAY_RATE_LIMIT_"}

    enabled: bool = True
    window_seconds: int = 900
    max_requests: int = 100


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SHIFTPAY_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    allowed_origins: list[str] = ["*"]

    poster: PosterConfig = PosterConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    rate_limit: RateLimitConfig = RateLimitConfig()
