"""
Configuration management using pydantic-settings.

All tradeloop settings are loaded from environment variables with the
TRADELOOP_ prefix.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings


class TradeConfig(BaseSettings):
    """
    Trade engine configuration.

    Environment variables are prefixed with TRADELOOP_, e.g.:
    - TRADELOOP_MAX_RETRIES=5
    - TRADELOOP_BASE_URL=https://steamcommunity.com/trade
    """

    model_config = {"env_prefix": "TRADELOOP_"}

    # Retry
    max_retries: int = 3
    retry_delay_ms: int = 600

    @property
    def retry_delay_s(self) -> float:
        return self.retry_delay_ms / 1000.0

    # Transport
    base_url: str = "https://steamcommunity.com/trade"
    request_timeout_seconds: float = 30.0

    # Default item namespace (app 440, context 2)
    default_app_id: int = 440
    default_context_id: int = 2

    # Suggested host poll cadence; the engine itself never schedules polls.
    poll_interval_ms: int = 800
