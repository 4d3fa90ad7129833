"""Application configuration."""

import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from smc_engine.models.config import MAX_CONFIDENCE, MIN_CONFIDENCE, SynthesizerConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables (SMC_ prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="SMC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Indicator periods
    sma_period: int = 20
    ema_period: int = 50
    rsi_period: int = 14

    # Momentum gates
    rsi_overbought: Decimal = Decimal("70")
    rsi_oversold: Decimal = Decimal("30")

    # Confidence scoring
    base_confidence: int = Field(default=70, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    max_confidence: int = Field(default=99, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def synthesizer_config(self) -> SynthesizerConfig:
        """Build the engine configuration from these settings."""
        return SynthesizerConfig(
            sma_period=self.sma_period,
            ema_period=self.ema_period,
            rsi_period=self.rsi_period,
            rsi_overbought=self.rsi_overbought,
            rsi_oversold=self.rsi_oversold,
            base_confidence=self.base_confidence,
            max_confidence=self.max_confidence,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
