"""
Application Configuration

All settings loaded from environment variables (prefix CRYPTODASH_).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CRYPTODASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CryptoDash Indicator Engine"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Timeframes analyzed on every refresh
    timeframes: list[str] = ["1h", "4h", "daily"]

    # Moving averages
    ma_periods: list[int] = [9, 21, 55, 100, 200]
    cross_short_period: int = 55
    cross_long_period: int = 200

    # Oscillators
    rsi_period: int = 14
    stoch_rsi_period: int = 14
    stoch_k_smooth: int = 3
    stoch_d_smooth: int = 3

    # Trend / volatility
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    bb_period: int = 20
    bb_std_dev: float = 2.0

    # Alert thresholds
    cross_alert_days: float = 5.0
    stoch_rsi_overbought: float = 80.0
    stoch_rsi_oversold: float = 20.0
    macd_histogram_lookback: int = 10
    macd_extreme_band: float = 0.1
    extreme_fear_threshold: float = 20.0
    extreme_greed_threshold: float = 85.0

    # Relative tolerance for sign/zero comparisons in cross detection
    sign_epsilon: float = 1e-9

    # Display precision
    min_price_decimals: int = 2
    max_price_decimals: int = 8
    display_timezone: str = "UTC"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
