"""
Configuration settings using Pydantic Settings.
All settings can be overridden via environment variables.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Dict, List, Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    # Instruments
    PAIRS: List[str] = Field(
        default=[
            "BTC", "ETH", "SOL", "XRP", "ADA",
            "AVAX", "DOGE", "LINK", "MATIC", "LTC",
            "TRX", "DOT", "ATOM", "BNB", "UNI"
        ],
        description="Base assets scanned every cycle, in scan order"
    )

    # Qualification
    MIN_PROFIT: float = Field(
        default=0.3,
        description="Minimum net profit percentage after fees"
    )
    SHOW_ALL: bool = Field(
        default=False,
        description="Emit every evaluated pair regardless of profit"
    )

    # Cache / history
    CACHE_TTL_SEC: float = Field(
        default=30,
        ge=0,
        description="Lifetime of a computed cycle result, 0 disables caching"
    )
    HISTORY_SIZE: int = Field(
        default=100,
        ge=1,
        description="Maximum number of opportunities kept in history"
    )

    # Exchanges
    ENABLED_EXCHANGES: List[str] = Field(
        default=["binance", "coinbase", "bybit", "kucoin", "okx", "kraken"],
        description="Registered price sources, in tie-break order"
    )
    EXCHANGE_FEES: Dict[str, float] = Field(
        default={},
        description="Per-exchange fee overrides in percent"
    )
    REQUEST_TIMEOUT_SEC: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for a single price request"
    )
    MAX_CONCURRENT_PAIRS: int = Field(
        default=4,
        ge=1,
        description="Pairs evaluated concurrently within one cycle"
    )
    CYCLE_TIMEOUT_SEC: Optional[float] = Field(
        default=None,
        gt=0,
        description="Optional deadline for a whole cycle"
    )

    # HTTP server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    STATIC_DIR: str = Field(
        default="public",
        description="Directory served at / when present"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")

    # Application
    DEBUG: bool = Field(default=False)

    @field_validator("PAIRS")
    @classmethod
    def _normalize_pairs(cls, value: List[str]) -> List[str]:
        pairs = [p.strip().upper() for p in value if p.strip()]
        if not pairs:
            raise ValueError("PAIRS must contain at least one instrument")
        return list(dict.fromkeys(pairs))

    @field_validator("ENABLED_EXCHANGES")
    @classmethod
    def _validate_exchanges(cls, value: List[str]) -> List[str]:
        exchanges = [e.strip().lower() for e in value]
        unknown = [e for e in exchanges if e not in EXCHANGE_CONFIG]
        if unknown:
            raise ValueError(f"Unknown exchanges: {', '.join(unknown)}")
        return list(dict.fromkeys(exchanges))

    @field_validator("EXCHANGE_FEES")
    @classmethod
    def _validate_fees(cls, value: Dict[str, float]) -> Dict[str, float]:
        fees = {k.lower(): v for k, v in value.items()}
        for name, fee in fees.items():
            if name not in EXCHANGE_CONFIG:
                raise ValueError(f"Fee override for unknown exchange: {name}")
            if fee < 0:
                raise ValueError(f"Fee for {name} must be non-negative")
        return fees

    def fee_for(self, exchange: str) -> float:
        """Effective fee for an exchange, override first."""
        return self.EXCHANGE_FEES.get(exchange, EXCHANGE_CONFIG[exchange]["fee"])


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Exchange configuration
EXCHANGE_CONFIG = {
    "binance": {
        "name": "Binance",
        "rest_base": "https://api.binance.com",
        "fee": 0.10,
        "rate": 10.0,
        "burst": 20,
    },
    "coinbase": {
        "name": "Coinbase",
        "rest_base": "https://api.coinbase.com",
        "fee": 0.50,
        "rate": 10.0,
        "burst": 10,
    },
    "bybit": {
        "name": "Bybit",
        "rest_base": "https://api.bybit.com",
        "fee": 0.10,
        "rate": 10.0,
        "burst": 20,
    },
    "kucoin": {
        "name": "KuCoin",
        "rest_base": "https://api.kucoin.com",
        "fee": 0.10,
        "rate": 10.0,
        "burst": 20,
    },
    "okx": {
        "name": "OKX",
        "rest_base": "https://www.okx.com",
        "fee": 0.10,
        "rate": 10.0,
        "burst": 20,
    },
    "kraken": {
        "name": "Kraken",
        "rest_base": "https://api.kraken.com",
        "fee": 0.26,
        "rate": 1.0,
        "burst": 15,
    }
}
