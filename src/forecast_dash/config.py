"""Static lookup tables and runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .domain import InstrumentType

DEFAULT_API_URL = "http://localhost:8080/api/predictions"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MODEL = "lstm"

# Model identifier -> form label
MODEL_CHOICES = {
    "lstm": "LSTM",
    "linear_regression": "Linear regression",
}


@dataclass(frozen=True)
class InstrumentCatalog:
    """Instruments the prediction service knows how to forecast."""

    equity_symbols: tuple[str, ...] = ("IBM", "AAPL", "GOOGL", "MSFT")
    crypto_pairs: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(
            {
                "BTC": ("USD",),
                "ETH": ("USD",),
                "XRP": ("USD",),
                "LTC": ("USD",),
            }
        )
    )
    forex_pairs: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(
            {
                "EUR": ("USD", "RUB"),
                "UAH": ("RUB",),
                "CNY": ("RUB", "USD"),
                "GBP": ("USD",),
            }
        )
    )

    def __post_init__(self) -> None:
        if not self.equity_symbols:
            raise ValueError("Catalog needs at least one equity symbol")
        for name, pairs in (("crypto", self.crypto_pairs), ("forex", self.forex_pairs)):
            if not pairs:
                raise ValueError(f"Catalog needs at least one {name} base currency")
            empty = [base for base, targets in pairs.items() if not targets]
            if empty:
                raise ValueError(f"No {name} target currencies for: {', '.join(empty)}")

    @property
    def symbols(self) -> list[str]:
        return list(self.equity_symbols)

    def pairs(self, instrument_type: InstrumentType) -> Mapping[str, tuple[str, ...]]:
        if instrument_type is InstrumentType.CRYPTO:
            return self.crypto_pairs
        if instrument_type is InstrumentType.FOREX:
            return self.forex_pairs
        raise ValueError(f"{instrument_type.value} instruments have no currency pairs")

    def bases(self, instrument_type: InstrumentType) -> list[str]:
        return list(self.pairs(instrument_type))

    def targets(self, instrument_type: InstrumentType, base_currency: Optional[str]) -> list[str]:
        """Allowed targets for a base; unknown or unset bases have none."""
        if base_currency is None:
            return []
        return list(self.pairs(instrument_type).get(base_currency, ()))


def default_catalog() -> InstrumentCatalog:
    return InstrumentCatalog()


@dataclass(frozen=True)
class ClientSettings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ClientSettings:
    """Read settings from ``FORECAST_DASH_*`` environment variables."""
    env = os.environ if environ is None else environ

    raw_timeout = env.get("FORECAST_DASH_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError as err:
        raise ValueError(f"FORECAST_DASH_TIMEOUT must be a number, got {raw_timeout!r}") from err
    if timeout <= 0:
        raise ValueError(f"FORECAST_DASH_TIMEOUT must be positive, got {raw_timeout!r}")

    return ClientSettings(
        api_url=env.get("FORECAST_DASH_API_URL", DEFAULT_API_URL),
        timeout=timeout,
        log_level=env.get("FORECAST_DASH_LOG_LEVEL", "INFO").upper(),
    )
