"""Domain models for forecast requests, responses and chart projections."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional

import pandas as pd

MIN_HORIZON = 1
MAX_HORIZON = 14


class InstrumentType(str, Enum):
    EQUITY = "stock"
    CRYPTO = "crypto"
    FOREX = "forex"

    @property
    def label(self) -> str:
        return _INSTRUMENT_LABELS[self]

    @property
    def uses_currency_pair(self) -> bool:
        return self is not InstrumentType.EQUITY


_INSTRUMENT_LABELS = {
    InstrumentType.EQUITY: "Stocks",
    InstrumentType.CRYPTO: "Cryptocurrency",
    InstrumentType.FOREX: "Currency pairs",
}


class SubmissionState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


@dataclass(frozen=True, slots=True)
class InstrumentSelection:
    type: InstrumentType
    symbol: Optional[str] = None
    base_currency: Optional[str] = None
    target_currency: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ForecastRequest:
    type: InstrumentType
    symbol: Optional[str]
    market: Optional[str]
    from_symbol: Optional[str]
    to_symbol: Optional[str]
    day_count: int
    model: str

    def to_payload(self) -> dict[str, Any]:
        """Wire representation; inapplicable fields are sent as explicit nulls."""
        return {
            "type": self.type.value,
            "symbol": self.symbol,
            "market": self.market,
            "fromSymbol": self.from_symbol,
            "toSymbol": self.to_symbol,
            "dayCount": self.day_count,
            "model": self.model,
        }


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    date: date
    predicted_close_price: float


@dataclass(frozen=True, slots=True)
class HistoricalPoint:
    record_date: date
    close_price: float


@dataclass(frozen=True, slots=True)
class PredictedTestPoint:
    predicted: float


@dataclass(frozen=True, slots=True)
class AccuracyMetrics:
    rmse: Optional[float] = None
    mae: Optional[float] = None

    @property
    def available(self) -> bool:
        return self.rmse is not None and self.mae is not None


@dataclass(frozen=True, slots=True)
class NormalizedForecast:
    forecast: list[ForecastPoint] = field(default_factory=list)
    historical: list[HistoricalPoint] = field(default_factory=list)
    predicted_test: list[PredictedTestPoint] = field(default_factory=list)
    metrics: AccuracyMetrics = field(default_factory=AccuracyMetrics)
    result: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ChartRange:
    min: float
    max: float
    tick_step: float


@dataclass(frozen=True, eq=False)
class ForecastView:
    """Everything the page needs to render one successful submission."""

    forecast_table: pd.DataFrame
    forecast_range: Optional[ChartRange]
    overlay: Optional[pd.DataFrame]
    metrics: AccuracyMetrics = field(default_factory=AccuracyMetrics)
    result: Optional[str] = None

    @property
    def has_forecast(self) -> bool:
        return not self.forecast_table.empty

    @property
    def has_overlay(self) -> bool:
        return self.overlay is not None and not self.overlay.empty
