"""forecast_dash package with UI-agnostic logic for the forecast form."""

from .domain import (
    AccuracyMetrics,
    ChartRange,
    ForecastPoint,
    ForecastRequest,
    ForecastView,
    HistoricalPoint,
    InstrumentSelection,
    InstrumentType,
    NormalizedForecast,
    PredictedTestPoint,
    SubmissionState,
)

__all__ = [
    "AccuracyMetrics",
    "ChartRange",
    "ForecastPoint",
    "ForecastRequest",
    "ForecastView",
    "HistoricalPoint",
    "InstrumentSelection",
    "InstrumentType",
    "NormalizedForecast",
    "PredictedTestPoint",
    "SubmissionState",
]
