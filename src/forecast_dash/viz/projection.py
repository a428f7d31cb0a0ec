"""Chart-ready projections of normalized forecasts.

All functions here are pure: the same series always give the same frames and
ranges, and nothing is remembered between submissions.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import pandas as pd

from ..domain import ChartRange, ForecastPoint, ForecastView, HistoricalPoint, NormalizedForecast, PredictedTestPoint

logger = logging.getLogger(__name__)

RANGE_BUFFER_RATIO = 0.05
TICK_COUNT = 5

FORECAST_COLUMNS = ["date", "predicted_close_price"]
HISTORICAL_COLUMN = "Historical data"
PREDICTED_TEST_COLUMN = "Test-set prediction"


def forecast_range(points: Sequence[ForecastPoint]) -> ChartRange:
    """Padded price bounds and tick spacing for the forecast chart.

    A single point yields a zero-width range with ``tick_step == 0``. Empty
    input has no defined range and raises ``ValueError``.
    """
    if not points:
        raise ValueError("Cannot compute a chart range for an empty forecast")

    prices = [point.predicted_close_price for point in points]
    min_price = min(prices)
    max_price = max(prices)
    buffer = (max_price - min_price) * RANGE_BUFFER_RATIO

    low = min_price - buffer
    high = max_price + buffer
    return ChartRange(min=low, max=high, tick_step=(high - low) / TICK_COUNT)


def forecast_frame(points: Sequence[ForecastPoint]) -> pd.DataFrame:
    """Forecast table in response order."""
    return pd.DataFrame(
        {
            "date": [point.date for point in points],
            "predicted_close_price": [point.predicted_close_price for point in points],
        },
        columns=FORECAST_COLUMNS,
    )


def overlay_frame(historical: Sequence[HistoricalPoint], predicted_test: Sequence[PredictedTestPoint]) -> pd.DataFrame:
    """Historical closes and test-set predictions on a shared date axis.

    Predictions carry no dates of their own, so they are laid against the
    newest historical dates. Older positions without a prediction are NaN.
    """
    labels = [point.record_date for point in historical]
    predicted = [point.predicted for point in predicted_test]

    if len(predicted) > len(labels):
        logger.warning(
            "Dropping %d predicted-test values that have no historical date to align with",
            len(predicted) - len(labels),
        )
        predicted = predicted[len(predicted) - len(labels):]

    padded = [math.nan] * (len(labels) - len(predicted)) + predicted
    return pd.DataFrame(
        {
            HISTORICAL_COLUMN: [point.close_price for point in historical],
            PREDICTED_TEST_COLUMN: padded,
        },
        index=pd.Index(labels, name="date"),
        columns=[HISTORICAL_COLUMN, PREDICTED_TEST_COLUMN],
    )


def project(normalized: NormalizedForecast) -> ForecastView:
    chart_range = forecast_range(normalized.forecast) if normalized.forecast else None
    overlay = None
    if normalized.historical and normalized.predicted_test:
        overlay = overlay_frame(normalized.historical, normalized.predicted_test)

    return ForecastView(
        forecast_table=forecast_frame(normalized.forecast),
        forecast_range=chart_range,
        overlay=overlay,
        metrics=normalized.metrics,
        result=normalized.result,
    )
