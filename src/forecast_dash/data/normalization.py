"""Normalize prediction service responses into domain series."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from numbers import Real
from typing import Any, Callable, Optional, TypeVar

import pandas as pd

from ..domain import AccuracyMetrics, ForecastPoint, HistoricalPoint, NormalizedForecast, PredictedTestPoint
from ..utils import NormalizationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FORECAST_KEY = "predictions"
HISTORICAL_KEY = "historical_data"
PREDICTED_TEST_KEY = "predicted_test"


def normalize_response(raw: Any) -> NormalizedForecast:
    """Reshape a raw response; missing fields become empty series or None."""
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise NormalizationError(f"Expected a JSON object, got {type(raw).__name__}")

    forecast = _parse_series(raw, FORECAST_KEY, _forecast_point)
    historical = _parse_series(raw, HISTORICAL_KEY, _historical_point)
    predicted_test = _parse_series(raw, PREDICTED_TEST_KEY, _predicted_test_point)
    logger.debug(
        "Normalized response: %d forecast, %d historical, %d predicted-test points",
        len(forecast),
        len(historical),
        len(predicted_test),
    )

    return NormalizedForecast(
        forecast=forecast,
        historical=historical,
        predicted_test=predicted_test,
        metrics=AccuracyMetrics(
            rmse=_optional_number(raw.get("rmse"), "rmse"),
            mae=_optional_number(raw.get("mae"), "mae"),
        ),
        result=_optional_text(raw.get("result"), "result"),
    )


def _parse_series(raw: Mapping[str, Any], key: str, parse_item: Callable[[Mapping[str, Any], str], T]) -> list[T]:
    items = raw.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise NormalizationError(f"'{key}' must be a list, got {type(items).__name__}")

    parsed = []
    for index, item in enumerate(items):
        where = f"{key}[{index}]"
        if not isinstance(item, Mapping):
            raise NormalizationError(f"{where} must be an object, got {type(item).__name__}")
        parsed.append(parse_item(item, where))
    return parsed


def _forecast_point(item: Mapping[str, Any], where: str) -> ForecastPoint:
    return ForecastPoint(
        date=_date(item.get("date"), f"{where}.date"),
        predicted_close_price=_number(item.get("predicted_close_price"), f"{where}.predicted_close_price"),
    )


def _historical_point(item: Mapping[str, Any], where: str) -> HistoricalPoint:
    return HistoricalPoint(
        record_date=_date(item.get("recordDate"), f"{where}.recordDate"),
        close_price=_number(item.get("closePrice"), f"{where}.closePrice"),
    )


def _predicted_test_point(item: Mapping[str, Any], where: str) -> PredictedTestPoint:
    return PredictedTestPoint(predicted=_number(item.get("predicted"), f"{where}.predicted"))


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise NormalizationError(f"{where} must be numeric, got {value!r}")
    return float(value)


def _optional_number(value: Any, where: str) -> Optional[float]:
    if value is None:
        return None
    return _number(value, where)


def _optional_text(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise NormalizationError(f"{where} must be a string, got {value!r}")
    return value


def _date(value: Any, where: str) -> date:
    if not isinstance(value, str) or not value.strip():
        raise NormalizationError(f"{where} must be a date string, got {value!r}")
    try:
        stamp = pd.Timestamp(value)
    except ValueError as err:
        raise NormalizationError(f"{where} is not a valid date: {value!r}") from err
    if pd.isna(stamp):
        raise NormalizationError(f"{where} is not a valid date: {value!r}")
    return stamp.date()
