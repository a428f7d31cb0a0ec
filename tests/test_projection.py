from __future__ import annotations

import math
from datetime import date, timedelta

import pytest

from forecast_dash import (
    AccuracyMetrics,
    ForecastPoint,
    HistoricalPoint,
    NormalizedForecast,
    PredictedTestPoint,
)
from forecast_dash.viz import forecast_frame, forecast_range, overlay_frame, project
from forecast_dash.viz.projection import HISTORICAL_COLUMN, PREDICTED_TEST_COLUMN

START = date(2024, 1, 1)


def _forecast(*prices: float) -> list[ForecastPoint]:
    return [ForecastPoint(date=START + timedelta(days=i), predicted_close_price=p) for i, p in enumerate(prices)]


def _history(*prices: float) -> list[HistoricalPoint]:
    return [HistoricalPoint(record_date=START + timedelta(days=i), close_price=p) for i, p in enumerate(prices)]


def test_forecast_range_pads_by_five_percent() -> None:
    chart_range = forecast_range(_forecast(100, 110, 90))

    assert chart_range.min == pytest.approx(89)
    assert chart_range.max == pytest.approx(111)
    assert chart_range.tick_step == pytest.approx(4.4)


@pytest.mark.parametrize(
    "prices",
    [(1.0, 2.0), (250.5, 249.0, 251.75, 250.0), (-3.0, 4.0), (0.001, 0.002, 0.0015)],
)
def test_forecast_range_encloses_all_prices(prices: tuple[float, ...]) -> None:
    chart_range = forecast_range(_forecast(*prices))

    assert chart_range.min < min(prices)
    assert chart_range.max > max(prices)
    assert chart_range.tick_step > 0


def test_single_point_collapses_to_zero_tick_step() -> None:
    chart_range = forecast_range(_forecast(42.0))

    assert chart_range.min == chart_range.max == 42.0
    assert chart_range.tick_step == 0


def test_forecast_range_is_idempotent() -> None:
    points = _forecast(3, 1, 2)
    assert forecast_range(points) == forecast_range(points)


def test_forecast_range_rejects_empty_series() -> None:
    with pytest.raises(ValueError):
        forecast_range([])


def test_forecast_frame_keeps_response_order() -> None:
    points = list(reversed(_forecast(1, 2, 3)))

    frame = forecast_frame(points)

    assert list(frame.columns) == ["date", "predicted_close_price"]
    assert frame["predicted_close_price"].tolist() == [3, 2, 1]


def test_forecast_frame_of_empty_series_has_columns() -> None:
    frame = forecast_frame([])

    assert frame.empty
    assert list(frame.columns) == ["date", "predicted_close_price"]


def test_overlay_aligns_predictions_to_history_tail() -> None:
    historical = _history(10, 11, 12, 13)
    predicted = [PredictedTestPoint(12.5), PredictedTestPoint(13.5)]

    frame = overlay_frame(historical, predicted)

    assert list(frame.index) == [point.record_date for point in historical]
    assert frame[HISTORICAL_COLUMN].tolist() == [10, 11, 12, 13]
    column = frame[PREDICTED_TEST_COLUMN].tolist()
    assert math.isnan(column[0]) and math.isnan(column[1])
    assert column[2:] == [12.5, 13.5]


def test_overlay_drops_surplus_oldest_predictions(caplog: pytest.LogCaptureFixture) -> None:
    historical = _history(10, 11)
    predicted = [PredictedTestPoint(v) for v in (1.0, 2.0, 3.0)]

    with caplog.at_level("WARNING"):
        frame = overlay_frame(historical, predicted)

    assert frame[PREDICTED_TEST_COLUMN].tolist() == [2.0, 3.0]
    assert "dropping 1" in caplog.text.lower()


def test_project_builds_full_view() -> None:
    normalized = NormalizedForecast(
        forecast=_forecast(100, 110, 90),
        historical=_history(1, 2, 3),
        predicted_test=[PredictedTestPoint(2.5)],
        metrics=AccuracyMetrics(rmse=0.3, mae=0.2),
        result="done",
    )

    view = project(normalized)

    assert view.has_forecast
    assert view.has_overlay
    assert view.forecast_range is not None
    assert view.forecast_range.tick_step == pytest.approx(4.4)
    assert view.metrics.available
    assert view.result == "done"


def test_project_skips_range_and_overlay_without_data() -> None:
    view = project(NormalizedForecast(historical=_history(1, 2)))

    assert not view.has_forecast
    assert view.forecast_range is None
    assert view.overlay is None
    assert not view.has_overlay
