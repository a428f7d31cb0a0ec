from __future__ import annotations

from typing import Any

import pytest

from forecast_dash import ForecastRequest, InstrumentType, SubmissionState
from forecast_dash.services import FAILURE_MESSAGE, FormController
from forecast_dash.utils import TransportError, ValidationError

GOOD_RESPONSE = {
    "predictions": [
        {"date": "2024-05-01", "predicted_close_price": 100},
        {"date": "2024-05-02", "predicted_close_price": 110},
        {"date": "2024-05-03", "predicted_close_price": 90},
    ],
    "historical_data": [
        {"recordDate": "2024-04-29", "closePrice": 98},
        {"recordDate": "2024-04-30", "closePrice": 99},
    ],
    "predicted_test": [{"predicted": 98.5}, {"predicted": 99.2}],
    "rmse": 1.5,
    "mae": 1.1,
}


class FakeClient:
    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[ForecastRequest] = []
        self.seen_states: list[SubmissionState] = []
        self.controller: FormController | None = None

    def submit(self, request: ForecastRequest) -> Any:
        self.requests.append(request)
        if self.controller is not None:
            self.seen_states.append(self.controller.state)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _controller(*outcomes: Any) -> tuple[FormController, FakeClient]:
    client = FakeClient(*outcomes)
    controller = FormController(client)
    client.controller = controller
    return controller, client


def test_initial_state_is_first_equity() -> None:
    controller, _ = _controller()

    assert controller.selection.type is InstrumentType.EQUITY
    assert controller.selection.symbol == "IBM"
    assert controller.model == "lstm"
    assert controller.horizon == 1
    assert controller.state is SubmissionState.IDLE
    assert controller.view is None


def test_successful_submission_refreshes_view() -> None:
    controller, client = _controller(GOOD_RESPONSE)
    controller.set_horizon(3)

    assert controller.submit() is True

    assert client.requests[0].symbol == "IBM"
    assert client.requests[0].day_count == 3
    assert client.seen_states == [SubmissionState.IN_FLIGHT]
    assert controller.state is SubmissionState.IDLE
    assert controller.error is None
    assert controller.view is not None
    assert controller.view.forecast_range.min == pytest.approx(89)
    assert controller.view.has_overlay
    assert controller.view.metrics.available


@pytest.mark.parametrize("days", [0, 15])
def test_out_of_range_horizon_never_reaches_client(days: int) -> None:
    controller, client = _controller(GOOD_RESPONSE)
    controller.set_horizon(days)

    assert controller.submit() is False

    assert client.requests == []
    assert controller.error == FAILURE_MESSAGE
    assert controller.state is SubmissionState.IDLE


@pytest.mark.parametrize("days", [1, 14])
def test_boundary_horizons_are_accepted(days: int) -> None:
    controller, client = _controller(GOOD_RESPONSE)
    controller.set_horizon(days)

    assert controller.submit() is True
    assert client.requests[0].day_count == days


def test_transport_failure_keeps_prior_series_and_clears_metrics() -> None:
    controller, _ = _controller(GOOD_RESPONSE, TransportError("boom"))
    controller.submit()
    previous = controller.view

    assert controller.submit() is False

    assert controller.error == FAILURE_MESSAGE
    assert controller.state is SubmissionState.IDLE
    assert controller.view is not None
    assert controller.view.forecast_table.equals(previous.forecast_table)
    assert controller.view.forecast_range == previous.forecast_range
    assert controller.view.metrics.rmse is None
    assert controller.view.metrics.mae is None


def test_malformed_response_is_a_failure_not_a_partial_update() -> None:
    bad = {"predictions": [{"date": "2024-06-01", "predicted_close_price": "high"}], "rmse": 9.9, "mae": 9.9}
    controller, _ = _controller(GOOD_RESPONSE, bad)
    controller.submit()

    assert controller.submit() is False

    assert controller.error == FAILURE_MESSAGE
    assert len(controller.view.forecast_table) == 3
    assert not controller.view.metrics.available


def test_success_after_failure_clears_error() -> None:
    controller, _ = _controller(TransportError("down"), GOOD_RESPONSE)

    controller.submit()
    assert controller.error == FAILURE_MESSAGE
    assert controller.view is None

    controller.submit()
    assert controller.error is None
    assert controller.view is not None


def test_new_response_replaces_rather_than_merges() -> None:
    second = {"predictions": [{"date": "2024-07-01", "predicted_close_price": 50}]}
    controller, _ = _controller(GOOD_RESPONSE, second)
    controller.submit()

    controller.submit()

    assert len(controller.view.forecast_table) == 1
    assert controller.view.overlay is None
    assert controller.view.metrics.rmse is None


def test_submission_rejected_while_in_flight(caplog: pytest.LogCaptureFixture) -> None:
    controller, client = _controller(GOOD_RESPONSE)
    controller.state = SubmissionState.IN_FLIGHT

    with caplog.at_level("WARNING"):
        assert controller.submit() is False

    assert client.requests == []
    assert "in flight" in caplog.text


def test_type_switch_builds_request_for_new_type() -> None:
    controller, client = _controller(GOOD_RESPONSE)
    controller.change_type(InstrumentType.CRYPTO)
    controller.change_base_currency("ETH")
    controller.change_type(InstrumentType.FOREX)
    controller.change_base_currency("CNY")

    controller.submit()

    request = client.requests[0]
    assert request.type is InstrumentType.FOREX
    assert request.symbol is None
    assert request.market is None
    assert (request.from_symbol, request.to_symbol) == ("CNY", "RUB")


def test_unknown_model_is_rejected() -> None:
    controller, _ = _controller()

    with pytest.raises(ValidationError):
        controller.set_model("prophet")

    controller.set_model("linear_regression")
    assert controller.model == "linear_regression"
