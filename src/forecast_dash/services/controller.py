"""Form orchestration: selection transitions and forecast submission."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..config import DEFAULT_MODEL, MODEL_CHOICES, InstrumentCatalog, default_catalog
from ..data.client import PredictionClient
from ..data.normalization import normalize_response
from ..domain import (
    MIN_HORIZON,
    AccuracyMetrics,
    ForecastView,
    InstrumentSelection,
    InstrumentType,
    SubmissionState,
)
from ..utils import ForecastDashError, ValidationError
from ..viz.projection import project
from . import selection as transitions
from .request_builder import build_request, validate_horizon

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to fetch the forecast."


class FormController:
    """Holds the form state and drives one submission at a time."""

    def __init__(self, client: PredictionClient, catalog: InstrumentCatalog | None = None) -> None:
        self.client = client
        self.catalog = catalog or default_catalog()
        self.selection: InstrumentSelection = transitions.default_selection(self.catalog)
        self.model = DEFAULT_MODEL
        self.horizon = MIN_HORIZON
        self.state = SubmissionState.IDLE
        self.view: Optional[ForecastView] = None
        self.error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.state is SubmissionState.IN_FLIGHT

    def change_type(self, instrument_type: InstrumentType) -> InstrumentSelection:
        self.selection = transitions.change_type(self.catalog, self.selection, instrument_type)
        return self.selection

    def change_base_currency(self, base_currency: str) -> InstrumentSelection:
        self.selection = transitions.change_base_currency(self.catalog, self.selection, base_currency)
        return self.selection

    def change_target_currency(self, target_currency: str) -> InstrumentSelection:
        self.selection = transitions.change_target_currency(self.catalog, self.selection, target_currency)
        return self.selection

    def change_symbol(self, symbol: str) -> InstrumentSelection:
        self.selection = transitions.change_symbol(self.catalog, self.selection, symbol)
        return self.selection

    def set_model(self, model: str) -> None:
        if model not in MODEL_CHOICES:
            raise ValidationError(f"Unknown model: {model}")
        self.model = model

    def set_horizon(self, day_count: int) -> None:
        self.horizon = day_count

    def submit(self) -> bool:
        """Run one submission; returns True when a new forecast was stored.

        Either every derived value is refreshed from the new response, or the
        previous forecast stays on screen with its metrics cleared and
        ``error`` set.
        """
        if self.is_loading:
            logger.warning("Ignoring submission while another request is in flight")
            return False

        self.error = None
        try:
            validate_horizon(self.horizon)
            request = build_request(self.selection, self.model, self.horizon)
        except ValidationError as err:
            logger.warning("Submission rejected: %s", err)
            self._fail()
            return False

        self.state = SubmissionState.IN_FLIGHT
        self._clear_metrics()
        try:
            raw = self.client.submit(request)
            view = project(normalize_response(raw))
        except ForecastDashError as err:
            logger.warning("Forecast submission failed: %s", err)
            self._fail()
            return False
        finally:
            self.state = SubmissionState.IDLE

        self.view = view
        logger.info("Stored forecast with %d points", len(view.forecast_table))
        return True

    def _fail(self) -> None:
        self.error = FAILURE_MESSAGE
        self._clear_metrics()

    def _clear_metrics(self) -> None:
        if self.view is not None:
            self.view = replace(self.view, metrics=AccuracyMetrics())
