"""Clients for the remote prediction service."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from ..config import ClientSettings
from ..domain import ForecastRequest
from ..utils import TransportError

logger = logging.getLogger(__name__)


class PredictionClient(Protocol):
    """Abstraction for prediction backends."""

    def submit(self, request: ForecastRequest) -> Any:
        """Send one request and return the decoded response body."""
        raise NotImplementedError


class HttpPredictionClient(PredictionClient):
    """POSTs requests as JSON; one attempt per call, no retries."""

    def __init__(self, settings: ClientSettings | None = None, session: requests.Session | None = None) -> None:
        self.settings = settings or ClientSettings()
        self.session = session or requests.Session()

    def submit(self, request: ForecastRequest) -> Any:
        url = self.settings.api_url
        logger.info("Requesting %s forecast (%s, %d days) from %s", request.type.value, request.model, request.day_count, url)

        try:
            response = self.session.post(url, json=request.to_payload(), timeout=self.settings.timeout)
            response.raise_for_status()
        except requests.RequestException as err:
            logger.warning("Prediction request to %s failed: %s", url, err)
            raise TransportError(f"Prediction request failed: {err}") from err

        try:
            return response.json()
        except ValueError as err:
            logger.warning("Prediction service at %s returned a non-JSON body", url)
            raise TransportError("Prediction service returned a malformed body") from err
