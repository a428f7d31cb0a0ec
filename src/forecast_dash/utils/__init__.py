"""Utility helpers."""

from .errors import ForecastDashError, NormalizationError, TransportError, ValidationError
from .logging import get_logger

__all__ = ["ForecastDashError", "NormalizationError", "TransportError", "ValidationError", "get_logger"]
