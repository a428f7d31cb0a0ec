"""Data access layer."""

from .client import HttpPredictionClient, PredictionClient
from .normalization import normalize_response

__all__ = ["HttpPredictionClient", "PredictionClient", "normalize_response"]
