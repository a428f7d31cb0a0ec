"""Service layer entry points."""

from .controller import FAILURE_MESSAGE, FormController
from .request_builder import build_request, clamp_horizon, validate_horizon
from .selection import (
    change_base_currency,
    change_symbol,
    change_target_currency,
    change_type,
    default_selection,
)

__all__ = [
    "FAILURE_MESSAGE",
    "FormController",
    "build_request",
    "change_base_currency",
    "change_symbol",
    "change_target_currency",
    "change_type",
    "clamp_horizon",
    "default_selection",
    "validate_horizon",
]
