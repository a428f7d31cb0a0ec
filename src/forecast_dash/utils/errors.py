"""Custom exceptions."""


class ForecastDashError(Exception):
    """Base class for recoverable forecast submission failures."""


class ValidationError(ForecastDashError):
    """Raised when the form state cannot produce a valid request."""


class TransportError(ForecastDashError):
    """Raised when the prediction service cannot be reached or answers badly."""


class NormalizationError(ForecastDashError):
    """Raised when a response field is present but has the wrong shape."""
