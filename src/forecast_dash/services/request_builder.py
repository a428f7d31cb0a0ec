"""Translate the form selection into a prediction request."""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional

from ..domain import MAX_HORIZON, MIN_HORIZON, ForecastRequest, InstrumentSelection, InstrumentType
from ..utils import ValidationError


class _Fields(NamedTuple):
    symbol: Optional[str]
    market: Optional[str]
    from_symbol: Optional[str]
    to_symbol: Optional[str]


def _equity_fields(selection: InstrumentSelection) -> _Fields:
    return _Fields(_required(selection.symbol, "symbol"), None, None, None)


def _crypto_fields(selection: InstrumentSelection) -> _Fields:
    return _Fields(
        _required(selection.base_currency, "base currency"),
        _required(selection.target_currency, "target currency"),
        None,
        None,
    )


def _forex_fields(selection: InstrumentSelection) -> _Fields:
    return _Fields(
        None,
        None,
        _required(selection.base_currency, "base currency"),
        _required(selection.target_currency, "target currency"),
    )


_FIELD_MAPPERS: dict[InstrumentType, Callable[[InstrumentSelection], _Fields]] = {
    InstrumentType.EQUITY: _equity_fields,
    InstrumentType.CRYPTO: _crypto_fields,
    InstrumentType.FOREX: _forex_fields,
}

_unmapped = set(InstrumentType) - set(_FIELD_MAPPERS)
if _unmapped:
    raise RuntimeError(f"No request mapping for instrument types: {sorted(t.value for t in _unmapped)}")


def _required(value: Optional[str], name: str) -> str:
    if not value:
        raise ValidationError(f"Missing {name}")
    return value


def validate_horizon(day_count: int) -> int:
    if isinstance(day_count, bool) or not isinstance(day_count, int):
        raise ValidationError(f"Horizon must be a whole number of days, got {day_count!r}")
    if not MIN_HORIZON <= day_count <= MAX_HORIZON:
        raise ValidationError(f"Horizon must be between {MIN_HORIZON} and {MAX_HORIZON} days, got {day_count}")
    return day_count


def clamp_horizon(value: float) -> int:
    """Pin free-form numeric input to the allowed horizon window."""
    return min(MAX_HORIZON, max(MIN_HORIZON, int(value)))


def build_request(selection: InstrumentSelection, model: str, day_count: int) -> ForecastRequest:
    """Build the request for ``selection``; fields of other instrument types are always None."""
    fields = _FIELD_MAPPERS[selection.type](selection)
    return ForecastRequest(
        type=selection.type,
        symbol=fields.symbol,
        market=fields.market,
        from_symbol=fields.from_symbol,
        to_symbol=fields.to_symbol,
        day_count=day_count,
        model=model,
    )
