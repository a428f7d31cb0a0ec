"""Instrument selection defaults and transitions.

Every transition returns a new ``InstrumentSelection``. Switching the
instrument type never carries a sub-field over from the previous type, and
switching the base currency always re-picks the target from the new base's
allowed pairs.
"""

from __future__ import annotations

from dataclasses import replace

from ..config import InstrumentCatalog
from ..domain import InstrumentSelection, InstrumentType
from ..utils import ValidationError


def default_selection(catalog: InstrumentCatalog, instrument_type: InstrumentType = InstrumentType.EQUITY) -> InstrumentSelection:
    """First entry of the lookup tables for ``instrument_type``."""
    if instrument_type is InstrumentType.EQUITY:
        return InstrumentSelection(type=instrument_type, symbol=catalog.symbols[0])

    base = catalog.bases(instrument_type)[0]
    return InstrumentSelection(
        type=instrument_type,
        base_currency=base,
        target_currency=catalog.targets(instrument_type, base)[0],
    )


def change_type(catalog: InstrumentCatalog, selection: InstrumentSelection, instrument_type: InstrumentType) -> InstrumentSelection:
    # Re-selecting the active type is a full reset too.
    return default_selection(catalog, InstrumentType(instrument_type))


def change_base_currency(catalog: InstrumentCatalog, selection: InstrumentSelection, base_currency: str) -> InstrumentSelection:
    if not selection.type.uses_currency_pair:
        raise ValidationError(f"{selection.type.label} have no base currency")

    targets = catalog.targets(selection.type, base_currency)
    if not targets:
        raise ValidationError(f"Unknown {selection.type.value} base currency: {base_currency}")
    return replace(selection, base_currency=base_currency, target_currency=targets[0])


def change_target_currency(catalog: InstrumentCatalog, selection: InstrumentSelection, target_currency: str) -> InstrumentSelection:
    if not selection.type.uses_currency_pair:
        raise ValidationError(f"{selection.type.label} have no target currency")

    if target_currency not in catalog.targets(selection.type, selection.base_currency):
        raise ValidationError(f"{target_currency} is not a valid target for {selection.base_currency}")
    return replace(selection, target_currency=target_currency)


def change_symbol(catalog: InstrumentCatalog, selection: InstrumentSelection, symbol: str) -> InstrumentSelection:
    if selection.type is not InstrumentType.EQUITY:
        raise ValidationError(f"{selection.type.label} are selected by currency pair, not symbol")

    if symbol not in catalog.symbols:
        raise ValidationError(f"Unknown equity symbol: {symbol}")
    return replace(selection, symbol=symbol)
