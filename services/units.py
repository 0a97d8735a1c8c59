"""
Unit Conversion Service

Normalizes ingredient units (drops, milliliters, grams, pieces) to their
canonical base units and checks unit compatibility.

Unknown units never raise: the amount passes through unchanged and a
warning is logged, so a typo in a stored unit cannot block a sale or a
report.
"""

import logging

from constants import UNIT_MAPPINGS, BASE_UNITS, DROPS, ML, DROPS_PER_ML

from .formatting import format_number, round_half_up

logger = logging.getLogger(__name__)


def normalize_unit(unit):
    """Lowercase, trim whitespace and strip trailing periods ('Szt. ' -> 'szt')."""
    if unit is None:
        return ''
    return str(unit).strip().lower().rstrip('.').strip()


def _unit_family(unit):
    return UNIT_MAPPINGS.get(normalize_unit(unit))


def convert_to_base_unit(amount, unit, log=None):
    """
    Convert an amount to its canonical base unit.

    Drops are divided by 20 (20 drops = 1 ml); milliliters, grams and
    pieces are already canonical. An unrecognized unit is treated as
    canonical and reported through `log` (module logger by default).

    Args:
        amount: Numeric amount, may be zero or negative
        unit: Unit label as stored or typed by the user
        log: Optional logging.Logger receiving the unknown-unit warning

    Returns:
        The amount in base units (always a number)
    """
    log = log or logger
    amount = amount or 0
    family = _unit_family(unit)

    if family == DROPS:
        return amount / DROPS_PER_ML
    if family is not None:
        return amount

    log.warning("Unknown unit: %r, treating as base unit", unit)
    return amount


def get_base_unit(unit):
    """Return the canonical unit for `unit`, or `unit` itself if unrecognized."""
    family = _unit_family(unit)
    if family is None:
        return unit
    return BASE_UNITS[family]


def are_units_compatible(unit1, unit2):
    """True when both units normalize to the same base unit."""
    return get_base_unit(unit1) == get_base_unit(unit2)


def is_drops(unit):
    return _unit_family(unit) == DROPS


def convert_between_units(amount, from_unit, to_unit, log=None):
    """
    Convert an amount between two compatible units via their base unit.

    Used when a composition lists an oil in drops while the stock record
    is kept in milliliters (and vice versa). Incompatible or unknown units
    pass the amount through unchanged with a warning.
    """
    log = log or logger
    amount = amount or 0

    if normalize_unit(from_unit) == normalize_unit(to_unit):
        return amount

    if _unit_family(from_unit) is None or _unit_family(to_unit) is None:
        log.warning("Cannot convert %r to %r, keeping amount", from_unit, to_unit)
        return amount

    if not are_units_compatible(from_unit, to_unit):
        log.warning("Incompatible units %r and %r, keeping amount", from_unit, to_unit)
        return amount

    base_amount = convert_to_base_unit(amount, from_unit, log=log)
    if is_drops(to_unit):
        return base_amount * DROPS_PER_ML
    return base_amount


def format_unit_display(amount, unit):
    """
    Format an amount for people.

    Sub-milliliter volumes are shown as whole drops (0.4 ml -> '8 kropli');
    everything else, including amounts already in drops, is the amount
    followed by the original unit.
    """
    amount = amount or 0
    if get_base_unit(unit) == ML and not is_drops(unit) and amount < 1:
        drops = round_half_up(amount * DROPS_PER_ML)
        return f"{drops} kropli"
    return f"{format_number(amount)} {unit}".strip()
