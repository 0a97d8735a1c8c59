"""
Number Formatting Service

Rounding and display helpers shared by the costing engine, the
document generators and the Jinja filters.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from constants import CURRENCY_SYMBOL


def round_half_up(value, places=0):
    """
    Round like a cash register does: halves always go away from zero.

    Python's round() uses banker's rounding, which would turn 0.5 grosz
    into 0 and 2.5 drops into 2.
    """
    if value is None:
        return 0
    try:
        quantum = Decimal(1).scaleb(-places)
        rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return value
    if places == 0:
        return int(rounded)
    return float(rounded)


def round_money(value):
    """Round a złoty amount to grosze."""
    return round_half_up(value or 0.0, 2)


def format_number(value):
    """Render a quantity without a trailing '.0' (12.0 -> '12', 2.5 -> '2.5')."""
    if value is None:
        return '0'
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return str(value)
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip('0').rstrip('.')


def format_money(value):
    """Format a złoty amount for display: 1234.5 -> '1234.50 zł'."""
    return f"{round_money(value):.2f} {CURRENCY_SYMBOL}"


def format_signed_money(value):
    """Format a correction difference, always showing the minus sign."""
    return f"-{round_money(abs(value or 0.0)):.2f} {CURRENCY_SYMBOL}"
