"""
Cost Calculation Service

Functions for pricing ingredient quantities and splitting gross amounts
into net and VAT.

Prices are quoted per a fixed reference quantity that depends on the
ingredient category:
- OIL:      price per 10 ml (drops are converted to ml first)
- WEIGHT:   price per 100 g (herbs and other bulk raw materials)
- DISCRETE: price per piece (bags, jars, sets)

The category, not the unit string, selects the formula, because a
composition may list an oil in drops while its stock record is in ml.
"""

import enum
import logging

from constants import (
    OIL_REFERENCE_ML, WEIGHT_REFERENCE_G, DISCRETE_REFERENCE_PCS,
    DISCRETE_UNITS, VAT_RATE,
)

from .formatting import round_money
from .units import convert_to_base_unit, get_base_unit, normalize_unit

logger = logging.getLogger(__name__)


class IngredientCategory(str, enum.Enum):
    """Pricing category of an ingredient."""
    OIL = 'oil'
    WEIGHT = 'weight'
    DISCRETE = 'discrete'

    @classmethod
    def parse(cls, value, default=None):
        """Return the category for `value` (enum, value or name), or `default`."""
        if isinstance(value, cls):
            return value
        if value is None:
            return default
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        return default


def calculate_oil_price(amount_ml, price_per_ten_ml):
    """Cost of `amount_ml` of an oil priced per 10 ml."""
    return (amount_ml or 0) / OIL_REFERENCE_ML * (price_per_ten_ml or 0)


def calculate_weight_price(amount_g, price_per_100g):
    """Cost of `amount_g` of a herb or raw material priced per 100 g."""
    return (amount_g or 0) * (price_per_100g or 0) / WEIGHT_REFERENCE_G


def calculate_discrete_price(pieces, price_per_piece):
    """Cost of `pieces` items priced per piece."""
    return (pieces or 0) * (price_per_piece or 0) / DISCRETE_REFERENCE_PCS


def calculate_ingredient_cost(amount, unit, price, category):
    """
    Calculate the cost of an ingredient quantity.

    Args:
        amount: Quantity in `unit`
        unit: Unit of the quantity (drops are converted for oils)
        price: Price per reference quantity of the category
        category: IngredientCategory or its string value

    Returns:
        Cost in złoty (unrounded)
    """
    parsed = IngredientCategory.parse(category)
    if parsed is None:
        logger.warning("Unknown ingredient category: %r, using weight pricing", category)
        parsed = IngredientCategory.WEIGHT

    if parsed is IngredientCategory.OIL:
        return calculate_oil_price(convert_to_base_unit(amount, unit), price)
    if parsed is IngredientCategory.DISCRETE:
        return calculate_discrete_price(amount, price)
    return calculate_weight_price(amount, price)


def category_from_unit(unit):
    """
    Default category for a new ingredient, derived from its stock unit.

    ml and drops -> OIL, pieces/sets -> DISCRETE, anything else -> WEIGHT.
    """
    normalized = normalize_unit(unit)
    if normalized in DISCRETE_UNITS:
        return IngredientCategory.DISCRETE
    if get_base_unit(unit) == 'ml':
        return IngredientCategory.OIL
    return IngredientCategory.WEIGHT


def split_gross(gross, vat_rate=VAT_RATE):
    """
    Split a gross amount into (net, vat).

    net = gross / (1 + rate); vat is the remainder so that
    net + vat always equals gross exactly.
    """
    gross = gross or 0.0
    net = gross / (1 + vat_rate)
    return net, gross - net


def stock_value(ingredient):
    """Value of the ingredient's current stock at its reference price."""
    return round_money(calculate_ingredient_cost(
        ingredient.amount, ingredient.unit, ingredient.price, ingredient.category
    ))
