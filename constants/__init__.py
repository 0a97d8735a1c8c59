"""
Constants Package

Unit tables, Polish number words, validation whitelists and seed data.
"""

from .units import (
    DROPS, ML, G, PIECES,
    UNIT_MAPPINGS, BASE_UNITS, DROPS_PER_ML,
    OIL_REFERENCE_ML, WEIGHT_REFERENCE_G, DISCRETE_REFERENCE_PCS,
    DISCRETE_UNITS, FORM_UNITS,
)

from .currency import (
    UNITS_WORDS, TEENS_WORDS, TENS_WORDS, HUNDREDS_WORDS, SCALE_WORDS,
    ZERO_PHRASE, MINUS_WORD, CURRENCY_ONE, CURRENCY_FEW, CURRENCY_MANY,
    CURRENCY_SYMBOL, VAT_RATE,
    DOCUMENT_NUMBER_WIDTH, CORRECTION_PREFIX, RECEIPT_PREFIX,
)

from .validation import (
    VALID_CATEGORIES, CATEGORY_LABELS, VALID_UNITS,
    VALID_MOVEMENT_TYPES, MANUAL_MOVEMENT_TYPES, VALID_COST_CATEGORIES,
    MAX_LENGTHS, MAX_SALE_LINES,
)

from .ingredients import DEFAULT_COMPOSITIONS
