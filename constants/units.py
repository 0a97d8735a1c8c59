"""
Unit Constants and Conversion Tables

Contains all unit mappings, conversion factors, and pricing reference
quantities used by the conversion and costing engine.
"""

# Canonical unit labels
DROPS = 'krople'
ML = 'ml'
G = 'g'
PIECES = 'szt'

# Unit mappings (normalized input -> unit family)
UNIT_MAPPINGS = {
    'krople': DROPS, 'kropli': DROPS,
    'ml': ML, 'milliliters': ML,
    'g': G, 'gram': G, 'gramy': G,
    'szt': PIECES, 'sztuki': PIECES, 'pieces': PIECES, 'kpl': PIECES,
}

# Unit family -> canonical base unit
BASE_UNITS = {
    DROPS: ML,
    ML: ML,
    G: G,
    PIECES: PIECES,
}

# 20 drops = 1 ml
DROPS_PER_ML = 20

# Reference quantities for price quotations
OIL_REFERENCE_ML = 10        # oils priced per 10 ml
WEIGHT_REFERENCE_G = 100     # herbs and others priced per 100 g
DISCRETE_REFERENCE_PCS = 1   # discrete items priced per piece

# Units which mark a discrete (per piece) ingredient
DISCRETE_UNITS = {'szt', 'sztuki', 'pieces', 'kpl'}

# Units offered in ingredient and composition forms
FORM_UNITS = ['g', 'ml', 'krople', 'szt']
