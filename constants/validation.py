"""
Validation Constants

Contains whitelist values for validating user input to prevent
injection attacks and ensure data integrity.
"""

# Valid ingredient categories (values of IngredientCategory)
VALID_CATEGORIES = {'oil', 'weight', 'discrete'}

# Polish labels shown in forms and reports
CATEGORY_LABELS = {
    'oil': 'Olejki',
    'weight': 'Zioła i surowce',
    'discrete': 'Inne',
}

# Valid stock units (whitelist for security)
VALID_UNITS = {'g', 'ml', 'krople', 'szt', 'kpl'}

# Valid ingredient movement types
VALID_MOVEMENT_TYPES = {'purchase', 'sale', 'reversal', 'adjustment'}

# Movement types a user may record by hand
MANUAL_MOVEMENT_TYPES = {'purchase', 'adjustment'}

# Valid monthly cost categories
VALID_COST_CATEGORIES = {
    'Koszty stałe', 'Surowce', 'Opakowania', 'Marketing',
    'Transport', 'Usługi', 'Inne',
}

# Maximum field lengths for security
MAX_LENGTHS = {
    'ingredient_name': 200,
    'composition_name': 200,
    'description': 1000,
    'buyer_field': 200,
    'tax_id': 20,
    'cost_name': 200,
    'notes': 500,
    'color': 30,
}

# Maximum number of composition lines in one sale
MAX_SALE_LINES = 20
