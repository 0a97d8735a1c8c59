"""
Services Package

Business logic modules for the herbal back-office.
"""

from .units import (
    normalize_unit,
    convert_to_base_unit,
    get_base_unit,
    are_units_compatible,
    convert_between_units,
    format_unit_display,
)

from .costing import (
    IngredientCategory,
    calculate_oil_price,
    calculate_weight_price,
    calculate_discrete_price,
    calculate_ingredient_cost,
    category_from_unit,
    split_gross,
    stock_value,
)

from .words import convert_to_words

from .formatting import (
    round_half_up,
    round_money,
    format_number,
    format_money,
    format_signed_money,
)

from .inventory import (
    adjust_stock,
    list_movements,
    set_movement_archived,
    low_stock_ingredients,
)

from .sales import (
    SaleLine,
    SaleError,
    format_sale_label,
    calculate_usage,
    process_sale,
    reverse_transaction,
)

from .numbering import (
    format_invoice_number,
    format_correction_number,
    format_receipt_number,
)

from .statistics import (
    sales_statistics,
    inventory_summary,
    available_years,
    ues_register,
    month_balance,
)

from .shopping import (
    format_shopping_qty,
    plan_shopping,
)

from .production import (
    calculate_available_sets,
    calculate_cost_per_set,
    composition_cost_breakdown,
    production_overview,
)

from .documents import (
    DocumentError,
    render_invoice,
    render_correction_invoice,
    render_receipt,
    render_ues_report,
)

__all__ = [
    # Units
    'normalize_unit',
    'convert_to_base_unit',
    'get_base_unit',
    'are_units_compatible',
    'convert_between_units',
    'format_unit_display',
    # Costing
    'IngredientCategory',
    'calculate_oil_price',
    'calculate_weight_price',
    'calculate_discrete_price',
    'calculate_ingredient_cost',
    'category_from_unit',
    'split_gross',
    'stock_value',
    # Words
    'convert_to_words',
    # Formatting
    'round_half_up',
    'round_money',
    'format_number',
    'format_money',
    'format_signed_money',
    # Inventory
    'adjust_stock',
    'list_movements',
    'set_movement_archived',
    'low_stock_ingredients',
    # Sales
    'SaleLine',
    'SaleError',
    'format_sale_label',
    'calculate_usage',
    'process_sale',
    'reverse_transaction',
    # Numbering
    'format_invoice_number',
    'format_correction_number',
    'format_receipt_number',
    # Statistics
    'sales_statistics',
    'inventory_summary',
    'available_years',
    'ues_register',
    'month_balance',
    # Shopping
    'format_shopping_qty',
    'plan_shopping',
    # Production
    'calculate_available_sets',
    'calculate_cost_per_set',
    'composition_cost_breakdown',
    'production_overview',
    # Documents
    'DocumentError',
    'render_invoice',
    'render_correction_invoice',
    'render_receipt',
    'render_ues_report',
]
