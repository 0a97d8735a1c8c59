"""
Shopping List Service

Plans purchases for a batch of compositions: how much of each ingredient
the batch needs, how much is missing from stock, and what it costs.
"""

from constants import CATEGORY_LABELS

from .costing import calculate_ingredient_cost
from .formatting import round_money
from .units import convert_between_units, format_unit_display


def format_shopping_qty(item):
    """Format quantity string for shopping list display."""
    return format_unit_display(round(item['qty'], 2), item['unit'])


def plan_shopping(compositions, quantities):
    """
    Aggregate ingredient needs for the requested number of sets.

    Args:
        compositions: iterable of Composition
        quantities: dict of composition id -> number of sets

    Returns:
        (items, total_cost, missing_cost) where each item is a dict with
        name, category, unit, qty (needed), in_stock, missing, cost and
        missing_cost; amounts are in the ingredient's stock unit.
    """
    consolidated = {}
    for composition in compositions:
        sets = quantities.get(composition.id, 0) or 0
        if sets <= 0:
            continue

        for ci in composition.ingredients:
            ing = ci.ingredient
            if not ing:
                continue  # Skip if ingredient was deleted

            needed = convert_between_units(ci.amount * sets, ci.unit, ing.unit)
            if ing.id in consolidated:
                consolidated[ing.id]['qty'] += needed
            else:
                consolidated[ing.id] = {
                    'ingredient_id': ing.id,
                    'name': ing.name,
                    'category': ing.category,
                    'category_label': CATEGORY_LABELS.get(ing.category, ing.category),
                    'unit': ing.unit,
                    'price': ing.price or 0.0,
                    'in_stock': ing.amount or 0.0,
                    'qty': needed,
                }

    items = []
    for item in consolidated.values():
        missing = max(0.0, item['qty'] - item['in_stock'])
        item['missing'] = missing
        item['cost'] = round_money(calculate_ingredient_cost(item['qty'], item['unit'], item['price'], item['category']))
        item['missing_cost'] = round_money(calculate_ingredient_cost(missing, item['unit'], item['price'], item['category']))
        item['display_qty'] = format_shopping_qty(item)
        items.append(item)

    items.sort(key=lambda x: (x['category'], x['name']))

    total_cost = round_money(sum(item['cost'] for item in items))
    missing_cost = round_money(sum(item['missing_cost'] for item in items))
    return items, total_cost, missing_cost
