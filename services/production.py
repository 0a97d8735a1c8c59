"""
Production Calculator Service

How many sets of a composition the current stock allows, which
ingredient runs out first, and what one set costs to make.
"""

import math

from .costing import calculate_ingredient_cost
from .formatting import round_money
from .units import convert_between_units


def ingredient_requirements(composition):
    """
    Per-line stock status of a composition.

    Returns:
        list of dicts: name, required (per set, stock unit), available,
        unit, possible_sets, percentage (0-100)
    """
    lines = []
    for ci in composition.ingredients:
        ing = ci.ingredient
        if not ing:
            continue
        required = convert_between_units(ci.amount, ci.unit, ing.unit)
        available = ing.amount or 0.0
        if required > 0:
            possible = math.floor(available / required)
            percentage = min(available / required * 100, 100)
        else:
            possible = None
            percentage = 100
        lines.append({
            'name': ing.name,
            'required': required,
            'available': available,
            'unit': ing.unit,
            'possible_sets': possible,
            'percentage': round(percentage),
        })
    return lines


def calculate_available_sets(composition):
    """
    Number of complete sets the stock allows.

    Returns:
        (sets, limiting_ingredient_name); (0, '') when the composition
        has no ingredient with a positive requirement.
    """
    min_sets = None
    limiting = ''
    for line in ingredient_requirements(composition):
        possible = line['possible_sets']
        if possible is None:
            continue
        if min_sets is None or possible < min_sets:
            min_sets = possible
            limiting = line['name']
    if min_sets is None:
        return 0, ''
    return max(0, min_sets), limiting


def calculate_cost_per_set(composition):
    """Material cost of one set, each line priced by its ingredient's category."""
    total = 0.0
    for ci in composition.ingredients:
        ing = ci.ingredient
        if not ing:
            continue
        total += calculate_ingredient_cost(ci.amount, ci.unit, ing.price, ing.category)
    return round_money(total)


def composition_cost_breakdown(composition):
    """(CompositionIngredient, cost) pairs plus the rounded total."""
    rows = []
    for ci in composition.ingredients:
        ing = ci.ingredient
        if not ing:
            continue
        rows.append((ci, round_money(calculate_ingredient_cost(ci.amount, ci.unit, ing.price, ing.category))))
    return rows, calculate_cost_per_set(composition)


def production_overview(compositions):
    """Calculator rows: sets, limiting ingredient, unit cost and batch value."""
    overview = []
    for composition in compositions:
        sets, limiting = calculate_available_sets(composition)
        cost = calculate_cost_per_set(composition)
        overview.append({
            'composition': composition,
            'sets': sets,
            'limiting_ingredient': limiting,
            'cost_per_set': cost,
            'total_value': round_money(sets * cost),
            'lines': ingredient_requirements(composition),
        })
    return overview
