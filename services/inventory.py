"""
Inventory Service

Stock adjustments with a movement log, and low-stock detection.
"""

import logging

from models import db, Ingredient, IngredientMovement, WarningThreshold

logger = logging.getLogger(__name__)


def record_movement(ingredient_name, movement_type, quantity_change, unit,
                    reference_id=None, reference_type=None, notes=None):
    """Add a movement row to the session (caller commits)."""
    movement = IngredientMovement(
        ingredient_name=ingredient_name,
        movement_type=movement_type,
        quantity_change=quantity_change,
        unit=unit,
        reference_id=reference_id,
        reference_type=reference_type,
        notes=notes,
    )
    db.session.add(movement)
    logger.debug("Movement %s %+.3f %s for %s", movement_type, quantity_change, unit, ingredient_name)
    return movement


def adjust_stock(ingredient, quantity_change, movement_type='adjustment', notes=None,
                 reference_id=None, reference_type=None):
    """
    Change an ingredient's stock and log the movement.

    Stock never goes below zero; the movement records the change that
    was actually applied.

    Returns:
        The applied change
    """
    current = ingredient.amount or 0.0
    new_amount = max(0.0, current + quantity_change)
    applied = new_amount - current
    ingredient.amount = new_amount
    record_movement(ingredient.name, movement_type, applied, ingredient.unit,
                    reference_id=reference_id, reference_type=reference_type, notes=notes)
    return applied


def list_movements(ingredient_name=None, include_archived=False):
    query = IngredientMovement.query
    if ingredient_name:
        query = query.filter_by(ingredient_name=ingredient_name)
    if not include_archived:
        query = query.filter(IngredientMovement.is_archived.is_(False))
    return query.order_by(IngredientMovement.created_at.desc(), IngredientMovement.id.desc()).all()


def set_movement_archived(movement, archived):
    movement.is_archived = bool(archived)


def low_stock_ingredients(ingredients=None, thresholds=None):
    """
    Ingredients whose stock is at or below their category threshold.

    A threshold of 0 disables the warning for that category.
    """
    if ingredients is None:
        ingredients = Ingredient.query.order_by(Ingredient.name).all()
    if thresholds is None:
        thresholds = WarningThreshold.get()

    low = []
    for ingredient in ingredients:
        limit = thresholds.for_category(ingredient.category)
        if limit and (ingredient.amount or 0.0) <= limit:
            low.append(ingredient)
    return low
