"""
Ingredient Models

Contains the Ingredient and IngredientMovement models for managing
raw-material stock and its history.
"""

from datetime import datetime

from .base import db


class Ingredient(db.Model):
    """
    Raw material kept in stock.

    Category selects the pricing formula:
    - oil:      price is per 10 ml, stock usually kept in ml
    - weight:   price is per 100 g (herbs, salts, clays)
    - discrete: price is per piece (bags, jars)
    """
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    category = db.Column(db.String(20), default='weight', nullable=False, index=True)

    # Stock unit (g, ml, szt)
    unit = db.Column(db.String(20), default='g', nullable=False)

    # Amount currently in stock, in `unit`
    amount = db.Column(db.Float, default=0.0, nullable=False)

    # Price per reference quantity of the category
    price = db.Column(db.Float, default=0.0, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    def __repr__(self):
        return f'<Ingredient {self.name!r} {self.amount} {self.unit}>'


class IngredientMovement(db.Model):
    """Stock change log entry (purchase, sale, reversal, adjustment)."""
    id = db.Column(db.Integer, primary_key=True)
    ingredient_name = db.Column(db.String(200), nullable=False, index=True)
    movement_type = db.Column(db.String(20), nullable=False)
    quantity_change = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(20), nullable=False)
    # e.g. reference_type='sale', reference_id=<transaction id>
    reference_id = db.Column(db.Integer, nullable=True)
    reference_type = db.Column(db.String(30), nullable=True)
    notes = db.Column(db.String(500), nullable=True)
    is_archived = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False, index=True)
