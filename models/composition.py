"""
Composition Models

Contains the Composition and CompositionIngredient models for managing
product recipes and their ingredient lines.
"""

from datetime import datetime

from .base import db


class Composition(db.Model):
    """Sellable herbal set with its default sale price."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    description = db.Column(db.String(1000), default='')
    color = db.Column(db.String(30), default='')
    sale_price = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
    ingredients = db.relationship(
        'CompositionIngredient', backref='composition', lazy=True,
        cascade='all, delete-orphan', order_by='CompositionIngredient.id'
    )


class CompositionIngredient(db.Model):
    """Ingredient line of a composition: amount per one set, in `unit`."""
    id = db.Column(db.Integer, primary_key=True)
    composition_id = db.Column(db.Integer, db.ForeignKey('composition.id'), nullable=False, index=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(20), nullable=False)  # may differ from stock unit (drops vs ml)
    ingredient = db.relationship('Ingredient')
