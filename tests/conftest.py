"""
Shared pytest fixtures.

The app runs with TestingConfig on an in-memory SQLite database; every
test gets freshly created tables.
"""

import os

import pytest

os.environ['FLASK_ENV'] = 'testing'

from app import app as flask_app  # noqa: E402
from models import db, Ingredient, Composition, CompositionIngredient  # noqa: E402


@pytest.fixture
def app():
    """Application with an app context and empty tables."""
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_ingredient(app):
    """Create and return a committed ingredient."""
    def _make(name, category='weight', unit='g', amount=0.0, price=0.0):
        ingredient = Ingredient(name=name, category=category, unit=unit, amount=amount, price=price)
        db.session.add(ingredient)
        db.session.commit()
        return ingredient
    return _make


@pytest.fixture
def make_composition(app):
    """Create a composition from (ingredient, amount, unit) lines."""
    def _make(name, lines, sale_price=None):
        composition = Composition(name=name, sale_price=sale_price)
        for ingredient, amount, unit in lines:
            composition.ingredients.append(CompositionIngredient(
                ingredient_id=ingredient.id, amount=amount, unit=unit,
            ))
        db.session.add(composition)
        db.session.commit()
        return composition
    return _make


@pytest.fixture
def relax_set(make_ingredient, make_composition):
    """Lavender set: 40 g lavender flowers and 8 drops of lavender oil per set."""
    lavender = make_ingredient('kwiaty lawendy', category='weight', unit='g', amount=500.0, price=12.0)
    oil = make_ingredient('olejek lawendowy', category='oil', unit='ml', amount=10.0, price=25.0)
    composition = make_composition('Wieczorny Spokój', [(lavender, 40, 'g'), (oil, 8, 'krople')], sale_price=45.0)
    return composition, lavender, oil
