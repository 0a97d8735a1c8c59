"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .ingredient import Ingredient, IngredientMovement
from .composition import Composition, CompositionIngredient
from .sales import SalesTransaction, SaleItem, TransactionIngredientUsage
from .costs import MonthlyCost
from .settings import CompanySettings, WarningThreshold

__all__ = [
    'db',
    'Ingredient',
    'IngredientMovement',
    'Composition',
    'CompositionIngredient',
    'SalesTransaction',
    'SaleItem',
    'TransactionIngredientUsage',
    'MonthlyCost',
    'CompanySettings',
    'WarningThreshold',
]
