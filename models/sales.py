"""
Sales Models

Contains the SalesTransaction, SaleItem and TransactionIngredientUsage
models for recording sales and the stock they consumed.
"""

from datetime import datetime

from .base import db


class SalesTransaction(db.Model):
    """One sale, possibly of several compositions, with buyer data and document numbers."""
    id = db.Column(db.Integer, primary_key=True)
    composition_id = db.Column(db.Integer, db.ForeignKey('composition.id', ondelete='SET NULL'), nullable=True, index=True)
    # Display label, e.g. "Wieczorny Spokój" or "2x A [30.00zł], 1x B [25.00zł]"
    composition_name = db.Column(db.String(1000), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)
    total_price = db.Column(db.Float, nullable=False)

    buyer_name = db.Column(db.String(200), nullable=True)
    buyer_email = db.Column(db.String(200), nullable=True)
    buyer_phone = db.Column(db.String(200), nullable=True)
    buyer_address = db.Column(db.String(200), nullable=True)
    buyer_tax_id = db.Column(db.String(20), nullable=True)

    invoice_number = db.Column(db.Integer, unique=True, nullable=False)
    correction_invoice_number = db.Column(db.Integer, unique=True, nullable=True)
    receipt_number = db.Column(db.Integer, unique=True, nullable=True)

    is_reversed = db.Column(db.Boolean, default=False, nullable=False)
    reversed_at = db.Column(db.DateTime, nullable=True)
    was_vat_registered = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False, index=True)

    items = db.relationship('SaleItem', backref='transaction', lazy=True,
                            cascade='all, delete-orphan', order_by='SaleItem.id')
    usages = db.relationship('TransactionIngredientUsage', backref='transaction', lazy=True,
                             cascade='all, delete-orphan')


class SaleItem(db.Model):
    """Composition line of a sale."""
    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(db.Integer, db.ForeignKey('sales_transaction.id'), nullable=False, index=True)
    composition_id = db.Column(db.Integer, db.ForeignKey('composition.id', ondelete='SET NULL'), nullable=True)
    composition_name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)


class TransactionIngredientUsage(db.Model):
    """Stock consumed by a sale, in the ingredient's stock unit."""
    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(db.Integer, db.ForeignKey('sales_transaction.id'), nullable=False, index=True)
    ingredient_name = db.Column(db.String(200), nullable=False)
    quantity_used = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
