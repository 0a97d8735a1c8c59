"""
Monthly Cost Model

Contains the MonthlyCost model for tracking operating costs per month.
"""

from datetime import datetime

from .base import db


class MonthlyCost(db.Model):
    """Operating cost booked to a calendar month."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.String(1000), nullable=True)
    amount = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(50), default='Koszty stałe', nullable=False)
    cost_month = db.Column(db.Integer, nullable=False)  # 1-12
    cost_year = db.Column(db.Integer, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
