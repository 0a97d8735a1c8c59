"""
Settings Models

Contains the single-row CompanySettings and WarningThreshold models.
"""

from datetime import datetime

from .base import db


class CompanySettings(db.Model):
    """Seller data printed on documents."""
    id = db.Column(db.Integer, primary_key=True)
    company_name = db.Column(db.String(200), nullable=False, default='Nazwa firmy')
    company_address = db.Column(db.String(200))
    company_tax_id = db.Column(db.String(20))
    company_phone = db.Column(db.String(50))
    company_email = db.Column(db.String(200))
    company_website = db.Column(db.String(200))
    bank_name = db.Column(db.String(200))
    bank_account = db.Column(db.String(50))
    is_vat_registered = db.Column(db.Boolean, default=False, nullable=False)
    show_ues_generator = db.Column(db.Boolean, default=True, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    @classmethod
    def get(cls):
        """Return the settings row, creating it on first use."""
        settings = cls.query.first()
        if settings is None:
            settings = cls()
            db.session.add(settings)
            db.session.flush()
        return settings


class WarningThreshold(db.Model):
    """Low-stock thresholds per ingredient category (in stock units)."""
    id = db.Column(db.Integer, primary_key=True)
    herbs_threshold = db.Column(db.Float, default=0.0, nullable=False)
    oils_threshold = db.Column(db.Float, default=0.0, nullable=False)
    others_threshold = db.Column(db.Float, default=0.0, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    @classmethod
    def get(cls):
        """Return the thresholds row, creating it on first use."""
        thresholds = cls.query.first()
        if thresholds is None:
            thresholds = cls()
            db.session.add(thresholds)
            db.session.flush()
        return thresholds

    def for_category(self, category):
        """Threshold for an ingredient category value ('oil', 'weight', 'discrete')."""
        if category == 'oil':
            return self.oils_threshold
        if category == 'discrete':
            return self.others_threshold
        return self.herbs_threshold
