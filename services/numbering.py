"""
Document Numbering Service

Sequential numbers for invoices, correction invoices and receipts, and
their printed form:
- invoice:    000000042
- correction: K/000000007
- receipt:    R/000000013
"""

import logging

from constants import DOCUMENT_NUMBER_WIDTH, CORRECTION_PREFIX, RECEIPT_PREFIX
from models import db, SalesTransaction

logger = logging.getLogger(__name__)


def format_invoice_number(number):
    return str(number or 0).zfill(DOCUMENT_NUMBER_WIDTH)


def format_correction_number(number):
    return f"{CORRECTION_PREFIX}{format_invoice_number(number)}"


def format_receipt_number(number):
    return f"{RECEIPT_PREFIX}{format_invoice_number(number)}"


def _next_value(column):
    current = db.session.query(db.func.max(column)).scalar()
    return (current or 0) + 1


def next_invoice_number():
    return _next_value(SalesTransaction.invoice_number)


def assign_correction_number(transaction):
    """Give a reversed transaction its correction number (once)."""
    if transaction.correction_invoice_number is None:
        transaction.correction_invoice_number = _next_value(SalesTransaction.correction_invoice_number)
        logger.info("Assigned correction number %s to transaction %s",
                    transaction.correction_invoice_number, transaction.id)
    return format_correction_number(transaction.correction_invoice_number)


def assign_receipt_number(transaction):
    """
    Return the receipt number of a transaction, assigning the next one
    the first time a receipt is printed. Caller commits.
    """
    if transaction.receipt_number is None:
        transaction.receipt_number = _next_value(SalesTransaction.receipt_number)
        logger.info("Assigned receipt number %s to transaction %s",
                    transaction.receipt_number, transaction.id)
    return format_receipt_number(transaction.receipt_number)
