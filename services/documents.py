"""
Sales Documents Service

Builds printable HTML for invoices, correction invoices, receipts and the
annual simplified sales register (UES). All amounts in words come from
services.words; all VAT splits from services.costing.
"""

import logging
from datetime import datetime

from flask import render_template

from constants import VAT_RATE

from .costing import split_gross
from .formatting import round_money
from .numbering import (
    format_invoice_number, format_correction_number, assign_receipt_number,
)
from .statistics import ues_register
from .words import convert_to_words

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Raised when a document cannot be produced for a transaction."""


def document_items(transaction):
    """
    Sold lines of a transaction as dicts with name, quantity,
    unit_price and gross (all gross amounts).
    """
    if transaction.items:
        return [{
            'name': item.composition_name,
            'quantity': item.quantity,
            'unit_price': item.unit_price,
            'gross': round_money(item.quantity * item.unit_price),
        } for item in transaction.items]
    return [{
        'name': transaction.composition_name,
        'quantity': transaction.quantity,
        'unit_price': transaction.unit_price,
        'gross': round_money(transaction.total_price),
    }]


def vat_lines(items, vat_rate=VAT_RATE):
    """Add net, vat and unit_net to each item (gross is VAT-inclusive)."""
    lines = []
    for item in items:
        net, vat = split_gross(item['gross'], vat_rate)
        line = dict(item)
        line['net'] = net
        line['vat'] = vat
        line['unit_net'] = net / item['quantity'] if item['quantity'] else 0.0
        lines.append(line)
    return lines


def _totals(transaction, vat_rate=VAT_RATE):
    gross = transaction.total_price
    net, vat = split_gross(gross, vat_rate)
    return {'gross': gross, 'net': net, 'vat': vat}


def render_invoice(transaction, company, is_original=True, vat_rate=VAT_RATE):
    number = format_invoice_number(transaction.invoice_number)
    logger.info("Rendering invoice %s", number)
    return render_template(
        'documents/invoice.html',
        transaction=transaction,
        company=company,
        number=number,
        is_original=is_original,
        lines=vat_lines(document_items(transaction), vat_rate),
        totals=_totals(transaction, vat_rate),
        vat_percent=round(vat_rate * 100),
        amount_in_words=convert_to_words(transaction.total_price),
    )


def render_correction_invoice(transaction, company, is_original=True, issued_on=None, vat_rate=VAT_RATE):
    """
    Correction invoice cancelling a reversed sale. The differences are
    the negated totals of the corrected invoice.
    """
    if not transaction.is_reversed or transaction.correction_invoice_number is None:
        raise DocumentError('Faktura korygująca dostępna tylko dla anulowanych transakcji')

    number = format_correction_number(transaction.correction_invoice_number)
    logger.info("Rendering correction invoice %s", number)
    return render_template(
        'documents/correction_invoice.html',
        transaction=transaction,
        company=company,
        number=number,
        corrected_number=format_invoice_number(transaction.invoice_number),
        is_original=is_original,
        issued_on=issued_on or transaction.reversed_at or datetime.now(),
        lines=vat_lines(document_items(transaction), vat_rate),
        totals=_totals(transaction, vat_rate),
        vat_percent=round(vat_rate * 100),
        amount_in_words=convert_to_words(-transaction.total_price),
    )


def render_receipt(transaction, company, is_original=True):
    """Receipt for a non-VAT sale; assigns the receipt number on first print."""
    number = assign_receipt_number(transaction)
    logger.info("Rendering receipt %s", number)
    return render_template(
        'documents/receipt.html',
        transaction=transaction,
        company=company,
        number=number,
        is_original=is_original,
        lines=document_items(transaction),
        total=transaction.total_price,
        amount_in_words=convert_to_words(transaction.total_price),
    )


def render_ues_report(transactions, year, company=None, generated_at=None):
    rows = ues_register(transactions, year)
    if not rows:
        raise DocumentError('Brak transakcji w wybranym roku')
    return render_template(
        'documents/ues_report.html',
        year=year,
        rows=rows,
        company=company,
        total=rows[-1]['cumulative_amount'],
        generated_at=generated_at or datetime.now(),
    )
