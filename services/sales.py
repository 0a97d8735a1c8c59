"""
Sales Service

Processing and reversing sales. A sale consumes composition ingredients
from stock; a reversal gives back exactly what the sale took.
"""

import logging
from collections import namedtuple
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from constants import MAX_SALE_LINES
from models import (
    db, Ingredient, CompanySettings,
    SalesTransaction, SaleItem, TransactionIngredientUsage,
)

from .formatting import round_money
from .inventory import adjust_stock
from .numbering import next_invoice_number, assign_correction_number
from .units import convert_between_units

logger = logging.getLogger(__name__)

SaleLine = namedtuple('SaleLine', ['composition', 'quantity', 'unit_price'])

BUYER_FIELDS = ('name', 'email', 'phone', 'address', 'tax_id')


class SaleError(Exception):
    """Raised when a sale cannot be processed or reversed."""


def format_sale_label(lines):
    """
    Display label of a sale.

    One line -> the composition name; several -> "2x A [30.00zł], 1x B [25.00zł]".
    """
    if len(lines) == 1:
        return lines[0].composition.name
    return ', '.join(
        f"{line.quantity}x {line.composition.name} [{line.unit_price:.2f}zł]"
        for line in lines
    )


def _validate_lines(lines):
    if not lines:
        raise SaleError('Wybierz zestaw do sprzedaży')
    if len(lines) > MAX_SALE_LINES:
        raise SaleError(f'Zbyt wiele pozycji (maks. {MAX_SALE_LINES})')
    for line in lines:
        if line.composition is None:
            raise SaleError('Nie znaleziono zestawu')
        if line.quantity is None or line.quantity < 1:
            raise SaleError(f'Nieprawidłowa ilość dla "{line.composition.name}"')
        if line.unit_price is None or line.unit_price < 0:
            raise SaleError(f'Nieprawidłowa cena dla "{line.composition.name}"')


def calculate_usage(lines):
    """
    Stock needed for the given sale lines, per ingredient, in stock units.

    Returns:
        dict of ingredient_id -> (Ingredient, amount)
    """
    usage = {}
    for line in lines:
        for ci in line.composition.ingredients:
            ingredient = ci.ingredient
            if ingredient is None:
                continue
            needed = convert_between_units(ci.amount * line.quantity, ci.unit, ingredient.unit)
            if ingredient.id in usage:
                usage[ingredient.id] = (ingredient, usage[ingredient.id][1] + needed)
            else:
                usage[ingredient.id] = (ingredient, needed)
    return usage


def process_sale(lines, buyer=None, created_at=None):
    """
    Record a sale and deduct the used ingredients from stock.

    Args:
        lines: list of SaleLine(composition, quantity, unit_price)
        buyer: optional dict with name/email/phone/address/tax_id
        created_at: sale date (defaults to now)

    Returns:
        The committed SalesTransaction

    Raises:
        SaleError: invalid input or database failure
    """
    _validate_lines(lines)
    buyer = buyer or {}

    quantity = sum(line.quantity for line in lines)
    total = round_money(sum(line.quantity * line.unit_price for line in lines))
    unit_price = lines[0].unit_price if len(lines) == 1 else round_money(total / quantity)

    logger.info("Processing sale: %s, total %.2f", format_sale_label(lines), total)

    try:
        transaction = SalesTransaction(
            composition_id=lines[0].composition.id,
            composition_name=format_sale_label(lines),
            quantity=quantity,
            unit_price=unit_price,
            total_price=total,
            invoice_number=next_invoice_number(),
            was_vat_registered=CompanySettings.get().is_vat_registered,
            created_at=created_at or datetime.now(),
            **{f'buyer_{field}': (buyer.get(field) or None) for field in BUYER_FIELDS}
        )
        for line in lines:
            transaction.items.append(SaleItem(
                composition_id=line.composition.id,
                composition_name=line.composition.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            ))
        db.session.add(transaction)
        db.session.flush()

        for ingredient, needed in calculate_usage(lines).values():
            applied = adjust_stock(ingredient, -needed, movement_type='sale',
                                   reference_id=transaction.id, reference_type='sale',
                                   notes=transaction.composition_name)
            if -applied < needed:
                logger.warning("Insufficient stock of %s: needed %.3f, had %.3f",
                               ingredient.name, needed, -applied)
            transaction.usages.append(TransactionIngredientUsage(
                ingredient_name=ingredient.name,
                quantity_used=-applied,
                unit=ingredient.unit,
            ))

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Error processing sale")
        raise SaleError('Nie udało się przetworzyć sprzedaży') from e

    logger.info("Sale %s processed", transaction.id)
    return transaction


def reverse_transaction(transaction, reversed_at=None):
    """
    Reverse a sale: restore the recorded ingredient usage, mark the
    transaction reversed and assign its correction invoice number.

    Raises:
        SaleError: transaction already reversed or database failure
    """
    if transaction.is_reversed:
        raise SaleError('Transakcja została już anulowana')

    logger.info("Reversing transaction %s", transaction.id)

    try:
        for usage in transaction.usages:
            ingredient = Ingredient.query.filter_by(name=usage.ingredient_name).first()
            if ingredient is None:
                logger.warning("Ingredient %s no longer exists, skipping restore", usage.ingredient_name)
                continue
            restored = convert_between_units(usage.quantity_used, usage.unit, ingredient.unit)
            adjust_stock(ingredient, restored, movement_type='reversal',
                         reference_id=transaction.id, reference_type='sale',
                         notes=f'Anulowanie: {transaction.composition_name}')

        transaction.is_reversed = True
        transaction.reversed_at = reversed_at or datetime.now()
        assign_correction_number(transaction)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Error reversing transaction %s", transaction.id)
        raise SaleError('Nie udało się anulować transakcji') from e

    return transaction
