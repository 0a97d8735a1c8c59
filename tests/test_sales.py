"""Tests for processing and reversing sales."""

from datetime import datetime

import pytest

from models import db, CompanySettings, IngredientMovement, SalesTransaction
from services.numbering import (
    format_invoice_number, format_correction_number, assign_receipt_number,
)
from services.sales import (
    SaleLine, SaleError, process_sale, reverse_transaction, format_sale_label, calculate_usage,
)


def test_usage_converts_drops_to_stock_unit(relax_set):
    composition, lavender, oil = relax_set
    usage = calculate_usage([SaleLine(composition, 2, 45.0)])
    assert usage[lavender.id][1] == 80
    assert usage[oil.id][1] == pytest.approx(0.8)


def test_sale_deducts_stock_and_records_usage(relax_set):
    composition, lavender, oil = relax_set

    transaction = process_sale([SaleLine(composition, 2, 45.0)], buyer={'name': 'Anna Nowak'})

    assert transaction.total_price == 90.0
    assert transaction.quantity == 2
    assert transaction.composition_name == 'Wieczorny Spokój'
    assert transaction.buyer_name == 'Anna Nowak'
    assert transaction.buyer_email is None
    assert lavender.amount == 420.0
    assert oil.amount == pytest.approx(9.2)

    used = {u.ingredient_name: u.quantity_used for u in transaction.usages}
    assert used['kwiaty lawendy'] == 80.0
    assert used['olejek lawendowy'] == pytest.approx(0.8)

    movements = IngredientMovement.query.filter_by(movement_type='sale').all()
    assert len(movements) == 2
    assert all(m.reference_id == transaction.id for m in movements)


def test_stock_never_goes_negative(make_ingredient, make_composition):
    oil = make_ingredient('olejek różany', category='oil', unit='ml', amount=0.5, price=80.0)
    composition = make_composition('Różany', [(oil, 8, 'krople')])

    transaction = process_sale([SaleLine(composition, 2, 30.0)])

    assert oil.amount == 0.0
    assert transaction.usages[0].quantity_used == pytest.approx(0.5)

    reverse_transaction(transaction)
    assert oil.amount == pytest.approx(0.5)


def test_reversal_restores_stock_and_assigns_correction_number(relax_set):
    composition, lavender, oil = relax_set
    transaction = process_sale([SaleLine(composition, 3, 45.0)])

    reverse_transaction(transaction)

    assert transaction.is_reversed
    assert transaction.reversed_at is not None
    assert lavender.amount == pytest.approx(500.0)
    assert oil.amount == pytest.approx(10.0)
    assert format_correction_number(transaction.correction_invoice_number) == 'K/000000001'
    assert IngredientMovement.query.filter_by(movement_type='reversal').count() == 2


def test_second_reversal_is_rejected(relax_set):
    composition, _, _ = relax_set
    transaction = process_sale([SaleLine(composition, 1, 45.0)])
    reverse_transaction(transaction)

    with pytest.raises(SaleError):
        reverse_transaction(transaction)


def test_reversal_skips_deleted_ingredients(relax_set):
    composition, lavender, oil = relax_set
    transaction = process_sale([SaleLine(composition, 1, 45.0)])
    composition.ingredients = [ci for ci in composition.ingredients if ci.ingredient_id != oil.id]
    db.session.delete(oil)
    db.session.commit()

    reverse_transaction(transaction)

    assert transaction.is_reversed
    assert lavender.amount == pytest.approx(500.0)


def test_invoice_numbers_are_sequential(relax_set):
    composition, _, _ = relax_set
    first = process_sale([SaleLine(composition, 1, 45.0)])
    second = process_sale([SaleLine(composition, 1, 45.0)])

    assert first.invoice_number == 1
    assert second.invoice_number == 2
    assert format_invoice_number(second.invoice_number) == '000000002'


def test_receipt_number_is_assigned_once(relax_set):
    composition, _, _ = relax_set
    first = process_sale([SaleLine(composition, 1, 45.0)])
    second = process_sale([SaleLine(composition, 1, 45.0)])

    assert first.receipt_number is None
    assert assign_receipt_number(first) == 'R/000000001'
    assert assign_receipt_number(first) == 'R/000000001'
    assert assign_receipt_number(second) == 'R/000000002'


def test_multi_line_sale(relax_set, make_ingredient, make_composition):
    composition, _, _ = relax_set
    bag = make_ingredient('woreczek lniany', category='discrete', unit='szt', amount=10, price=2.0)
    other = make_composition('Woreczek', [(bag, 1, 'szt')], sale_price=25.0)
    lines = [SaleLine(composition, 2, 30.0), SaleLine(other, 1, 25.0)]

    assert format_sale_label(lines) == '2x Wieczorny Spokój [30.00zł], 1x Woreczek [25.00zł]'

    transaction = process_sale(lines)
    assert transaction.total_price == 85.0
    assert transaction.quantity == 3
    assert len(transaction.items) == 2
    assert bag.amount == 9


def test_sale_records_vat_status(relax_set):
    composition, _, _ = relax_set
    CompanySettings.get().is_vat_registered = True
    db.session.commit()

    transaction = process_sale([SaleLine(composition, 1, 45.0)], created_at=datetime(2025, 3, 1, 10, 0))
    assert transaction.was_vat_registered
    assert transaction.created_at == datetime(2025, 3, 1, 10, 0)


@pytest.mark.parametrize('quantity, price', [(0, 45.0), (1, -1.0)])
def test_invalid_lines_are_rejected(relax_set, quantity, price):
    composition, _, _ = relax_set
    with pytest.raises(SaleError):
        process_sale([SaleLine(composition, quantity, price)])
    assert SalesTransaction.query.count() == 0


def test_empty_sale_is_rejected(app):
    with pytest.raises(SaleError):
        process_sale([])


def test_missing_composition_is_rejected(app):
    with pytest.raises(SaleError):
        process_sale([SaleLine(None, 1, 10.0)])
