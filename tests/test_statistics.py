"""Tests for sales statistics, inventory summary, UES register and month balance."""

from datetime import datetime

import pytest

from models import db, MonthlyCost, SalesTransaction
from services.sales import SaleLine, process_sale, reverse_transaction
from services.statistics import (
    sales_statistics, inventory_summary, available_years, ues_register, month_balance,
)


def _sell(composition, quantity, price, when):
    return process_sale([SaleLine(composition, quantity, price)], created_at=when)


def test_statistics_ignore_reversed_sales(relax_set):
    composition, _, _ = relax_set
    now = datetime(2025, 6, 30, 12, 0)
    _sell(composition, 2, 45.0, datetime(2025, 6, 29))
    _sell(composition, 1, 40.0, datetime(2025, 5, 1))
    cancelled = _sell(composition, 5, 45.0, datetime(2025, 6, 28))
    reverse_transaction(cancelled)

    stats = sales_statistics(SalesTransaction.query.all(), now=now)

    assert stats['total_sales'] == 2
    assert stats['total_revenue'] == 130.0
    assert stats['total_quantity'] == 3
    assert stats['average_order_value'] == 65.0
    assert stats['recent_sales'] == 1
    assert stats['recent_revenue'] == 90.0
    assert stats['top_compositions'][0]['name'] == 'Wieczorny Spokój'
    assert stats['top_compositions'][0]['revenue'] == 130.0


def test_statistics_of_no_sales():
    stats = sales_statistics([], now=datetime(2025, 1, 1))
    assert stats['total_sales'] == 0
    assert stats['average_order_value'] == 0.0
    assert stats['top_compositions'] == []


def test_inventory_summary_counts_only_used_ingredients(relax_set, make_ingredient):
    make_ingredient('nieużywany', category='weight', unit='g', amount=1000.0, price=50.0)

    summary = inventory_summary()

    # lavender 500 g at 12 zł/100 g, oil 10 ml at 25 zł/10 ml
    assert summary['weight'] == 60.0
    assert summary['oil'] == 25.0
    assert summary['discrete'] == 0.0
    assert summary['total'] == 85.0


def test_ues_register_is_chronological_with_running_total(relax_set):
    composition, _, _ = relax_set
    late = _sell(composition, 1, 45.0, datetime(2025, 3, 10))
    early = _sell(composition, 2, 40.0, datetime(2025, 1, 5))
    cancelled = _sell(composition, 1, 45.0, datetime(2025, 2, 1))
    _sell(composition, 1, 45.0, datetime(2024, 12, 31))
    reverse_transaction(cancelled)

    rows = ues_register([late, early, cancelled], 2025)

    assert [r['lp'] for r in rows] == [1, 2]
    assert [r['date'] for r in rows] == [early.created_at, late.created_at]
    assert [r['document_number'] for r in rows] == ['000000001', '000000002']
    assert [r['cumulative_amount'] for r in rows] == [80.0, 125.0]


def test_available_years_include_current_year(relax_set):
    composition, _, _ = relax_set
    sale = _sell(composition, 1, 45.0, datetime(2023, 5, 5))
    assert available_years([sale], today=datetime(2025, 1, 1)) == [2025, 2023]


def test_month_balance(relax_set):
    composition, _, _ = relax_set
    _sell(composition, 2, 45.0, datetime(2025, 4, 15))
    _sell(composition, 1, 45.0, datetime(2025, 5, 1))
    db.session.add_all([
        MonthlyCost(name='Czynsz', amount=50.0, category='Koszty stałe', cost_month=4, cost_year=2025),
        MonthlyCost(name='Lawenda', amount=15.5, category='Surowce', cost_month=4, cost_year=2025),
        MonthlyCost(name='Reklama', amount=99.0, category='Marketing', cost_month=5, cost_year=2025),
    ])
    db.session.commit()

    balance = month_balance(2025, 4)

    assert balance['revenue'] == 90.0
    assert balance['costs'] == 65.5
    assert balance['balance'] == pytest.approx(24.5)
    assert balance['by_category'] == {'Koszty stałe': 50.0, 'Surowce': 15.5}
