"""
Statistics Service

Sales statistics, inventory value summary, the annual simplified sales
register (UES) and the monthly revenue/cost balance.

Reversed transactions never count towards revenue.
"""

from datetime import datetime, timedelta

from models import db, Ingredient, CompositionIngredient, SalesTransaction, MonthlyCost

from .costing import IngredientCategory, stock_value
from .formatting import round_money
from .numbering import format_invoice_number

TOP_COMPOSITIONS = 5
RECENT_DAYS = 7


def active_transactions(transactions):
    return [t for t in transactions if not t.is_reversed]


def _transaction_lines(transaction):
    """(name, quantity, revenue) per sold composition of a transaction."""
    if transaction.items:
        return [(item.composition_name, item.quantity, item.quantity * item.unit_price)
                for item in transaction.items]
    return [(transaction.composition_name, transaction.quantity, transaction.total_price)]


def sales_statistics(transactions, now=None):
    """
    Headline numbers for the sales dashboard.

    Returns:
        dict with total_sales, total_revenue, total_quantity,
        average_order_value, top_compositions, recent_sales, recent_revenue
    """
    now = now or datetime.now()
    active = active_transactions(transactions)

    total_sales = len(active)
    total_revenue = sum(t.total_price for t in active)
    total_quantity = sum(t.quantity for t in active)
    average = total_revenue / total_sales if total_sales else 0.0

    breakdown = {}
    for transaction in active:
        for name, quantity, revenue in _transaction_lines(transaction):
            entry = breakdown.setdefault(name, {'name': name, 'quantity': 0, 'revenue': 0.0, 'count': 0})
            entry['quantity'] += quantity
            entry['revenue'] += revenue
            entry['count'] += 1
    compositions = sorted(breakdown.values(), key=lambda x: x['revenue'], reverse=True)

    since = now - timedelta(days=RECENT_DAYS)
    recent = [t for t in active if t.created_at >= since]

    return {
        'total_sales': total_sales,
        'total_revenue': round_money(total_revenue),
        'total_quantity': total_quantity,
        'average_order_value': round_money(average),
        'top_compositions': compositions[:TOP_COMPOSITIONS],
        'recent_sales': len(recent),
        'recent_revenue': round_money(sum(t.total_price for t in recent)),
    }


def inventory_summary():
    """
    Stock value of the ingredients used in at least one composition,
    grouped by category.
    """
    used_ids = {r[0] for r in db.session.query(CompositionIngredient.ingredient_id).distinct().all()}
    ingredients = Ingredient.query.filter(Ingredient.id.in_(used_ids)).all()

    totals = {category.value: 0.0 for category in IngredientCategory}
    for ingredient in ingredients:
        category = IngredientCategory.parse(ingredient.category, IngredientCategory.WEIGHT)
        totals[category.value] += stock_value(ingredient)

    summary = {key: round_money(value) for key, value in totals.items()}
    summary['total'] = round_money(sum(totals.values()))
    return summary


def available_years(transactions, today=None):
    """Years with sales, plus the current year, newest first."""
    years = {t.created_at.year for t in transactions}
    years.add((today or datetime.now()).year)
    return sorted(years, reverse=True)


def ues_register(transactions, year):
    """
    Rows of the simplified sales register for `year`.

    Active transactions in chronological order, numbered 1..n with a
    9-digit document number and a running gross total.
    """
    year_transactions = sorted(
        (t for t in active_transactions(transactions) if t.created_at.year == year),
        key=lambda t: (t.created_at, t.id),
    )
    rows = []
    cumulative = 0.0
    for index, transaction in enumerate(year_transactions, start=1):
        cumulative += transaction.total_price
        rows.append({
            'lp': index,
            'date': transaction.created_at,
            'document_number': format_invoice_number(index),
            'gross_amount': transaction.total_price,
            'cumulative_amount': round_money(cumulative),
        })
    return rows


def costs_by_category(costs):
    totals = {}
    for cost in costs:
        totals[cost.category] = totals.get(cost.category, 0.0) + cost.amount
    return {key: round_money(value) for key, value in sorted(totals.items())}


def month_balance(year, month):
    """Revenue of active sales in a month against the costs booked to it."""
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)

    sales = SalesTransaction.query.filter(
        SalesTransaction.is_reversed.is_(False),
        SalesTransaction.created_at >= start,
        SalesTransaction.created_at < end,
    ).all()
    costs = MonthlyCost.query.filter_by(cost_year=year, cost_month=month).all()

    revenue = round_money(sum(t.total_price for t in sales))
    total_costs = round_money(sum(c.amount for c in costs))
    return {
        'year': year,
        'month': month,
        'revenue': revenue,
        'costs': total_costs,
        'balance': round_money(revenue - total_costs),
        'by_category': costs_by_category(costs),
    }
