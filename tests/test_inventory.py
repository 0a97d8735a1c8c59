"""Tests for stock adjustments, movements and low-stock warnings."""

from models import db, IngredientMovement, WarningThreshold
from services.inventory import (
    adjust_stock, list_movements, set_movement_archived, low_stock_ingredients,
)


def test_adjust_stock_records_applied_change(make_ingredient):
    herb = make_ingredient('rumianek', amount=30.0)

    assert adjust_stock(herb, 20.0, movement_type='purchase') == 20.0
    assert adjust_stock(herb, -80.0) == -50.0
    db.session.commit()

    assert herb.amount == 0.0
    changes = [m.quantity_change for m in list_movements('rumianek')]
    assert sorted(changes) == [-50.0, 20.0]


def test_archived_movements_are_hidden_by_default(make_ingredient):
    herb = make_ingredient('melisa')
    adjust_stock(herb, 10.0, movement_type='purchase')
    adjust_stock(herb, 5.0, movement_type='purchase')
    db.session.commit()

    movement = IngredientMovement.query.first()
    set_movement_archived(movement, True)
    db.session.commit()

    assert len(list_movements()) == 1
    assert len(list_movements(include_archived=True)) == 2


def test_low_stock_uses_category_thresholds(make_ingredient):
    herb = make_ingredient('nagietek', category='weight', unit='g', amount=40.0)
    make_ingredient('mięta', category='weight', unit='g', amount=400.0)
    oil = make_ingredient('olejek miętowy', category='oil', unit='ml', amount=3.0)
    make_ingredient('słoik', category='discrete', unit='szt', amount=1.0)

    thresholds = WarningThreshold(herbs_threshold=50.0, oils_threshold=5.0, others_threshold=0.0)

    low = low_stock_ingredients(thresholds=thresholds)
    assert {i.name for i in low} == {herb.name, oil.name}
