"""Route smoke tests."""

from datetime import datetime

import pytest

from app import seed_compositions, safe_float, safe_int, parse_date
from constants import DEFAULT_COMPOSITIONS
from models import (
    db, Ingredient, IngredientMovement, Composition, CompositionIngredient,
    SalesTransaction, MonthlyCost, CompanySettings,
)
from services.sales import SaleLine, process_sale, reverse_transaction


@pytest.mark.parametrize('path', [
    '/', '/ingredients', '/movements', '/compositions', '/sales',
    '/costs', '/shopping', '/calculator', '/settings',
])
def test_pages_render(client, path):
    response = client.get(path)
    assert response.status_code == 200


def test_pages_render_with_data(client, relax_set):
    composition, _, _ = relax_set
    for path in ['/', '/ingredients', '/compositions', f'/composition/{composition.id}', '/calculator']:
        assert client.get(path).status_code == 200


def test_form_helpers():
    assert safe_float('2,5') == 2.5
    assert safe_float('abc', default=1.0) == 1.0
    assert safe_float('-5', min_val=0.0) == 0.0
    assert safe_int('7', max_val=5) == 5
    assert safe_int(None, default=3) == 3
    assert parse_date('2025-02-14') == datetime(2025, 2, 14)
    assert parse_date('14.02.2025') is None


def test_add_ingredient_records_initial_stock(client):
    response = client.post('/ingredient/add', data={'name': 'Szałwia', 'unit': 'g', 'amount': '100', 'price': '9'})
    assert response.status_code == 302

    ingredient = Ingredient.query.filter_by(name='Szałwia').one()
    assert ingredient.amount == 100.0
    assert ingredient.category == 'weight'
    assert IngredientMovement.query.filter_by(ingredient_name='Szałwia', movement_type='purchase').count() == 1


def test_add_ingredient_defaults_category_from_unit(client):
    client.post('/ingredient/add', data={'name': 'olejek cedrowy', 'unit': 'ml'})
    assert Ingredient.query.filter_by(name='olejek cedrowy').one().category == 'oil'


def test_duplicate_ingredient_is_rejected(client, make_ingredient):
    make_ingredient('Mięta')
    response = client.post('/ingredient/add', data={'name': 'mięta', 'unit': 'g'}, follow_redirects=True)
    assert 'już istnieje' in response.get_data(as_text=True)
    assert Ingredient.query.count() == 1


def test_edit_ingredient(client, make_ingredient):
    ingredient = make_ingredient('Lipa')
    response = client.post(f'/ingredient/{ingredient.id}/edit', data={'name': 'Kwiat lipy', 'category': 'weight', 'unit': 'g', 'price': '14'})
    assert response.status_code == 200
    assert ingredient.name == 'Kwiat lipy'
    assert ingredient.price == 14.0


def test_renamed_ingredient_is_restored_on_reversal(client, relax_set):
    composition, lavender, _ = relax_set
    transaction = process_sale([SaleLine(composition, 1, 45.0)])
    assert lavender.amount == 460.0

    response = client.post(f'/ingredient/{lavender.id}/edit',
                           data={'name': 'lawenda kwiat', 'category': 'weight', 'unit': 'g'})
    assert response.status_code == 200
    assert {u.ingredient_name for u in transaction.usages} == {'lawenda kwiat', 'olejek lawendowy'}

    reverse_transaction(transaction)
    assert lavender.amount == 500.0


def test_edit_ingredient_rejects_unit_incompatible_with_compositions(client, relax_set):
    _, _, oil = relax_set
    response = client.post(f'/ingredient/{oil.id}/edit',
                           data={'name': oil.name, 'category': 'oil', 'unit': 'g'})
    assert response.status_code == 400
    assert oil.unit == 'ml'


def test_edit_ingredient_rejects_bad_category(client, make_ingredient):
    ingredient = make_ingredient('Lipa')
    response = client.post(f'/ingredient/{ingredient.id}/edit', data={'name': 'Lipa', 'category': 'spices'})
    assert response.status_code == 400


def test_stock_purchase(client, make_ingredient):
    ingredient = make_ingredient('Hibiskus', amount=10.0)
    response = client.post(f'/ingredient/{ingredient.id}/stock', data={'movement_type': 'purchase', 'quantity': '90'})
    assert response.status_code == 302
    assert ingredient.amount == 100.0


def test_stock_rejects_sale_movement(client, make_ingredient):
    ingredient = make_ingredient('Hibiskus', amount=10.0)
    client.post(f'/ingredient/{ingredient.id}/stock', data={'movement_type': 'sale', 'quantity': '5'})
    assert ingredient.amount == 10.0


def test_delete_ingredient_removes_composition_lines(client, relax_set):
    _, lavender, _ = relax_set
    client.post(f'/ingredient/{lavender.id}/delete')
    assert db.session.get(Ingredient, lavender.id) is None
    assert CompositionIngredient.query.filter_by(ingredient_id=lavender.id).count() == 0


def test_movement_archive_toggle(client, make_ingredient):
    ingredient = make_ingredient('Bez')
    client.post(f'/ingredient/{ingredient.id}/stock', data={'movement_type': 'purchase', 'quantity': '5'})
    movement = IngredientMovement.query.one()

    client.post(f'/movement/{movement.id}/archive')
    assert movement.is_archived
    client.post(f'/movement/{movement.id}/unarchive')
    assert not movement.is_archived


def test_composition_crud(client, make_ingredient):
    oil = make_ingredient('olejek eukaliptusowy', category='oil', unit='ml', amount=10.0, price=18.0)

    client.post('/composition/add', data={'name': 'Oddech', 'sale_price': '39.99'})
    composition = Composition.query.filter_by(name='Oddech').one()
    assert composition.sale_price == 39.99

    client.post(f'/composition/{composition.id}/ingredient/add', data={'ingredient_id': str(oil.id), 'amount': '10'})
    line = CompositionIngredient.query.filter_by(composition_id=composition.id).one()
    assert line.unit == 'krople'

    response = client.post(f'/composition/{composition.id}/ingredient/add',
                           data={'ingredient_id': str(oil.id), 'amount': '5', 'unit': 'g'})
    assert response.status_code == 302
    assert CompositionIngredient.query.filter_by(composition_id=composition.id).count() == 1

    client.post(f'/composition/{composition.id}/ingredient/{line.id}/delete')
    assert CompositionIngredient.query.filter_by(composition_id=composition.id).count() == 0

    client.post(f'/composition/{composition.id}/delete')
    assert Composition.query.filter_by(name='Oddech').count() == 0


def test_sale_flow(client, relax_set):
    composition, lavender, _ = relax_set

    response = client.post('/sale/add', data={
        'composition_id': str(composition.id), 'quantity': '2', 'unit_price': '',
        'buyer_name': 'Ewa', 'sale_date': '2025-03-01',
    })
    assert response.status_code == 302

    transaction = SalesTransaction.query.one()
    assert transaction.total_price == 90.0
    assert transaction.created_at == datetime(2025, 3, 1)
    assert lavender.amount == 420.0

    invoice = client.get(f'/sale/{transaction.id}/invoice')
    assert invoice.status_code == 200
    assert 'FAKTURA' in invoice.get_data(as_text=True)

    assert client.get(f'/sale/{transaction.id}/correction').status_code == 302

    receipt = client.get(f'/sale/{transaction.id}/receipt?copy=1')
    assert 'KOPIA' in receipt.get_data(as_text=True)
    assert transaction.receipt_number == 1

    assert client.get('/reports/ues?year=2025').status_code == 200
    assert client.get('/reports/ues?year=2020').status_code == 302

    client.post(f'/sale/{transaction.id}/reverse')
    assert transaction.is_reversed
    assert lavender.amount == 500.0

    correction = client.get(f'/sale/{transaction.id}/correction')
    assert correction.status_code == 200
    assert 'K/000000001' in correction.get_data(as_text=True)

    response = client.post(f'/sale/{transaction.id}/reverse', follow_redirects=True)
    assert 'już anulowana' in response.get_data(as_text=True)


def test_sale_without_composition_is_rejected(client, app):
    response = client.post('/sale/add', data={'composition_id': ''}, follow_redirects=True)
    assert 'Wybierz zestaw' in response.get_data(as_text=True)
    assert SalesTransaction.query.count() == 0


def test_missing_sale_is_404(client):
    assert client.get('/sale/999/invoice').status_code == 404


def test_costs(client):
    client.post('/cost/add', data={'name': 'Czynsz', 'amount': '800', 'category': 'Koszty stałe',
                                   'cost_month': '4', 'cost_year': '2025'})
    cost = MonthlyCost.query.one()
    assert cost.amount == 800.0

    client.post(f'/cost/{cost.id}/edit', data={'name': 'Czynsz', 'amount': '850', 'category': 'Koszty stałe',
                                               'cost_month': '4', 'cost_year': '2025'})
    assert cost.amount == 850.0

    page = client.get('/costs?year=2025&month=4').get_data(as_text=True)
    assert '850.00 zł' in page

    client.post(f'/cost/{cost.id}/delete')
    assert MonthlyCost.query.count() == 0


def test_cost_with_bad_category_is_rejected(client):
    client.post('/cost/add', data={'name': 'X', 'amount': '10', 'category': 'Wakacje'})
    assert MonthlyCost.query.count() == 0


def test_shopping_plan_page(client, relax_set):
    composition, _, _ = relax_set
    response = client.post('/shopping', data={f'qty_{composition.id}': '15'})
    assert '87.00 zł' in response.get_data(as_text=True)


def test_settings_update(client):
    client.post('/settings', data={'company_name': 'Zielarnia Ola', 'is_vat_registered': '1',
                                   'herbs_threshold': '25'})
    settings = CompanySettings.get()
    assert settings.company_name == 'Zielarnia Ola'
    assert settings.is_vat_registered
    assert not settings.show_ues_generator


def test_seed_compositions(app):
    assert seed_compositions() == len(DEFAULT_COMPOSITIONS)
    db.session.commit()
    assert Composition.query.count() == len(DEFAULT_COMPOSITIONS)
    assert seed_compositions() == 0
    oil_line = CompositionIngredient.query.filter_by(unit='krople').first()
    assert oil_line.ingredient.unit == 'ml'
