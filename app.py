from datetime import datetime
import logging

from flask import Flask, render_template, request, redirect, url_for, flash
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from config import get_config
from log_config import configure_logging
from constants import (
    VALID_CATEGORIES, CATEGORY_LABELS, VALID_UNITS, MANUAL_MOVEMENT_TYPES,
    VALID_COST_CATEGORIES, MAX_LENGTHS, MAX_SALE_LINES, FORM_UNITS,
    DEFAULT_COMPOSITIONS, DROPS, G, ML,
)
from models import (
    db, Ingredient, IngredientMovement, Composition, CompositionIngredient,
    SalesTransaction, SaleItem, TransactionIngredientUsage, MonthlyCost, CompanySettings, WarningThreshold,
)
from services import (
    are_units_compatible, category_from_unit, stock_value,
    calculate_ingredient_cost, format_unit_display,
    format_number, format_money, format_signed_money,
    adjust_stock, list_movements, set_movement_archived, low_stock_ingredients,
    SaleLine, SaleError, process_sale, reverse_transaction,
    format_invoice_number, format_correction_number, format_receipt_number,
    sales_statistics, inventory_summary, available_years, month_balance,
    plan_shopping, composition_cost_breakdown, production_overview,
    calculate_available_sets,
    DocumentError, render_invoice, render_correction_invoice, render_receipt,
    render_ues_report,
)
from utils.sanitizer import sanitize_text, sanitize_name, sanitize_tax_id

app = Flask(__name__)
app.config.from_object(get_config())

configure_logging(app.config['LOG_LEVEL'])
logger = logging.getLogger(__name__)

db.init_app(app)
migrate = Migrate(app, db)

# Jinja filters for amounts and units
app.jinja_env.filters['money'] = format_money
app.jinja_env.filters['signed_money'] = format_signed_money
app.jinja_env.filters['number'] = format_number
app.jinja_env.filters['unit_display'] = format_unit_display
app.jinja_env.filters['invoice_number'] = format_invoice_number
app.jinja_env.filters['correction_number'] = format_correction_number
app.jinja_env.filters['receipt_number'] = format_receipt_number
app.jinja_env.globals['CATEGORY_LABELS'] = CATEGORY_LABELS


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(str(value).replace(',', '.')) if value else default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(value) if value else default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def parse_date(value):
    """Parse a YYYY-MM-DD form value; None when empty or invalid."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d')
    except ValueError:
        return None


def format_signed_amount(value):
    return ('+' if value >= 0 else '-') + format_number(abs(round(value, 3)))


def commit_or_flash(message):
    """Commit the session; on failure roll back, log and flash `message`."""
    try:
        db.session.commit()
        return True
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception(message)
        flash(message, 'danger')
        return False


# ============================================
# ROUTES - HOME
# ============================================

@app.route('/')
def index():
    transactions = SalesTransaction.query.options(joinedload(SalesTransaction.items)).all()
    stats = sales_statistics(transactions)
    summary = inventory_summary()
    low_stock = low_stock_ingredients()
    db.session.commit()  # settings rows may have been created
    return render_template('index.html', stats=stats, summary=summary, low_stock=low_stock)

# ============================================
# ROUTES - INGREDIENTS
# ============================================

@app.route('/ingredients')
def ingredients_list():
    category = request.args.get('category', 'all')
    query = Ingredient.query
    if category in VALID_CATEGORIES:
        query = query.filter_by(category=category)
    ingredients = query.order_by(Ingredient.category, Ingredient.name).all()

    used_ingredient_ids = {r[0] for r in db.session.query(CompositionIngredient.ingredient_id).distinct().all()}
    values = {ing.id: stock_value(ing) for ing in ingredients}
    low_ids = {ing.id for ing in low_stock_ingredients(ingredients)}
    db.session.commit()

    return render_template('ingredients.html', ingredients=ingredients, values=values,
                           used_ids=used_ingredient_ids, low_ids=low_ids,
                           selected_category=category, units=FORM_UNITS)

@app.route('/ingredient/add', methods=['POST'])
def ingredient_add():
    name = sanitize_name(request.form.get('name'), max_length=MAX_LENGTHS['ingredient_name'])
    if not name:
        flash('Nazwa składnika jest wymagana', 'danger')
        return redirect(url_for('ingredients_list'))

    existing = Ingredient.query.filter(Ingredient.name.ilike(name)).first()
    if existing:
        flash(f'Składnik "{name}" już istnieje', 'warning')
        return redirect(url_for('ingredients_list'))

    unit = request.form.get('unit', G).strip().lower()
    if unit not in VALID_UNITS or unit == DROPS:
        flash(f'Nieprawidłowa jednostka: {unit}', 'danger')
        return redirect(url_for('ingredients_list'))

    category = request.form.get('category') or category_from_unit(unit).value
    if category not in VALID_CATEGORIES:
        flash(f'Nieprawidłowa kategoria: {category}', 'danger')
        return redirect(url_for('ingredients_list'))

    ingredient = Ingredient(
        name=name,
        category=category,
        unit=unit,
        price=safe_float(request.form.get('price'), default=0.0, min_val=0.0, max_val=99999.99),
    )
    db.session.add(ingredient)
    db.session.flush()

    amount = safe_float(request.form.get('amount'), default=0.0, min_val=0.0, max_val=9999999)
    if amount:
        adjust_stock(ingredient, amount, movement_type='purchase', notes='Stan początkowy')

    if commit_or_flash('Nie udało się dodać składnika'):
        logger.info("Ingredient added: %s", ingredient.name)
        flash(f'Składnik "{ingredient.name}" dodany!', 'success')
    return redirect(url_for('ingredients_list'))

@app.route('/ingredient/<int:id>/edit', methods=['POST'])
def ingredient_edit(id):
    ingredient = Ingredient.query.get_or_404(id)

    name = sanitize_name(request.form.get('name'), max_length=MAX_LENGTHS['ingredient_name'])
    if not name:
        return 'Nazwa składnika jest wymagana', 400

    # Check if new name conflicts with another ingredient
    if name.lower() != ingredient.name.lower():
        existing = Ingredient.query.filter(
            Ingredient.name.ilike(name),
            Ingredient.id != id
        ).first()
        if existing:
            return f'Składnik "{name}" już istnieje', 400

    category = request.form.get('category', ingredient.category)
    if category not in VALID_CATEGORIES:
        return f'Nieprawidłowa kategoria: {category}', 400

    unit = request.form.get('unit', ingredient.unit).strip().lower()
    if unit not in VALID_UNITS or unit == DROPS:
        return f'Nieprawidłowa jednostka: {unit}', 400

    # Composition lines must stay convertible to the stock unit
    if unit != ingredient.unit:
        lines = CompositionIngredient.query.filter_by(ingredient_id=id).all()
        if any(not are_units_compatible(line.unit, unit) for line in lines):
            return f'Jednostka "{unit}" nie pasuje do składów zestawów', 400

    old_name = ingredient.name
    ingredient.name = name
    ingredient.category = category
    ingredient.unit = unit
    ingredient.price = safe_float(request.form.get('price'), default=ingredient.price, min_val=0.0, max_val=99999.99)

    # Movement history and recorded sale usage follow the renamed ingredient
    if old_name != name:
        IngredientMovement.query.filter_by(ingredient_name=old_name).update({'ingredient_name': name})
        TransactionIngredientUsage.query.filter_by(ingredient_name=old_name).update({'ingredient_name': name})

    try:
        db.session.commit()
        return '', 200  # Return success for AJAX
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to save ingredient %s", id)
        return 'Nie udało się zapisać', 400

@app.route('/ingredient/<int:id>/delete', methods=['POST'])
def ingredient_delete(id):
    ingredient = Ingredient.query.get_or_404(id)
    name = ingredient.name

    # Manually delete composition lines (cascade doesn't work on existing SQLite tables)
    CompositionIngredient.query.filter_by(ingredient_id=id).delete()

    db.session.delete(ingredient)
    if commit_or_flash('Nie udało się usunąć składnika'):
        logger.info("Ingredient deleted: %s", name)
        flash(f'Składnik "{name}" usunięty!', 'success')
    return redirect(url_for('ingredients_list'))

@app.route('/ingredient/<int:id>/stock', methods=['POST'])
def ingredient_stock(id):
    ingredient = Ingredient.query.get_or_404(id)

    movement_type = request.form.get('movement_type', 'purchase')
    if movement_type not in MANUAL_MOVEMENT_TYPES:
        flash(f'Nieprawidłowy typ ruchu: {movement_type}', 'danger')
        return redirect(url_for('ingredients_list'))

    quantity = safe_float(request.form.get('quantity'), default=0.0, min_val=-9999999, max_val=9999999)
    if quantity == 0 or (movement_type == 'purchase' and quantity < 0):
        flash('Podaj prawidłową ilość', 'danger')
        return redirect(url_for('ingredients_list'))

    price = request.form.get('price', '').strip()
    if price:
        ingredient.price = safe_float(price, default=ingredient.price, min_val=0.0, max_val=99999.99)

    notes = sanitize_text(request.form.get('notes'), max_length=MAX_LENGTHS['notes']) or None
    applied = adjust_stock(ingredient, quantity, movement_type=movement_type, notes=notes)

    if commit_or_flash('Nie udało się zapisać zmiany stanu'):
        flash(f'Stan "{ingredient.name}": {format_signed_amount(applied)} {ingredient.unit}', 'success')
    return redirect(url_for('ingredients_list'))


# ============================================
# ROUTES - MOVEMENTS
# ============================================

@app.route('/movements')
def movements_list():
    ingredient_name = request.args.get('ingredient') or None
    include_archived = request.args.get('archived') == '1'
    movements = list_movements(ingredient_name=ingredient_name, include_archived=include_archived)
    names = [r[0] for r in db.session.query(IngredientMovement.ingredient_name).distinct().order_by(IngredientMovement.ingredient_name).all()]
    return render_template('movements.html', movements=movements, names=names,
                           selected_ingredient=ingredient_name, include_archived=include_archived)

@app.route('/movement/<int:id>/archive', methods=['POST'])
def movement_archive(id):
    movement = IngredientMovement.query.get_or_404(id)
    set_movement_archived(movement, True)
    commit_or_flash('Nie udało się zarchiwizować ruchu')
    return redirect(request.referrer or url_for('movements_list'))

@app.route('/movement/<int:id>/unarchive', methods=['POST'])
def movement_unarchive(id):
    movement = IngredientMovement.query.get_or_404(id)
    set_movement_archived(movement, False)
    commit_or_flash('Nie udało się przywrócić ruchu')
    return redirect(request.referrer or url_for('movements_list'))

# ============================================
# ROUTES - COMPOSITIONS
# ============================================

@app.route('/compositions')
def compositions_list():
    compositions = Composition.query.options(
        joinedload(Composition.ingredients).joinedload(CompositionIngredient.ingredient)
    ).order_by(Composition.name).all()
    sets = {c.id: calculate_available_sets(c)[0] for c in compositions}
    return render_template('compositions.html', compositions=compositions, sets=sets)

@app.route('/composition/<int:id>')
def composition_view(id):
    composition = Composition.query.options(
        joinedload(Composition.ingredients).joinedload(CompositionIngredient.ingredient)
    ).get_or_404(id)

    rows, total = composition_cost_breakdown(composition)
    sets, limiting = calculate_available_sets(composition)
    ingredients = Ingredient.query.order_by(Ingredient.category, Ingredient.name).all()

    return render_template('composition_view.html', composition=composition,
                           rows=rows, total=total, sets=sets, limiting=limiting,
                           ingredients=ingredients, units=FORM_UNITS)

def _composition_fields(composition):
    composition.description = sanitize_text(request.form.get('description'), max_length=MAX_LENGTHS['description'])
    composition.color = sanitize_name(request.form.get('color'), max_length=MAX_LENGTHS['color'])
    price = request.form.get('sale_price', '').strip()
    composition.sale_price = safe_float(price, default=None, min_val=0.0, max_val=99999.99) if price else None

@app.route('/composition/add', methods=['POST'])
def composition_add():
    name = sanitize_name(request.form.get('name'), max_length=MAX_LENGTHS['composition_name'])
    if not name:
        flash('Nazwa zestawu jest wymagana', 'danger')
        return redirect(url_for('compositions_list'))

    if Composition.query.filter(Composition.name.ilike(name)).first():
        flash(f'Zestaw "{name}" już istnieje', 'warning')
        return redirect(url_for('compositions_list'))

    composition = Composition(name=name)
    _composition_fields(composition)
    db.session.add(composition)
    if not commit_or_flash('Nie udało się dodać zestawu'):
        return redirect(url_for('compositions_list'))

    logger.info("Composition added: %s", composition.name)
    flash(f'Zestaw "{composition.name}" dodany!', 'success')
    return redirect(url_for('composition_view', id=composition.id))

@app.route('/composition/<int:id>/edit', methods=['POST'])
def composition_edit(id):
    composition = Composition.query.get_or_404(id)

    name = sanitize_name(request.form.get('name'), max_length=MAX_LENGTHS['composition_name'])
    if not name:
        flash('Nazwa zestawu jest wymagana', 'danger')
        return redirect(url_for('composition_view', id=id))

    if name.lower() != composition.name.lower():
        existing = Composition.query.filter(Composition.name.ilike(name), Composition.id != id).first()
        if existing:
            flash(f'Zestaw "{name}" już istnieje', 'warning')
            return redirect(url_for('composition_view', id=id))

    composition.name = name
    _composition_fields(composition)
    if commit_or_flash('Nie udało się zapisać zestawu'):
        flash(f'Zestaw "{composition.name}" zapisany!', 'success')
    return redirect(url_for('composition_view', id=id))

@app.route('/composition/<int:id>/delete', methods=['POST'])
def composition_delete(id):
    composition = Composition.query.get_or_404(id)
    name = composition.name

    # Sales keep their copied names; only the link is dropped
    SalesTransaction.query.filter_by(composition_id=id).update({'composition_id': None})
    SaleItem.query.filter_by(composition_id=id).update({'composition_id': None})

    db.session.delete(composition)
    if commit_or_flash('Nie udało się usunąć zestawu'):
        logger.info("Composition deleted: %s", name)
        flash(f'Zestaw "{name}" usunięty!', 'success')
    return redirect(url_for('compositions_list'))

@app.route('/composition/<int:id>/ingredient/add', methods=['POST'])
def composition_ingredient_add(id):
    composition = Composition.query.get_or_404(id)

    ingredient_id = safe_int(request.form.get('ingredient_id'), default=0)
    ingredient = db.session.get(Ingredient, ingredient_id) if ingredient_id else None
    if not ingredient:
        flash('Wybierz prawidłowy składnik', 'danger')
        return redirect(url_for('composition_view', id=id))

    default_unit = DROPS if ingredient.unit == ML else ingredient.unit
    unit = (request.form.get('unit') or default_unit).strip().lower()
    if unit not in VALID_UNITS or not are_units_compatible(unit, ingredient.unit):
        flash(f'Jednostka "{unit}" nie pasuje do składnika ({ingredient.unit})', 'danger')
        return redirect(url_for('composition_view', id=id))

    amount = safe_float(request.form.get('amount'), default=0.0, min_val=0.0, max_val=99999)
    if amount <= 0:
        flash('Ilość musi być większa od zera', 'danger')
        return redirect(url_for('composition_view', id=id))

    line = CompositionIngredient(
        composition_id=composition.id,
        ingredient_id=ingredient.id,
        amount=amount,
        unit=unit,
    )
    db.session.add(line)
    if commit_or_flash('Nie udało się dodać składnika do zestawu'):
        cost = calculate_ingredient_cost(amount, unit, ingredient.price, ingredient.category)
        flash(f'Dodano {format_unit_display(amount, unit)} {ingredient.name} ({format_money(cost)})', 'success')
    return redirect(url_for('composition_view', id=id))

@app.route('/composition/<int:composition_id>/ingredient/<int:ci_id>/delete', methods=['POST'])
def composition_ingredient_delete(composition_id, ci_id):
    line = CompositionIngredient.query.filter_by(id=ci_id, composition_id=composition_id).first_or_404()
    db.session.delete(line)
    commit_or_flash('Nie udało się usunąć składnika z zestawu')
    return redirect(url_for('composition_view', id=composition_id))

# ============================================
# ROUTES - SALES
# ============================================

@app.route('/sales')
def sales_list():
    transactions = SalesTransaction.query.options(
        joinedload(SalesTransaction.items)
    ).order_by(SalesTransaction.created_at.desc(), SalesTransaction.id.desc()).all()
    compositions = Composition.query.order_by(Composition.name).all()
    stats = sales_statistics(transactions)
    settings = CompanySettings.get()
    years = available_years(transactions)
    db.session.commit()
    return render_template('sales.html', transactions=transactions, compositions=compositions,
                           stats=stats, settings=settings, years=years,
                           max_lines=MAX_SALE_LINES)

def _sale_lines_from_form(form):
    """Build SaleLine tuples from the parallel composition_id/quantity/unit_price lists."""
    ids = form.getlist('composition_id')
    quantities = form.getlist('quantity')
    prices = form.getlist('unit_price')

    lines = []
    for index, raw_id in enumerate(ids):
        composition_id = safe_int(raw_id, default=0)
        if not composition_id:
            continue
        composition = db.session.get(Composition, composition_id)
        quantity = safe_int(quantities[index] if index < len(quantities) else None, default=1)
        raw_price = prices[index] if index < len(prices) else ''
        default_price = (composition.sale_price or 0.0) if composition else 0.0
        unit_price = safe_float(raw_price, default=default_price, max_val=99999.99)
        lines.append(SaleLine(composition, quantity, unit_price))
    return lines

@app.route('/sale/add', methods=['POST'])
def sale_add():
    lines = _sale_lines_from_form(request.form)
    buyer = {
        'name': sanitize_name(request.form.get('buyer_name'), max_length=MAX_LENGTHS['buyer_field']),
        'email': sanitize_name(request.form.get('buyer_email'), max_length=MAX_LENGTHS['buyer_field']),
        'phone': sanitize_name(request.form.get('buyer_phone'), max_length=MAX_LENGTHS['buyer_field']),
        'address': sanitize_text(request.form.get('buyer_address'), max_length=MAX_LENGTHS['buyer_field']),
        'tax_id': sanitize_tax_id(request.form.get('buyer_tax_id'), max_length=MAX_LENGTHS['tax_id']),
    }

    try:
        transaction = process_sale(lines, buyer=buyer, created_at=parse_date(request.form.get('sale_date')))
    except SaleError as e:
        db.session.rollback()
        flash(str(e), 'danger')
        return redirect(url_for('sales_list'))

    flash(f'Sprzedaż zapisana: {transaction.composition_name} ({format_money(transaction.total_price)})', 'success')
    return redirect(url_for('sales_list'))

@app.route('/sale/<int:id>/reverse', methods=['POST'])
def sale_reverse(id):
    transaction = SalesTransaction.query.get_or_404(id)
    try:
        reverse_transaction(transaction)
    except SaleError as e:
        db.session.rollback()
        flash(str(e), 'danger')
        return redirect(url_for('sales_list'))

    flash(f'Transakcja anulowana, korekta {format_correction_number(transaction.correction_invoice_number)}', 'success')
    return redirect(url_for('sales_list'))

# ============================================
# ROUTES - DOCUMENTS
# ============================================

@app.route('/sale/<int:id>/invoice')
def sale_invoice(id):
    transaction = SalesTransaction.query.get_or_404(id)
    company = CompanySettings.get()
    html = render_invoice(transaction, company,
                          is_original=request.args.get('copy') != '1',
                          vat_rate=app.config['VAT_RATE'])
    db.session.commit()
    return html

@app.route('/sale/<int:id>/correction')
def sale_correction(id):
    transaction = SalesTransaction.query.get_or_404(id)
    company = CompanySettings.get()
    try:
        html = render_correction_invoice(transaction, company,
                                         is_original=request.args.get('copy') != '1',
                                         vat_rate=app.config['VAT_RATE'])
    except DocumentError as e:
        db.session.rollback()
        flash(str(e), 'warning')
        return redirect(url_for('sales_list'))
    db.session.commit()
    return html

@app.route('/sale/<int:id>/receipt')
def sale_receipt(id):
    transaction = SalesTransaction.query.get_or_404(id)
    company = CompanySettings.get()
    html = render_receipt(transaction, company, is_original=request.args.get('copy') != '1')
    # Receipt number is assigned on first print
    if not commit_or_flash('Nie udało się nadać numeru paragonu'):
        return redirect(url_for('sales_list'))
    return html

@app.route('/reports/ues')
def report_ues():
    year = safe_int(request.args.get('year'), default=datetime.now().year, min_val=2000, max_val=2100)
    transactions = SalesTransaction.query.order_by(SalesTransaction.created_at).all()
    company = CompanySettings.get()
    try:
        html = render_ues_report(transactions, year, company=company)
    except DocumentError as e:
        db.session.rollback()
        flash(f'{e} ({year})', 'warning')
        return redirect(url_for('sales_list'))
    db.session.commit()
    return html

# ============================================
# ROUTES - MONTHLY COSTS
# ============================================

@app.route('/costs')
def costs_list():
    today = datetime.now()
    year = safe_int(request.args.get('year'), default=today.year, min_val=2000, max_val=2100)
    month = safe_int(request.args.get('month'), default=today.month, min_val=1, max_val=12)

    costs = MonthlyCost.query.filter_by(cost_year=year, cost_month=month).order_by(MonthlyCost.category, MonthlyCost.name).all()
    balance = month_balance(year, month)
    return render_template('costs.html', costs=costs, balance=balance, year=year, month=month,
                           categories=sorted(VALID_COST_CATEGORIES))

def _cost_fields(cost):
    """Validate and copy the cost form onto `cost`; returns an error message or None."""
    name = sanitize_name(request.form.get('name'), max_length=MAX_LENGTHS['cost_name'])
    if not name:
        return 'Nazwa kosztu jest wymagana'

    category = request.form.get('category', 'Koszty stałe')
    if category not in VALID_COST_CATEGORIES:
        return f'Nieprawidłowa kategoria: {category}'

    amount = safe_float(request.form.get('amount'), default=0.0, min_val=0.0, max_val=9999999.99)
    if amount <= 0:
        return 'Kwota musi być większa od zera'

    cost.name = name
    cost.category = category
    cost.amount = amount
    cost.description = sanitize_text(request.form.get('description'), max_length=MAX_LENGTHS['description']) or None
    cost.cost_month = safe_int(request.form.get('cost_month'), default=datetime.now().month, min_val=1, max_val=12)
    cost.cost_year = safe_int(request.form.get('cost_year'), default=datetime.now().year, min_val=2000, max_val=2100)
    return None

@app.route('/cost/add', methods=['POST'])
def cost_add():
    cost = MonthlyCost()
    error = _cost_fields(cost)
    if error:
        flash(error, 'danger')
        return redirect(url_for('costs_list'))

    db.session.add(cost)
    if commit_or_flash('Nie udało się dodać kosztu'):
        flash(f'Koszt "{cost.name}" dodany!', 'success')
    return redirect(url_for('costs_list', year=cost.cost_year, month=cost.cost_month))

@app.route('/cost/<int:id>/edit', methods=['POST'])
def cost_edit(id):
    cost = MonthlyCost.query.get_or_404(id)
    error = _cost_fields(cost)
    if error:
        db.session.rollback()
        flash(error, 'danger')
    elif commit_or_flash('Nie udało się zapisać kosztu'):
        flash(f'Koszt "{cost.name}" zapisany!', 'success')
    return redirect(url_for('costs_list', year=cost.cost_year, month=cost.cost_month))

@app.route('/cost/<int:id>/delete', methods=['POST'])
def cost_delete(id):
    cost = MonthlyCost.query.get_or_404(id)
    year, month, name = cost.cost_year, cost.cost_month, cost.name
    db.session.delete(cost)
    if commit_or_flash('Nie udało się usunąć kosztu'):
        flash(f'Koszt "{name}" usunięty!', 'success')
    return redirect(url_for('costs_list', year=year, month=month))

# ============================================
# ROUTES - SHOPPING LIST
# ============================================

@app.route('/shopping', methods=['GET', 'POST'])
def shopping_list():
    compositions = Composition.query.options(
        joinedload(Composition.ingredients).joinedload(CompositionIngredient.ingredient)
    ).order_by(Composition.name).all()

    quantities = {}
    if request.method == 'POST':
        for composition in compositions:
            quantities[composition.id] = safe_int(request.form.get(f'qty_{composition.id}'), default=0, min_val=0, max_val=1000)

    items, total_cost, missing_cost = plan_shopping(compositions, quantities)
    return render_template('shopping.html', compositions=compositions, quantities=quantities,
                           items=items, total_cost=total_cost, missing_cost=missing_cost)

# ============================================
# ROUTES - PRODUCTION CALCULATOR
# ============================================

@app.route('/calculator')
def calculator():
    compositions = Composition.query.options(
        joinedload(Composition.ingredients).joinedload(CompositionIngredient.ingredient)
    ).order_by(Composition.name).all()
    overview = production_overview(compositions)
    return render_template('calculator.html', overview=overview)

# ============================================
# ROUTES - SETTINGS
# ============================================

COMPANY_FIELDS = ('company_name', 'company_address', 'company_phone', 'company_email',
                  'company_website', 'bank_name', 'bank_account')

@app.route('/settings', methods=['GET', 'POST'])
def settings():
    company = CompanySettings.get()
    thresholds = WarningThreshold.get()

    if request.method == 'POST':
        for field in COMPANY_FIELDS:
            setattr(company, field, sanitize_text(request.form.get(field), max_length=200) or None)
        company.company_name = company.company_name or 'Nazwa firmy'
        company.company_tax_id = sanitize_tax_id(request.form.get('company_tax_id')) or None
        company.is_vat_registered = request.form.get('is_vat_registered') == '1'
        company.show_ues_generator = request.form.get('show_ues_generator') == '1'

        thresholds.herbs_threshold = safe_float(request.form.get('herbs_threshold'), default=0.0, min_val=0.0, max_val=999999)
        thresholds.oils_threshold = safe_float(request.form.get('oils_threshold'), default=0.0, min_val=0.0, max_val=999999)
        thresholds.others_threshold = safe_float(request.form.get('others_threshold'), default=0.0, min_val=0.0, max_val=999999)

        if commit_or_flash('Nie udało się zapisać ustawień'):
            logger.info("Settings updated (VAT registered: %s)", company.is_vat_registered)
            flash('Ustawienia zapisane!', 'success')
        return redirect(url_for('settings'))

    db.session.commit()
    return render_template('settings.html', company=company, thresholds=thresholds)


# ============================================
# INITIALIZE DATABASE
# ============================================

def seed_compositions():
    """Create the starter compositions (and their ingredients) in an empty database."""
    if Composition.query.first():
        return 0

    created = 0
    for data in DEFAULT_COMPOSITIONS:
        composition = Composition(name=data['name'], description=data['description'], color=data['color'])
        db.session.add(composition)
        lines = [(name, amount, G, 'weight') for name, amount in data['herbs'].items()]
        lines += [(name, amount, DROPS, 'oil') for name, amount in data['oils'].items()]
        for name, amount, unit, category in lines:
            ingredient = Ingredient.query.filter_by(name=name).first()
            if ingredient is None:
                ingredient = Ingredient(name=name, category=category, unit=ML if unit == DROPS else unit)
                db.session.add(ingredient)
                db.session.flush()
            composition.ingredients.append(CompositionIngredient(
                ingredient_id=ingredient.id, amount=amount, unit=unit,
            ))
        created += 1
    return created


def init_db():
    with app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()

        CompanySettings.get()
        if WarningThreshold.query.first() is None:
            defaults = app.config['LOW_STOCK_DEFAULTS']
            db.session.add(WarningThreshold(
                herbs_threshold=defaults['herbs'],
                oils_threshold=defaults['oils'],
                others_threshold=defaults['others'],
            ))

        if app.config.get('SEED_COMPOSITIONS'):
            created = seed_compositions()
            if created:
                logger.info("Seeded %d starter compositions", created)

        db.session.commit()


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
