from flask import render_template
from . import expenses_bp


@expenses_bp.route('/expenses')
def index():
    """Expense review (CSV import not built yet)"""
    return render_template('expenses/index.html')


@expenses_bp.route('/expenses/categories')
def categories():
    return render_template('expenses/categories.html')
