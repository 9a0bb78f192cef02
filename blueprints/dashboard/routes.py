from flask import render_template
from . import dashboard_bp
from services.account_service import AccountService
from services.income_service import IncomeService
from services.property_service import PropertyService


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
def index():
    """Household overview"""
    accounts = AccountService.get_accounts()
    properties = PropertyService.get_properties()
    sources = IncomeService.get_income_sources()

    housing = PropertyService.get_housing_totals(properties)
    investments_total = AccountService.get_total_balance(accounts)

    return render_template('dashboard/index.html',
                         investments_total=investments_total,
                         account_count=len(accounts),
                         housing_equity=housing['total_equity'],
                         property_count=len(properties),
                         annual_income=IncomeService.get_total_annual_income(sources),
                         net_worth=investments_total + housing['total_equity'])


@dashboard_bp.route('/simulation')
def simulation():
    """Monte Carlo simulation placeholder"""
    return render_template('dashboard/simulation.html')
