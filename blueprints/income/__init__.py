from flask import Blueprint

income_bp = Blueprint('income', __name__, template_folder='templates')

from . import routes
