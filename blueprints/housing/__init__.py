from flask import Blueprint

housing_bp = Blueprint('housing', __name__, template_folder='templates')

from . import routes
