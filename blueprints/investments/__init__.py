from flask import Blueprint

investments_bp = Blueprint('investments', __name__, template_folder='templates')

from . import routes, allocations, glide_paths
