# leadportal/main/__init__.py

from flask import Blueprint

# Create a Blueprint instance named 'main'
bp = Blueprint('main', __name__, template_folder='templates')

# Import the routes to associate them with this blueprint
from . import routes
