# leadportal/main/routes.py

from flask import render_template
from flask_login import current_user
from leadportal.main import bp


@bp.route('/')
@bp.route('/welcome')
def index():
    return render_template('welcome.html', user=current_user)
