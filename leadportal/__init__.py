# leadportal/__init__.py
from flask import Flask
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from config import config

login = LoginManager()
csrf = CSRFProtect()

login.login_view = 'auth.login'
login.login_message_category = 'warning'

@login.user_loader
def load_user(id):
    from leadportal.models.user import load_portal_user
    return load_portal_user(id)

def create_app(config_name='default', backend=None):
    """
    Builds the application. ``backend`` provides ``connect(session_store)``;
    when omitted a Supabase backend is created from the configuration.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name])

    # Initialize app-specific configuration (logging, etc.)
    config[config_name].init_app(app)

    login.init_app(app)
    csrf.init_app(app)

    from .services import init_backend
    init_backend(app, backend)

    # --- Register Blueprints ---
    from .auth import bp as auth_bp
    app.register_blueprint(auth_bp)

    from .main import bp as main_bp
    app.register_blueprint(main_bp)

    from .admin import bp as admin_bp
    app.register_blueprint(admin_bp)

    # --- Register Template Filters for Time Formatting ---
    from datetime import datetime
    import pytz

    @app.template_filter('localtime')
    def localtime_filter(dt, format='%b %d, %Y, %I:%M %p'):
        """Convert a UTC datetime to the configured timezone and format it."""
        if dt is None:
            return 'N/A'
        if not isinstance(dt, datetime):
            return str(dt)
        tz_name = app.config.get('TIMEZONE', 'UTC')
        try:
            local_tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            app.logger.warning('Unknown TIMEZONE %s, using UTC', tz_name)
            local_tz = pytz.UTC

        # If datetime is naive, assume it's UTC
        if dt.tzinfo is None:
            dt = pytz.UTC.localize(dt)
        return dt.astimezone(local_tz).strftime(format)

    # --- Register Error Handlers ---
    from flask import render_template
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        return render_template('errors/500.html'), 500

    return app
