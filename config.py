import os
from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    """Base configuration class."""
    # SECRET_KEY must be set via environment variable in production
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Hosted backend (Supabase) credentials
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY')

    # Remote tables
    PROFILE_TABLE = os.environ.get('PROFILE_TABLE') or 'users'
    SUBMISSIONS_TABLE = os.environ.get('SUBMISSIONS_TABLE') or 'contact_submissions'

    # Navigation targets
    LANDING_PATH = '/'
    LOGIN_PATH = '/login'
    SIGNUP_REDIRECT_DELAY = 2  # seconds before the post-signup redirect

    TIMEZONE = os.environ.get('TIMEZONE') or 'UTC'

    # Logging
    LOG_TO_STDOUT = os.environ.get('LOG_TO_STDOUT')

    @staticmethod
    def init_app(app):
        """Initialize application-specific configuration."""
        import logging
        from logging import StreamHandler

        if not app.debug and not app.testing:
            formatter = logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
            )
            if app.config.get('LOG_TO_STDOUT'):
                handler = StreamHandler()
            else:
                if not os.path.exists('logs'):
                    os.mkdir('logs')
                handler = logging.FileHandler('logs/leadportal.log')
            handler.setFormatter(formatter)
            handler.setLevel(logging.INFO)
            app.logger.addHandler(handler)
            app.logger.setLevel(logging.INFO)
            app.logger.info('Lead portal startup')

class DevelopmentConfig(Config):
    DEBUG = True

class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    SECRET_KEY = 'testing-secret-key'
    SUPABASE_URL = 'http://localhost:54321'
    SUPABASE_ANON_KEY = 'testing-anon-key'

class ProductionConfig(Config):
    DEBUG = False

    @staticmethod
    def init_app(app):
        """Initialize production configuration with validation."""
        Config.init_app(app)  # Call parent init_app for logging

        # Validate required environment variables
        if not os.environ.get('SECRET_KEY'):
            raise ValueError("SECRET_KEY environment variable must be set in production!")

        if not os.environ.get('SUPABASE_URL') or not os.environ.get('SUPABASE_ANON_KEY'):
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in production!")

        app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
        app.config['SUPABASE_URL'] = os.environ.get('SUPABASE_URL')
        app.config['SUPABASE_ANON_KEY'] = os.environ.get('SUPABASE_ANON_KEY')

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
