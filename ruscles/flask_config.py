import os
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value):
    return [item.strip().lower() for item in (value or '').split(',') if item.strip()]


class Config:
    # Database Configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///ruscles.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Database connection pool settings
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,  # Recycle connections every 5 minutes
    }

    ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')
    APP_VERSION = os.getenv('APP_VERSION') or os.getenv('GIT_COMMIT_SHA', 'local')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # CORS Configuration
    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000')
    CORS_MAX_AGE = int(os.getenv('CORS_MAX_AGE', '3600'))

    # JWT Configuration
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRY_DAYS = int(os.getenv('JWT_EXPIRY_DAYS', '30'))

    # Cookie Configuration
    COOKIE_SECURE = os.getenv('COOKIE_SECURE', 'False').lower() == 'true'
    COOKIE_MAX_AGE = int(os.getenv('COOKIE_MAX_AGE', str(30 * 24 * 60 * 60)))
    COOKIE_HTTPONLY = os.getenv('COOKIE_HTTPONLY', 'True').lower() == 'true'
    COOKIE_SAMESITE = os.getenv('COOKIE_SAMESITE', 'Lax')

    # Admin access
    ALLOWED_ADMIN_EMAILS = _split_csv(os.getenv('ALLOWED_ADMIN_EMAILS'))
    ALLOWED_ADMIN_DOMAINS = _split_csv(os.getenv('ALLOWED_ADMIN_DOMAINS'))
    MIN_PASSWORD_LENGTH = int(os.getenv('MIN_PASSWORD_LENGTH', '6'))

    # Google sign-in
    GOOGLE_CLIENT_ID = os.getenv('GOOGLE_CLIENT_ID')
    GOOGLE_TOKENINFO_URL = os.getenv('GOOGLE_TOKENINFO_URL', 'https://oauth2.googleapis.com/tokeninfo')
    GOOGLE_TIMEOUT = int(os.getenv('GOOGLE_TIMEOUT', '10'))

    # Route guard
    ADMIN_PATH_PREFIXES = ['/admin']
    SIGNIN_PATH = '/auth/signin'
    AUTH_ERROR_PATH = '/auth/error'

    # Statistics windows are computed in this timezone
    BUSINESS_TIMEZONE = os.getenv('BUSINESS_TIMEZONE', 'UTC')

    # Seed data
    SEED_ADMIN_EMAIL = os.getenv('SEED_ADMIN_EMAIL', 'admin@ruscles.com')
    SEED_COMPANY_NAME = os.getenv('SEED_COMPANY_NAME', 'Ruscles')

    # Server Configuration
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    FLASK_HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.getenv('FLASK_PORT', '5001'))


class DevelopmentConfig(Config):
    ENVIRONMENT = 'development'
    FLASK_DEBUG = True


class TestingConfig(Config):
    ENVIRONMENT = 'testing'
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ALLOWED_ADMIN_EMAILS = ['owner@ruscles.com', 'admin@ruscles.com']
    ALLOWED_ADMIN_DOMAINS = ['ruscles-staff.com']
    GOOGLE_CLIENT_ID = 'test-client-id.apps.googleusercontent.com'
    BCRYPT_LOG_ROUNDS = 4


class ProductionConfig(Config):
    ENVIRONMENT = 'production'
    COOKIE_SECURE = True
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_timeout': 20,
        'pool_size': 10,
        'max_overflow': 10,
    }


_CONFIGS = {
    'development': DevelopmentConfig,
    'dev': DevelopmentConfig,
    'testing': TestingConfig,
    'test': TestingConfig,
    'production': ProductionConfig,
    'prod': ProductionConfig,
}


def get_config(name=None):
    """Resolve a config class by environment name (defaults to ENVIRONMENT)."""
    name = (name or os.getenv('ENVIRONMENT') or os.getenv('FLASK_ENV') or 'development').lower()
    return _CONFIGS.get(name, DevelopmentConfig)
