import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

from utils.errors import ConfigurationError

load_dotenv()

REQUIRED_DB_VARS = ('DB_HOST', 'DB_PORT', 'DB_NAME', 'DB_USER', 'DB_PASSWORD')

# Vite and CRA dev servers
DEV_ORIGINS = ['http://localhost:5173', 'http://localhost:3000']


def missing_database_vars(environ=None):
    """Return the required DB_* variables that are unset or empty"""
    environ = os.environ if environ is None else environ
    return [name for name in REQUIRED_DB_VARS if not environ.get(name)]


def build_database_uri(environ=None, sslmode=None):
    """Assemble the PostgreSQL URI from DB_* variables"""
    environ = os.environ if environ is None else environ
    missing = missing_database_vars(environ)
    if missing:
        return None
    uri = 'postgresql://{user}:{password}@{host}:{port}/{name}'.format(
        user=quote_plus(environ['DB_USER']),
        password=quote_plus(environ['DB_PASSWORD']),
        host=environ['DB_HOST'],
        port=environ['DB_PORT'],
        name=environ['DB_NAME'],
    )
    if sslmode:
        uri += f'?sslmode={sslmode}'
    return uri


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')

    # Database Settings (no defaults for credentials)
    SQLALCHEMY_DATABASE_URI = build_database_uri()
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Request Settings
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB

    # CORS Settings
    CORS_RESTRICTED = False
    FRONTEND_URL = os.environ.get('FRONTEND_URL')

    # Client Settings
    API_BASE_URL = os.environ.get('API_BASE_URL', '')
    API_TIMEOUT = float(os.environ.get('API_TIMEOUT', '10'))
    CACHE_DIR = os.environ.get('CACHE_DIR', '.cache')

    @classmethod
    def validate(cls):
        """Abort startup when database settings are incomplete"""
        missing = missing_database_vars()
        if missing:
            raise ConfigurationError(
                'Missing required environment variables: ' + ', '.join(missing),
                missing=missing)

    @classmethod
    def allowed_origins(cls):
        if cls.CORS_RESTRICTED:
            return [cls.FRONTEND_URL] if cls.FRONTEND_URL else []
        return list(DEV_ORIGINS)


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    CORS_RESTRICTED = True
    SQLALCHEMY_DATABASE_URI = build_database_uri(sslmode=os.environ.get('DB_SSLMODE', 'require'))


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # In-memory SQLite rejects pool_size on its StaticPool
    SQLALCHEMY_ENGINE_OPTIONS = {}
    API_BASE_URL = 'http://localhost/api'

    @classmethod
    def validate(cls):
        return None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, defaulting to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
