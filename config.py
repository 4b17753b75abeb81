import os
from dotenv import load_dotenv

load_dotenv()

REQUIRED_ENV_VARS = ('UPSTREAM_BASE_URL',)


def validate_required_env_vars():
    """
    Check that every required environment variable is set.

    Raises:
        ValueError: Listing every missing variable.
    """
    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}"
        )


def _float_env(name, default):
    value = os.getenv(name)
    return float(value) if value else default


def _int_env(name, default):
    value = os.getenv(name)
    return int(value) if value else default


class Config:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY', os.urandom(24))

    # Upstream base addresses
    UPSTREAM_BASE_URL = os.getenv('UPSTREAM_BASE_URL')
    SKIP_SEGMENTS_BASE_URL = os.getenv(
        'SKIP_SEGMENTS_BASE_URL', 'https://sponsor.ajay.app'
    )
    TRENDING_BASE_URL = os.getenv('TRENDING_BASE_URL')
    LANGUAGE_TRENDING_BASE_URL = os.getenv('LANGUAGE_TRENDING_BASE_URL')
    UPSTREAM_USER_AGENT = os.getenv('UPSTREAM_USER_AGENT', 'Tunegate/1.0')

    # Timeouts (seconds)
    UPSTREAM_TIMEOUT = _float_env('UPSTREAM_TIMEOUT', 30.0)
    CHARTS_TIMEOUT = _float_env('CHARTS_TIMEOUT', 15.0)

    # Cache-hint windows (seconds)
    CACHE_HINT_TTL = _int_env('CACHE_HINT_TTL', 600)
    MOOD_CATEGORIES_TTL = _int_env('MOOD_CATEGORIES_TTL', 1800)
    HIGHLIGHT_CACHE_TTL = _int_env('HIGHLIGHT_CACHE_TTL', 3600)
    STALE_WHILE_REVALIDATE = _int_env('STALE_WHILE_REVALIDATE', 60)

    # Application settings
    DEBUG = False
    TESTING = False
    PORT = int(os.getenv('PORT', 8000))
    HOST = os.getenv('HOST', '0.0.0.0')


class ProdConfig(Config):
    """Production configuration."""
    FLASK_ENV = 'production'


class DevConfig(Config):
    """Development configuration."""
    FLASK_ENV = 'development'
    DEBUG = True
    PORT = 8000
    HOST = 'localhost'


class TestConfig(Config):
    """Testing configuration."""
    FLASK_ENV = 'testing'
    TESTING = True
    DEBUG = True
    UPSTREAM_BASE_URL = 'http://upstream.test'
    TRENDING_BASE_URL = 'http://trending.test'
    LANGUAGE_TRENDING_BASE_URL = 'http://language-trending.test'
    SKIP_SEGMENTS_BASE_URL = 'http://skip-segments.test'


# Dictionary for easy config selection
config = {
    'development': DevConfig,
    'production': ProdConfig,
    'testing': TestConfig,
    'default': DevConfig
}
