"""
ShowtimeScout Configuration Module

This module manages application configuration with support for:
- Local development (.env file in the project directory)
- Environment variable overrides
- An explicit CrawlConfig handed to the crawl-service client
"""

import os
from dataclasses import dataclass

# ============================================================================
# EARLY .ENV LOADING (must happen before any os.getenv() calls)
# ============================================================================

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(SCRIPT_DIR)


def load_env_file(env_file='.env'):
    """
    Load environment variables from a .env file in PROJECT_DIR.
    Existing environment variables are never overridden.

    Returns:
        bool: True if the file was read
    """
    env_path = os.path.join(PROJECT_DIR, env_file)

    if not os.path.exists(env_path):
        return False

    try:
        with open(env_path, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")
                    if key and not os.getenv(key):
                        os.environ[key] = value
        return True
    except OSError as e:
        print(f"Warning: Failed to load {env_file}: {e}")
        return False


load_env_file()

# ============================================================================
# DEPLOYMENT ENVIRONMENT DETECTION
# ============================================================================

def is_production():
    """
    Check if running in production mode.

    Returns:
        bool: True if production, False if development
    """
    env = os.getenv('ENVIRONMENT', '').lower()
    return env in ('production', 'prod')


def is_development():
    return not is_production()


# ============================================================================
# APPLICATION SETTINGS
# ============================================================================

APP_NAME = os.getenv('APP_NAME', 'ShowtimeScout')
APP_VERSION = os.getenv('APP_VERSION', '1.0.0')
APP_ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '8000'))

DEBUG = os.getenv('DEBUG', 'false').lower() in ('true', '1', 'yes')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO' if is_production() else 'DEBUG')

# ============================================================================
# CRAWL SERVICE (Firecrawl)
# ============================================================================

FIRECRAWL_API_KEY = os.getenv('FIRECRAWL_API_KEY', '')
FIRECRAWL_API_URL = os.getenv('FIRECRAWL_API_URL', 'https://api.firecrawl.dev')
FIRECRAWL_PAGE_LIMIT = int(os.getenv('FIRECRAWL_PAGE_LIMIT', '10'))
FIRECRAWL_MAX_POLL_ATTEMPTS = int(os.getenv('FIRECRAWL_MAX_POLL_ATTEMPTS', '60'))
FIRECRAWL_POLL_INTERVAL_SECONDS = float(os.getenv('FIRECRAWL_POLL_INTERVAL_SECONDS', '3.0'))
FIRECRAWL_REQUEST_TIMEOUT = float(os.getenv('FIRECRAWL_REQUEST_TIMEOUT', '30'))


@dataclass(frozen=True)
class CrawlConfig:
    """
    Everything the crawl client needs. The client reads nothing else, so
    tests and callers can point it anywhere without touching the environment.
    """
    api_key: str
    base_url: str = 'https://api.firecrawl.dev'
    page_limit: int = 10
    max_attempts: int = 60
    poll_interval: float = 3.0
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls):
        """Build a CrawlConfig from the FIRECRAWL_* environment variables."""
        return cls(
            api_key=os.getenv('FIRECRAWL_API_KEY', FIRECRAWL_API_KEY),
            base_url=os.getenv('FIRECRAWL_API_URL', FIRECRAWL_API_URL).rstrip('/'),
            page_limit=int(os.getenv('FIRECRAWL_PAGE_LIMIT', str(FIRECRAWL_PAGE_LIMIT))),
            max_attempts=int(os.getenv('FIRECRAWL_MAX_POLL_ATTEMPTS', str(FIRECRAWL_MAX_POLL_ATTEMPTS))),
            poll_interval=float(os.getenv('FIRECRAWL_POLL_INTERVAL_SECONDS', str(FIRECRAWL_POLL_INTERVAL_SECONDS))),
            request_timeout=float(os.getenv('FIRECRAWL_REQUEST_TIMEOUT', str(FIRECRAWL_REQUEST_TIMEOUT))),
        )


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def mask_secret(value):
    if not value:
        return 'not set'
    if len(value) <= 6:
        return '***'
    return f"{value[:3]}...{value[-2:]}"


def get_config_summary(crawl_config=None):
    """
    Get a summary of current configuration (safe for logging).
    Masks sensitive values.

    Returns:
        dict: Configuration summary
    """
    crawl_config = crawl_config or CrawlConfig.from_env()
    return {
        'app': APP_NAME,
        'version': APP_VERSION,
        'environment': APP_ENVIRONMENT,
        'debug': DEBUG,
        'host': HOST,
        'port': PORT,
        'crawl_api_url': crawl_config.base_url,
        'crawl_api_key': mask_secret(crawl_config.api_key),
        'crawl_max_attempts': crawl_config.max_attempts,
        'crawl_poll_interval': crawl_config.poll_interval,
    }


def validate_configuration(crawl_config=None):
    """
    Validate critical configuration settings.
    Raises ValueError if required settings are missing.
    """
    crawl_config = crawl_config or CrawlConfig.from_env()
    errors = []

    if is_production() and not crawl_config.api_key:
        errors.append("FIRECRAWL_API_KEY is required in production")

    if crawl_config.page_limit < 1:
        errors.append("FIRECRAWL_PAGE_LIMIT must be at least 1")
    if crawl_config.max_attempts < 1:
        errors.append("FIRECRAWL_MAX_POLL_ATTEMPTS must be at least 1")
    if crawl_config.poll_interval < 0:
        errors.append("FIRECRAWL_POLL_INTERVAL_SECONDS cannot be negative")
    if crawl_config.request_timeout <= 0:
        errors.append("FIRECRAWL_REQUEST_TIMEOUT must be positive")

    if errors:
        raise ValueError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))

    return True
