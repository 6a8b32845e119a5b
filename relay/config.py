import os
from dataclasses import dataclass
from typing import Mapping, Tuple


_TRUTHY = ('1', 'true', 'yes', 'on')

# Room for a "-NNN" retry suffix inside a 63 character DNS label
SITE_NAME_MIN_LENGTH = 4
SITE_NAME_LIMIT = 59


def parse_flag(value) -> bool:
    """Strict boolean parsing for env and request values.

    Only real booleans and the strings 1/true/yes/on count as true.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def _env_flag(name: str, default: str) -> bool:
    return parse_flag(os.getenv(name, default))


class Config:
    DEBUG = False
    TESTING = False

    # Request bodies (JSON or multipart) are capped at 5 MB
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', str(5 * 1024 * 1024)))
    CORS_ALLOW_ORIGIN = os.getenv('CORS_ALLOW_ORIGIN', '*')

    # Netlify
    NETLIFY_TOKEN = os.getenv('NETLIFY_TOKEN', '')
    NETLIFY_API_URL = os.getenv('NETLIFY_API_URL', 'https://api.netlify.com/api/v1')
    NETLIFY_CONNECT_TIMEOUT = float(os.getenv('NETLIFY_CONNECT_TIMEOUT', '10'))
    NETLIFY_READ_TIMEOUT = float(os.getenv('NETLIFY_READ_TIMEOUT', '60'))

    # Site naming
    SITE_NAME_PREFIX = os.getenv('SITE_NAME_PREFIX', 'portfolio')
    SITE_NAME_MAX_LENGTH = int(os.getenv('SITE_NAME_MAX_LENGTH', '48'))
    MAX_NAME_ATTEMPTS = int(os.getenv('MAX_NAME_ATTEMPTS', '10'))

    # Behaviour toggles
    CLEANUP_ORPHANED_SITES = _env_flag('CLEANUP_ORPHANED_SITES', 'true')
    UNESCAPE_HTML_DEFAULT = _env_flag('UNESCAPE_HTML_DEFAULT', 'false')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    NETLIFY_TOKEN = 'test-token'
    NETLIFY_API_URL = 'https://netlify.test/api/v1'
    MAX_NAME_ATTEMPTS = 5
    CLEANUP_ORPHANED_SITES = True
    UNESCAPE_HTML_DEFAULT = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


@dataclass(frozen=True)
class RelaySettings:
    """Settings threaded through the deploy pipeline.

    Built once from the Flask config at startup so that nothing downstream
    reads the environment on its own.
    """
    netlify_token: str
    netlify_api_url: str = 'https://api.netlify.com/api/v1'
    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    site_name_prefix: str = 'portfolio'
    site_name_max_length: int = 48
    max_name_attempts: int = 10
    cleanup_orphaned_sites: bool = True
    unescape_html_default: bool = False

    @property
    def timeout(self) -> Tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)

    @property
    def has_token(self) -> bool:
        return bool(self.netlify_token)

    @classmethod
    def from_mapping(cls, cfg: Mapping) -> "RelaySettings":
        max_length = int(cfg.get('SITE_NAME_MAX_LENGTH', cls.site_name_max_length))
        if not SITE_NAME_MIN_LENGTH <= max_length <= SITE_NAME_LIMIT:
            raise ValueError(
                f"SITE_NAME_MAX_LENGTH must be between {SITE_NAME_MIN_LENGTH} and {SITE_NAME_LIMIT}, got {max_length}"
            )
        return cls(
            netlify_token=cfg.get('NETLIFY_TOKEN', '') or '',
            netlify_api_url=cfg.get('NETLIFY_API_URL', cls.netlify_api_url).rstrip('/'),
            connect_timeout=float(cfg.get('NETLIFY_CONNECT_TIMEOUT', cls.connect_timeout)),
            read_timeout=float(cfg.get('NETLIFY_READ_TIMEOUT', cls.read_timeout)),
            site_name_prefix=cfg.get('SITE_NAME_PREFIX', cls.site_name_prefix),
            site_name_max_length=max_length,
            max_name_attempts=int(cfg.get('MAX_NAME_ATTEMPTS', cls.max_name_attempts)),
            cleanup_orphaned_sites=parse_flag(cfg.get('CLEANUP_ORPHANED_SITES', cls.cleanup_orphaned_sites)),
            unescape_html_default=parse_flag(cfg.get('UNESCAPE_HTML_DEFAULT', cls.unescape_html_default)),
        )
