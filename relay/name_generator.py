import re
from typing import Iterator

# Netlify subdomains are DNS labels; leave room for a "-NNN" suffix
NAME_MAX_LENGTH = 48
FALLBACK_NAME = 'site'

_INVALID_CHARS = re.compile(r'[^a-z0-9-]')
_HYPHEN_RUNS = re.compile(r'-{2,}')


def normalize_site_name(name: str, max_length: int = NAME_MAX_LENGTH) -> str:
    """Turn arbitrary text into a valid site name like 'portfolio-jane-doe'.

    Lowercases, maps anything outside [a-z0-9-] to '-', collapses hyphen
    runs, trims edge hyphens and truncates. Idempotent.
    """
    slug = _INVALID_CHARS.sub('-', (name or '').lower())
    slug = _HYPHEN_RUNS.sub('-', slug).strip('-')
    slug = slug[:max_length].rstrip('-')
    return slug or FALLBACK_NAME[:max_length]


def base_site_name(username: str, prefix: str = 'portfolio', max_length: int = NAME_MAX_LENGTH) -> str:
    """Base name for a tenant, e.g. 'portfolio-jane'."""
    raw = f"{prefix}-{username}" if prefix else username
    return normalize_site_name(raw, max_length=max_length)


def candidate_names(base: str) -> Iterator[str]:
    """Yield base, base-1, base-2, ... forever."""
    yield base
    suffix = 1
    while True:
        yield f"{base}-{suffix}"
        suffix += 1
