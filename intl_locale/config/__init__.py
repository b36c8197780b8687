"""intl_locale centralized configuration for runtime settings.

Provides typed settings for locale negotiation defaults, caching and the
embedding surfaces. All settings are backed by environment variables
following the IL_* naming convention.

Example:
    >>> from intl_locale.config import settings
    >>> settings.default_locale
    'en'
    >>> settings.locale_matcher
    'best fit'

Environment Variables:
    IL_DEFAULT_LOCALE: Locale used when no requested locale is available (default: en)
    IL_LOCALE_MATCHER: Matcher used when callers do not pick one (default: best fit)
    IL_CANONICAL_CACHE_SIZE: Entries kept in the canonicalization cache, 0 disables (default: 1024)
    IL_DATA_DIR: Directory holding mappings.json/locales.json (default: bundled fixtures)
    IL_API_PORT: Port used by the `serve` command (default: 8000)
    IL_LOG_DIR: Directory for JSON-lines logs (default: unset, console only)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env(name: str, default: str) -> str:
    """Get environment variable with IL_* prefix validation."""
    if not name.startswith("IL_"):
        raise ValueError(f"Only IL_* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_int(name: str, default: int) -> int:
    """Get environment variable as integer."""
    raw = _env(name, str(default))
    try:
        return int(raw)
    except Exception:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, str(default))
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Centralized runtime settings for intl_locale.

    All values can be overridden via environment variables.
    This dataclass is frozen to prevent accidental mutation at runtime.
    For testing, override environment variables and reload this module,
    or construct a Settings instance directly.
    """

    # Negotiation defaults
    default_locale: str = _env("IL_DEFAULT_LOCALE", "en")
    locale_matcher: str = _env("IL_LOCALE_MATCHER", "best fit")

    # Canonicalization cache (0 disables)
    canonical_cache_size: int = _env_int("IL_CANONICAL_CACHE_SIZE", 1024)

    # Locale registry data
    data_dir: str = _env("IL_DATA_DIR", "")

    # Embedding surfaces
    api_port: int = _env_int("IL_API_PORT", 8000)
    log_dir: str = _env("IL_LOG_DIR", "")
    log_console: bool = _env_bool("IL_LOG_CONSOLE", False)


# Module-level instance for convenient access
settings = Settings()

__all__ = ["settings", "Settings"]
