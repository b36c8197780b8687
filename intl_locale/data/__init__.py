"""Locale registry data provider."""

from .provider import FIXTURES_DIR, LocaleDataProvider, get_provider

__all__ = ["FIXTURES_DIR", "LocaleDataProvider", "get_provider"]
