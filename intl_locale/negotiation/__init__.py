"""Locale negotiation: matching requested locales against available ones.

This module provides the Lookup and Best Fit matchers, locale resolution with
Unicode extension-key negotiation, and the supported/prioritized locale
list operations.
"""

from .matchers import (
    BestFitMatcher,
    LookupMatcher,
    available_matchers,
    rank_candidates,
    register_matcher,
    select_matcher,
    shared_subtags,
)
from .resolver import prioritize_available_locales, resolve_locale, supported_locales
from .types import (
    ExtensionKeyData,
    LocaleData,
    LocaleMatcher,
    MatchResult,
    ResolutionResult,
)

__all__ = [
    "BestFitMatcher",
    "LookupMatcher",
    "available_matchers",
    "rank_candidates",
    "register_matcher",
    "select_matcher",
    "shared_subtags",
    "prioritize_available_locales",
    "resolve_locale",
    "supported_locales",
    "ExtensionKeyData",
    "LocaleData",
    "LocaleMatcher",
    "MatchResult",
    "ResolutionResult",
]
