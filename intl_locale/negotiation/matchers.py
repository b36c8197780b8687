"""Locale matchers: Lookup (RFC 4647 / ECMA-402) and Best Fit.

Both matchers implement the LocaleMatcher protocol and are selected once at
the call boundary through ``select_matcher``.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Optional, Sequence

from intl_locale.tags.extensions import find_unicode_extension, strip_unicode_extension
from intl_locale.tags.grammar import truncate_tag

from .types import AvailableLocales, LocaleMatcher, MatchResult

logger = logging.getLogger(__name__)


def _primary_language(tag: str) -> Optional[str]:
    """Primary language subtag, or None for private use and irregular "i-" tags."""
    language = tag.split("-", 1)[0].lower()
    return language if len(language) > 1 else None


def shared_subtags(tag: str, candidate: str) -> int:
    """Count leading subtags ``tag`` and ``candidate`` share, case-insensitively."""
    count = 0
    for a, b in zip(tag.lower().split("-"), candidate.lower().split("-")):
        if a != b:
            break
        count += 1
    return count


def rank_candidates(available: Iterable[str], tag: str) -> list[tuple[int, str]]:
    """Available locales with the same primary language as ``tag``, best first.

    Tags led by a singleton (``x-...``, ``i-...``) have no primary language
    and are never ranked; they only match exactly through Lookup.

    Ordering: most shared leading subtags, then shorter, then lexicographic.
    """
    language = _primary_language(tag)
    if language is None:
        return []
    scored = [
        (shared_subtags(tag, candidate), candidate)
        for candidate in available
        if _primary_language(candidate) == language
    ]
    scored.sort(key=lambda item: (-item[0], len(item[1]), item[1]))
    return scored


def _result(locale: str, requested: str) -> MatchResult:
    found = find_unicode_extension(requested)
    if found is None:
        return MatchResult(locale=locale, requested=requested)
    extension, index = found
    return MatchResult(
        locale=locale, extension=extension, extension_index=index, requested=requested
    )


class LookupMatcher:
    """Deterministic Lookup matching.

    Each requested tag, extension removed, is truncated subtag by subtag
    until a member of ``available`` is found; the first requested tag with
    a match wins.

    Examples:
        >>> LookupMatcher().match({"en-US"}, ["en-GB", "en-US"], "en").locale
        'en-US'
    """

    name = "lookup"

    def best_available(self, available: AvailableLocales, tag: str) -> Optional[str]:
        candidate = tag
        while candidate:
            if candidate in available:
                return candidate
            candidate = truncate_tag(candidate)
        return None

    def match(
        self, available: AvailableLocales, requested: Sequence[str], default_locale: str
    ) -> MatchResult:
        for locale in requested:
            found = self.best_available(available, strip_unicode_extension(locale))
            if found is not None:
                return _result(found, locale)

        logger.debug("No requested locale available, using default %s", default_locale)
        return MatchResult(locale=default_locale)


class BestFitMatcher:
    """Closeness-scored matching, never worse than Lookup.

    For each requested tag in preference order, the Lookup result for that
    tag is the baseline; an available locale of the same primary language
    that shares strictly more leading subtags replaces it, and when Lookup
    finds nothing the closest same-language locale is used. An exact match
    always wins, and an earlier requested tag with any candidate wins over
    later ones.

    Examples:
        >>> BestFitMatcher().match({"zh", "zh-Hant-HK"}, ["zh-Hant-TW"], "en").locale
        'zh-Hant-HK'
        >>> BestFitMatcher().match({"en-US"}, ["en"], "fr").locale
        'en-US'
    """

    name = "best fit"

    def __init__(self) -> None:
        self._lookup = LookupMatcher()

    def best_available(self, available: AvailableLocales, tag: str) -> Optional[str]:
        baseline = self._lookup.best_available(available, tag)
        best = baseline
        best_score = shared_subtags(tag, baseline) if baseline is not None else 0

        ranked = rank_candidates(available, tag)
        if ranked:
            score, candidate = ranked[0]
            if best is None or score > best_score:
                logger.debug("Best fit for %s: %s over %s", tag, candidate, baseline)
                best = candidate

        return best

    def match(
        self, available: AvailableLocales, requested: Sequence[str], default_locale: str
    ) -> MatchResult:
        for locale in requested:
            found = self.best_available(available, strip_unicode_extension(locale))
            if found is not None:
                return _result(found, locale)

        logger.debug("No requested locale fits, using default %s", default_locale)
        return MatchResult(locale=default_locale)


MatcherFactory = Callable[[], LocaleMatcher]
_registry: Dict[str, MatcherFactory] = {}


def register_matcher(name: str, factory: MatcherFactory) -> None:
    """Register a matcher factory under an ``options["localeMatcher"]`` value."""
    _registry[name] = factory


def available_matchers() -> list[str]:
    """Get list of registered matcher names."""
    return sorted(_registry.keys())


def select_matcher(name: Optional[str]) -> LocaleMatcher:
    """Pick the matcher for an ``options["localeMatcher"]`` value.

    ``"lookup"`` selects Lookup; any other value, including None and
    ``"best fit"``, selects Best Fit unless a matcher was registered under it.
    """
    factory = _registry.get(name or "best fit")
    if factory is None:
        factory = _registry["best fit"]
    return factory()


register_matcher("lookup", LookupMatcher)
register_matcher("best fit", BestFitMatcher)
register_matcher("best-fit", BestFitMatcher)
