"""Locale resolution (ECMA-402 ResolveLocale, SupportedLocales).

Compares a BCP 47 language priority list against the available locales and
determines the best available locale. Options carried in Unicode extension
sequences are negotiated separately against the caller's relevant extension
keys and locale data; client-provided options take precedence.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from intl_locale.tags.extensions import parse_unicode_extension, strip_unicode_extension

from .matchers import rank_candidates, select_matcher
from .types import AvailableLocales, LocaleData, ResolutionResult

logger = logging.getLogger(__name__)


def _default_locale() -> str:
    from intl_locale.data.provider import get_provider

    return get_provider().default_locale


def _insert_extension(locale: str, extension: str) -> str:
    """Insert a ``-u-...`` sequence before any private use suffix."""
    private_index = locale.find("-x-")
    if private_index < 0:
        return locale + extension
    return locale[:private_index] + extension + locale[private_index:]


def resolve_locale(
    available: AvailableLocales,
    requested: Sequence[str],
    options: Optional[Mapping[str, Any]] = None,
    relevant_extension_keys: Sequence[str] = (),
    locale_data: Optional[LocaleData] = None,
    default_locale: Optional[str] = None,
) -> ResolutionResult:
    """Resolve the locale and extension-key values serving ``requested``.

    Args:
        available: Canonical tags the environment supports
        requested: Canonicalized, deduplicated tags in preference order
        options: ``localeMatcher`` ("lookup" or "best fit") plus optional
            per-key overrides (e.g. ``{"ca": "japanese"}``)
        relevant_extension_keys: Negotiable keys, in the order to resolve them
        locale_data: Per-locale key data (required when keys are given)
        default_locale: Locale used when nothing matches (defaults to the
            locale data provider's default)

    Returns:
        ResolutionResult with one ``extensions`` entry per relevant key

    Raises:
        LocaleDataError: If a relevant key has no data for the resolved locale
        ValueError: If relevant keys are given without locale_data

    Examples:
        >>> resolve_locale({"en-US"}, ["en-GB", "en-US"], {"localeMatcher": "lookup"}).locale
        'en-US'
    """
    options = options or {}
    if relevant_extension_keys and locale_data is None:
        raise ValueError("locale_data is required when relevant_extension_keys are given")

    matcher = select_matcher(options.get("localeMatcher"))
    if default_locale is None:
        default_locale = _default_locale()

    r = matcher.match(available, requested, default_locale)
    found_locale = r.locale

    keywords: Dict[str, str] = {}
    if r.extension is not None:
        keywords = parse_unicode_extension(r.extension).keywords

    extensions: Dict[str, str] = {}
    supported_extension = "-u"

    for key in relevant_extension_keys:
        key_data = locale_data.key_data(found_locale, key)  # type: ignore[union-attr]
        value = key_data.default
        addition = ""

        requested_value = keywords.get(key)
        if requested_value is not None and requested_value in key_data.values:
            value = requested_value
            addition = f"-{key}" if requested_value == "true" else f"-{key}-{requested_value}"

        option_value = options.get(key)
        if option_value is not None:
            option_value = str(option_value).lower()
            if option_value in key_data.values and option_value != value:
                value = option_value
                addition = ""

        extensions[key] = value
        supported_extension += addition

    locale = found_locale
    if len(supported_extension) > 2:
        locale = _insert_extension(found_locale, supported_extension)

    logger.debug(
        "Resolved %s via %s matcher to %s", list(requested), matcher.name, locale
    )
    return ResolutionResult(locale=locale, data_locale=found_locale, extensions=extensions)


def supported_locales(
    available: AvailableLocales,
    requested: Sequence[str],
    options: Optional[Mapping[str, Any]] = None,
) -> list[str]:
    """Requested tags the available locales can serve, in request order.

    Tags are returned as requested (extensions kept); no extension
    negotiation happens.

    Examples:
        >>> supported_locales({"de", "fr"}, ["de-AT", "it", "fr-u-nu-latn"], {"localeMatcher": "lookup"})
        ['de-AT', 'fr-u-nu-latn']
    """
    matcher = select_matcher((options or {}).get("localeMatcher"))
    return [
        locale
        for locale in requested
        if matcher.best_available(available, strip_unicode_extension(locale)) is not None
    ]


def prioritize_available_locales(
    available: AvailableLocales,
    requested: Sequence[str],
) -> list[str]:
    """Order available locales by how well they serve the request list.

    For each requested tag in preference order, available locales with the
    same primary language follow, closest first; each locale appears once
    and available locales serving no request are left out.

    Examples:
        >>> prioritize_available_locales({"en-US", "en-GB", "fr", "de"}, ["fr-CA", "en-GB"])
        ['fr', 'en-GB', 'en-US']
    """
    ordered: Dict[str, None] = {}
    for locale in requested:
        for _score, candidate in rank_candidates(available, strip_unicode_extension(locale)):
            ordered.setdefault(candidate, None)
    return list(ordered)
