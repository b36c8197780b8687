"""Requested locale list canonicalization (ECMA-402 CanonicalizeLocaleList)."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from .canonicalize import TagCanonicalizer, get_canonicalizer
from .grammar import is_structurally_valid
from .types import ValidationError

logger = logging.getLogger(__name__)

LocalesArgument = Union[None, str, Iterable[str]]


def canonicalize_locale_list(
    locales: LocalesArgument = None,
    canonicalizer: Optional[TagCanonicalizer] = None,
) -> list[str]:
    """Validate and canonicalize requested locales into an ordered set.

    Args:
        locales: None, a single tag, or an iterable of tags in preference order
        canonicalizer: Canonicalizer to use (defaults to the global one)

    Returns:
        Canonical tags in first-seen order, later duplicates dropped

    Raises:
        ValidationError: On the first structurally invalid tag; nothing
            after it is processed and no partial result is returned
        TypeError: If an element is not a string

    Examples:
        >>> canonicalize_locale_list(["de", "fr-fr", "DE"])
        ['de', 'fr-FR']
        >>> canonicalize_locale_list("en-us")
        ['en-US']
    """
    if locales is None:
        return []
    if isinstance(locales, str):
        locales = [locales]

    canon = canonicalizer or get_canonicalizer()
    seen: dict[str, None] = {}

    for tag in locales:
        if not isinstance(tag, str):
            raise TypeError(f"language tag must be a string, got {type(tag).__name__}")
        if not is_structurally_valid(tag):
            logger.debug("Rejecting requested locale %r", tag)
            raise ValidationError(tag)
        seen.setdefault(canon.canonicalize(tag), None)

    return list(seen)
