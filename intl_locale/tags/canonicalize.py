"""BCP 47 language tag canonicalization.

Canonicalizes structurally valid tags, including regularized case of
subtags (RFC 5646 section 4.5, ECMA-402 CanonicalizeLanguageTag). For
example, the tag ``Zh-NAN-haNS-bu-variant2-Variant1-u-ca-chinese-t-Zh-laTN-x-PRIVATE``::

    Zh             ; 2*3ALPHA
    -NAN           ; ['-' extlang]
    -haNS          ; ['-' script]
    -bu            ; ['-' region]
    -variant2      ; *('-' variant)
    -Variant1
    -u-ca-chinese  ; *('-' extension)
    -t-Zh-laTN
    -x-PRIVATE     ; ['-' privateuse]

becomes ``nan-Hans-MM-variant2-variant1-t-zh-latn-u-ca-chinese-x-private``.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Optional

from .mappings import MappingTables

logger = logging.getLogger(__name__)


class TagCanonicalizer:
    """Rewrite structurally valid tags into their canonical spelling.

    The mapping tables are injected and treated as an immutable snapshot.
    An optional bounded cache remembers results; canonicalization is a pure
    function of the input and the tables, so the cache never changes what
    callers observe.

    Examples:
        >>> canon = TagCanonicalizer(MappingTables.empty())
        >>> canon.canonicalize("EN-latn-us")
        'en-Latn-US'
    """

    def __init__(self, tables: Optional[MappingTables] = None, cache_size: int = 0):
        """Initialize canonicalizer.

        Args:
            tables: Remapping tables. Defaults to tables that remap nothing.
            cache_size: Maximum cached results (0 disables the cache)
        """
        self.tables = tables if tables is not None else MappingTables.empty()
        self.cache_size = max(0, cache_size)
        self._cache: "OrderedDict[str, str]" = OrderedDict()
        self._lock = threading.Lock()

    def canonicalize(self, tag: str) -> str:
        """Canonicalize ``tag``.

        Precondition: ``is_structurally_valid(tag)`` is true. Invalid input
        is not detected here and produces an unspecified result; validate
        first (``canonicalize_locale_list`` does).
        """
        if not self.cache_size:
            return self._canonicalize(tag)

        with self._lock:
            cached = self._cache.get(tag)
            if cached is not None:
                self._cache.move_to_end(tag)
                return cached

        result = self._canonicalize(tag)

        with self._lock:
            self._cache[tag] = result
            self._cache.move_to_end(tag)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return result

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _canonicalize(self, tag: str) -> str:
        # The canonical form of most subtags is lower case; scripts and
        # regions are re-cased explicitly below.
        locale = tag.lower()

        whole = self.tables.whole_tags.get(locale)
        if whole is not None:
            logger.debug("Whole-tag mapping %s -> %s", locale, whole)
            return whole

        subtags = locale.split("-")
        i = 0

        # Standard part: everything before the first singleton or "x". The
        # "i" of irregular tags such as i-klingon sits at position 0 and does
        # not start an extension.
        while i < len(subtags):
            subtag = subtags[i]
            if len(subtag) == 1 and (i > 0 or subtag == "x"):
                break

            if len(subtag) == 4:
                subtag = subtag[0].upper() + subtag[1:]
            elif i != 0 and len(subtag) == 2:
                subtag = subtag.upper()

            # Lookups come after re-casing: "in" is a deprecated language,
            # "IN" is India.
            if subtag in self.tables.subtags:
                subtag = self.tables.subtags[subtag]
            elif subtag in self.tables.extlangs:
                mapping = self.tables.extlangs[subtag]
                subtag = mapping.preferred
                if i == 1 and mapping.prefix == subtags[0]:
                    # zh-nan -> nan
                    del subtags[0]
                    i -= 1

            subtags[i] = subtag
            i += 1

        normal = "-".join(subtags[:i])

        # Extension sequences sort as whole strings: t-zh-latn before u-ca-chinese.
        extensions = []
        while i < len(subtags) and subtags[i] != "x":
            start = i
            i += 1
            while i < len(subtags) and len(subtags[i]) > 1:
                i += 1
            extensions.append("-".join(subtags[start:i]))
        extensions.sort()

        private_use = "-".join(subtags[i:])

        canonical = normal
        if extensions:
            canonical += "-" + "-".join(extensions)
        if private_use:
            # A Language-Tag may be entirely private use.
            canonical = f"{canonical}-{private_use}" if canonical else private_use

        # Subtag remaps can land on a whole-tag key: sgn-DD -> sgn-DE -> gsg.
        remapped = self.tables.whole_tags.get(canonical.lower())
        if remapped is not None:
            logger.debug("Whole-tag mapping %s -> %s", canonical, remapped)
            return remapped

        return canonical


# Global singleton instance
_canonicalizer: Optional[TagCanonicalizer] = None
_canonicalizer_lock = threading.Lock()


def get_canonicalizer() -> TagCanonicalizer:
    """Get the global TagCanonicalizer built from the default locale data.

    Returns:
        Singleton TagCanonicalizer instance
    """
    global _canonicalizer
    if _canonicalizer is None:
        from intl_locale.config import settings
        from intl_locale.data.provider import get_provider

        with _canonicalizer_lock:
            if _canonicalizer is None:
                _canonicalizer = TagCanonicalizer(
                    get_provider().tables, cache_size=settings.canonical_cache_size
                )
    return _canonicalizer


def canonicalize(tag: str) -> str:
    """Convenience function to canonicalize a structurally valid tag.

    Examples:
        >>> canonicalize("Zh-NAN-haNS-bu")
        'nan-Hans-MM'
    """
    return get_canonicalizer().canonicalize(tag)
