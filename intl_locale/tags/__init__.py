"""Language tag validation and canonicalization.

This module provides RFC 5646 structural validation, Unicode extension
handling, and canonicalization of single tags and requested locale lists.
"""

from .canonicalize import TagCanonicalizer, canonicalize, get_canonicalizer
from .extensions import (
    UnicodeExtension,
    find_unicode_extension,
    parse_unicode_extension,
    strip_unicode_extension,
)
from .grammar import is_structurally_valid, parse_tag, truncate_tag
from .locale_list import canonicalize_locale_list
from .mappings import ExtlangMapping, MappingTables
from .types import LocaleDataError, LocaleError, TagParts, ValidationError

__all__ = [
    "TagCanonicalizer",
    "canonicalize",
    "get_canonicalizer",
    "UnicodeExtension",
    "find_unicode_extension",
    "parse_unicode_extension",
    "strip_unicode_extension",
    "is_structurally_valid",
    "parse_tag",
    "truncate_tag",
    "canonicalize_locale_list",
    "ExtlangMapping",
    "MappingTables",
    "LocaleDataError",
    "LocaleError",
    "TagParts",
    "ValidationError",
]
