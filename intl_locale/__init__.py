"""BCP 47 language tag validation, canonicalization and locale negotiation.

Public operations:
- is_structurally_valid / canonicalize / canonicalize_locale_list
- resolve_locale / supported_locales / prioritize_available_locales
"""

from intl_locale.negotiation import (
    ResolutionResult,
    prioritize_available_locales,
    resolve_locale,
    supported_locales,
)
from intl_locale.tags import (
    LocaleDataError,
    LocaleError,
    MappingTables,
    TagCanonicalizer,
    ValidationError,
    canonicalize,
    canonicalize_locale_list,
    is_structurally_valid,
    strip_unicode_extension,
)

__version__ = "0.1.0"

__all__ = [
    "ResolutionResult",
    "prioritize_available_locales",
    "resolve_locale",
    "supported_locales",
    "LocaleDataError",
    "LocaleError",
    "MappingTables",
    "TagCanonicalizer",
    "ValidationError",
    "canonicalize",
    "canonicalize_locale_list",
    "is_structurally_valid",
    "strip_unicode_extension",
]
