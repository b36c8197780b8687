"""Language tag core types and errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# Error types
class LocaleError(Exception):
    """Base intl_locale error."""
    pass


class ValidationError(LocaleError, ValueError):
    """A language tag failed structural validation.

    Carries the offending tag so callers can drop it and resubmit.
    """

    def __init__(self, tag: object, message: Optional[str] = None) -> None:
        self.tag = tag
        super().__init__(message or f"invalid language tag: {tag}")


class LocaleDataError(LocaleError, LookupError):
    """Locale registry data is missing, malformed or inconsistent."""
    pass


@dataclass(frozen=True)
class TagParts:
    """Component view of a structurally valid language tag.

    Grandfathered/irregular tags are not decomposed: ``legacy`` is set and
    the whole tag is kept in ``language``. A pure private-use tag only fills
    ``private_use``.
    """

    language: str = ""
    extlangs: tuple[str, ...] = ()
    script: Optional[str] = None
    region: Optional[str] = None
    variants: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()
    private_use: Optional[str] = None
    legacy: bool = False
