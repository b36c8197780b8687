"""Negotiation core types and protocols."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Dict, Mapping, Optional, Protocol, Sequence, runtime_checkable

AvailableLocales = Collection[str]


@dataclass(frozen=True)
class ExtensionKeyData:
    """Legal values and default value of one extension key for one locale."""

    values: tuple[str, ...]
    default: str

    def __post_init__(self) -> None:
        if self.default not in self.values:
            raise ValueError(f"default {self.default!r} is not one of {self.values!r}")


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a matcher run, before extension negotiation.

    ``extension`` is the requested tag's ``-u-`` sequence and
    ``extension_index`` the character position of its leading ``-`` in the
    requested tag. ``requested`` is None when the default locale was used.
    """

    locale: str
    extension: Optional[str] = None
    extension_index: Optional[int] = None
    requested: Optional[str] = None


@dataclass(frozen=True)
class ResolutionResult:
    """Resolved locale plus resolved extension-key values."""

    locale: str
    data_locale: str
    extensions: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "locale": self.locale,
            "dataLocale": self.data_locale,
            "extensions": dict(self.extensions),
        }


@runtime_checkable
class LocaleData(Protocol):
    """Per-locale, per-extension-key data lookup."""

    def key_data(self, locale: str, key: str) -> ExtensionKeyData:
        """Get legal values and default of ``key`` for ``locale``."""
        ...


@runtime_checkable
class LocaleMatcher(Protocol):
    """Locale matching strategy interface."""

    name: str

    def best_available(self, available: AvailableLocales, tag: str) -> Optional[str]:
        """Best available locale for one extension-free requested tag."""
        ...

    def match(
        self, available: AvailableLocales, requested: Sequence[str], default_locale: str
    ) -> MatchResult:
        """Pick the locale serving the requested list, or the default."""
        ...
