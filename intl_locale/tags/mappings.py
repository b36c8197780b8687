"""Deprecated-subtag mapping tables used by the canonicalizer.

Tables are built once from versioned registry data and passed explicitly to
a TagCanonicalizer; nothing here is mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .types import LocaleDataError


@dataclass(frozen=True)
class ExtlangMapping:
    """Preferred value of a deprecated extlang and the prefix it requires."""

    preferred: str
    prefix: str


@dataclass(frozen=True)
class MappingTables:
    """Whole-tag, subtag and extlang remapping tables.

    - ``whole_tags``: lower-cased complete tag -> canonical tag
    - ``subtags``: case-normalized subtag (``BU``, ``Qaai``, ``in``) -> replacement
    - ``extlangs``: lower-cased extlang -> ExtlangMapping

    No ``subtags`` key may also be an ``extlangs`` key; the canonicalizer
    consults ``subtags`` first and relies on that.
    """

    whole_tags: Mapping[str, str] = field(default_factory=dict)
    subtags: Mapping[str, str] = field(default_factory=dict)
    extlangs: Mapping[str, ExtlangMapping] = field(default_factory=dict)
    version: str = ""

    def __post_init__(self) -> None:
        collisions = set(self.subtags) & set(self.extlangs)
        if collisions:
            raise LocaleDataError(
                f"subtag and extlang mappings collide on: {', '.join(sorted(collisions))}"
            )

        whole_tags = {key.lower(): value for key, value in self.whole_tags.items()}
        # Frozen dataclass: swap in read-only views once.
        object.__setattr__(self, "whole_tags", MappingProxyType(whole_tags))
        object.__setattr__(self, "subtags", MappingProxyType(dict(self.subtags)))
        object.__setattr__(self, "extlangs", MappingProxyType(dict(self.extlangs)))

    @classmethod
    def empty(cls) -> MappingTables:
        """Tables that remap nothing (case normalization and sorting only)."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MappingTables:
        """Build tables from the ``mappings.json`` document shape.

        Raises:
            LocaleDataError: If a section has the wrong shape
        """
        try:
            extlangs = {
                key.lower(): ExtlangMapping(
                    preferred=str(entry["preferred"]).lower(),
                    prefix=str(entry["prefix"]).lower(),
                )
                for key, entry in data.get("extlangs", {}).items()
            }
            return cls(
                whole_tags={str(k): str(v) for k, v in data.get("whole_tags", {}).items()},
                subtags={str(k): str(v) for k, v in data.get("subtags", {}).items()},
                extlangs=extlangs,
                version=str(data.get("version", "")),
            )
        except (AttributeError, KeyError, TypeError) as e:
            raise LocaleDataError(f"Malformed mapping tables: {e}") from e
