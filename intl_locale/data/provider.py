"""Locale registry data: mapping tables, available locales and extension keys.

Loads versioned JSON registry data once and exposes it as immutable
snapshots. The canonicalizer receives ``tables``; the resolver receives the
available locale set and this provider as its ``LocaleData``.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from intl_locale.config import settings
from intl_locale.negotiation.types import ExtensionKeyData
from intl_locale.tags.grammar import truncate_tag
from intl_locale.tags.mappings import MappingTables
from intl_locale.tags.types import LocaleDataError

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent / "fixtures"
ROOT_LOCALE = "und"


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise LocaleDataError(f"Failed to load locale data from {path}: {e}") from e
    if not isinstance(data, dict):
        raise LocaleDataError(f"Locale data in {path} must be a JSON object")
    return data


class LocaleDataProvider:
    """Read-only locale registry loaded from ``mappings.json`` and ``locales.json``.

    Examples:
        >>> provider = LocaleDataProvider()
        >>> provider.is_available("en-US")
        True
        >>> provider.key_data("th-TH", "ca").default
        'buddhist'
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        """Initialize provider.

        Args:
            data_dir: Directory holding the registry JSON files. Defaults to
                the bundled fixtures.

        Raises:
            LocaleDataError: If a data file is missing or malformed
        """
        self.data_dir = Path(data_dir) if data_dir else FIXTURES_DIR

        mappings = _read_json(self.data_dir / "mappings.json")
        locales = _read_json(self.data_dir / "locales.json")

        self.tables = MappingTables.from_dict(mappings)
        self.version = str(locales.get("version", ""))
        self.available_locales = frozenset(str(tag) for tag in locales.get("available", []))
        self.default_locale = str(locales.get("default_locale") or settings.default_locale)
        self._key_data = self._load_key_data(locales.get("extension_keys", {}))

        if self.default_locale not in self.available_locales:
            logger.warning(
                "Default locale %s is not among the available locales", self.default_locale
            )

        logger.debug(
            "Loaded locale data from %s: %d available locales, %d extension-key tables",
            self.data_dir,
            len(self.available_locales),
            len(self._key_data),
        )

    @staticmethod
    def _load_key_data(raw: Any) -> Mapping[str, Mapping[str, ExtensionKeyData]]:
        try:
            table = {
                locale: MappingProxyType(
                    {
                        key: ExtensionKeyData(
                            values=tuple(str(v) for v in entry["values"]),
                            default=str(entry["default"]),
                        )
                        for key, entry in keys.items()
                    }
                )
                for locale, keys in raw.items()
            }
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise LocaleDataError(f"Malformed extension key data: {e}") from e
        return MappingProxyType(table)

    def is_available(self, tag: str) -> bool:
        return tag in self.available_locales

    def key_data(self, locale: str, key: str) -> ExtensionKeyData:
        """Get legal values and default of ``key`` for ``locale``.

        Walks the locale's truncation chain (``zh-Hant-TW`` -> ``zh-Hant`` ->
        ``zh``) and finally the root table.

        Raises:
            LocaleDataError: If no level of the chain defines ``key``
        """
        candidate = locale
        while candidate:
            entry = self._key_data.get(candidate, {}).get(key)
            if entry is not None:
                return entry
            candidate = truncate_tag(candidate)

        entry = self._key_data.get(ROOT_LOCALE, {}).get(key)
        if entry is None:
            raise LocaleDataError(f"No data for extension key {key!r} in locale {locale!r}")
        return entry

    def extension_keys(self) -> list[str]:
        """All extension keys that have root data."""
        return sorted(self._key_data.get(ROOT_LOCALE, {}))


# Global singleton instance
_provider: Optional[LocaleDataProvider] = None
_provider_lock = threading.Lock()


def get_provider() -> LocaleDataProvider:
    """Get the global LocaleDataProvider instance.

    Uses ``IL_DATA_DIR`` when set, otherwise the bundled fixtures.

    Returns:
        Singleton LocaleDataProvider instance
    """
    global _provider
    if _provider is None:
        with _provider_lock:
            if _provider is None:
                _provider = LocaleDataProvider(settings.data_dir or None)
    return _provider
