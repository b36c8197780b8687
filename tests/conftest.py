# tests/conftest.py
# Shared locale data fixtures: bundled registry data and a small hand-built table set.

from __future__ import annotations

import pytest

from intl_locale.data.provider import LocaleDataProvider
from intl_locale.tags import ExtlangMapping, MappingTables, TagCanonicalizer


@pytest.fixture
def tables() -> MappingTables:
    """Small, deterministic mapping tables."""
    return MappingTables(
        whole_tags={
            "i-klingon": "tlh",
            "en-gb-oed": "en-GB-oed",
            "zh-min-nan": "nan",
            "art-lojban": "jbo",
        },
        subtags={"BU": "MM", "DD": "DE", "in": "id", "iw": "he", "heploc": "alalc97"},
        extlangs={
            "nan": ExtlangMapping(preferred="nan", prefix="zh"),
            "yue": ExtlangMapping(preferred="yue", prefix="zh"),
            "ase": ExtlangMapping(preferred="ase", prefix="sgn"),
        },
        version="test",
    )


@pytest.fixture
def canonicalizer(tables: MappingTables) -> TagCanonicalizer:
    return TagCanonicalizer(tables)


@pytest.fixture(scope="session")
def provider() -> LocaleDataProvider:
    """Locale data from the bundled fixtures."""
    return LocaleDataProvider()


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory that gets cleaned up."""
    return tmp_path
