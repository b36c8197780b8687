"""Tests for locale resolution and the supported/prioritized list operations."""

from __future__ import annotations

import pytest

from intl_locale.negotiation import (
    ExtensionKeyData,
    ResolutionResult,
    prioritize_available_locales,
    resolve_locale,
    supported_locales,
)
from intl_locale.tags import LocaleDataError

LOOKUP = {"localeMatcher": "lookup"}


class FakeLocaleData:
    """Locale data with one table for every locale."""

    def __init__(self, table):
        self.table = table
        self.calls = []

    def key_data(self, locale, key):
        self.calls.append((locale, key))
        if key not in self.table:
            raise LocaleDataError(f"no data for {key}")
        return self.table[key]


class TestResolveLocale:
    """Test locale selection."""

    def test_lookup_fallback(self):
        result = resolve_locale({"en-US"}, ["en-GB", "en-US"], LOOKUP, default_locale="fr")
        assert result == ResolutionResult(locale="en-US", data_locale="en-US", extensions={})

    def test_default_when_nothing_requested(self):
        result = resolve_locale({"en", "de"}, [], LOOKUP, default_locale="de")
        assert result.locale == "de"
        assert result.data_locale == "de"

    def test_default_from_locale_data(self):
        """Test that the bundled default locale is used when none is passed."""
        assert resolve_locale({"de"}, ["sw"], LOOKUP).locale == "en"

    def test_best_fit_is_default_matcher(self):
        assert resolve_locale({"en-US"}, ["en"], default_locale="fr").locale == "en-US"
        assert resolve_locale({"en-US"}, ["en"], LOOKUP, default_locale="fr").locale == "fr"

    def test_keys_require_locale_data(self):
        with pytest.raises(ValueError, match="locale_data"):
            resolve_locale({"en"}, ["en"], LOOKUP, ["ca"])

    def test_to_dict(self):
        result = ResolutionResult(locale="th-u-nu-thai", data_locale="th", extensions={"nu": "thai"})
        assert result.to_dict() == {
            "locale": "th-u-nu-thai",
            "dataLocale": "th",
            "extensions": {"nu": "thai"},
        }


class TestExtensionNegotiation:
    """Test extension-key negotiation against the bundled locale data."""

    def test_requested_values_kept(self, provider):
        result = resolve_locale(
            provider.available_locales,
            ["th-TH-u-ca-gregory-nu-thai"],
            LOOKUP,
            ["ca", "nu"],
            provider,
        )
        assert result.locale == "th-TH-u-ca-gregory-nu-thai"
        assert result.data_locale == "th-TH"
        assert result.extensions == {"ca": "gregory", "nu": "thai"}

    def test_illegal_requested_value_ignored(self, provider):
        result = resolve_locale(provider.available_locales, ["th-TH-u-ca-chinese"], LOOKUP, ["ca"], provider)
        assert result.locale == "th-TH"
        assert result.extensions == {"ca": "buddhist"}

    def test_unrequested_key_gets_default(self, provider):
        result = resolve_locale(provider.available_locales, ["de"], LOOKUP, ["co", "hc"], provider)
        assert result.locale == "de"
        assert result.extensions == {"co": "standard", "hc": "h23"}

    def test_key_order_follows_relevant_keys(self, provider):
        result = resolve_locale(
            provider.available_locales, ["th-u-ca-gregory-nu-thai"], LOOKUP, ["nu", "ca"], provider
        )
        assert result.locale == "th-u-nu-thai-ca-gregory"
        assert list(result.extensions) == ["nu", "ca"]

    def test_irrelevant_requested_keys_dropped(self, provider):
        result = resolve_locale(
            provider.available_locales, ["th-u-ca-gregory-nu-thai"], LOOKUP, ["nu"], provider
        )
        assert result.locale == "th-u-nu-thai"
        assert result.extensions == {"nu": "thai"}

    def test_key_without_value(self, provider):
        result = resolve_locale(provider.available_locales, ["de-u-kn"], LOOKUP, ["kn"], provider)
        assert result.locale == "de-u-kn"
        assert result.extensions == {"kn": "true"}

    def test_option_overrides_requested_value(self, provider):
        options = {"localeMatcher": "lookup", "ca": "japanese"}
        result = resolve_locale(provider.available_locales, ["ja-JP-u-ca-gregory"], options, ["ca"], provider)
        assert result.locale == "ja-JP"
        assert result.extensions == {"ca": "japanese"}

    def test_option_equal_to_requested_value_keeps_extension(self, provider):
        options = {"localeMatcher": "lookup", "ca": "gregory"}
        result = resolve_locale(provider.available_locales, ["ja-JP-u-ca-gregory"], options, ["ca"], provider)
        assert result.locale == "ja-JP-u-ca-gregory"
        assert result.extensions == {"ca": "gregory"}

    def test_illegal_option_ignored(self, provider):
        options = {"localeMatcher": "lookup", "ca": "persian"}
        result = resolve_locale(provider.available_locales, ["ja-JP-u-ca-gregory"], options, ["ca"], provider)
        assert result.locale == "ja-JP-u-ca-gregory"
        assert result.extensions == {"ca": "gregory"}

    def test_extension_from_matched_request_only(self, provider):
        """Test that only the winning requested tag contributes its extension."""
        result = resolve_locale({"de"}, ["sw-u-co-phonebk", "de"], LOOKUP, ["co"], provider)
        assert result.locale == "de"
        assert result.extensions == {"co": "standard"}

    def test_extension_inserted_before_private_use(self, provider):
        result = resolve_locale(
            {"de-x-priv"}, ["de-u-co-phonebk-x-priv"], LOOKUP, ["co"], provider
        )
        assert result.data_locale == "de-x-priv"
        assert result.locale == "de-u-co-phonebk-x-priv"
        assert result.extensions == {"co": "phonebk"}

    def test_default_locale_gets_defaults(self, provider):
        result = resolve_locale({"fr"}, ["th-u-nu-thai"], LOOKUP, ["nu"], provider, default_locale="fr")
        assert result.locale == "fr"
        assert result.extensions == {"nu": "latn"}

    def test_unknown_key_raises(self, provider):
        with pytest.raises(LocaleDataError):
            resolve_locale(provider.available_locales, ["en"], LOOKUP, ["zz"], provider)

    def test_data_consulted_for_found_locale(self):
        data = FakeLocaleData({"nu": ExtensionKeyData(values=("latn", "thai"), default="latn")})
        result = resolve_locale({"th"}, ["th-TH-u-nu-thai"], LOOKUP, ["nu"], data)
        assert data.calls == [("th", "nu")]
        assert result.locale == "th-u-nu-thai"
        assert result.data_locale == "th"


class TestSupportedLocales:
    def test_lookup(self):
        available = {"de", "fr"}
        requested = ["de-AT", "it", "fr-u-nu-latn"]
        assert supported_locales(available, requested, LOOKUP) == ["de-AT", "fr-u-nu-latn"]

    def test_best_fit(self):
        assert supported_locales({"en-US"}, ["en", "it"]) == ["en"]
        assert supported_locales({"en-US"}, ["en", "it"], LOOKUP) == []

    def test_empty_request(self):
        assert supported_locales({"en"}, []) == []


class TestPrioritizeAvailableLocales:
    def test_orders_by_request(self):
        available = {"en-US", "en-GB", "fr", "de"}
        assert prioritize_available_locales(available, ["fr-CA", "en-GB"]) == ["fr", "en-GB", "en-US"]

    def test_each_locale_once(self):
        available = {"en-US", "en-GB", "en"}
        assert prioritize_available_locales(available, ["en-GB", "en-US"]) == ["en-GB", "en", "en-US"]

    def test_ignores_extensions_and_unserved(self):
        assert prioritize_available_locales({"th", "de"}, ["th-u-nu-thai", "sw"]) == ["th"]

    def test_singleton_led_tags_not_prioritized(self):
        assert prioritize_available_locales({"i-default", "i-enochian"}, ["i-mingo"]) == []
        assert prioritize_available_locales({"x-acme", "en"}, ["x-other", "en-GB"]) == ["en"]


class TestPrivateUseResolution:
    def test_unrelated_private_use_falls_back_to_default(self):
        result = resolve_locale({"x-acme", "en"}, ["x-other"], {}, default_locale="en")
        assert result.locale == "en"

    def test_exact_private_use_match(self):
        result = resolve_locale({"x-acme", "en"}, ["x-acme"], {}, default_locale="en")
        assert result.locale == "x-acme"
