"""Tests for requested locale list canonicalization."""

from __future__ import annotations

import pytest

from intl_locale.tags import TagCanonicalizer, ValidationError, canonicalize_locale_list


class RecordingCanonicalizer(TagCanonicalizer):
    """Canonicalizer that remembers which tags it was asked about."""

    def __init__(self, tables):
        super().__init__(tables)
        self.seen = []

    def canonicalize(self, tag):
        self.seen.append(tag)
        return super().canonicalize(tag)


class TestCanonicalizeLocaleList:
    def test_none_and_empty(self, canonicalizer):
        assert canonicalize_locale_list(None, canonicalizer) == []
        assert canonicalize_locale_list([], canonicalizer) == []
        assert canonicalize_locale_list(set(), canonicalizer) == []

    def test_single_string(self, canonicalizer):
        """Test that a bare string is one tag, not a list of characters."""
        assert canonicalize_locale_list("fr-fr", canonicalizer) == ["fr-FR"]

    def test_preserves_order(self, canonicalizer):
        assert canonicalize_locale_list(["de", "fr-FR", "en"], canonicalizer) == ["de", "fr-FR", "en"]
        assert canonicalize_locale_list(("ja", "de"), canonicalizer) == ["ja", "de"]

    def test_deduplicates_after_canonicalization(self, canonicalizer):
        """Test that later spellings of the same canonical tag are dropped."""
        assert canonicalize_locale_list(["en-us", "de", "EN-US"], canonicalizer) == ["en-US", "de"]
        assert canonicalize_locale_list(["iw", "he", "de"], canonicalizer) == ["he", "de"]
        assert canonicalize_locale_list(["i-klingon", "tlh"], canonicalizer) == ["tlh"]

    def test_accepts_iterables(self, canonicalizer):
        tags = (t for t in ["EN-gb", "de-dd"])
        assert canonicalize_locale_list(tags, canonicalizer) == ["en-GB", "de-DE"]

    def test_fails_fast_on_invalid_tag(self, tables):
        """Test that the first invalid tag aborts with no partial result."""
        recorder = RecordingCanonicalizer(tables)
        with pytest.raises(ValidationError) as exc_info:
            canonicalize_locale_list(["de", "wrong-tag", "fr-FR"], recorder)

        assert exc_info.value.tag == "wrong-tag"
        assert "wrong-tag" in str(exc_info.value)
        assert recorder.seen == ["de"]

    def test_validation_error_is_value_error(self, canonicalizer):
        with pytest.raises(ValueError, match="invalid language tag"):
            canonicalize_locale_list(["en-fonipa-fonipa"], canonicalizer)

    def test_non_string_element(self, canonicalizer):
        with pytest.raises(TypeError):
            canonicalize_locale_list(["en", 42], canonicalizer)  # type: ignore[list-item]

    def test_default_canonicalizer(self):
        assert canonicalize_locale_list(["Zh-NAN-haNS-bu", "de"]) == ["nan-Hans-MM", "de"]
