"""Tests for language resolution."""

import pytest
from sitelang.page import Location
from sitelang.resolver import (
    PREFERENCE_KEY, LanguageResolver, locale_from_accept_language, primary_subtag,
)
from sitelang.storage import MemoryPreferences


@pytest.fixture
def resolver():
    return LanguageResolver(["en", "es"], "en")


def _prefs(code):
    return MemoryPreferences({PREFERENCE_KEY: code})


class TestSingleSource:
    @pytest.mark.parametrize("code", ["en", "es"])
    def test_query_only(self, resolver, code):
        assert resolver.resolve(Location(f"/?lang={code}")) == code

    def test_nothing_set_gives_default(self, resolver):
        assert resolver.resolve(Location("/")) == "en"

    def test_no_location_gives_default(self, resolver):
        assert resolver.resolve(None) == "en"

    def test_fragment_marker(self, resolver):
        assert resolver.resolve(Location("/#lang=es")) == "es"

    def test_fragment_marker_after_other_params(self, resolver):
        assert resolver.resolve(Location("/#section=2&lang=es")) == "es"

    def test_fragment_without_marker_ignored(self, resolver):
        assert resolver.resolve(Location("/#slang=es")) == "en"

    def test_preference(self, resolver):
        assert resolver.resolve(Location("/"), _prefs("es")) == "es"

    def test_path_segment(self, resolver):
        assert resolver.resolve(Location("/es/about.html")) == "es"

    def test_browser_locale_primary_subtag(self, resolver):
        assert resolver.resolve(Location("/"), browser_locale="es-MX") == "es"

    def test_unsupported_everywhere_gives_default(self, resolver):
        loc = Location("/fr/page?lang=de#lang=it")
        assert resolver.resolve(loc, _prefs("pt"), "ja-JP") == "en"

    def test_custom_default_added_to_supported(self):
        r = LanguageResolver(["es"], "de")
        assert r.supported == ["de", "es"]
        assert r.resolve(Location("/")) == "de"


class TestPriority:
    def test_fragment_beats_query(self, resolver):
        assert resolver.resolve(Location("/?lang=en#lang=es")) == "es"

    def test_query_beats_preference(self, resolver):
        assert resolver.resolve(Location("/?lang=es"), _prefs("en")) == "es"

    def test_preference_beats_path(self, resolver):
        assert resolver.resolve(Location("/en/"), _prefs("es")) == "es"

    def test_path_beats_locale(self, resolver):
        assert resolver.resolve(Location("/es/"), browser_locale="en-US") == "es"

    def test_unsupported_higher_source_falls_through(self, resolver):
        assert resolver.resolve(Location("/?lang=fr"), _prefs("es")) == "es"


class TestResolveParts:
    def test_plain_mapping_as_preferences(self, resolver):
        assert resolver.resolve_parts(preferences={PREFERENCE_KEY: "es"}) == "es"

    def test_all_empty(self, resolver):
        assert resolver.resolve_parts() == "en"

    def test_fragment_with_hash_prefix(self, resolver):
        assert resolver.resolve_parts(fragment="#lang=es") == "es"


class TestLocaleHelpers:
    @pytest.mark.parametrize("locale,expected", [
        ("es-MX", "es"),
        ("pt_BR", "pt"),
        ("EN", "en"),
        ("en_US.UTF-8", "en"),
        ("", ""),
        (None, ""),
    ])
    def test_primary_subtag(self, locale, expected):
        assert primary_subtag(locale) == expected

    def test_accept_language_first(self):
        assert locale_from_accept_language("es-ES,es;q=0.9,en;q=0.8") == "es-ES"

    def test_accept_language_weights(self):
        assert locale_from_accept_language("en;q=0.5, es;q=0.9") == "es"

    def test_accept_language_wildcard_skipped(self):
        assert locale_from_accept_language("*, es;q=0.5") == "es"

    def test_accept_language_empty(self):
        assert locale_from_accept_language("") == ""
        assert locale_from_accept_language(None) == ""

    def test_accept_language_bad_weight(self):
        assert locale_from_accept_language("en;q=abc, es") == "es"
