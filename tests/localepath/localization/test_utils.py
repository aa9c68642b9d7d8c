"""Unit tests for localization utilities."""

from localepath.localization.utils import (
    compile_locale_pattern,
    compile_wildcard,
    is_default_locale,
    parse_accept_language,
    parse_locale,
)

LOCALES = {"en": "en-US", "pt": "pt-BR", "uk": "uk"}


class TestParseLocale:
    """Tests for parse_locale function."""

    def test_parse_dash(self) -> None:
        """Test parsing a locale with a dash separator."""
        assert parse_locale("pt-BR", LOCALES) == ("pt", "BR")

    def test_parse_underscore(self) -> None:
        """Test parsing a locale with an underscore separator."""
        assert parse_locale("pt_BR", LOCALES) == ("pt", "BR")

    def test_parse_splits_once(self) -> None:
        """Test that only the first separator splits."""
        assert parse_locale("zh-Hant-TW", {}) == ("zh", "Hant-TW")

    def test_parse_bare_code_uses_canonical_value(self) -> None:
        """Test that configured codes expand through their canonical locale."""
        assert parse_locale("pt", LOCALES) == ("pt", "BR")

    def test_parse_bare_code_without_region(self) -> None:
        """Test parsing a code whose canonical value has no region."""
        assert parse_locale("uk", LOCALES) == ("uk", None)

    def test_parse_unknown_code(self) -> None:
        """Test parsing a code that is not configured."""
        assert parse_locale("pt", {}) == ("pt", None)


class TestIsDefaultLocale:
    """Tests for is_default_locale function."""

    def test_exact_code(self) -> None:
        """Test matching the default code exactly."""
        assert is_default_locale("en", None, "en") is True
        assert is_default_locale("en", "US", "en") is True

    def test_language_and_region(self) -> None:
        """Test matching a language-region default."""
        assert is_default_locale("en", "US", "en-US") is True
        assert is_default_locale("en", None, "en-US") is False
        assert is_default_locale("en", "GB", "en-US") is False

    def test_other_locale(self) -> None:
        """Test that other locales are not the default."""
        assert is_default_locale("fr", None, "en") is False


class TestCompileLocalePattern:
    """Tests for compile_locale_pattern function."""

    def test_matches_code_at_path_start(self) -> None:
        """Test matching a code as the first path segment."""
        pattern = compile_locale_pattern(["en", "fr"])

        assert pattern.match("/fr/users").group(1) == "fr"
        assert pattern.match("/fr").group(1) == "fr"
        assert pattern.match("/users/fr") is None

    def test_case_insensitive(self) -> None:
        """Test that matching ignores case."""
        pattern = compile_locale_pattern(["en"])
        assert pattern.match("/EN/users").group(1) == "EN"

    def test_whole_segment(self) -> None:
        """Test that a code must fill the whole first path segment."""
        pattern = compile_locale_pattern(["en"])
        assert pattern.match("/english") is None
        assert pattern.match("/en-US/users") is None
        assert pattern.match("/en.json") is None

    def test_longer_code_matched_in_any_order(self) -> None:
        """Test that a shorter code does not shadow a longer one."""
        assert compile_locale_pattern(["pt", "pt-BR"]).match("/pt-BR/x").group(1) == "pt-BR"
        assert compile_locale_pattern(["pt-BR", "pt"]).match("/pt-BR/x").group(1) == "pt-BR"
        assert compile_locale_pattern(["pt", "pt-BR"]).match("/pt/x").group(1) == "pt"

    def test_codes_are_escaped(self) -> None:
        """Test that codes are matched literally."""
        pattern = compile_locale_pattern(["e."])
        assert pattern.match("/ex/") is None


class TestCompileWildcard:
    """Tests for compile_wildcard function."""

    def test_star(self) -> None:
        """Test that a star matches any characters, slashes included."""
        pattern = compile_wildcard("/api/*")
        assert pattern.match("/api/users")
        assert pattern.match("/api/users/1")
        assert not pattern.match("/apiv2/users")

    def test_question_mark(self) -> None:
        """Test that a question mark matches a single character."""
        pattern = compile_wildcard("/v?/status")
        assert pattern.match("/v1/status")
        assert not pattern.match("/v10/status")

    def test_case_sensitive(self) -> None:
        """Test that matching is case-sensitive."""
        assert not compile_wildcard("/api/*").match("/API/users")

    def test_whole_path(self) -> None:
        """Test that the whole path must match."""
        assert not compile_wildcard("/health").match("/health/live")


class TestParseAcceptLanguage:
    """Tests for parse_accept_language function."""

    def test_parse_empty_header(self) -> None:
        """Test parsing empty Accept-Language header."""
        assert parse_accept_language(None) == []
        assert parse_accept_language("") == []

    def test_parse_single_language(self) -> None:
        """Test parsing single language without quality."""
        assert parse_accept_language("fr-CA") == [("fr-CA", 1.0)]

    def test_parse_sorted_by_quality(self) -> None:
        """Test that entries are ordered by quality."""
        result = parse_accept_language("en;q=0.5, fr-CA, de;q=0.8")
        assert result == [("fr-CA", 1.0), ("de", 0.8), ("en", 0.5)]

    def test_equal_quality_keeps_order(self) -> None:
        """Test that entries with the same quality keep their order."""
        assert parse_accept_language("pt,fr") == [("pt", 1.0), ("fr", 1.0)]

    def test_invalid_quality(self) -> None:
        """Test that an invalid quality counts as 1.0."""
        assert parse_accept_language("fr;q=abc") == [("fr", 1.0)]

    def test_wildcard_and_zero_quality_dropped(self) -> None:
        """Test that wildcards and refused languages are dropped."""
        assert parse_accept_language("*, de;q=0, fr;q=0.1") == [("fr", 0.1)]
