"""Tests for method and URL patterns."""

import pytest

from stubmatch import (
    ANY,
    ExactMethod,
    ExactUrl,
    InvalidPatternError,
    MalformedCandidateUrlError,
    MalformedPatternUrlError,
    MatcherError,
    RegexUrl,
    UrlParts,
    Wildcard,
    match_method,
    match_url,
    method_pattern,
    url_pattern,
)

METHODS = ["GET", "get", "Post", "PUT", "patch", "DELETE", "OPTIONS", "CREAZY"]


class TestWildcard:
    def test_single_instance_is_a_wildcard(self) -> None:
        assert isinstance(ANY, Wildcard)
        assert ANY == Wildcard()

    def test_repr(self) -> None:
        assert repr(ANY) == "ANY"

    def test_not_a_string(self) -> None:
        assert ANY != "ANY"
        assert ANY != "__ANY__"


class TestMatchMethod:
    def test_any_matches_everything(self) -> None:
        for m in [*METHODS, ""]:
            assert match_method(ANY, m) is True

    def test_exact(self) -> None:
        assert match_method(ExactMethod("GET"), "GET") is True
        assert match_method(ExactMethod("GET"), "POST") is False

    @pytest.mark.parametrize("pattern", METHODS)
    @pytest.mark.parametrize("candidate", METHODS)
    def test_case_insensitive(self, pattern: str, candidate: str) -> None:
        assert match_method(ExactMethod(pattern), candidate) == match_method(
            ExactMethod(pattern.upper()), candidate.lower()
        )

    def test_string_any_is_literal(self) -> None:
        assert match_method(method_pattern("ANY"), "GET") is False
        assert match_method(method_pattern("ANY"), "any") is True


class TestMatchUrl:
    def test_any_does_not_parse(self) -> None:
        assert match_url(ANY, "") is True
        assert match_url(ANY, "not a url") is True

    def test_exact_parses_candidate(self) -> None:
        with pytest.raises(MalformedCandidateUrlError):
            match_url(ExactUrl(UrlParts(path="/a")), "")

    def test_regex_parses_candidate(self) -> None:
        with pytest.raises(MalformedCandidateUrlError):
            match_url(RegexUrl(".*"), "http://x.com/\x01")

    def test_regex_searches_full_url(self) -> None:
        pattern = RegexUrl(r"x\.com/a$")
        assert match_url(pattern, "https://x.com/a") is True
        assert match_url(pattern, "https://x.com/a/b") is False

    def test_host_includes_port(self) -> None:
        pattern = ExactUrl(UrlParts(host="host:5000", path="/abc"))
        assert match_url(pattern, "http://host:5000/abc") is True
        assert match_url(pattern, "http://host/abc") is False

    def test_unconstrained_scheme_and_host(self) -> None:
        pattern = ExactUrl(UrlParts(path="/abc"))
        assert match_url(pattern, "http://host/abc") is True
        assert match_url(pattern, "https://other-host/abc") is True
        assert match_url(pattern, "http://host/abc/") is False
        assert match_url(pattern, "http://host/abcd") is False


class TestUrlPattern:
    def test_any(self) -> None:
        assert url_pattern(ANY) is ANY

    def test_string_is_parsed(self) -> None:
        assert url_pattern("http://x.com/a") == ExactUrl(
            UrlParts(scheme="http", host="x.com", path="/a")
        )

    def test_regex_prefix(self) -> None:
        pattern = url_pattern("=~^https://")
        assert isinstance(pattern, RegexUrl)
        assert pattern.pattern == "^https://"

    def test_variants_pass_through(self) -> None:
        pattern = ExactUrl(UrlParts(path="/a"))
        assert url_pattern(pattern) is pattern

    def test_malformed_pattern_raises(self) -> None:
        with pytest.raises(MalformedPatternUrlError):
            url_pattern("http://x.com:8o8o/a")

    def test_invalid_regex_raises(self) -> None:
        with pytest.raises(InvalidPatternError, match="invalid url regex"):
            url_pattern("=~(unclosed")

    def test_backreference_rejected(self) -> None:
        with pytest.raises(InvalidPatternError):
            RegexUrl(r"(a)\1")

    def test_wrong_type(self) -> None:
        with pytest.raises(MatcherError, match="url pattern must be"):
            url_pattern(42)  # type: ignore[arg-type]


class TestMethodPattern:
    def test_string(self) -> None:
        assert method_pattern("GET") == ExactMethod("GET")

    def test_any(self) -> None:
        assert method_pattern(ANY) is ANY

    def test_wrong_type(self) -> None:
        with pytest.raises(MatcherError, match="method pattern must be"):
            method_pattern(None)  # type: ignore[arg-type]
