"""
Tests for NO_PROXY hostname matching.
"""
import pytest
from proxy_config import should_bypass_proxy
from proxy_config.no_proxy import get_hostname, matches_no_proxy_entry, parse_no_proxy


class TestShouldBypassProxy:
    @pytest.mark.parametrize("host", ["example.com", "api.example.com", "localhost", "10.0.0.1"])
    def test_wildcard_matches_everything(self, host):
        assert should_bypass_proxy(f"https://{host}/path", "*") is True

    def test_leading_dot_matches_subdomain(self):
        assert should_bypass_proxy("https://api.example.com", ".example.com") is True

    def test_leading_dot_does_not_match_bare_domain(self):
        assert should_bypass_proxy("https://example.com", ".example.com") is False

    def test_implicit_parent_domain(self):
        assert should_bypass_proxy("https://api.example.com", "example.com") is True

    def test_exact_match(self):
        assert should_bypass_proxy("https://example.com", "example.com") is True

    def test_suffix_must_be_label_boundary(self):
        """'example.com' must not match 'badexample.com'."""
        assert should_bypass_proxy("https://badexample.com", "example.com") is False

    def test_malformed_url_fails_open(self):
        assert should_bypass_proxy("not a url", "example.com") is False

    def test_invalid_ipv6_url_fails_open(self):
        assert should_bypass_proxy("http://[::1", "*") is False

    @pytest.mark.parametrize("no_proxy", [None, "", " , ,"])
    def test_empty_list_never_bypasses(self, no_proxy):
        assert should_bypass_proxy("https://example.com", no_proxy) is False

    def test_case_insensitive(self):
        assert should_bypass_proxy("https://API.Example.COM", " .EXAMPLE.com ") is True

    def test_multiple_entries_and_trailing_comma(self):
        no_proxy = "localhost, 127.0.0.1, .internal.co,"
        assert should_bypass_proxy("http://localhost:8080", no_proxy) is True
        assert should_bypass_proxy("https://jira.internal.co", no_proxy) is True
        assert should_bypass_proxy("https://jira.external.co", no_proxy) is False

    def test_port_is_ignored_for_matching(self):
        assert should_bypass_proxy("https://jira.corp.local:8443/rest", "corp.local") is True


class TestHelpers:
    def test_parse_no_proxy(self):
        assert parse_no_proxy(" A.com ,,.B.org, ") == ["a.com", ".b.org"]

    def test_get_hostname(self):
        assert get_hostname("https://User@Host.Example.com:443/x") == "host.example.com"
        assert get_hostname("not a url") is None

    def test_matches_entry(self):
        assert matches_no_proxy_entry("a.b.c", ".b.c") is True
        assert matches_no_proxy_entry("b.c", ".b.c") is False
        assert matches_no_proxy_entry("a.b.c", "b.c") is True
        assert matches_no_proxy_entry("ab.c", "b.c") is False
