"""Unit tests for source URL validation."""

from __future__ import annotations

import pytest

from newsfeed.utils.errors import InvalidSourceURLError
from newsfeed.utils.url_safety import is_private_hostname, parse_ipv4_host, validate_source_url


class TestIsPrivateHostname:
    @pytest.mark.parametrize(
        "host",
        [
            "localhost",
            "LOCALHOST",
            "localhost.localdomain",
            "printer.local",
            "127.0.0.1",
            "127.8.9.10",
            "0.0.0.0",
            "10.1.2.3",
            "172.16.0.1",
            "172.31.255.255",
            "192.168.1.20",
            "169.254.169.254",
            "::1",
            "[::1]",
            "fe80::1",
            "::ffff:10.0.0.1",
            "127.1",
            "0",
            "0x0a.1.2.3",
            "3232235777",
            "0300.0250.0.1",
        ],
    )
    def test_blocked(self, host):
        assert is_private_hostname(host) is True

    @pytest.mark.parametrize(
        "host",
        ["example.com", "8.8.8.8", "172.32.0.1", "172.15.255.255", "2606:4700::1111", "local.example.com"],
    )
    def test_allowed(self, host):
        assert is_private_hostname(host) is False


class TestValidateSourceURL:
    def test_public_https_url_is_returned(self):
        url = "https://feeds.bbci.co.uk/news/rss.xml"
        assert validate_source_url(url) == url

    def test_public_http_url_with_port(self):
        assert validate_source_url("http://example.com:8080/feed") == "http://example.com:8080/feed"

    @pytest.mark.parametrize("url", ["not a url", "example.com/feed", "", "http://"])
    def test_malformed(self, url):
        with pytest.raises(InvalidSourceURLError, match="Invalid URL format"):
            validate_source_url(url)

    def test_bad_port_is_malformed(self):
        with pytest.raises(InvalidSourceURLError, match="Invalid URL format"):
            validate_source_url("http://example.com:99999/feed")

    @pytest.mark.parametrize("url", ["ftp://example.com/feed.xml", "file:///etc/passwd", "gopher://example.com"])
    def test_non_http_scheme(self, url):
        with pytest.raises(InvalidSourceURLError, match="URL must use HTTP or HTTPS"):
            validate_source_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost/feed",
            "http://127.0.0.1:3000/api/feed",
            "https://192.168.0.10/rss",
            "http://[::1]/rss",
            "http://169.254.169.254/latest/meta-data/",
            "http://nas.local/feed",
            "http://127.1/feed",
            "http://2130706433/feed",
            "http://0x7f.0.0.1/feed",
            "http://0177.0.0.1/feed",
            "http://10.1/feed",
            "http://0xa9fea9fe/latest/meta-data/",
            "http://[::ffff:7f00:1]/feed",
            "http://127.0.0.1./feed",
        ],
    )
    def test_private_hosts_rejected(self, url):
        with pytest.raises(InvalidSourceURLError, match="Private/local URLs are not allowed"):
            validate_source_url(url)

    def test_error_is_a_400(self):
        with pytest.raises(InvalidSourceURLError) as exc_info:
            validate_source_url("http://localhost")
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize(
        "url",
        ["http://1.2.3.4.5/feed", "http://256.1.1.1/feed", "http://08.1.2.3/feed", "http://feeds.123/rss", "http://[::zz]/rss"],
    )
    def test_malformed_ip_literals(self, url):
        with pytest.raises(InvalidSourceURLError, match="Invalid URL format"):
            validate_source_url(url)

    def test_numeric_public_host_is_allowed(self):
        # 134744072 == 8.8.8.8
        assert validate_source_url("http://134744072/feed") == "http://134744072/feed"


class TestParseIPv4Host:
    @pytest.mark.parametrize(
        "host,expected",
        [
            ("127.0.0.1", "127.0.0.1"),
            ("127.1", "127.0.0.1"),
            ("10.1", "10.0.0.1"),
            ("192.168.257", "192.168.1.1"),
            ("2130706433", "127.0.0.1"),
            ("0x7f.0.0.1", "127.0.0.1"),
            ("0177.0.0.1", "127.0.0.1"),
            ("0x", "0.0.0.0"),
        ],
    )
    def test_shorthand_forms(self, host, expected):
        assert str(parse_ipv4_host(host)) == expected

    @pytest.mark.parametrize("host", ["example.com", "feeds.bbci.co.uk", "1.2.3.example"])
    def test_domains_are_not_addresses(self, host):
        assert parse_ipv4_host(host) is None

    @pytest.mark.parametrize("host", ["1.2.3.4.5", "256.0.0.1", "1.2.3.256", "1.16777216", "09", "x.1"])
    def test_invalid_numeric_hosts(self, host):
        with pytest.raises(ValueError):
            parse_ipv4_host(host)
