"""
Tests for InfluxDB client construction.
"""

from unittest.mock import patch

import pytest

from jmx_influx.connection import DEFAULT_INFLUXDB_PORT, connect
from jmx_influx.errors import InvalidConfiguration


class TestConnect:
    """Tests for connect."""

    @patch("jmx_influx.connection.InfluxDBClient")
    def test_http_url(self, mock_client_cls):
        """Host, port and credentials are passed to the client."""
        client = connect("http://influxdb:8087", "admin", "secret")

        mock_client_cls.assert_called_once_with(
            host="influxdb",
            port=8087,
            ssl=False,
            verify_ssl=False,
            path="",
            timeout=None,
            username="admin",
            password="secret",
        )
        assert client is mock_client_cls.return_value

    @patch("jmx_influx.connection.InfluxDBClient")
    def test_https_url_enables_ssl(self, mock_client_cls):
        """https turns on TLS with verification."""
        connect("https://influx.example.com/proxy/")

        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["ssl"] is True
        assert kwargs["verify_ssl"] is True
        assert kwargs["port"] == DEFAULT_INFLUXDB_PORT
        assert kwargs["path"] == "proxy"

    @patch("jmx_influx.connection.InfluxDBClient")
    def test_bare_host_port(self, mock_client_cls):
        """host:port without a scheme is treated as http."""
        connect("influxdb:8086")

        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["host"] == "influxdb"
        assert kwargs["port"] == 8086
        assert kwargs["ssl"] is False

    @patch("jmx_influx.connection.InfluxDBClient")
    def test_unset_credentials_use_client_defaults(self, mock_client_cls):
        """None credentials are not forwarded."""
        connect("http://influxdb:8086")

        kwargs = mock_client_cls.call_args.kwargs
        assert "username" not in kwargs
        assert "password" not in kwargs

    @pytest.mark.parametrize("url", ["", "ftp://influxdb:21", "http://", "http://influxdb:notaport"])
    def test_invalid_urls(self, url):
        """Unusable URLs are configuration errors."""
        with pytest.raises(InvalidConfiguration) as exc_info:
            connect(url)
        assert exc_info.value.field == "url"
