# -----------------------------------------------------------------------------
# Copyright (c) 2010 JmxTrans team
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
InfluxDB client construction.

Only builds the client handle; no request is sent, so an unreachable server
is reported by the first write rather than here.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from influxdb import InfluxDBClient

from jmx_influx.errors import InvalidConfiguration

LOG = logging.getLogger(__name__)

DEFAULT_INFLUXDB_PORT = 8086


def connect(url: str, username: Optional[str] = None, password: Optional[str] = None,
            timeout: Optional[float] = None) -> InfluxDBClient:
    """
    Create an InfluxDB client for a URL such as http://influxdb:8086.

    A bare host:port is accepted and treated as plain HTTP. The URL path, if
    any, is used as the API path prefix (for InfluxDB behind a proxy).

    Raises:
        InvalidConfiguration: if the URL has no host or an invalid port
    """
    if not url:
        raise InvalidConfiguration("url", "an InfluxDB URL is required")
    if "://" not in url:
        url = f"http://{url}"

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidConfiguration("url", f"not an http(s) URL: {url}")
    try:
        port = parsed.port or DEFAULT_INFLUXDB_PORT
    except ValueError as e:
        raise InvalidConfiguration("url", f"invalid port in {url}: {e}") from e

    use_ssl = parsed.scheme == "https"
    client_kwargs = {
        'host': parsed.hostname,
        'port': port,
        'ssl': use_ssl,
        'verify_ssl': use_ssl,
        'path': parsed.path.strip('/'),
        'timeout': timeout,
    }
    # Leave the client's own defaults in place for unset credentials
    if username is not None:
        client_kwargs['username'] = username
    if password is not None:
        client_kwargs['password'] = password

    LOG.debug(f"Connecting to url: {parsed.scheme}://{parsed.hostname}:{port} as: username: {username}")
    return InfluxDBClient(**client_kwargs)
