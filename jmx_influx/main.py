#!/usr/bin/env python3

# -----------------------------------------------------------------------------
# Copyright (c) 2010 JmxTrans team
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Command line entry point for the InfluxDB output writer.

Loads the writer configuration, assembles the writer and pushes one batch
of JMX results read from a JSON file. Useful for checking a configuration
against a live InfluxDB before handing it to the poller.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError
from requests.exceptions import RequestException
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError

from jmx_influx.config import load_config, load_environment
from jmx_influx.errors import InvalidConfiguration, OutputWriterError
from jmx_influx.model import Result, Server
from jmx_influx.writer.factory import WriterFactory

LOG = logging.getLogger(__name__)

DEFAULT_JMX_HOST = 'localhost'
DEFAULT_JMX_PORT = 1099

EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_BAD_CONFIG = 2


class LoggingClient:
    """Client stand-in for --doNotPost: logs what would be written."""

    def write_points(self, points, **kwargs):
        LOG.info(f"Would write {len(points)} points with {kwargs}")
        for point in points:
            LOG.debug(f"  {point}")
        return True

    def create_database(self, dbname):
        LOG.info(f"Would create database {dbname}")


def read_results(path: str, host: Optional[str] = None,
                 port: Optional[int] = None) -> Tuple[Server, List[Result]]:
    """
    Read results from a JSON file.

    The file holds either a list of results or an object with `server`
    ({host, port}) and `results` keys. Explicit host/port win over the file.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidConfiguration("fromJson", f"failed to read {path}: {e}") from e

    server_data = {}
    if isinstance(data, dict):
        server_data = data.get('server') or {}
        data = data.get('results', [])
    if not isinstance(server_data, dict):
        raise InvalidConfiguration("fromJson", f"expected a {{host, port}} object for server in {path}")
    if not isinstance(data, list):
        raise InvalidConfiguration("fromJson", f"expected a list of results in {path}")

    try:
        server = Server(
            host=host or server_data.get('host', DEFAULT_JMX_HOST),
            port=port if port is not None else server_data.get('port', DEFAULT_JMX_PORT),
        )
        results = [Result.model_validate(item) for item in data]
    except ValidationError as e:
        raise InvalidConfiguration("fromJson", f"malformed results in {path}: {e}") from e

    LOG.info(f"Read {len(results)} results for {server.host}:{server.port} from {path}")
    return server, results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Write JMX results to InfluxDB using an output writer configuration',
    )
    parser.add_argument('-c', '--config', required=True,
                        help='<Required> Writer configuration file (.json, .yaml or .yml)')
    parser.add_argument('--fromJson', required=True,
                        help='<Required> JSON file with the results to write')
    parser.add_argument('--host', default=None,
                        help='JMX host the results came from (overrides the file)')
    parser.add_argument('--port', type=int, default=None,
                        help='JMX port the results came from (overrides the file)')
    parser.add_argument('--envFile', default=None,
                        help='.env file with INFLUXDB_URL/INFLUXDB_USERNAME/INFLUXDB_PASSWORD')
    parser.add_argument('-n', '--doNotPost', action='store_true', default=False,
                        help='Resolve and log everything, but do not post to InfluxDB')
    parser.add_argument('-v', '--verbose', action='store_true', default=False,
                        help='Enable verbose logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        env = load_environment(args.envFile)
        config = load_config(args.config)
        client = LoggingClient() if args.doNotPost else None
        writer = WriterFactory.from_config(config, env=env, client=client)
        server, results = read_results(args.fromJson, args.host, args.port)
    except OutputWriterError as e:
        LOG.error(f"Configuration error: {e}")
        return EXIT_BAD_CONFIG

    try:
        written = writer.write(server, results)
    except (InfluxDBClientError, InfluxDBServerError, RequestException) as e:
        LOG.error(f"Write failed: {e}")
        return EXIT_WRITE_FAILED
    finally:
        writer.close()

    LOG.info(f"Wrote {written} of {len(results)} results")
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
