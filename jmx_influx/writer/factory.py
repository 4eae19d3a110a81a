"""
Writer factory for the InfluxDB output.
"""

import logging
from typing import Any, Mapping, Optional, Union

from jmx_influx.config import (
    EnvConfig,
    InfluxDbWriterConfig,
    Settings,
    parse_config,
    resolve_connection,
    resolve_settings,
)
from jmx_influx.connection import connect
from jmx_influx.writer.base import Writer
from jmx_influx.writer.influxdb_writer import InfluxDbWriter
from jmx_influx.writer.transform import ResultTransformerWriter

LOG = logging.getLogger(__name__)

class WriterFactory:
    """
    Factory for creating the InfluxDB writer from configuration.
    """

    @staticmethod
    def build(settings: Settings, client) -> Writer:
        """
        Compose the InfluxDB sink with the optional boolean coercion stage.

        Args:
            settings: Resolved writer settings
            client: InfluxDB client handle shared by every write

        Returns:
            Writer ready to be called once per polling cycle
        """
        if settings.create_database:
            LOG.info(f"Creating database {settings.database} if missing")
            client.create_database(settings.database)

        sink = InfluxDbWriter(
            client,
            settings.database,
            settings.write_consistency,
            settings.retention_policy,
            settings.tag_attributes,
        )
        LOG.info(f"Creating InfluxDB writer for database: {settings.database}, "
                 f"retention policy: {settings.retention_policy}, "
                 f"consistency: {settings.write_consistency.value}")
        return ResultTransformerWriter.boolean_to_number(settings.boolean_as_number, sink)

    @staticmethod
    def from_config(raw: Union[InfluxDbWriterConfig, Mapping[str, Any]],
                    env: Optional[EnvConfig] = None, client=None) -> Writer:
        """
        Resolve configuration, connect and build the writer.

        Args:
            raw: Writer configuration mapping (camelCase keys)
            env: Environment defaults for the connection; read from INFLUXDB_* when omitted
            client: Existing client handle; a new one is created from the URL when omitted

        Raises:
            InvalidConfiguration: if a field is missing or malformed
            UnknownAttribute: if resultTags names an unknown attribute
        """
        config = parse_config(raw)
        if config.debug:
            logging.getLogger("jmx_influx").setLevel(logging.DEBUG)

        settings = resolve_settings(config)
        if client is None:
            connection = resolve_connection(config, env)
            client = connect(connection.url, connection.username, connection.password)
        return WriterFactory.build(settings, client)
