# -----------------------------------------------------------------------------
# Copyright (c) 2010 JmxTrans team
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
InfluxDB writer for JMX results.

Each result becomes one point: the key alias is the measurement, numeric
values are the fields and the selected result attributes are the tags.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from jmx_influx.config import WriteConsistency
from jmx_influx.model import TAG_HOSTNAME, Result, ResultAttribute, Server
from jmx_influx.writer.base import Writer

LOG = logging.getLogger(__name__)

JMX_PORT_FIELD = "_jmx_port"
TIME_PRECISION = "ms"  # Result.epoch is in milliseconds


def is_numeric(value: Any) -> bool:
    """Finite ints and floats; booleans are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


class InfluxDbWriter(Writer):
    """
    Writer implementation for InfluxDB 1.x.

    Issues a single write_points call per batch. Retries, batching and
    connection pooling belong to the client and the dispatch loop.
    """

    def __init__(self, client, database: str, write_consistency: WriteConsistency,
                 retention_policy: str, tag_attributes: Sequence[ResultAttribute]):
        """
        Args:
            client: InfluxDB client handle (anything with write_points)
            database: Database to write into
            write_consistency: Cluster acknowledgement level
            retention_policy: Retention policy for written points
            tag_attributes: Result attributes written as tags
        """
        self.client = client
        self.database = database
        self.write_consistency = write_consistency
        self.retention_policy = retention_policy
        self.tag_attributes = tuple(tag_attributes)

    def build_point(self, server: Server, result: Result) -> Optional[Dict[str, Any]]:
        """Build the point for one result, or None when it has no numeric value."""
        fields = {key: value for key, value in result.values.items() if is_numeric(value)}
        if not fields:
            LOG.debug(f"Skipping {result.key_alias}.{result.attribute_name}: no numeric values")
            return None
        fields[JMX_PORT_FIELD] = server.port

        tags = {TAG_HOSTNAME: server.host}
        for attribute in self.tag_attributes:
            attribute.add_to(tags, result, server)

        return {
            'measurement': result.key_alias,
            'time': result.epoch,
            'tags': tags,
            'fields': fields,
        }

    def write(self, server: Server, results: Sequence[Result]) -> int:
        points: List[Dict[str, Any]] = []
        for result in results:
            point = self.build_point(server, result)
            if point is not None:
                points.append(point)

        if not points:
            LOG.debug(f"Nothing to write for {server.host}:{server.port}")
            return 0

        try:
            self.client.write_points(
                points,
                time_precision=TIME_PRECISION,
                database=self.database,
                retention_policy=self.retention_policy,
                consistency=self.write_consistency.client_value,
            )
        except Exception as e:
            LOG.error(f"Failed to write {len(points)} points to {self.database}: {e}")
            raise

        LOG.debug(f"Wrote {len(points)} points for {server.host}:{server.port} to {self.database}")
        return len(points)
