"""
Output writers: the InfluxDB sink and the result transformation stage.
"""

from jmx_influx.writer.base import Writer
from jmx_influx.writer.factory import WriterFactory
from jmx_influx.writer.influxdb_writer import InfluxDbWriter
from jmx_influx.writer.transform import ResultTransformerWriter, coerce_booleans

__all__ = [
    "Writer",
    "WriterFactory",
    "InfluxDbWriter",
    "ResultTransformerWriter",
    "coerce_booleans",
]
