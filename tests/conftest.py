"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from jmx_influx.config import Settings, WriteConsistency
from jmx_influx.model import Result, Server


@pytest.fixture
def server():
    """JMX endpoint the test results come from."""
    return Server(host="app01.example.com", port=9010)


@pytest.fixture
def make_result():
    """Factory for results with sensible defaults."""
    def _make(**overrides):
        data = {
            "attribute_name": "HeapMemoryUsage",
            "class_name": "sun.management.MemoryImpl",
            "obj_domain": "java.lang",
            "type_name": "type=Memory",
            "key_alias": "jvm.memory",
            "values": {"used": 1024, "max": 4096},
            "epoch": 1700000000000,
        }
        data.update(overrides)
        return Result(**data)
    return _make


@pytest.fixture
def mock_client():
    """InfluxDB client handle with write_points/create_database mocked."""
    return MagicMock(name="InfluxDBClient")


@pytest.fixture
def settings():
    """Settings with every attribute tagged."""
    return Settings(database="metrics", write_consistency=WriteConsistency.QUORUM)
