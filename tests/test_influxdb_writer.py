"""
Tests for the InfluxDB writer.
"""

import math

import pytest

from jmx_influx.config import WriteConsistency
from jmx_influx.model import ResultAttribute
from jmx_influx.writer.influxdb_writer import (
    JMX_PORT_FIELD,
    TAG_HOSTNAME,
    InfluxDbWriter,
    is_numeric,
)


@pytest.fixture
def writer(mock_client):
    return InfluxDbWriter(
        mock_client,
        "metrics",
        WriteConsistency.QUORUM,
        "autogen",
        (ResultAttribute.TYPE_NAME, ResultAttribute.HOST),
    )


class TestIsNumeric:
    """Tests for is_numeric."""

    @pytest.mark.parametrize("value", [0, 42, -3, 1.5, 0.0])
    def test_numbers(self, value):
        assert is_numeric(value)

    @pytest.mark.parametrize("value", [True, False, "12", None, math.nan, math.inf, [1]])
    def test_non_numbers(self, value):
        assert not is_numeric(value)


class TestInfluxDbWriter:
    """Tests for InfluxDbWriter."""

    def test_write_parameters(self, writer, mock_client, server, make_result):
        """Database, retention policy and consistency go to write_points."""
        written = writer.write(server, [make_result()])

        assert written == 1
        mock_client.write_points.assert_called_once()
        kwargs = mock_client.write_points.call_args.kwargs
        assert kwargs["database"] == "metrics"
        assert kwargs["retention_policy"] == "autogen"
        assert kwargs["consistency"] == "quorum"
        assert kwargs["time_precision"] == "ms"

    def test_point_layout(self, writer, mock_client, server, make_result):
        """One point per result with alias, epoch, tags and numeric fields."""
        writer.write(server, [make_result()])

        points = mock_client.write_points.call_args.args[0]
        assert points == [{
            "measurement": "jvm.memory",
            "time": 1700000000000,
            "tags": {
                TAG_HOSTNAME: "app01.example.com",
                "typeName": "type=Memory",
            },
            "fields": {"used": 1024, "max": 4096, JMX_PORT_FIELD: 9010},
        }]

    def test_all_attributes_write_hostname_once(self, mock_client, server, make_result):
        """Selecting every attribute does not add a second host tag."""
        writer = InfluxDbWriter(mock_client, "metrics", WriteConsistency.ALL, "default", tuple(ResultAttribute))

        writer.write(server, [make_result()])

        tags = mock_client.write_points.call_args.args[0][0]["tags"]
        assert tags[TAG_HOSTNAME] == "app01.example.com"
        assert "host" not in tags
        assert list(tags.values()).count("app01.example.com") == 1

    def test_only_selected_attributes_tagged(self, mock_client, server, make_result):
        """No attribute tags beyond hostname when none are selected."""
        writer = InfluxDbWriter(mock_client, "metrics", WriteConsistency.ALL, "default", ())

        writer.write(server, [make_result()])

        point = mock_client.write_points.call_args.args[0][0]
        assert point["tags"] == {TAG_HOSTNAME: "app01.example.com"}

    def test_non_numeric_values_dropped(self, writer, mock_client, server, make_result):
        """Strings and booleans are not written as fields."""
        result = make_result(values={"used": 10, "name": "heap", "valid": True})

        writer.write(server, [result])

        point = mock_client.write_points.call_args.args[0][0]
        assert point["fields"] == {"used": 10, JMX_PORT_FIELD: 9010}

    def test_results_without_numbers_skipped(self, writer, mock_client, server, make_result):
        """Results without numeric values produce no point."""
        results = [
            make_result(values={"state": "RUNNING"}),
            make_result(key_alias="jvm.threads", values={"count": 12}),
        ]

        written = writer.write(server, results)

        assert written == 1
        points = mock_client.write_points.call_args.args[0]
        assert [p["measurement"] for p in points] == ["jvm.threads"]

    def test_empty_batch_not_sent(self, writer, mock_client, server, make_result):
        """The client is not called when there is nothing to write."""
        assert writer.write(server, []) == 0
        assert writer.write(server, [make_result(values={"enabled": False})]) == 0
        mock_client.write_points.assert_not_called()

    def test_single_call_per_batch(self, writer, mock_client, server, make_result):
        """A batch is written with one client call."""
        writer.write(server, [make_result(), make_result(key_alias="b"), make_result(key_alias="c")])

        mock_client.write_points.assert_called_once()
        assert len(mock_client.write_points.call_args.args[0]) == 3

    def test_client_errors_propagate(self, writer, mock_client, server, make_result):
        """Write failures reach the caller unchanged."""
        error = ConnectionError("influxdb unreachable")
        mock_client.write_points.side_effect = error

        with pytest.raises(ConnectionError) as exc_info:
            writer.write(server, [make_result()])
        assert exc_info.value is error
