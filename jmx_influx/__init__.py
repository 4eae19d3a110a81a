# -----------------------------------------------------------------------------
# Copyright (c) 2010 JmxTrans team
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
InfluxDB output writer for JMX results.

The package is organised the same way as the rest of the output pipeline:
- config: parse and resolve the writer's JSON/YAML configuration
- model: JMX results and the result attributes that can become tags
- connection: build the InfluxDB client handle
- writer: the InfluxDB sink and the result transformation stage
"""

__version__ = "1.0.0"
