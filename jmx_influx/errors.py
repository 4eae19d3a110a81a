# -----------------------------------------------------------------------------
# Copyright (c) 2010 JmxTrans team
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Exceptions raised while assembling the InfluxDB output writer.

Write-time failures are not wrapped here: errors from the InfluxDB client
reach the caller unchanged.
"""


class OutputWriterError(Exception):
    """Base class for output writer configuration errors."""


class InvalidConfiguration(OutputWriterError):
    """A required configuration field is missing or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid configuration for '{field}': {message}")


class UnknownAttribute(OutputWriterError):
    """A requested result tag does not name a known result attribute."""

    def __init__(self, name, known=()):
        self.name = name
        self.known = tuple(known)
        message = f"Unknown result attribute: {name!r}"
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message)
