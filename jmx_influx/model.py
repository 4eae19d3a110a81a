# -----------------------------------------------------------------------------
# Copyright (c) 2010 JmxTrans team
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
JMX result model consumed by the output writers.

A Result is one attribute reading taken from one MBean on one Server. The
ResultAttribute enumeration lists the result metadata that may be written
as InfluxDB tags.
"""

import logging
from enum import Enum
from typing import Any, Dict, MutableMapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from jmx_influx.errors import UnknownAttribute
from jmx_influx.utils import camel_to_snake_case, snake_to_camel_case

LOG = logging.getLogger(__name__)

# Tag carrying the JMX host on every point
TAG_HOSTNAME = "hostname"


class Server(BaseModel):
    """JMX endpoint a batch of results was polled from."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int


class Result(BaseModel):
    """
    One JMX attribute reading.

    Keys follow the poller's JSON output (attributeName, className, objDomain,
    typeName, keyAlias, values, epoch). `epoch` is in milliseconds.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=snake_to_camel_case,
        populate_by_name=True,
    )

    attribute_name: str
    class_name: str = ""
    obj_domain: str = ""
    type_name: str = ""
    key_alias: str
    values: Dict[str, Any] = Field(default_factory=dict)
    epoch: int


class ResultAttribute(Enum):
    """
    Result metadata fields that can be written as tags.

    Member values are the names accepted in the `resultTags` configuration
    list. Declaration order is the order tags are resolved and logged in.
    """

    TYPE_NAME = "typeName"
    OBJ_DOMAIN = "objDomain"
    CLASS_NAME = "className"
    ATTRIBUTE_NAME = "attributeName"
    KEY_ALIAS = "keyAlias"
    HOST = "host"

    @classmethod
    def from_attribute(cls, name: str) -> "ResultAttribute":
        """
        Look up an attribute by its configuration name (exact match).

        Raises:
            UnknownAttribute: if no member carries this name
        """
        for attribute in cls:
            if attribute.value == name:
                return attribute
        raise UnknownAttribute(name, known=[attribute.value for attribute in cls])

    def value_of(self, result: Result, server: Optional[Server] = None) -> Optional[str]:
        """Return the tag value this attribute contributes for a result."""
        if self is ResultAttribute.HOST:
            return server.host if server is not None else None
        return getattr(result, camel_to_snake_case(self.value))

    @property
    def tag_name(self) -> str:
        """Tag key written for this attribute; the host shares the hostname tag."""
        if self is ResultAttribute.HOST:
            return TAG_HOSTNAME
        return self.value

    def add_to(self, tags: MutableMapping[str, str], result: Result,
               server: Optional[Server] = None) -> None:
        """Add this attribute as a tag; empty values are left out."""
        value = self.value_of(result, server)
        if value:
            tags[self.tag_name] = value
