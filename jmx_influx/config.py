# -----------------------------------------------------------------------------
# Copyright (c) 2010 JmxTrans team
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Configuration management for the InfluxDB output writer.

Raw configuration comes from a JSON or YAML mapping using the writer's
camelCase keys. It is parsed into InfluxDbWriterConfig and then resolved
into the immutable Settings the writer runs with. Connection defaults can be
supplied through INFLUXDB_* environment variables (or a .env file).
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jmx_influx.attributes import ALL_RESULT_ATTRIBUTES, resolve_tag_attributes
from jmx_influx.errors import InvalidConfiguration
from jmx_influx.model import ResultAttribute
from jmx_influx.utils import is_blank, snake_to_camel_case

LOG = logging.getLogger(__name__)

# Retention policy used when the configuration does not name one
DEFAULT_RETENTION_POLICY = "default"
DEFAULT_INFLUXDB_URL = "http://localhost:8086"


class WriteConsistency(str, Enum):
    """Acknowledgement level requested from an InfluxDB cluster on write."""

    ALL = "ALL"
    ANY = "ANY"
    ONE = "ONE"
    QUORUM = "QUORUM"

    @property
    def client_value(self) -> str:
        """Value expected by the InfluxDB HTTP API (`consistency` parameter)."""
        return self.value.lower()


class EnvConfig(BaseSettings):
    # Connection defaults, overridden by the configuration file
    model_config = SettingsConfigDict(env_prefix="INFLUXDB_", case_sensitive=False, extra="ignore")

    url: str = DEFAULT_INFLUXDB_URL
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)


class InfluxDbWriterConfig(BaseModel):
    """Raw writer configuration as found in the JSON/YAML file."""

    model_config = ConfigDict(
        alias_generator=snake_to_camel_case,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    boolean_as_number: bool = False
    debug: bool = False
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    database: Optional[str] = None
    write_consistency: Optional[str] = None
    retention_policy: Optional[str] = None
    result_tags: Optional[List[str]] = None
    create_database: bool = False


class ConnectionSettings(BaseModel):
    """Parameters handed to the InfluxDB client constructor, unvalidated."""

    model_config = ConfigDict(frozen=True)

    url: str
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)


class Settings(BaseModel):
    """Resolved writer settings; created once and never mutated."""

    model_config = ConfigDict(frozen=True)

    database: str
    write_consistency: WriteConsistency = WriteConsistency.ALL
    retention_policy: str = DEFAULT_RETENTION_POLICY
    boolean_as_number: bool = False
    tag_attributes: Tuple[ResultAttribute, ...] = ALL_RESULT_ATTRIBUTES
    create_database: bool = False

    @field_validator("database")
    @classmethod
    def database_not_blank(cls, value: str) -> str:
        if is_blank(value):
            raise ValueError("a database name is required")
        return value


def parse_config(raw: Union[InfluxDbWriterConfig, Mapping[str, Any]]) -> InfluxDbWriterConfig:
    """
    Validate the shape of a raw configuration mapping.

    Raises:
        InvalidConfiguration: if the input is not a mapping or a field has the wrong type
    """
    if isinstance(raw, InfluxDbWriterConfig):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidConfiguration("<root>", f"expected a mapping, got {type(raw).__name__}")
    try:
        return InfluxDbWriterConfig.model_validate(dict(raw))
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error.get("loc") else "<root>"
        raise InvalidConfiguration(field, error["msg"]) from e


def resolve_write_consistency(value: Optional[str]) -> WriteConsistency:
    """Blank means ALL; anything else must be an exact member name."""
    if is_blank(value):
        return WriteConsistency.ALL
    try:
        return WriteConsistency(value)
    except ValueError:
        expected = ", ".join(level.value for level in WriteConsistency)
        raise InvalidConfiguration(
            "writeConsistency", f"unknown consistency level {value!r} (expected one of: {expected})"
        ) from None


def resolve_retention_policy(value: Optional[str]) -> str:
    """Blank means the server default policy; other names pass through as-is."""
    return DEFAULT_RETENTION_POLICY if is_blank(value) else value


def resolve_settings(raw: Union[InfluxDbWriterConfig, Mapping[str, Any]]) -> Settings:
    """
    Resolve a raw configuration into writer Settings.

    Raises:
        InvalidConfiguration: if the database is missing or a field is malformed
        UnknownAttribute: if resultTags names an unknown attribute
    """
    config = parse_config(raw)

    if is_blank(config.database):
        raise InvalidConfiguration("database", "a database name is required")

    settings = Settings(
        database=config.database,
        write_consistency=resolve_write_consistency(config.write_consistency),
        retention_policy=resolve_retention_policy(config.retention_policy),
        boolean_as_number=config.boolean_as_number,
        tag_attributes=resolve_tag_attributes(config.result_tags),
        create_database=config.create_database,
    )
    LOG.debug(f"Resolved writer settings: {settings}")
    return settings


def resolve_connection(raw: Union[InfluxDbWriterConfig, Mapping[str, Any]],
                       env: Optional[EnvConfig] = None) -> ConnectionSettings:
    """Combine connection fields from the configuration with environment defaults."""
    config = parse_config(raw)
    env = env if env is not None else EnvConfig()
    return ConnectionSettings(
        url=config.url if not is_blank(config.url) else env.url,
        username=config.username if config.username is not None else env.username,
        password=config.password if config.password is not None else env.password,
    )


def load_environment(dotenv_path: Optional[str] = None) -> EnvConfig:
    """Load a .env file (if any) into the process environment and read INFLUXDB_* values."""
    load_dotenv(dotenv_path=dotenv_path)
    return EnvConfig()


def load_config(config_file: Union[str, Path]) -> InfluxDbWriterConfig:
    """
    Load writer configuration from a YAML or JSON file.

    Raises:
        InvalidConfiguration: if the file is missing, unreadable or has an unsupported format
    """
    path = Path(config_file)
    if not path.exists():
        raise InvalidConfiguration("config", f"config file not found: {path}")

    suffix = path.suffix.lower()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            elif suffix == '.json':
                data = json.load(f)
            else:
                raise InvalidConfiguration("config", f"unsupported config file format: {path}")
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise InvalidConfiguration("config", f"failed to read {path}: {e}") from e

    LOG.info(f"Loaded configuration from {os.fspath(path)}")
    return parse_config(data if data is not None else {})
