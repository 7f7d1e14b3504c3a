# Copyright (c) 2026 netclient Contributors
# Licensed under the MIT License
# See LICENSE file for full license text

"""Configuration loader for connection settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from .const import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RECONNECT_SLEEP,
)
from .domain.value_objects import Endpoint, RetryCounting, RetryPolicy

_LOGGER = logging.getLogger(__name__)

CONF_HOST = "host"
CONF_PORT = "port"
CONF_MAX_RETRIES = "max_retries"
CONF_CONNECT_TIMEOUT = "connect_timeout"
CONF_RECONNECT_SLEEP = "reconnect_sleep"
CONF_RETRY_COUNTING = "retry_counting"
CONF_AUTO_RECONNECT = "auto_reconnect"


def _whole_number(value: Any) -> int:
    """Accept int values only; bool is an int subclass but never a count."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise vol.Invalid(f"expected int, got {type(value).__name__}")
    return value


_POSITIVE_SECONDS = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))

CLIENT_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): vol.All(str, vol.Length(min=1)),
        vol.Required(CONF_PORT): vol.All(_whole_number, vol.Range(min=0, max=0xFFFF)),
        vol.Optional(CONF_MAX_RETRIES, default=DEFAULT_MAX_RETRIES): vol.All(
            _whole_number, vol.Range(min=0)
        ),
        vol.Optional(
            CONF_CONNECT_TIMEOUT, default=DEFAULT_CONNECT_TIMEOUT
        ): _POSITIVE_SECONDS,
        vol.Optional(
            CONF_RECONNECT_SLEEP, default=DEFAULT_RECONNECT_SLEEP
        ): _POSITIVE_SECONDS,
        vol.Optional(
            CONF_RETRY_COUNTING, default=RetryCounting.SESSIONS.value
        ): vol.In([counting.value for counting in RetryCounting]),
        vol.Optional(CONF_AUTO_RECONNECT, default=False): vol.Boolean(),
    }
)


@dataclass(frozen=True)
class ClientConfig:
    """Validated connection settings.

    Attributes:
        endpoint: Remote endpoint
        policy: Retry policy
    """

    endpoint: Endpoint
    policy: RetryPolicy


def load_client_config(data: dict[str, Any]) -> ClientConfig:
    """Validate a settings mapping and build a ClientConfig.

    Args:
        data: Raw settings (e.g. parsed YAML)

    Returns:
        Validated configuration

    Raises:
        ValueError: If configuration is invalid

    Example:
        >>> config = load_client_config({"host": "example.test", "port": 9999})
        >>> config.policy.max_retries
        10
    """
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping")

    try:
        validated = CLIENT_CONFIG_SCHEMA(data)
    except vol.Invalid as err:
        raise ValueError(f"Invalid client configuration: {err}") from err

    try:
        config = ClientConfig(
            endpoint=Endpoint(validated[CONF_HOST], validated[CONF_PORT]),
            policy=RetryPolicy(
                max_retries=validated[CONF_MAX_RETRIES],
                connect_timeout=validated[CONF_CONNECT_TIMEOUT],
                reconnect_sleep=validated[CONF_RECONNECT_SLEEP],
                counting=RetryCounting(validated[CONF_RETRY_COUNTING]),
                auto_reconnect=validated[CONF_AUTO_RECONNECT],
            ),
        )
    except (TypeError, ValueError) as err:
        raise ValueError(f"Invalid client configuration: {err}") from err

    _LOGGER.debug("Loaded client configuration for %s", config.endpoint)
    return config


def load_client_config_file(path: str | Path, section: str | None = None) -> ClientConfig:
    """Load connection settings from a YAML file.

    Args:
        path: YAML file path
        section: Optional top-level key holding the settings

    Returns:
        Validated configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML or the configuration is invalid
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        data = yaml.safe_load(config_file.read_text())
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML: {err}") from err

    if not data:
        raise ValueError("Configuration file is empty")

    if section is not None:
        if not isinstance(data, dict) or section not in data:
            raise ValueError(f"Configuration missing required '{section}' section")
        data = data[section]

    return load_client_config(data)
