"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all jumphost settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Enumerated settings are checked at load time so a typo fails before any
  AWS call is made
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

from jumphost.domain.errors import ConfigurationError
from jumphost.domain.value_objects.tag import JUMPHOST_RESOURCE_NAME

logger = logging.getLogger(__name__)

MATCH_POLICIES = ("first", "strict")


@dataclass(frozen=True)
class AWSConfig:
    """AWS SDK configuration."""
    region: str = ""
    profile: str = ""
    max_attempts: int = 5
    connect_timeout: int = 10
    read_timeout: int = 30


@dataclass(frozen=True)
class IpEchoConfig:
    """Public IP self-discovery endpoint."""
    url: str = "https://checkip.amazonaws.com"
    timeout_seconds: int = 10


@dataclass(frozen=True)
class JumphostSettings:
    """Naming, tagging and lookup policy for jumphost resources."""
    resource_name: str = JUMPHOST_RESOURCE_NAME
    cluster_infra_id: str = ""
    match_policy: str = "first"  # "first" or "strict"


@dataclass(frozen=True)
class JumphostConfig:
    """Root configuration for the jumphost tool."""
    aws: AWSConfig = field(default_factory=AWSConfig)
    ip_echo: IpEchoConfig = field(default_factory=IpEchoConfig)
    jumphost: JumphostSettings = field(default_factory=JumphostSettings)
    deadline_seconds: int = 120
    log_level: str = "WARNING"


def _env_override(data: dict, prefix: str = "JUMPHOST") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern JUMPHOST_SECTION_KEY.
    For example: JUMPHOST_AWS_REGION=us-east-2, JUMPHOST_IP_ECHO_URL=...
    Section names may contain underscores, so the longest known section
    prefix wins.
    """
    sections = sorted(
        (f.name for f in dataclasses.fields(JumphostConfig)
         if f.name not in ("deadline_seconds", "log_level")),
        key=len,
        reverse=True,
    )
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        for section in sections:
            if name.startswith(f"{section}_"):
                data[section] = dict(_section(data, section))
                data[section][name[len(section) + 1:]] = value
                break
        else:
            data[name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict when it is missing or unparsable."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {path} must contain a JSON object")
    return data


def _to_int(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"config section {name!r} must be an object, got {type(section).__name__}"
        )
    return section


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for f in dataclasses.fields(cls):
        if f.name in filtered and f.type == "int":
            filtered[f.name] = _to_int(f"{cls.__name__}.{f.name}", filtered[f.name])

    return cls(**filtered)


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise ConfigurationError(
            f"{name} must be one of {', '.join(choices)}; got {value!r}"
        )


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "JUMPHOST",
) -> JumphostConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (JUMPHOST_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to jumphost.json in CWD.
        env_prefix: Environment variable prefix. Defaults to JUMPHOST.

    Raises:
        ConfigurationError: a setting has an invalid value
    """
    config_path = Path(path) if path else Path("jumphost.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    config = JumphostConfig(
        aws=_build_sub_config(AWSConfig, _section(data, "aws")),
        ip_echo=_build_sub_config(IpEchoConfig, _section(data, "ip_echo")),
        jumphost=_build_sub_config(JumphostSettings, _section(data, "jumphost")),
        deadline_seconds=_to_int("deadline_seconds", data.get("deadline_seconds", 120)),
        log_level=str(data.get("log_level", "WARNING")).upper(),
    )

    _check_choice("jumphost.match_policy", config.jumphost.match_policy, MATCH_POLICIES)
    if config.deadline_seconds <= 0:
        raise ConfigurationError("deadline_seconds must be positive")

    return config
