"""
Centralized Logging

Architectural Intent:
- Single place that decides where jumphost, botocore and urllib3 log output goes
- --debug also surfaces the SDK's retry/backoff decisions and HTTP connection
  attempts, next to the pipeline stage transitions
- Optional JSON lines carry pipeline context handed over with `extra=`

Design Decisions:
- One stderr handler is shared by every configured logger so text and JSON
  output never interleave two formats
- Above DEBUG the SDK loggers are held at WARNING; botocore is very chatty
"""

import json
import logging
import sys
from datetime import datetime, UTC

JUMPHOST_LOGGER = "jumphost"
SDK_LOGGERS = ("botocore", "urllib3")

# LogRecord attributes copied into JSON output when a call site sets them
CONTEXT_FIELDS = ("stage", "subnet_id", "vpc_id", "group_id", "cidr")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with pipeline context when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _make_handler(level: int, json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))
    return handler


def sdk_level_for(level: int) -> int:
    """Level for the botocore/urllib3 loggers given the tool's own level."""
    return logging.DEBUG if level <= logging.DEBUG else logging.WARNING


def configure_logging(
    level: int = logging.WARNING,
    json_format: bool = False,
) -> None:
    """Configure logging for the jumphost tool and the AWS SDK beneath it.

    Args:
        level: Level for the jumphost loggers (and the shared handler)
        json_format: If True, emit JSON lines. Otherwise human-readable.

    Calling it again replaces the previous handler, so the CLI can re-apply
    the level from the config file after parsing flags.
    """
    handler = _make_handler(level, json_format)

    app = logging.getLogger(JUMPHOST_LOGGER)
    app.handlers.clear()
    app.setLevel(level)
    app.addHandler(handler)

    for name in SDK_LOGGERS:
        sdk = logging.getLogger(name)
        sdk.handlers.clear()
        sdk.setLevel(sdk_level_for(level))
        sdk.addHandler(handler)


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    """Translate a config log_level string into a logging level."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default
