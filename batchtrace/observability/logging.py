"""Structured logging for the registry.

JSON output for deployments, console output for development, and a
redaction step so signing material never reaches a log sink.
"""

import logging
import re
import sys
from collections.abc import Mapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "secret",
    "token",
    "api_key",
    "authorization",
    "credentials",
    "private_key",
    "signing_key",
    "mnemonic",
    "seed_phrase",
    "access_token",
    "refresh_token",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PRIVATE_KEY_PATTERN = re.compile(r"\b0x[0-9a-fA-F]{64}\b")


class SecretRedactor:
    """Processor that masks key material before an event is rendered.

    Keys listed in SENSITIVE_KEYS are replaced wholesale. String values
    anywhere in the event, including inside nested dicts, lists and tuples,
    are scanned for email addresses and 64-hex-digit private keys. Account
    identities (40 hex digits) are not secrets and pass through.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        return cast(EventDict, self._redact(event_dict))

    def _redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                key: "[REDACTED]"
                if isinstance(key, str) and key.lower() in SENSITIVE_KEYS
                else self._redact(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return type(value)(self._redact(item) for item in value)
        if isinstance(value, str):
            return PRIVATE_KEY_PATTERN.sub("[KEY]", EMAIL_PATTERN.sub("[EMAIL]", value))
        return value


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_pii: bool = True,
) -> None:
    """Configure structlog for the registry.

    Args:
        level: Minimum level name; unknown names fall back to INFO
        format: "json" for machine sinks, "console" for local development
        redact_pii: Insert SecretRedactor ahead of the renderer
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if redact_pii:
        processors.append(SecretRedactor())
    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    level_num = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
