"""structlog configuration for keepsake-mcp.

Every record goes to stderr: stdout carries the MCP protocol. Console
rendering by default, JSON lines with ``--log-json``. Records from
structlog and from stdlib loggers (httpx, mcp) share one processor chain,
and that chain masks the API key before anything is rendered.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

import structlog

REDACTED = "[REDACTED]"

_NOISY_LOGGERS = ("httpx", "httpcore", "mcp")
_SECRET_FIELDS = frozenset({"api_key", "authorization"})
_BEARER = re.compile(r"(Bearer\s+)[^\s'\",]+", re.IGNORECASE)


class SecretRedactor:
    """structlog processor that masks credentials in an event dict.

    Masks the values of ``api_key``/``authorization`` fields (also inside
    mapping values such as headers), bearer tokens inside any string,
    and every literal occurrence of the configured *secrets*.
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        self._secrets = tuple(secret for secret in secrets if secret)

    def _scrub(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return _BEARER.sub(rf"\g<1>{REDACTED}", text)

    def _clean(self, key: str, value: Any) -> Any:
        if key.lower() in _SECRET_FIELDS:
            return REDACTED
        if isinstance(value, str):
            return self._scrub(value)
        if isinstance(value, Mapping):
            return {str(k): self._clean(str(k), v) for k, v in value.items()}
        return value

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key, value in event_dict.items():
            if not key.startswith("_"):
                event_dict[key] = self._clean(key, value)
        return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    secrets: Iterable[str] = (),
) -> None:
    """Configure structlog processors and route all output to stderr.

    Args:
        verbose: ``keepsake_mcp`` loggers at DEBUG. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        secrets: Literal values (the API key) to mask wherever they appear.
    """
    app_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        SecretRedactor(secrets),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("keepsake_mcp").setLevel(app_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
