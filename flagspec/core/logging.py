"""Structured Logging for flagspec

- Library loggers route through stdlib logging: a host application that
  never calls configure_logging sees only warnings and above, formatted by
  its own handlers
- configure_logging (used by the CLI) installs one stderr handler with
  colored console output or JSON lines
- Context propagation via contextvars
- Long spec strings are shortened before rendering
"""
import logging
import sys

import structlog
from structlog.types import EventDict, Processor

# Event fields that may carry user-supplied spec text of any length
_LONG_FIELDS = ("spec", "reason")
MAX_FIELD_CHARS = 200


def _add_library_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that tags events with the library name."""
    event_dict.setdefault("library", "flagspec")
    return event_dict


def _shorten_long_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that truncates oversized spec text (e.g. deeply nested specs)."""
    for key in _LONG_FIELDS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
            event_dict[key] = f"{value[:MAX_FIELD_CHARS]}... ({len(value)} chars)"
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors used by both renderers and for foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_library_info,
        _shorten_long_fields,
    ]


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """Route flagspec and stdlib logging to stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names mean WARNING
        json_logs: Emit JSON lines instead of console output
    """
    shared_processors = get_shared_processors()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_logs),
        ],
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # stdout belongs to command output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """structlog logger bound to the stdlib logger ``name``.

    Works before and after configure_logging; configuration is looked up on
    every call.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def bind_context(**kwargs) -> None:
    """Bind key-value pairs to every later log event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LoggerRegistry:
    """One logger per library domain, named ``flagspec.<domain>``."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"flagspec.{name}")
        return cls._loggers[name]


def parser_logger() -> structlog.stdlib.BoundLogger:
    """Logger for spec parsing and validator construction."""
    return LoggerRegistry.get("parser")


def messages_logger() -> structlog.stdlib.BoundLogger:
    """Logger for message catalog lookups."""
    return LoggerRegistry.get("messages")


def cli_logger() -> structlog.stdlib.BoundLogger:
    """Logger for command-line tool events."""
    return LoggerRegistry.get("cli")
