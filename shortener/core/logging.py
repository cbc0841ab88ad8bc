"""
Centralized Logging Configuration.

All modules log through structlog on top of the stdlib logging tree, set up
once by setup_logging() from config/settings/logging.yaml. Outside a project
checkout DEFAULT_LOGGING_CONFIG is used.

Console records go to stderr so that the links printed on stdout stay clean.
The optional JSONL file receives one JSON object per record with timestamp,
level, logger, event, func_name, lineno, source and any extra fields.

Usage:
    from shortener.core.logging import get_logger, log_with_source, setup_logging

    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    log_with_source(logger, "cli", "info", "Link added", strid="abc")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from shortener.core.config import find_project_root, load_validated_config
from shortener.core.config_schema import FileHandlerSchema, LoggingSchema

DEFAULT_LOGGING_CONFIG = LoggingSchema(
    level="WARNING",
    format="console",
    handlers={
        "console": {"enabled": True},
        "file": {
            "enabled": False,
            "path": "logs/shortener.jsonl",
            "max_bytes": 10485760,
            "backup_count": 5,
        },
    },
)

_logging_config: LoggingSchema | None = None


def _load_logging_config() -> LoggingSchema:
    """Load and cache logging.yaml, or DEFAULT_LOGGING_CONFIG if there is none."""
    global _logging_config
    if _logging_config is None:
        try:
            _logging_config = load_validated_config(LoggingSchema, "logging.yaml")
        except (RuntimeError, FileNotFoundError):
            _logging_config = DEFAULT_LOGGING_CONFIG
    return _logging_config


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
            # report the caller of log_with_source, not log_with_source
            additional_ignores=[__name__],
        ),
    ]


def _file_handler(settings: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    try:
        log_path = find_project_root() / settings.path
    except RuntimeError:
        log_path = Path.cwd() / settings.path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Arguments left as None take their value from logging.yaml.

    Raises:
        ConfigurationError: If logging.yaml exists but is invalid.
    """
    config = _load_logging_config()
    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = config.handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = config.handlers.file.enabled

    pre_chain = _shared_processors()
    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        foreign_pre_chain=pre_chain,
    )
    if format_type == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            foreign_pre_chain=pre_chain,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)
    if enable_file_logging:
        root_logger.addHandler(_file_handler(config.handlers.file, json_formatter))

    # httpx logs every request at INFO; the client logs its own.
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger, typically for __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Args:
        logger: The logger instance
        source: Log source, "cli" for command-line events
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **kwargs: Additional context fields

    Raises:
        AttributeError: If level is not a valid log level
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
