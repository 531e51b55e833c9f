import logging
from typing import Any

import structlog
from structlog.types import Processor

# Name of the root handler installed by setup_logging
HANDLER_NAME = "credprovider"


def _shared_processors(json_logs: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        # Console output pretty-prints exceptions itself
        processors.append(structlog.processors.format_exc_info)
    return processors


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """
    Configure structlog for the credprovider package.

    Calling it again replaces the handler it installed earlier, so a later call
    can switch between JSON and console output. Handlers installed by the host
    application are left in place.
    """
    shared_processors = _shared_processors(json_logs)

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_renderer: Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # Only applied to records coming from plain `logging` calls
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


class CredProviderStructLogger:
    """
    Structured logger for the credprovider package.

    ``bind`` returns a new logger carrying extra key-value pairs; the logger it
    was called on, and every other logger, is left unchanged.
    """

    def __init__(self, log_name: str = "credprovider", logger: Any = None):
        self.log_name = log_name
        self.logger = logger if logger is not None else structlog.stdlib.get_logger(log_name)

    def bind(self, **new_values: Any) -> "CredProviderStructLogger":
        return CredProviderStructLogger(self.log_name, self.logger.bind(**new_values))

    def debug(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.debug(event, *args, **kw)

    def info(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.info(event, *args, **kw)

    def error(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.error(event, *args, **kw)


def get_credprovider_logger(log_name: str = "credprovider") -> CredProviderStructLogger:
    """Return a structured logger scoped to the credprovider package."""
    return CredProviderStructLogger(log_name)


def init_logger(config) -> CredProviderStructLogger:
    """
    Initialize logging from a SystemConfig and return the package logger.
    """
    setup_logging(json_logs=config.json_logs, log_level=config.log_level.value)

    return CredProviderStructLogger("credprovider")
