"""Structured logging utilities for the Doxygen graph pipeline.

Every record carries the emitting component and the run id in ``extra`` so
that warnings from the resolver can be traced back to a single build.
"""

import logging
import sys
from typing import Any, Dict, Optional

_LOG_FORMAT = "%(levelname)s [%(component)s] %(message)s"


class ComponentLogger:
    """Logger that tags each record with component, run id and bound context."""

    def __init__(
        self,
        name: str,
        run_id: Optional[str] = None,
        component: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize component logger.

        Args:
            name: Logger name (typically __name__)
            run_id: Optional identifier shared by all records of one pipeline run
            component: Component name for structured logging
            context: Fields merged into every record's extra data
        """
        self.logger = logging.getLogger(name)
        self.run_id = run_id
        self.component = component or name.split(".")[-1]
        self.context: Dict[str, Any] = dict(context or {})
        self.warning_count = 0

    def bind(self, **context: Any) -> "ComponentLogger":
        """Return a child logger whose records also carry ``context``."""
        merged = dict(self.context)
        merged.update(context)
        return ComponentLogger(self.logger.name, self.run_id, self.component, merged)

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra: Dict[str, Any] = {
            "component": self.component,
            "run_id": self.run_id,
        }
        combined_extra.update(self.context)
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log a warning and count it."""
        self.warning_count += 1
        self.logger.warning(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ) -> None:
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log exception message with component info and traceback."""
        self.logger.exception(message, extra=self._get_extra(extra))


class _ComponentDefaultsFilter(logging.Filter):
    """Fill in ``component`` for records emitted by foreign loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        return True


def get_logger(
    name: str,
    run_id: Optional[str] = None,
    component: Optional[str] = None,
) -> ComponentLogger:
    """Get a component-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        run_id: Optional identifier of the pipeline run
        component: Component name for structured logging

    Returns:
        ComponentLogger instance
    """
    return ComponentLogger(name, run_id, component)


def configure_logging(level: str = "INFO", stream: Any = None) -> logging.Handler:
    """Install a stream handler on the package logger.

    Args:
        level: Logging level name
        stream: Output stream, stderr by default

    Returns:
        The installed handler, so callers can remove it again
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler.addFilter(_ComponentDefaultsFilter())
    package_logger = logging.getLogger("doxygen_graph")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
