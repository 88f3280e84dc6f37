"""
Structured JSON logging for the hacklearn site.

Every component logs through a named logger (``search.index``,
``site.router``, ``purchases`` ...). When ``setup_logging`` is active the
records are emitted as one JSON object per line so CLI output and log
output can be told apart by consumers.

Example usage:
    from hacklearn.core.logging_config import setup_logging, get_logger, LogLevel

    setup_logging(level=LogLevel.DEBUG)
    logger = get_logger("search.index")
    logger.info("Index built", extra={"entries": 3})
"""

import json
import logging
import sys
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class LogLevel(Enum):
    """Log levels accepted by the configuration file and the CLI."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_string(cls, level_str: str) -> 'LogLevel':
        """
        Convert a case-insensitive string to a LogLevel.

        Raises:
            ValueError: If level_str names no known level
        """
        try:
            return cls(level_str.upper())
        except ValueError:
            valid_levels = [level.value for level in cls]
            raise ValueError(f"Invalid log level '{level_str}'. Valid levels: {valid_levels}")

    def to_logging_level(self) -> int:
        """Map to the ``logging`` module constant."""
        return getattr(logging, self.value)


class SafeJSONEncoder(json.JSONEncoder):
    """JSON encoder that degrades unknown objects to strings instead of failing."""

    def default(self, obj: Any) -> Union[str, Dict[str, Any], list]:
        try:
            if hasattr(obj, '__dict__'):
                return {'_type': obj.__class__.__name__, '_repr': str(obj)}
            if hasattr(obj, '__iter__') and not isinstance(obj, (str, bytes)):
                return list(obj)
            return str(obj)
        except Exception:
            return f"<unserializable: {type(obj).__name__}>"


class JSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON.

    Output format:
    {
        "timestamp": "2025-09-13T10:00:00Z",
        "level": "INFO",
        "component": "search.index",
        "message": "Index built",
        "entries": 3
    }
    """

    # LogRecord attributes that are not user-supplied extras
    EXCLUDED_FIELDS = frozenset({
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
        'filename', 'module', 'lineno', 'funcName', 'created',
        'msecs', 'relativeCreated', 'thread', 'threadName',
        'processName', 'process', 'taskName', 'exc_info', 'exc_text',
        'stack_info', 'message', 'asctime'
    })

    def __init__(self, include_source_location: bool = False):
        super().__init__()
        self.include_source_location = include_source_location
        self.json_encoder = SafeJSONEncoder(separators=(',', ':'), ensure_ascii=False)

    def format(self, record: logging.LogRecord) -> str:
        try:
            log_data: Dict[str, Any] = {
                "timestamp": self._format_timestamp(record.created),
                "level": record.levelname,
                "component": record.name,
                "message": self._safe_get_message(record),
            }

            if self.include_source_location:
                log_data.update({
                    "file": record.filename,
                    "line": record.lineno,
                    "function": record.funcName,
                })

            for key, value in record.__dict__.items():
                if key in self.EXCLUDED_FIELDS or key in log_data:
                    continue
                try:
                    json.dumps(value, cls=SafeJSONEncoder)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

            if record.exc_info:
                log_data["exception"] = self.formatException(record.exc_info)

            return self.json_encoder.encode(log_data)

        except Exception as e:
            timestamp = self._format_timestamp(record.created)
            return (f"{timestamp} {record.levelname} {record.name} "
                    f"{self._safe_get_message(record)} [JSON_FORMAT_ERROR: {e}]")

    @staticmethod
    def _format_timestamp(created: float) -> str:
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.isoformat().replace('+00:00', 'Z')

    @staticmethod
    def _safe_get_message(record: logging.LogRecord) -> str:
        try:
            return record.getMessage()
        except Exception:
            return f"<message formatting failed: {record.msg}>"


class LoggingFilter:
    """Pass only records strictly below ``max_level``."""

    def __init__(self, max_level: int):
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def setup_logging(
    level: LogLevel = LogLevel.INFO,
    include_source_location: bool = False,
    format_json: bool = True,
    split_streams: bool = True
) -> None:
    """
    Install stdout/stderr handlers on the root logger.

    INFO and WARNING go to stdout, ERROR and CRITICAL to stderr. With
    ``split_streams=False`` everything goes to stderr, keeping stdout free
    for command output. Existing root handlers are replaced so repeated
    calls do not duplicate output.

    Args:
        level: Minimum log level to output (default: INFO)
        include_source_location: Include file/line info in logs
        format_json: Use JSON formatting; plain text otherwise
        split_streams: Send records below ERROR to stdout
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level.to_logging_level())

    if format_json:
        formatter: logging.Formatter = JSONFormatter(include_source_location=include_source_location)
    else:
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            datefmt='%Y-%m-%dT%H:%M:%S'
        )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)

    if split_streams:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(level.to_logging_level())
        stdout_handler.addFilter(LoggingFilter(logging.ERROR))
        stdout_handler.setFormatter(formatter)
        root_logger.addHandler(stdout_handler)
        stderr_handler.setLevel(logging.ERROR)
    else:
        stderr_handler.setLevel(level.to_logging_level())

    root_logger.addHandler(stderr_handler)

    # PyYAML's loader and friends are chatty at DEBUG
    if level != LogLevel.DEBUG:
        logging.getLogger('yaml').setLevel(logging.WARNING)


def get_logger(component: str, extra_context: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Return the logger for ``component``.

    When ``extra_context`` is given the logger is wrapped in an adapter that
    merges the context into every record's extras.

    Example:
        logger = get_logger("purchases", {"site": "hacklearn"})
        logger.info("Project purchased", extra={"project": "login-bypass-lab"})
    """
    logger = logging.getLogger(component)

    if extra_context:
        class ContextAdapter(logging.LoggerAdapter):
            def process(self, msg, kwargs):
                merged = dict(extra_context)
                merged.update(kwargs.get('extra') or {})
                kwargs['extra'] = merged
                return msg, kwargs

        return ContextAdapter(logger, extra_context)  # type: ignore[return-value]

    return logger


def configure_from_dict(config: Dict[str, Any]) -> None:
    """
    Configure logging from the ``logging`` section of ``config.yaml``.

    Example config:
        {"level": "INFO", "include_source_location": false, "format_json": true}

    An unknown level falls back to INFO.
    """
    try:
        level = LogLevel.from_string(str(config.get('level', 'INFO')))
    except ValueError:
        level = LogLevel.INFO

    setup_logging(
        level=level,
        include_source_location=bool(config.get('include_source_location', False)),
        format_json=bool(config.get('format_json', True)),
        split_streams=bool(config.get('split_streams', True)),
    )


class PerformanceLogger:
    """
    Context manager that logs how long an operation took.

    Example:
        with PerformanceLogger(logger, "build_index", topics=2):
            ...
    """

    def __init__(self, logger: logging.Logger, operation: str, **context):
        self.logger = logger
        self.operation = operation
        self.context = context
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self) -> 'PerformanceLogger':
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting {self.operation}", extra=self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.start_time is None:
            return
        self.duration_ms = round((time.perf_counter() - self.start_time) * 1000, 3)
        log_context = {
            **self.context,
            "duration_ms": self.duration_ms,
            "operation": self.operation,
        }
        if exc_type is None:
            self.logger.debug(f"Completed {self.operation}", extra=log_context)
        else:
            log_context["error_type"] = exc_type.__name__
            self.logger.error(f"Failed {self.operation}", extra=log_context)
