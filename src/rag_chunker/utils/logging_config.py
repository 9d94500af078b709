"""
Logging configuration for applications embedding the RAG chunker.

The library itself only ever logs through module loggers; handlers are
installed here, by the CLI or by a host application that calls setup_logging.

Three formats are available: standard, detailed and json. JSON output is one
compact object per record, suitable for log shippers.
"""

import json
import logging
import logging.handlers
from datetime import datetime
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Accept a LogLevel, a level name in any case, or a numeric level."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value}") from None


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


STANDARD_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'

_STANDARD_RECORD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'taskName', 'exc_info',
    'exc_text', 'stack_info', 'message', 'extra_data',
})


class JSONFormatter(logging.Formatter):
    """
    Compact JSON formatter.

    Fields passed through ``extra=`` (or an ``extra_data`` dict on the record)
    are merged into the emitted object.
    """

    @staticmethod
    @lru_cache(maxsize=256)
    def _base_log_data(name: str, levelname: str, module: str, func_name: str, lineno: int) -> tuple:
        return (
            ("logger", name),
            ("level", levelname),
            ("module", module),
            ("function", func_name),
            ("line", lineno),
        )

    def _extract_extra_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        extra_data: Dict[str, Any] = {}

        if isinstance(getattr(record, 'extra_data', None), dict):
            extra_data.update(record.extra_data)

        for attr_name, attr_value in record.__dict__.items():
            if attr_name.startswith('_') or attr_name in _STANDARD_RECORD_ATTRS:
                continue
            if not callable(attr_value):
                extra_data[attr_name] = attr_value

        return extra_data

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single-line JSON object."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "message": record.getMessage(),
        }
        log_data.update(self._base_log_data(
            record.name, record.levelname, record.module, record.funcName, record.lineno
        ))

        extra_data = self._extract_extra_fields(record)
        if extra_data:
            log_data.update(extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False, separators=(',', ':'))


def create_formatter(log_format: Union[str, LogFormat]) -> logging.Formatter:
    """Formatter for a LogFormat or its name."""
    log_format = LogFormat(log_format) if not isinstance(log_format, LogFormat) else log_format
    if log_format == LogFormat.JSON:
        return JSONFormatter()
    if log_format == LogFormat.DETAILED:
        return logging.Formatter(DETAILED_FORMAT)
    return logging.Formatter(STANDARD_FORMAT)


def parse_file_size(size: Union[str, int]) -> int:
    """
    Convert a size like "10MB" to bytes.

    Example:
        >>> parse_file_size("512KB")
        524288
    """
    if isinstance(size, int):
        return size

    text = size.strip().upper()
    for suffix, multiplier in (('KB', 1024), ('MB', 1024 ** 2), ('GB', 1024 ** 3)):
        if text.endswith(suffix):
            return int(text[:-len(suffix)]) * multiplier
    return int(text)


def setup_logging(
    level: Union[str, int, LogLevel] = LogLevel.INFO,
    log_format: Union[str, LogFormat] = LogFormat.STANDARD,
    log_file: Optional[Union[str, Path]] = None,
    console_handler: Optional[logging.Handler] = None,
    enable_console: bool = True,
    max_file_size: Union[str, int] = "10MB",
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the root logger.

    Existing root handlers are removed. The console handler defaults to a
    StreamHandler using the selected format; a caller-supplied handler (the
    CLI passes a RichHandler) keeps its own formatter. When log_file is given a
    RotatingFileHandler is added with the selected format.

    Args:
        level: Log level name, number or LogLevel
        log_format: standard, detailed or json
        log_file: Optional path for rotating file output
        console_handler: Handler to use for console output
        enable_console: Whether to attach a console handler at all
        max_file_size: Rotation threshold, e.g. "10MB"
        backup_count: Rotated files to keep

    Returns:
        The configured root logger
    """
    log_level = LogLevel.parse(level)
    formatter = create_formatter(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.value)
    root_logger.handlers.clear()

    if enable_console:
        if console_handler is None:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level.value)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=parse_file_size(max_file_size),
            backupCount=backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_level.value)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger
