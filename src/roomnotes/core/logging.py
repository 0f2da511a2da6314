"""
Logging configuration for the RoomNotes backend.
"""
import json
import logging
import logging.config
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import Settings, get_settings

# LogRecord attributes that are not user-supplied "extra" fields
_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'taskName', 'message', 'asctime',
))


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info),
            }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}
        if extra:
            log_entry['extra'] = extra

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record: logging.LogRecord) -> str:
        # work on a copy so the file handlers still see plain names
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{color}{self.BOLD}{record.levelname}{self.RESET}"
        record.name = f"\033[90m{record.name}{self.RESET}"
        return super().format(record)


def get_log_level(level_str: Optional[str] = None) -> int:
    """Get log level from string or settings."""
    level_str = level_str or get_settings().log_level
    level = logging.getLevelName(level_str.upper())
    return level if isinstance(level, int) else logging.INFO


# (logger name, handlers, level); anything not listed propagates to root
_LOGGERS = (
    ('roomnotes', ('console', 'file', 'error_file'), 'DEBUG'),
    ('uvicorn', ('console',), 'INFO'),
    ('uvicorn.access', ('console',), 'INFO'),
    # python-socketio / python-engineio are chatty at INFO
    ('socketio', ('file',), 'WARNING'),
    ('engineio', ('file',), 'WARNING'),
    ('sqlalchemy', ('file',), 'WARNING'),
    ('alembic', ('console', 'file'), 'INFO'),
)

_FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-25s | %(funcName)-20s:%(lineno)-4d | %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _rotating_handler(path: Path, formatter: str, level: str) -> Dict[str, Any]:
    return {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': str(path),
        'maxBytes': 10_000_000,  # 10MB
        'backupCount': 5,
        'formatter': formatter,
        'level': level,
    }


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """dictConfig for console output plus rotating all/error log files."""
    log_dir = Path(settings.log_dir)

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {'()': JSONFormatter},
            'colored': {
                '()': ColoredFormatter,
                'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
                'datefmt': _DATE_FORMAT,
            },
            'file': {'format': _FILE_FORMAT, 'datefmt': _DATE_FORMAT},
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'colored' if settings.debug else 'json',
                'stream': sys.stdout,
                'level': get_log_level(settings.log_level),
            },
            'file': _rotating_handler(log_dir / 'roomnotes.log', 'file', 'DEBUG'),
            'error_file': _rotating_handler(log_dir / 'error.log', 'json', 'ERROR'),
        },
        'root': {'handlers': ['console', 'file'], 'level': 'INFO'},
        'loggers': {
            name: {'handlers': list(handlers), 'level': level, 'propagate': False}
            for name, handlers, level in _LOGGERS
        },
    }


def setup_logging() -> None:
    """Configure console and rotating file logging."""
    settings = get_settings()
    Path(settings.log_dir).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(settings))

    get_logger('logging').info("Logging system initialized", extra={
        'log_level': settings.log_level,
        'debug': settings.debug,
        'environment': settings.environment,
    })


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the roomnotes namespace."""
    return logging.getLogger(f"roomnotes.{name}")


class LoggingMiddleware:
    """ASGI middleware logging one line per HTTP response, with its duration.

    Socket.IO traffic never reaches it: ``socketio.ASGIApp`` answers those
    paths before the FastAPI app is called.
    """

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        client = scope.get('client')
        request_info = {
            'method': scope['method'],
            'path': scope['path'],
            'client_ip': client[0] if client else 'unknown',
        }

        def elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 2)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_code = message.get('status', 0)
                level = logging.WARNING if status_code >= 500 else logging.INFO
                self.logger.log(
                    level,
                    f"{scope['method']} {scope['path']} -> {status_code}",
                    extra={**request_info, 'status_code': status_code, 'duration_ms': elapsed_ms()},
                )
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                **request_info,
                'duration_ms': elapsed_ms(),
                'exception_type': type(exc).__name__,
                'exception_message': str(exc),
            })
            raise
