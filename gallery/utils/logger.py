"""
Logging setup.

Levels:
- INFO: notable events (config defaults seeded, search executed)
- WARNING: client errors (invalid token, unknown user)
- ERROR: system errors, configuration inconsistencies
- No personal fields (username, password, token) are written

Output:
- stdout: human readable text
- <log_dir>/app.log and error.log: NDJSON, only when ``log_dir`` is set
"""
import contextvars
import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from gallery.config import get_settings

# Fields never copied into the NDJSON context
_SENSITIVE_FIELDS = frozenset({"username", "display_name", "password", "token", "secret"})

# Request ID for the current request (async safe)
request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def generate_request_id() -> str:
    """Short, readable request id."""
    return uuid.uuid4().hex[:12]


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set the request id, generating one when none is given."""
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


class FlushingRotatingFileHandler(RotatingFileHandler):
    """Flush after every record so log shippers see lines immediately."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


# Standard LogRecord attributes (not copied into ctx)
_STANDARD_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "asctime", "taskName",
    }
)


class JsonLinesFormatter(logging.Formatter):
    """
    NDJSON formatter.
    
    Fields:
    - ts: UTC timestamp
    - level: log level
    - logger: logger name
    - rid: request id
    - event: event type (lifecycle, request, auth, access, search, config, db)
    - msg: message
    - ctx: extra context (sensitive fields removed)
    - exc: exception text
    """

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        msecs = int(record.msecs) % 1000
        payload = {
            "ts": dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{msecs:03d}Z",
            "level": record.levelname,
            "logger": record.name,
        }
        
        rid = get_request_id()
        if rid:
            payload["rid"] = rid
        
        if getattr(record, "event", None):
            payload["event"] = record.event
        
        payload["msg"] = record.getMessage()
        
        extra_ctx = {
            k: v for k, v in record.__dict__.items()
            if k not in _STANDARD_ATTRS
            and k != "event"
            and k not in _SENSITIVE_FIELDS
            and v is not None
        }
        if extra_ctx:
            payload["ctx"] = extra_ctx
        
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging() -> None:
    """
    Configure the root logger.
    
    - stdout: text format, INFO and above
    - stderr: ERROR and above
    - <log_dir>/app.log, <log_dir>/error.log: NDJSON
    - third party loggers lowered to WARNING
    """
    settings = get_settings()
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    root_logger.handlers.clear()

    text_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.INFO)
    stdout_handler.setFormatter(text_formatter)
    root_logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(text_formatter)
    root_logger.addHandler(stderr_handler)

    if settings.log_dir:
        json_formatter = JsonLinesFormatter()
        log_dir = Path(settings.log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = FlushingRotatingFileHandler(
                log_dir / "app.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(json_formatter)
            root_logger.addHandler(file_handler)

            error_handler = FlushingRotatingFileHandler(
                log_dir / "error.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(json_formatter)
            root_logger.addHandler(error_handler)
        except OSError as e:
            root_logger.warning("File logging disabled: %s", e)
    
    # Keep third party noise out of the application log
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error", "asyncio", "sqlalchemy"):
        logging.getLogger(name).setLevel(logging.WARNING)
