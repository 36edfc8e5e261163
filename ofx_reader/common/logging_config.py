import logging
import json
import os
import datetime
from typing import Any, Optional
from threading import local

# Thread-local storage for the document being processed
_context = local()


class JSONFormatter(logging.Formatter):
    """
    Formatter that renders each record as a single JSON object.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "document_id": get_document_id(),
        }

        if hasattr(record, "extra_fields") and isinstance(record.extra_fields, dict):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(log_level: int = logging.INFO, log_file: Optional[str] = None):
    """
    Configure the root logger with JSON output.

    The library never calls this itself; applications embedding the reader do.
    """
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if root_logger.handlers:
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    logging.info("Logging initialized.", extra={"extra_fields": {"status": "ready"}})


def set_document_id(document_id: str):
    """Tag every record emitted by this thread with a document identifier."""
    _context.document_id = document_id


def get_document_id() -> Optional[str]:
    return getattr(_context, "document_id", None)


def clear_document_id():
    if hasattr(_context, "document_id"):
        del _context.document_id


class OFXLoggerAdapter(logging.LoggerAdapter):
    """
    Adapter that turns keyword arguments into structured fields.

        logger.info("Body converted", dialect="SGML", lines=42)
    """
    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.get("extra", {})
        if "extra_fields" not in extra:
            extra["extra_fields"] = {}

        standard_args = {'exc_info', 'stack_info', 'stacklevel', 'extra'}
        new_kwargs = {}
        for key, value in kwargs.items():
            if key in standard_args:
                new_kwargs[key] = value
            else:
                extra["extra_fields"][key] = value

        new_kwargs["extra"] = extra
        return msg, new_kwargs


def get_logger(name: str) -> OFXLoggerAdapter:
    """
    Return a structured logger for the given name.
    """
    return OFXLoggerAdapter(logging.getLogger(name), {})
