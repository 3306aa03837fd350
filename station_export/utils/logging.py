# station_export/utils/logging.py
import logging
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from typing import Optional

from pythonjsonlogger import jsonlogger
from station_export.config import settings

# Set per HTTP request by core.middleware; copied into to_thread workers
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class ContextFilter(logging.Filter):
    """Stamp every record with service name, request id and export format."""

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def filter(self, record):
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        if not hasattr(record, "export_format"):
            record.export_format = None
        record.service = self.service
        return True


LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(service)s %(name)s %(message)s "
    "%(exception)s %(request_id)s %(export_format)s"
)


def configure_logging(service: str = settings.service_name, level: str = settings.log_level) -> logging.Logger:
    """Attach JSON handlers to the root logger (stdout, plus a rotating file if enabled)."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = jsonlogger.JsonFormatter(LOG_FORMAT)
    context = ContextFilter(service)
    root.addFilter(context)

    handlers = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(RotatingFileHandler(
            settings.log_dir / "export.log",
            maxBytes=10_000_000,
            backupCount=5,
            encoding="utf-8"
        ))
    for handler in handlers:
        handler.setFormatter(formatter)
        # Records from child loggers skip root filters, so handlers stamp too
        handler.addFilter(context)
        root.addHandler(handler)

    logging.getLogger("multipart").setLevel(logging.WARNING)
    return root


logger = configure_logging()
