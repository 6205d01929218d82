import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue

from pythonjsonlogger import jsonlogger

from filmorate_api.core.config import settings
from filmorate_api.core.trace import get_trace_id

JSON_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "%(module)s %(lineno)d %(trace_id)s %(service)s %(env)s"
)


class TraceContextFilter(logging.Filter):
    """Stamp trace_id/service/env on every record before it is queued."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = (getattr(record, "trace_id", None)
                           or get_trace_id() or "-")
        record.service = getattr(record, "service", None) or self.service
        record.env = getattr(record, "env", None) or settings.env
        return True


_listener: QueueListener | None = None


def setup_json_logging(service: str | None = None,
                       level: str | None = None) -> None:
    global _listener
    if _listener is not None:
        # повторный вызов (например, второй lifespan в тестах)
        shutdown_logging()

    service = service or settings.app_name
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))

    q: Queue = Queue(-1)
    queue_handler = QueueHandler(q)
    # обогащаем record ДО помещения в очередь: contextvar живёт в потоке
    # запроса, а не в потоке listener-а
    queue_handler.addFilter(TraceContextFilter(service))

    _listener = QueueListener(q, stream_handler, respect_handler_level=True)
    _listener.start()

    root.handlers = [queue_handler]

    for name in ("uvicorn", "uvicorn.error", "sqlalchemy.engine"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
    # штатный uvicorn-access дублирует наш access-лог
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "logger_initialized",
        extra={"service": service})


def shutdown_logging() -> None:
    """Stop the queue listener and flush what is still queued."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
