import uuid
from contextvars import ContextVar

TRACE_HEADER = "X-Request-Id"

_trace_id: ContextVar[str] = ContextVar("trace_id", default="-")


def get_trace_id() -> str:
    return _trace_id.get()


def set_trace_id(value: str) -> None:
    _trace_id.set(value)


def bind_trace_id(incoming: str | None = None) -> str:
    """Reuse the caller's request id when it is sane, otherwise mint one."""
    value = (incoming or "").strip()
    if not value or len(value) > 64:
        value = uuid.uuid4().hex
    set_trace_id(value)
    return value
