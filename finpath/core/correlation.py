from contextvars import ContextVar
import uuid

correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

def new_correlation_id() -> str:
    return "corr-" + uuid.uuid4().hex[:16]

def new_request_id() -> str:
    return "req-" + uuid.uuid4().hex[:8]

def set_correlation_id(cid: str) -> None:
    correlation_id_var.set(cid)

def get_correlation_id() -> str | None:
    return correlation_id_var.get()

def set_request_id(rid: str) -> None:
    request_id_var.set(rid)

def get_request_id() -> str | None:
    return request_id_var.get()
