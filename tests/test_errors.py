from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from finpath.api.errors import (
    finpath_error_handler,
    http_exception_handler,
    validation_exception_handler,
    global_exception_handler
)
from finpath.core.errors import FinPathError, NotFoundError, PreconditionError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError

app = FastAPI(debug=False)

app.add_exception_handler(FinPathError, finpath_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

class Payload(BaseModel):
    progress: float

@app.get("/http-error")
def http_error():
    raise HTTPException(status_code=401, detail="invalid token")

@app.post("/validation-error")
def validation_error(payload: Payload):
    return {"ok": True}

@app.get("/unexpected-error")
async def unexpected_error():
    raise RuntimeError("boom")

@app.get("/domain/invalid")
def domain_invalid():
    raise ValidationError("Progress must be between 0 and 100", target="progress")

@app.get("/domain/missing")
def domain_missing():
    raise NotFoundError("Step not found", target="step_number")

@app.get("/domain/precondition")
def domain_precondition():
    raise PreconditionError("Please set at least one financial goal before generating a roadmap")

client = TestClient(app, raise_server_exceptions=False)

def _envelope(resp):
    body = resp.json()
    assert set(body) == {"code", "message", "target", "details", "request_id", "correlation_id"}
    return body

def test_http_exception():
    resp = client.get("/http-error")
    assert resp.status_code == 401
    body = _envelope(resp)
    assert body["code"] == "unauthorized"
    assert body["message"] == "invalid token"
    assert body["details"] is None

def test_validation_exception():
    resp = client.post("/validation-error", json={"progress": "lots"})
    assert resp.status_code == 422
    body = _envelope(resp)
    assert body["code"] == "validation_error"
    assert body["message"] == "Validation failed"
    assert isinstance(body["details"]["errors"], list)

def test_unexpected_exception():
    resp = client.get("/unexpected-error")
    assert resp.status_code == 500
    body = _envelope(resp)
    assert body["code"] == "internal_error"
    assert body["message"] == "Internal server error"
    assert body["details"] == {"error": "RuntimeError"}

def test_not_found_route():
    resp = client.get("/not-found")
    assert resp.status_code == 404
    body = _envelope(resp)
    assert body["code"] == "not_found"
    assert body["message"] == "Not Found"

def test_domain_validation_error():
    resp = client.get("/domain/invalid")
    assert resp.status_code == 400
    body = _envelope(resp)
    assert body["code"] == "invalid_parameters"
    assert body["target"] == "progress"

def test_domain_not_found():
    resp = client.get("/domain/missing")
    assert resp.status_code == 404
    assert _envelope(resp)["target"] == "step_number"

def test_domain_precondition():
    resp = client.get("/domain/precondition")
    assert resp.status_code == 400
    assert _envelope(resp)["code"] == "precondition_failed"
