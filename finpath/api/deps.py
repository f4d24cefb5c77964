from fastapi import Header, HTTPException

from finpath.core.errors import ServiceUnavailableError
from finpath.services.auth.jwt_tokens import decode_token


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2:
        return None
    if parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def get_current_user_id(authorization: str | None = Header(default=None)) -> int:
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="missing token")
    try:
        data = decode_token(token)
    except ServiceUnavailableError:
        raise
    except Exception:
        raise HTTPException(status_code=401, detail="invalid token")
    if data.get("type") != "access":
        raise HTTPException(status_code=401, detail="invalid token")
    try:
        return int(data.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="invalid token")
