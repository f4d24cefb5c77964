import jwt

from finpath.config.settings import settings
from finpath.core.errors import ServiceUnavailableError


def decode_token(token: str) -> dict:
    secret = settings.jwt_secret_key.get_secret_value()
    if not secret:
        raise ServiceUnavailableError("JWT_SECRET_KEY is not configured")
    return jwt.decode(token, secret, algorithms=["HS256"])
