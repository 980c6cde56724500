# src/jolokia_api_server/tokens.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=1)


class SessionExpiredError(Exception):
    """Raised when a session token fails signature or expiry checks."""


class SessionTokenData(BaseModel):
    id: Optional[str] = None
    exp: Optional[int] = None


class TokenService:
    def __init__(self, secret: str, ttl: timedelta = TOKEN_TTL):
        self.secret = secret
        self.ttl = ttl

    def expiry_from_now(self) -> datetime:
        return datetime.now(timezone.utc) + self.ttl

    def issue(self, identifier: str, expires_at: Optional[datetime] = None) -> str:
        expire = expires_at or self.expiry_from_now()
        to_encode = {"id": identifier, "exp": expire}
        return jwt.encode(to_encode, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """Returns the broker name embedded in a valid, unexpired token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError as e:
            raise SessionExpiredError(str(e)) from e

        token_data = SessionTokenData(**payload)
        if not token_data.id:
            raise SessionExpiredError("Token carries no broker id")
        return token_data.id
