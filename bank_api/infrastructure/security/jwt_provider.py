# bank_api/infrastructure/security/jwt_provider.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from bank_api.config.settings import settings
from bank_api.core.exceptions import UnauthorizedError


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


class JwtProvider:
    def __init__(
        self,
        *,
        secret: str | None = None,
        issuer: str | None = None,
        audience: str | None = None,
        expiration_minutes: int | None = None,
    ) -> None:
        self._secret = secret or settings.jwt_secret
        self._issuer = issuer or settings.jwt_issuer
        self._audience = audience or settings.jwt_audience
        self._expiration_minutes = expiration_minutes or settings.jwt_expiration_minutes
        self._algorithm = "HS256"

    def issue_token(self, *, subject: str, payload: dict, minutes: int | None = None) -> IssuedToken:
        now = datetime.now(tz=timezone.utc)
        ttl = minutes if minutes and minutes > 0 else self._expiration_minutes
        exp = now + timedelta(minutes=ttl)

        claims = {
            "iss": self._issuer,
            "aud": self._audience,
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": uuid4().hex,
            "typ": "access",
        }
        claims.update(payload)
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=exp)

    def decode(self, token: str) -> dict:
        # leeway=0: no clock skew tolerance on exp
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                leeway=0,
                options={"require": ["exp", "iat", "sub", "typ"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("Token expired.") from e
        except jwt.InvalidTokenError as e:
            raise UnauthorizedError("Invalid token.") from e

        if claims.get("typ") != "access":
            raise UnauthorizedError("Invalid token.")
        return claims
