"""
Adapter: Bearer-token identity provider.

Implements IdentityProvider port.
Resolves the caller's identity from a signed JWT.
"""

from typing import Any, Optional

from jose import JWTError, jwt

from app.domain.cart.errors import IdentityUnavailableError
from app.domain.cart.ports import IdentityProvider


class JwtIdentityProvider(IdentityProvider):
    """Decodes the request's bearer token and returns its identity claim.

    Verification:
      - signature (using the configured secret and algorithm)
      - expiration time (exp)
      - audience is NOT verified
    """

    def __init__(
        self,
        token: Optional[str],
        secret: str,
        algorithm: str = "HS256",
        identity_claim: str = "sub",
    ) -> None:
        self._token = token
        self._secret = secret
        self._algorithm = algorithm
        self._identity_claim = identity_claim

    def current_user(self) -> str:
        """Return the identity claim of the bearer token.

        Raises:
            IdentityUnavailableError: If the token is missing, invalid,
                expired, or lacks the identity claim.
        """
        if not self._token:
            raise IdentityUnavailableError("missing bearer token")

        claims = self._decode(self._token)
        identity = claims.get(self._identity_claim)
        if not identity:
            raise IdentityUnavailableError(f"token has no '{self._identity_claim}' claim")
        return str(identity)

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError as exc:
            raise IdentityUnavailableError("invalid or expired token") from exc
