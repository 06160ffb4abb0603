"""
Bearer token issuance and verification.

Tokens are HS256 JWTs carrying ``sub`` (the user id), ``iat`` and ``exp``.
New tokens are always signed with the current secret; retired secrets listed
in ``previous_secrets`` are still accepted for verification so a secret can
be rotated without logging everyone out at once. Removing a secret from that
list invalidates every token it signed.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from jose import JWTError, jwt

from dealership.exceptions import MalformedTokenError, SignatureMismatchError, TokenExpiredError

logger = logging.getLogger(__name__)

TOKEN_TTL_SECONDS = 3600


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies signed, expiring bearer tokens."""

    def __init__(
        self,
        secret: str,
        previous_secrets: Sequence[str] = (),
        algorithm: str = "HS256",
        ttl_seconds: int = TOKEN_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self._secrets = [secret, *(s for s in previous_secrets if s and s != secret)]
        self._clock = clock

    def issue(self, subject_id: int | str) -> str:
        """Create a token for ``subject_id`` that expires after the TTL."""
        # JWT NumericDate claims are whole seconds
        issued_at = int(self._clock().timestamp())
        claims = {
            "sub": str(subject_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(claims, self._secrets[0], algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the subject id of a valid token.

        Raises:
            MalformedTokenError: token can't be parsed or has no subject
            SignatureMismatchError: no accepted secret matches the signature
            TokenExpiredError: the clock is past the token's expiry
        """
        try:
            header = jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except (JWTError, AttributeError, TypeError) as e:
            raise MalformedTokenError() from e

        if header.get("alg") != self.algorithm:
            raise SignatureMismatchError()

        claims = None
        for secret in self._secrets:
            try:
                claims = jwt.decode(
                    token,
                    secret,
                    algorithms=[self.algorithm],
                    # Expiry is checked below against the injected clock
                    options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
                )
                break
            except JWTError:
                continue

        if claims is None:
            logger.info("Rejected token signed with an unknown secret")
            raise SignatureMismatchError()

        subject = claims.get("sub")
        expires_at = claims.get("exp")
        if not subject or not isinstance(expires_at, int | float):
            raise MalformedTokenError()

        if self._clock().timestamp() > expires_at:
            raise TokenExpiredError()

        return subject
