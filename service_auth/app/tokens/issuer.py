"""
RS256 identity token issuance.
"""

import base64
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from shared.logging import get_logger
from ..errors import KeyUnavailable, SigningFailed

logger = get_logger("auth.tokens")

ALGORITHM = "RS256"
DEFAULT_ISSUER = "Auth-Service"
DEFAULT_AUDIENCE = "Moment-Service"
DEFAULT_VALIDITY = timedelta(days=7)


def _b64url_uint(n: int) -> str:
    b = n.to_bytes((n.bit_length() + 7) // 8, "big")
    return base64.urlsafe_b64encode(b).rstrip(b"=").decode("ascii")


def load_signing_key(path: Union[str, Path]) -> RSAPrivateKey:
    """Load an unencrypted PEM RSA private key from ``path``."""
    try:
        pem = Path(path).read_bytes()
    except OSError as e:
        logger.error("Signing key unreadable", path=str(path), error=str(e))
        raise KeyUnavailable(
            "Signing key file could not be read",
            details={"path": str(path), "error": type(e).__name__}
        )

    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error("Signing key malformed", path=str(path), error=str(e))
        raise KeyUnavailable(
            "Signing key is not a valid PEM private key",
            details={"path": str(path), "error": type(e).__name__}
        )

    if not isinstance(key, RSAPrivateKey):
        raise KeyUnavailable(
            "Signing key is not an RSA key",
            details={"path": str(path), "key_type": type(key).__name__}
        )

    return key


def _epoch_seconds(now: Optional[datetime]) -> int:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int(now.timestamp())


class TokenIssuer:
    """Builds and signs bounded-lifetime identity tokens.

    The signing key is loaded once and never mutated, so a single issuer is
    shared by every request. Issued tokens are not tracked.
    """

    def __init__(self, signing_key: RSAPrivateKey,
                 issuer: str = DEFAULT_ISSUER,
                 audience: str = DEFAULT_AUDIENCE,
                 validity: timedelta = DEFAULT_VALIDITY,
                 key_id: Optional[str] = None):
        if not isinstance(signing_key, RSAPrivateKey):
            raise KeyUnavailable(
                "Signing key is not an RSA key",
                details={"key_type": type(signing_key).__name__}
            )
        self._signing_key = signing_key
        self.issuer = issuer
        self.audience = audience
        self.validity = validity
        self.key_id = key_id

    @classmethod
    def from_key_file(cls, path: Union[str, Path], **kwargs) -> "TokenIssuer":
        return cls(load_signing_key(path), **kwargs)

    def build_claims(self, subject_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        issued_at = _epoch_seconds(now)
        return {
            "iss": self.issuer,
            "sub": subject_id,
            "aud": self.audience,
            "iat": issued_at,
            "exp": issued_at + int(self.validity.total_seconds()),
        }

    def issue(self, subject_id: str, now: Optional[datetime] = None) -> str:
        """Sign a token for ``subject_id`` valid from ``now`` for the configured window."""
        if not subject_id:
            raise SigningFailed("Cannot issue a token without a subject")

        claims = self.build_claims(subject_id, now)
        headers = {"kid": self.key_id} if self.key_id else None

        try:
            token = jwt.encode(claims, self._signing_key, algorithm=ALGORITHM, headers=headers)
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.error("Token signing failed", sub=subject_id, error=str(e))
            raise SigningFailed(details={"error": type(e).__name__})

        logger.info("Token issued", sub=subject_id, iat=claims["iat"], exp=claims["exp"])
        return token

    def public_jwks(self) -> Dict[str, Any]:
        """JWKS document for the public half of the signing key."""
        numbers = self._signing_key.public_key().public_numbers()
        key: Dict[str, Any] = {
            "kty": "RSA",
            "use": "sig",
            "alg": ALGORITHM,
            "n": _b64url_uint(numbers.n),
            "e": _b64url_uint(numbers.e),
        }
        if self.key_id:
            key["kid"] = self.key_id
        return {"keys": [key]}


def issue_token(subject_id: str, signing_key: RSAPrivateKey, now: Optional[datetime] = None) -> str:
    """Issue a token with the default issuer, audience and validity window."""
    return TokenIssuer(signing_key).issue(subject_id, now)
