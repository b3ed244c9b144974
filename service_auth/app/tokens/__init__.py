"""
Token issuance package.

Signs identity tokens for verified subjects with the service's RSA key.
The claim set is fixed: ``iss``, ``sub``, ``aud``, ``iat`` and ``exp``.
Verification belongs to downstream consumers, which can fetch the public
key from the JWKS route.
"""

from .issuer import TokenIssuer, issue_token, load_signing_key

__all__ = ["TokenIssuer", "issue_token", "load_signing_key"]
