"""
Sign-and-encrypt capability for authentication results.

A result is signed as a JWT (JWS) with the provider's private key, then the
signed token is wrapped in a JWE addressed to the relying party's public key.
The JWE plaintext is a small claim set whose ``njwt`` claim holds the nested
signed token.
"""

import json
import time
from typing import Any, Dict

from jose import jwe, jwt
from jose.exceptions import JOSEError

from .models import AuthResult
from ..errors import JWTError

KEY_MANAGEMENT_ALGORITHM = "RSA-OAEP"
CONTENT_ENCRYPTION = "A128CBC-HS256"
DEFAULT_TTL_SECONDS = 300


def sign_and_encrypt_auth_result(
    result: AuthResult,
    signing_key: str,
    encryption_key: str,
    *,
    algorithm: str = "RS256",
    ttl_seconds: int = DEFAULT_TTL_SECONDS,
) -> str:
    """Seal ``result`` into a compact JWE string."""
    now = int(time.time())
    claims: Dict[str, Any] = result.model_dump(mode="json", exclude_none=True)
    claims.update(iat=now, exp=now + ttl_seconds)

    try:
        signed = jwt.encode(claims, signing_key, algorithm=algorithm)
        envelope = json.dumps({"njwt": signed, "iat": now, "exp": now + ttl_seconds})
        sealed = jwe.encrypt(
            envelope,
            encryption_key,
            encryption=CONTENT_ENCRYPTION,
            algorithm=KEY_MANAGEMENT_ALGORITHM,
            cty="JWT",
        )
    except (JOSEError, ValueError, TypeError) as e:
        raise JWTError(f"Failed to seal authentication result: {e}") from e

    return sealed.decode("ascii") if isinstance(sealed, bytes) else sealed


def decrypt_and_verify_auth_result(
    token: str,
    decryption_key: str,
    verification_key: str,
    *,
    algorithm: str = "RS256",
) -> AuthResult:
    """Open a sealed result, checking signature and expiry."""
    try:
        envelope = json.loads(jwe.decrypt(token, decryption_key))
        claims = jwt.decode(envelope["njwt"], verification_key, algorithms=[algorithm])
        return AuthResult(
            status=claims["status"],
            attributes=claims.get("attributes"),
            session_url=claims.get("session_url"),
        )
    except (JOSEError, ValueError, TypeError, KeyError) as e:
        raise JWTError(f"Failed to open authentication result: {e}") from e
