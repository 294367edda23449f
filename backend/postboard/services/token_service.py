"""
Postboard API: Token Service
=============================

What:  Issues and verifies compact HS256-signed tokens (JWT wire format).
How:   header and claims are compact JSON, base64url-encoded without padding,
       joined with '.', and signed with HMAC-SHA256 over `header.claims`.

           eyJhbGciOi...  .  eyJzdWIiOi...  .  3q2-7w...
           └─ header ─┘      └─ claims ──┘     └─ signature ─┘

Who:   UserService.login() issues; the bearer dependency in security.py verifies.

Known gap:
    No `exp`, `iss` or `aud` claim is written or checked, so tokens never
    expire. Rotating JWT_SECRET is the only revocation mechanism.
"""

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Dict, Optional

from postboard.config import settings
from postboard.exceptions import (
    InvalidSignatureError,
    InvalidTokenError,
    MalformedPayloadError,
)

TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


def b64url_encode(data: bytes) -> str:
    """Base64url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """Decode unpadded base64url, restoring padding. Raises binascii.Error / ValueError."""
    padding = "=" * (-len(data) % 4)
    return base64.b64decode(data + padding, altchars=b"-_", validate=True)


def _encode_segment(obj: Dict[str, Any]) -> str:
    return b64url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


class TokenService:
    """
    Issue/verify contract for bearer tokens.

    The secret is bound at construction so tests can build services with
    their own secret; the module-level `token_service` uses settings.jwt_secret.
    """

    def __init__(self, secret: Optional[str] = None):
        self._secret = (secret or settings.jwt_secret).encode("utf-8")

    def _sign(self, signing_input: str) -> bytes:
        return hmac.new(self._secret, signing_input.encode("utf-8"), hashlib.sha256).digest()

    def issue(self, claims: Dict[str, Any]) -> str:
        """
        Serialize and sign `claims`, returning `header.claims.signature`.

        Args:
            claims: JSON-serializable mapping, minimally {"sub": user_id, "email": email}.
        """
        signing_input = f"{_encode_segment(TOKEN_HEADER)}.{_encode_segment(claims)}"
        signature = b64url_encode(self._sign(signing_input))
        return f"{signing_input}.{signature}"

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify a token's signature and return its claims.

        Raises:
            InvalidTokenError:      not exactly three dot-separated segments
            InvalidSignatureError:  signature missing, undecodable or mismatched
            MalformedPayloadError:  claims segment is not a base64url JSON object
        """
        parts = token.split(".") if isinstance(token, str) else []
        if len(parts) != 3 or not parts[0] or not parts[1]:
            raise InvalidTokenError("Token must have three dot-separated segments")

        header_b64, claims_b64, signature_b64 = parts
        expected = self._sign(f"{header_b64}.{claims_b64}")
        try:
            supplied = b64url_decode(signature_b64)
        except (binascii.Error, ValueError):
            raise InvalidSignatureError("Signature segment is not valid base64url")

        # base64 decoding ignores some trailing bits, so compare the canonical
        # encoding as well: any edit to the signature text must fail.
        if not hmac.compare_digest(expected, supplied) or not hmac.compare_digest(
            b64url_encode(expected), signature_b64
        ):
            raise InvalidSignatureError("Token signature does not match")

        try:
            claims = json.loads(b64url_decode(claims_b64).decode("utf-8"))
        except (binascii.Error, ValueError, UnicodeDecodeError) as e:
            raise MalformedPayloadError(f"Token claims could not be decoded: {e}")
        if not isinstance(claims, dict):
            raise MalformedPayloadError("Token claims must be a JSON object")

        return claims


token_service = TokenService()
