"""HS256 bearer tokens for portal users.

The portal's identity service issues these after login; this service only
verifies them. ``create_token`` exists for tests and operator scripts.
A token carries the portal user id in ``sub`` and nothing else the policy
needs: the role config is always read from the profile store.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

ISSUER = "intranet-access"
_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims of a bearer token."""
    sub: str
    exp: datetime


def create_token(
    subject: str,
    secret: str,
    algorithm: str = "HS256",
    expires_hours: int = 24,
) -> str:
    """Sign a token for the user id *subject*.

    Raises:
        ValueError: If *algorithm* is anything but HS256.
    """
    if algorithm != "HS256":
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    issued = int(time.time())
    claims = {
        "sub": subject,
        "iss": ISSUER,
        "iat": issued,
        "exp": issued + expires_hours * 3600,
    }
    head_and_body = _encode_segment(_HEADER) + b"." + _encode_segment(claims)
    return (head_and_body + b"." + _urlsafe(_sign(head_and_body, secret))).decode()


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Optional[TokenPayload]:
    """Verify *token* and return its claims.

    Any failure yields ``None``: wrong algorithm, malformed token, bad
    signature, expiry in the past, or a missing or empty subject.
    """
    if algorithm != "HS256" or not isinstance(token, str):
        return None
    try:
        head_and_body, _, signature = token.encode().rpartition(b".")
        if head_and_body.count(b".") != 1:
            return None
        if not hmac.compare_digest(_sign(head_and_body, secret), _from_urlsafe(signature)):
            return None

        claims = json.loads(_from_urlsafe(head_and_body.split(b".")[1]))
        expires_at = claims.get("exp", 0)
        subject = claims.get("sub")
        if time.time() > expires_at or not isinstance(subject, str) or not subject:
            return None
    except (ValueError, TypeError, AttributeError):
        # json.JSONDecodeError and binascii.Error are both ValueErrors.
        return None

    return TokenPayload(sub=subject, exp=datetime.fromtimestamp(expires_at, tz=timezone.utc))


def _sign(data: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode(), data, hashlib.sha256).digest()


def _encode_segment(obj: dict) -> bytes:
    return _urlsafe(json.dumps(obj, separators=(",", ":")).encode())


def _urlsafe(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def _from_urlsafe(data: bytes) -> bytes:
    return base64.urlsafe_b64decode(data + b"=" * (-len(data) % 4))
