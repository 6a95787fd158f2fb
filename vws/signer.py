"""VWS request signing.

The service recomputes the signature from the headers it receives, so the
canonical string is always built from the header values actually set on the
outgoing request.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional, Union
from urllib.parse import urlsplit

import requests

CONTENT_TYPE = "application/json"

Body = Union[bytes, str, None]


def _to_bytes(body: Body) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    return body


def content_md5(body: Body) -> str:
    """Return the lowercase hex MD5 of the body; empty input is hashed too."""
    return hashlib.md5(_to_bytes(body)).hexdigest()


def format_date(now: Optional[datetime] = None) -> str:
    """Format a timestamp as RFC 1123 GMT, e.g. ``Mon, 02 Jan 2006 15:04:05 GMT``."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return format_datetime(now.astimezone(timezone.utc), usegmt=True)


def canonical_string(
    method: str,
    body_md5: str,
    content_type: str,
    date: str,
    path: str,
) -> str:
    return "\n".join([method.upper(), body_md5, content_type, date, path])


def sign(
    secret_key: str,
    method: str,
    path: str,
    content_type: str,
    date: str,
    body: Body = None,
) -> str:
    """Compute the base64 HMAC-SHA1 signature for one request."""
    message = canonical_string(method, content_md5(body), content_type, date, path)
    mac = hmac.new(secret_key.encode("utf-8"), message.encode("utf-8"), hashlib.sha1)
    return base64.b64encode(mac.digest()).decode("ascii")


def authorization_header(access_key: str, signature: str) -> str:
    return f"VWS {access_key}:{signature}"


class RequestSigner:
    """Attach ``Date``, ``Content-Type`` and ``Authorization`` headers."""

    def __init__(self, access_key: str, secret_key: str) -> None:
        self._access_key = access_key
        self._secret_key = secret_key

    def __repr__(self) -> str:
        return "RequestSigner(access_key=***)"

    def prepare(
        self,
        request: requests.PreparedRequest,
        now: Optional[datetime] = None,
    ) -> requests.PreparedRequest:
        request.headers["Date"] = format_date(now)
        request.headers["Content-Type"] = CONTENT_TYPE

        signature = sign(
            self._secret_key,
            request.method or "",
            urlsplit(request.url or "").path,
            request.headers["Content-Type"],
            request.headers["Date"],
            request.body,
        )
        request.headers["Authorization"] = authorization_header(
            self._access_key, signature
        )
        return request
