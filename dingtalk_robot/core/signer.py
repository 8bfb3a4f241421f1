"""
Robot request signing.

sign = base64(HMAC-SHA256(key=secret, msg=f"{timestamp}\\n{secret}"))

The server rejects timestamps older than about an hour, so every request
samples a fresh timestamp; nothing here is cached.
"""

import base64
import hashlib
import hmac
import time


def timestamp_millis() -> int:
    """Wall-clock milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def string_to_sign(secret: str | bytes, timestamp: int) -> bytes:
    if isinstance(secret, bytes):
        secret = secret.decode("utf-8")
    return f"{timestamp}\n{secret}".encode("utf-8")


def sign(secret: str | bytes, timestamp: int) -> str:
    """Return the base64 signature for ``timestamp`` (not yet URL-encoded)."""
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    digest = hmac.new(key, string_to_sign(secret, timestamp), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")
