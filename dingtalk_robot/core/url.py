from urllib.parse import quote, urlsplit

from dingtalk_robot.core.credentials import Credentials
from dingtalk_robot.core.signer import sign, timestamp_millis


def percent_encode(value: str) -> str:
    """Query-component encoding: only A-Z a-z 0-9 - _ . ~ stay literal."""
    return quote(value, safe="")


def compose_url(credentials: Credentials, now: int | None = None) -> str:
    """Build the robot URL for one request.

    Args:
        credentials: Where to send and how to sign.
        now: Timestamp in ms used for signing; sampled when omitted.

    A non-empty ``direct_url`` is returned verbatim.
    """
    if credentials.direct_url:
        return credentials.direct_url

    url = credentials.webhook_base + percent_encode(credentials.access_token)
    if credentials.sec_token:
        timestamp = timestamp_millis() if now is None else now
        signature = sign(credentials.sec_token, timestamp)
        url += f"&timestamp={timestamp}&sign={percent_encode(signature)}"
    return url


def redact_url(url: str) -> str:
    """Drop the query string (token, signature) for logging."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid url>"
    return f"{parts.scheme}://{parts.netloc}{parts.path}"[:60]
