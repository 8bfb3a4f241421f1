from dataclasses import dataclass


@dataclass
class SendResult:
    channel: str  # e.g. "dingtalk"
    success: bool
    target: str  # direct URL, access token or "" for the default robot
    status_code: int | None = None
    error: str | None = None
