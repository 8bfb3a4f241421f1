class DingTalkError(Exception):
    """Base error for everything raised by the robot client."""


class ConfigError(DingTalkError):
    """Credentials could not be built (missing file, bad JSON, wrong shape)."""


class TransportError(DingTalkError):
    """The request never got an HTTP response (DNS, connect, timeout...)."""


class ProtocolError(DingTalkError):
    """The robot endpoint answered with a status other than 200."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Unexpected status: {status_code}")
