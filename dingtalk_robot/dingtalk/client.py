"""
DingTalk robot client: singleton, same lifecycle as the other service clients.

Handles:
- default credentials resolved from settings (env or JSON config file)
- URL composition + signing per request (fresh timestamp every send)
- POST of the serialized message, status 200 == success

Single attempt: no retries, the response body is not inspected.
"""

import httpx
import structlog

from dingtalk_robot.config import settings
from dingtalk_robot.core.credentials import Credentials
from dingtalk_robot.core.encoder import serialize
from dingtalk_robot.core.url import compose_url, redact_url
from dingtalk_robot.errors import ProtocolError, TransportError
from dingtalk_robot.schemas.message import Message

logger = structlog.get_logger()

CONTENT_TYPE = "Content-Type"
APPLICATION_JSON_UTF8 = "application/json; charset=utf-8"


class DingTalkClient:
    def __init__(
        self,
        credentials: Credentials | None = None,
        http: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._credentials = credentials
        self._http = http
        self._owns_http = False
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else settings.DINGTALK_TIMEOUT

    @property
    def credentials(self) -> Credentials:
        """Default credentials; resolved from settings on first use.

        Raises:
            ConfigError: config file missing, unreadable or malformed.
        """
        if self._credentials is None:
            self._credentials = Credentials.from_settings(settings)
        return self._credentials

    async def initialize(self):
        """Resolve credentials and create the shared httpx client."""
        _ = self.credentials
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.timeout)
            self._owns_http = True
        logger.info("dingtalk.initialized", signed=self.credentials.is_signed)

    async def shutdown(self):
        """Close the httpx client if we created it."""
        if self._http and self._owns_http:
            await self._http.aclose()
            self._http = None
            self._owns_http = False
        logger.info("dingtalk.shutdown")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def post(self, url: str, body: bytes, content_type: str = APPLICATION_JSON_UTF8) -> int:
        """POST ``body`` once and return the HTTP status code.

        Raises:
            TransportError: no HTTP response was received (incl. URLs httpx rejects).
        """
        headers = {CONTENT_TYPE: content_type}
        try:
            if self._http is not None:
                resp = await self._http.post(url, content=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.post(url, content=body, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("dingtalk.transport_failed", url=redact_url(url), error=str(e))
            raise TransportError(str(e)) from e
        return resp.status_code

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send(self, json_message: str, credentials: Credentials | None = None) -> None:
        """Send an already-serialized JSON message.

        Raises:
            TransportError: network failure.
            ProtocolError: status other than 200.
        """
        url = compose_url(credentials or self.credentials)
        status = await self.post(url, json_message.encode("utf-8"))
        if status != 200:
            logger.error("dingtalk.send_failed", url=redact_url(url), status=status)
            raise ProtocolError(status)
        logger.info("dingtalk.sent", url=redact_url(url), size=len(json_message))

    async def send_message(self, message: Message, credentials: Credentials | None = None) -> None:
        await self.send(serialize(message), credentials)

    async def send_text(self, content: str) -> None:
        await self.send_message(Message.new_text(content))

    async def send_markdown(self, title: str, content: str) -> None:
        await self.send_message(Message.new_markdown(title, content))

    async def send_link(self, title: str, text: str, pic_url: str, message_url: str) -> None:
        await self.send_message(Message.new_link(title, text, pic_url, message_url))


# Singleton instance
dingtalk_client = DingTalkClient()
