"""
DingTalk output: send a message to one robot.

- target is a URL → direct mode (URL used verbatim)
- target is any other non-empty string → access token (configured base, own or default secret)
- target is empty → default robot from settings
"""

import structlog

from dingtalk_robot.dingtalk.client import DingTalkClient, dingtalk_client
from dingtalk_robot.errors import DingTalkError, ProtocolError
from dingtalk_robot.output.base import SendResult
from dingtalk_robot.schemas.message import Message

logger = structlog.get_logger()


def _mask(target: str) -> str:
    """Never log a full token or pre-signed URL."""
    if target.startswith("http"):
        return target.split("?", 1)[0][:60]
    return f"{target[:6]}..." if target else "<default>"


async def send_dingtalk(
    target: str,
    message: Message,
    client: DingTalkClient | None = None,
    sec_token: str | None = None,
) -> SendResult:
    """Send a message to one DingTalk robot; failures are returned, not raised.

    Args:
        target: Direct URL, access token, or "" for the default robot.
        message: Message to send.
        client: Client to use; defaults to the shared singleton.
        sec_token: Secret for a token target. Omitted, the default robot's secret
            is reused; a wrong secret is reported by DingTalk in the response
            body (still HTTP 200), which is not inspected.
    """
    client = client or dingtalk_client
    try:
        credentials = client.credentials
        if target.startswith("http"):
            credentials = credentials.with_direct_url(target)
        elif target:
            credentials = credentials.with_token(target, sec_token)

        await client.send_message(message, credentials)
        logger.info("output.dingtalk.sent", target=_mask(target), msgtype=message.kind.value)
        return SendResult(channel="dingtalk", success=True, target=target, status_code=200)

    except DingTalkError as e:
        logger.warning("output.dingtalk.failed", target=_mask(target), error=str(e))
        status_code = e.status_code if isinstance(e, ProtocolError) else None
        return SendResult(
            channel="dingtalk",
            success=False,
            target=target,
            status_code=status_code,
            error=str(e),
        )
