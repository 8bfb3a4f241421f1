"""
Output router: dispatch one message to configured output channels.

Accepts a single output_config dict or a list of them.
Format: {"type": "dingtalk", "target": "https://..." | "<access token>" | "", "secret": optional}
"""

import structlog

from dingtalk_robot.dingtalk.client import DingTalkClient
from dingtalk_robot.output.base import SendResult
from dingtalk_robot.output.dingtalk import send_dingtalk
from dingtalk_robot.schemas.message import Message

logger = structlog.get_logger()


async def dispatch(
    output_config: dict | list[dict],
    message: Message,
    client: DingTalkClient | None = None,
) -> list[SendResult]:
    """Route a message to one or more output channels.

    Targets are sent one after another; each gets its own timestamp and result.

    Args:
        output_config: Single config or list of configs.
            Each must have "type"; "target" defaults to the default robot,
            "secret" signs a token target with its own key.
        message: Message to dispatch.
        client: DingTalk client override (tests, custom transports).

    Returns:
        List of SendResult, one per config, in order.
    """
    if isinstance(output_config, dict):
        output_config = [output_config]

    results = []
    for cfg in output_config:
        channel_type = cfg.get("type")
        target = cfg.get("target", "")

        if channel_type == "dingtalk":
            result = await send_dingtalk(target, message, client, cfg.get("secret"))
        else:
            logger.warning("output.unknown_type", type=channel_type)
            result = SendResult(
                channel=channel_type or "unknown",
                success=False,
                target=target,
                error=f"Unknown output type: {channel_type}",
            )
        results.append(result)

    failed = sum(1 for r in results if not r.success)
    logger.info(
        "output.dispatched",
        msgtype=message.kind.value,
        total=len(results),
        failed=failed,
    )
    return results
