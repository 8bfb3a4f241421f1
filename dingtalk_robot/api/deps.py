from fastapi import HTTPException

from dingtalk_robot.config import settings
from dingtalk_robot.dingtalk.client import DingTalkClient, dingtalk_client


async def get_dingtalk_client() -> DingTalkClient:
    """Shared robot client; 503 when the integration is switched off."""
    if not settings.DINGTALK_ENABLED:
        raise HTTPException(status_code=503, detail="DingTalk integration is disabled")
    return dingtalk_client
