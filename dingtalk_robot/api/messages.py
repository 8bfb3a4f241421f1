import structlog
from fastapi import APIRouter, Depends

from dingtalk_robot.api.deps import get_dingtalk_client
from dingtalk_robot.core.encoder import encode
from dingtalk_robot.dingtalk.client import DingTalkClient
from dingtalk_robot.output.router import dispatch
from dingtalk_robot.schemas.send import (
    PreviewRequest,
    PreviewResponse,
    SendRequest,
    SendResponse,
    SendResultOut,
    TextRequest,
)

router = APIRouter(prefix="/api/messages", tags=["messages"])
logger = structlog.get_logger()


@router.post("/preview", response_model=PreviewResponse)
async def preview_message(req: PreviewRequest):
    """Return the JSON payload that would be sent, without sending it."""
    return PreviewResponse(payload=encode(req.message))


@router.post("", response_model=SendResponse)
async def send_message(
    req: SendRequest,
    client: DingTalkClient = Depends(get_dingtalk_client),
):
    """Send a message to the default robot or to each of ``targets``."""
    targets = req.targets if req.targets else [""]
    output_config = [{"type": "dingtalk", "target": t} for t in targets]

    results = await dispatch(output_config, req.message, client)
    success = all(r.success for r in results)
    logger.info(
        "api.message_sent",
        msgtype=req.message.kind.value,
        targets=len(results),
        success=success,
    )
    return SendResponse(
        success=success,
        results=[SendResultOut.model_validate(r) for r in results],
    )


@router.post("/text", status_code=204)
async def send_text(
    req: TextRequest,
    client: DingTalkClient = Depends(get_dingtalk_client),
):
    """Plain-text shortcut to the default robot; failures surface as 502."""
    await client.send_text(req.content)
