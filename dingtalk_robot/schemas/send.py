from pydantic import BaseModel

from dingtalk_robot.schemas.message import Message


class PreviewRequest(BaseModel):
    message: Message


class PreviewResponse(BaseModel):
    payload: dict


class SendRequest(BaseModel):
    """Send a message - to the default robot, or to explicit targets."""
    message: Message
    targets: list[str] | None = None  # Direct URLs or access tokens


class SendResultOut(BaseModel):
    model_config = {"from_attributes": True}

    channel: str
    success: bool
    target: str
    status_code: int | None = None
    error: str | None = None


class SendResponse(BaseModel):
    success: bool
    results: list[SendResultOut]


class TextRequest(BaseModel):
    content: str
