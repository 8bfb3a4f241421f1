from dingtalk_robot.core.credentials import Credentials
from dingtalk_robot.core.encoder import encode, serialize
from dingtalk_robot.core.signer import sign, timestamp_millis
from dingtalk_robot.core.url import compose_url
from dingtalk_robot.dingtalk.client import DingTalkClient
from dingtalk_robot.errors import ConfigError, DingTalkError, ProtocolError, TransportError
from dingtalk_robot.schemas.message import (
    ActionCardButton,
    AvatarVisibility,
    ButtonOrientation,
    FeedCardLink,
    Mention,
    Message,
    MessageType,
)

__all__ = [
    "ActionCardButton",
    "AvatarVisibility",
    "ButtonOrientation",
    "ConfigError",
    "Credentials",
    "DingTalkClient",
    "DingTalkError",
    "FeedCardLink",
    "Mention",
    "Message",
    "MessageType",
    "ProtocolError",
    "TransportError",
    "compose_url",
    "encode",
    "serialize",
    "sign",
    "timestamp_millis",
]
