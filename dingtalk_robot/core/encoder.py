"""
Message -> robot JSON payload.

Wire names are fixed by the robot API (picUrl vs picURL, singleURL, ...).
"""

import json

from dingtalk_robot.schemas.message import (
    ActionCardBody,
    FeedCardBody,
    LinkBody,
    MarkdownBody,
    Message,
    TextBody,
)


def _text(body: TextBody) -> dict:
    return {"content": body.content}


def _markdown(body: MarkdownBody) -> dict:
    return {"title": body.title, "text": body.content}


def _link(body: LinkBody) -> dict:
    return {
        "text": body.text,
        "title": body.title,
        "picUrl": body.pic_url,
        "messageUrl": body.message_url,
    }


def _action_card(body: ActionCardBody) -> dict:
    card = {
        "title": body.title,
        "text": body.text,
        "hideAvatar": body.avatar.value,
        "btnOrientation": body.btn_orientation.value,
    }
    if body.single_button is not None:
        card["singleTitle"] = body.single_button.title
        card["singleURL"] = body.single_button.action_url
    else:
        card["btns"] = [{"title": b.title, "actionURL": b.action_url} for b in body.buttons]
    return card


def _feed_card(body: FeedCardBody) -> dict:
    return {
        "links": [
            {"title": link.title, "messageURL": link.message_url, "picURL": link.pic_url}
            for link in body.links
        ]
    }


_ENCODERS = {
    "text": _text,
    "markdown": _markdown,
    "link": _link,
    "actionCard": _action_card,
    "feedCard": _feed_card,
}


def encode(message: Message) -> dict:
    """Build the JSON tree for ``message``."""
    msgtype = message.body.kind
    payload = {"msgtype": msgtype, msgtype: _ENCODERS[msgtype](message.body)}

    mention = message.mention
    if mention is not None and not mention.is_empty:
        payload["at"] = {"atMobiles": list(mention.at_mobiles), "isAtAll": mention.at_all}
    return payload


def serialize(message: Message) -> str:
    """Compact JSON text of ``encode(message)``; non-ASCII is kept as-is."""
    return json.dumps(encode(message), ensure_ascii=False, separators=(",", ":"))
