"""
Robot message models.

A Message is an immutable value: every builder call returns a new Message.

    Message.new_text("deploy finished").at_mobiles(["13800000000"])
    Message.new_action_card("Release", "v1.2 is out", buttons=[("Notes", url)]).landscape()
"""

from collections.abc import Iterable
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator


class MessageType(str, Enum):
    TEXT = "text"
    MARKDOWN = "markdown"
    LINK = "link"
    ACTION_CARD = "actionCard"
    FEED_CARD = "feedCard"


class AvatarVisibility(str, Enum):
    SHOW = "0"
    HIDE = "1"


class ButtonOrientation(str, Enum):
    VERTICAL = "0"
    LANDSCAPE = "1"


class _Frozen(BaseModel):
    model_config = {"frozen": True}


class ActionCardButton(_Frozen):
    title: str
    action_url: str


class FeedCardLink(_Frozen):
    title: str
    message_url: str
    pic_url: str


class Mention(_Frozen):
    at_all: bool = False
    at_mobiles: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.at_all and not self.at_mobiles


class TextBody(_Frozen):
    kind: Literal["text"] = "text"
    content: str


class MarkdownBody(_Frozen):
    kind: Literal["markdown"] = "markdown"
    title: str
    content: str


class LinkBody(_Frozen):
    kind: Literal["link"] = "link"
    title: str
    text: str
    pic_url: str
    message_url: str


class ActionCardBody(_Frozen):
    kind: Literal["actionCard"] = "actionCard"
    title: str
    text: str
    avatar: AvatarVisibility = AvatarVisibility.SHOW
    btn_orientation: ButtonOrientation = ButtonOrientation.VERTICAL
    single_button: ActionCardButton | None = None
    buttons: tuple[ActionCardButton, ...] = ()

    @model_validator(mode="after")
    def _one_button_mode(self):
        if self.single_button is not None and self.buttons:
            raise ValueError("action card takes either a single button or a button list, not both")
        if self.single_button is None and not self.buttons:
            raise ValueError("action card needs a single button or at least one button in the list")
        return self


class FeedCardBody(_Frozen):
    kind: Literal["feedCard"] = "feedCard"
    links: tuple[FeedCardLink, ...] = ()


MessageBody = Annotated[
    Union[TextBody, MarkdownBody, LinkBody, ActionCardBody, FeedCardBody],
    Field(discriminator="kind"),
]


def _button(b: ActionCardButton | tuple[str, str]) -> ActionCardButton:
    if isinstance(b, ActionCardButton):
        return b
    title, action_url = b
    return ActionCardButton(title=title, action_url=action_url)


def _feed_link(link: FeedCardLink | tuple[str, str, str]) -> FeedCardLink:
    if isinstance(link, FeedCardLink):
        return link
    title, message_url, pic_url = link
    return FeedCardLink(title=title, message_url=message_url, pic_url=pic_url)


class Message(_Frozen):
    body: MessageBody
    mention: Mention | None = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def new_text(cls, content: str) -> "Message":
        return cls(body=TextBody(content=content))

    @classmethod
    def new_markdown(cls, title: str, content: str) -> "Message":
        return cls(body=MarkdownBody(title=title, content=content))

    @classmethod
    def new_link(cls, title: str, text: str, pic_url: str, message_url: str) -> "Message":
        return cls(body=LinkBody(title=title, text=text, pic_url=pic_url, message_url=message_url))

    @classmethod
    def new_action_card(
        cls,
        title: str,
        text: str,
        *,
        single_title: str | None = None,
        single_url: str | None = None,
        buttons: Iterable[ActionCardButton | tuple[str, str]] = (),
    ) -> "Message":
        """Action card in single-button mode (single_title + single_url) or list mode (buttons).

        Raises:
            ValueError: both modes or neither mode given.
        """
        single = None
        if single_title is not None or single_url is not None:
            single = ActionCardButton(title=single_title, action_url=single_url)
        return cls(
            body=ActionCardBody(
                title=title,
                text=text,
                single_button=single,
                buttons=tuple(_button(b) for b in buttons),
            )
        )

    @classmethod
    def new_feed_card(cls, links: Iterable[FeedCardLink | tuple[str, str, str]] = ()) -> "Message":
        return cls(body=FeedCardBody(links=tuple(_feed_link(link) for link in links)))

    # ------------------------------------------------------------------
    # Builders (each returns a new Message)
    # ------------------------------------------------------------------

    @property
    def kind(self) -> MessageType:
        return MessageType(self.body.kind)

    def at_all(self) -> "Message":
        mention = self.mention or Mention()
        return self.model_copy(update={"mention": mention.model_copy(update={"at_all": True})})

    def at_mobiles(self, mobiles: Iterable[str]) -> "Message":
        """Append mobiles to @; order and duplicates are kept."""
        mention = self.mention or Mention()
        at_mobiles = mention.at_mobiles + tuple(mobiles)
        return self.model_copy(update={"mention": mention.model_copy(update={"at_mobiles": at_mobiles})})

    def hide_avatar(self) -> "Message":
        return self._replace_body(ActionCardBody, "hide_avatar", avatar=AvatarVisibility.HIDE)

    def landscape(self) -> "Message":
        return self._replace_body(
            ActionCardBody, "landscape", btn_orientation=ButtonOrientation.LANDSCAPE
        )

    def add_button(self, title: str, action_url: str) -> "Message":
        """Append a button in list mode; rejected on single-button cards."""
        body = self._require(ActionCardBody, "add_button")
        button = ActionCardButton(title=title, action_url=action_url)
        return self._replace_body(ActionCardBody, "add_button", buttons=body.buttons + (button,))

    def add_link(self, title: str, message_url: str, pic_url: str) -> "Message":
        body = self._require(FeedCardBody, "add_link")
        link = FeedCardLink(title=title, message_url=message_url, pic_url=pic_url)
        return self._replace_body(FeedCardBody, "add_link", links=body.links + (link,))

    def _require(self, body_type: type[BaseModel], op: str):
        if not isinstance(self.body, body_type):
            expected = body_type.model_fields["kind"].default
            raise ValueError(f"{op}() applies to {expected} messages, not {self.body.kind}")
        return self.body

    def _replace_body(self, body_type: type[BaseModel], op: str, **update) -> "Message":
        body = self._require(body_type, op)
        # Rebuild (not model_copy) so validators run again
        new_body = body_type(**{**dict(body), **update})
        return self.model_copy(update={"body": new_body})
