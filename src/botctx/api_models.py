"""Bot API object types used by the context layer.

Only the fields the projections, the dispatcher and the CLI read are
modelled; unknown JSON fields are ignored on decode.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import msgspec

__all__ = [
    "CallbackQuery",
    "Chat",
    "ChatInviteLink",
    "ChatMember",
    "ChatMemberUpdated",
    "ChatPermissions",
    "ChosenInlineResult",
    "InlineQuery",
    "Message",
    "MessageId",
    "PhotoSize",
    "Poll",
    "PollAnswer",
    "PollOption",
    "PreCheckoutQuery",
    "ShippingAddress",
    "ShippingQuery",
    "Update",
    "UpdateKind",
    "User",
    "UserProfilePhotos",
    "decode_update",
]


class User(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: int
    is_bot: bool = False
    first_name: str = ""
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    can_join_groups: bool | None = None
    can_read_all_group_messages: bool | None = None
    supports_inline_queries: bool | None = None


class Chat(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: int
    type: str
    title: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_forum: bool | None = None


class Message(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    message_id: int
    chat: Chat
    date: int = 0
    from_: User | None = msgspec.field(default=None, name="from")
    sender_chat: Chat | None = None
    message_thread_id: int | None = None
    text: str | None = None
    caption: str | None = None
    reply_to_message: Message | None = None


class MessageId(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    message_id: int


class CallbackQuery(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: str
    from_: User = msgspec.field(name="from")
    chat_instance: str = ""
    message: Message | None = None
    inline_message_id: str | None = None
    data: str | None = None
    game_short_name: str | None = None


class InlineQuery(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: str
    from_: User = msgspec.field(name="from")
    query: str = ""
    offset: str = ""
    chat_type: str | None = None


class ChosenInlineResult(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    result_id: str
    from_: User = msgspec.field(name="from")
    query: str = ""
    inline_message_id: str | None = None


class ShippingAddress(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    country_code: str
    state: str = ""
    city: str = ""
    street_line1: str = ""
    street_line2: str = ""
    post_code: str = ""


class ShippingQuery(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: str
    from_: User = msgspec.field(name="from")
    invoice_payload: str = ""
    shipping_address: ShippingAddress | None = None


class PreCheckoutQuery(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: str
    from_: User = msgspec.field(name="from")
    currency: str = ""
    total_amount: int = 0
    invoice_payload: str = ""
    shipping_option_id: str | None = None


class PollOption(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    text: str
    voter_count: int = 0


class Poll(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    id: str
    question: str
    options: tuple[PollOption, ...] = ()
    total_voter_count: int = 0
    is_closed: bool = False
    is_anonymous: bool = True
    type: str = "regular"
    allows_multiple_answers: bool = False


class PollAnswer(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    poll_id: str
    option_ids: tuple[int, ...] = ()
    user: User | None = None
    voter_chat: Chat | None = None


class ChatMember(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    status: str
    user: User | None = None
    custom_title: str | None = None


class ChatMemberUpdated(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    chat: Chat
    from_: User = msgspec.field(name="from")
    old_chat_member: ChatMember
    new_chat_member: ChatMember
    date: int = 0


class ChatPermissions(msgspec.Struct, frozen=True, omit_defaults=True):
    can_send_messages: bool | None = None
    can_send_audios: bool | None = None
    can_send_documents: bool | None = None
    can_send_photos: bool | None = None
    can_send_videos: bool | None = None
    can_send_video_notes: bool | None = None
    can_send_voice_notes: bool | None = None
    can_send_polls: bool | None = None
    can_send_other_messages: bool | None = None
    can_add_web_page_previews: bool | None = None
    can_change_info: bool | None = None
    can_invite_users: bool | None = None
    can_pin_messages: bool | None = None
    can_manage_topics: bool | None = None


class ChatInviteLink(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    invite_link: str
    creator: User | None = None
    creates_join_request: bool = False
    is_primary: bool = False
    is_revoked: bool = False
    name: str | None = None
    expire_date: int | None = None
    member_limit: int | None = None


class PhotoSize(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: int | None = None


class UserProfilePhotos(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    total_count: int
    photos: tuple[tuple[PhotoSize, ...], ...] = ()


class UpdateKind(StrEnum):
    MESSAGE = "message"
    EDITED_MESSAGE = "edited_message"
    CHANNEL_POST = "channel_post"
    EDITED_CHANNEL_POST = "edited_channel_post"
    INLINE_QUERY = "inline_query"
    CHOSEN_INLINE_RESULT = "chosen_inline_result"
    CALLBACK_QUERY = "callback_query"
    SHIPPING_QUERY = "shipping_query"
    PRE_CHECKOUT_QUERY = "pre_checkout_query"
    POLL = "poll"
    POLL_ANSWER = "poll_answer"
    MY_CHAT_MEMBER = "my_chat_member"
    CHAT_MEMBER = "chat_member"


class Update(msgspec.Struct, frozen=True, forbid_unknown_fields=False):
    """One inbound event; at most one variant field is populated.

    An update with none of the known variants set (a newer update type) is
    accepted and simply projects to nothing.
    """

    update_id: int
    message: Message | None = None
    edited_message: Message | None = None
    channel_post: Message | None = None
    edited_channel_post: Message | None = None
    inline_query: InlineQuery | None = None
    chosen_inline_result: ChosenInlineResult | None = None
    callback_query: CallbackQuery | None = None
    shipping_query: ShippingQuery | None = None
    pre_checkout_query: PreCheckoutQuery | None = None
    poll: Poll | None = None
    poll_answer: PollAnswer | None = None
    my_chat_member: ChatMemberUpdated | None = None
    chat_member: ChatMemberUpdated | None = None

    def __post_init__(self) -> None:
        populated = [kind for kind in UpdateKind if getattr(self, kind) is not None]
        if len(populated) > 1:
            names = ", ".join(populated)
            raise ValueError(f"update {self.update_id} has several variants: {names}")

    @property
    def kind(self) -> UpdateKind | None:
        for kind in UpdateKind:
            if getattr(self, kind) is not None:
                return kind
        return None

    @property
    def payload(self) -> Any | None:
        kind = self.kind
        if kind is None:
            return None
        return getattr(self, kind)


def decode_update(data: bytes | str) -> Update:
    return msgspec.json.decode(data, type=Update)
