"""Bot API method catalog.

Each method is declared once as a table entry (Bot API name, positional
field names, result type). Two addressing families exist: the regular form
takes the target identifiers first and accepts a cancellation signal, the
``*_inline`` form is addressed by ``inline_message_id`` alone and never
takes a signal.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MethodType
from typing import Any, Protocol, TypeAlias

import anyio
import msgspec

from .api_models import (
    Chat,
    ChatInviteLink,
    ChatMember,
    Message,
    MessageId,
    Poll,
    User,
    UserProfilePhotos,
)

__all__ = [
    "Api",
    "BotTransport",
    "Other",
    "Signal",
]

Other: TypeAlias = Mapping[str, Any]
Signal: TypeAlias = anyio.Event


class BotTransport(Protocol):
    async def call(
        self,
        method: str,
        params: Mapping[str, Any],
        *,
        signal: Signal | None = None,
    ) -> Any: ...


class _ApiMethod:
    def __init__(
        self,
        method: str,
        *fields: str,
        returns: Any = None,
        inline: bool = False,
    ) -> None:
        self.method = method
        self.fields = ("inline_message_id", *fields) if inline else fields
        self.returns = returns
        self.inline = inline
        self.name = method

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, api: Api | None, owner: type | None = None) -> Any:
        if api is None:
            return self
        return MethodType(self, api)

    def __repr__(self) -> str:
        form = "inline" if self.inline else "regular"
        return f"<api method {self.name} -> {self.method} ({form})>"

    def _bind(
        self,
        args: tuple[Any, ...],
        other: Other | None,
        signal: Signal | None,
    ) -> tuple[dict[str, Any], Signal | None]:
        count = len(self.fields)
        if len(args) < count:
            missing = ", ".join(self.fields[len(args) :])
            raise TypeError(f"{self.name}() missing arguments: {missing}")
        extra = list(args[count:])
        allowed = 1 if self.inline else 2
        if len(extra) > allowed:
            raise TypeError(
                f"{self.name}() takes at most {count + allowed} "
                f"positional arguments ({len(args)} given)"
            )
        if extra:
            if other is not None:
                raise TypeError(f"{self.name}() got multiple values for 'other'")
            other = extra[0]
        if len(extra) > 1:
            if signal is not None:
                raise TypeError(f"{self.name}() got multiple values for 'signal'")
            signal = extra[1]
        params = {key: value for key, value in (other or {}).items() if value is not None}
        for field, value in zip(self.fields, args[:count], strict=True):
            if value is not None:
                params[field] = value
        return params, signal

    async def __call__(
        self,
        api: Api,
        *args: Any,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Any:
        if self.inline and signal is not None:
            raise TypeError(f"{self.name}() does not accept a signal")
        params, signal = self._bind(args, other, signal)
        if self.inline:
            result = await api.transport.call(self.method, params)
        else:
            result = await api.transport.call(self.method, params, signal=signal)
        if self.returns is None:
            return result
        return msgspec.convert(result, type=self.returns)


def _regular(method: str, *fields: str, returns: Any = None) -> _ApiMethod:
    return _ApiMethod(method, *fields, returns=returns)


def _inline(method: str, *fields: str, returns: Any = bool) -> _ApiMethod:
    return _ApiMethod(method, *fields, returns=returns, inline=True)


_EDITED = Message | bool


class Api:
    """Typed-ish access to the Bot API through a transport.

    Positional arguments fill the named fields; ``other`` carries every
    optional parameter and is overridden by the positional values.
    """

    def __init__(self, transport: BotTransport) -> None:
        self.transport = transport

    async def call(
        self,
        method: str,
        params: Other | None = None,
        signal: Signal | None = None,
    ) -> Any:
        """Escape hatch for methods missing from the catalog."""
        return await self.transport.call(method, dict(params or {}), signal=signal)

    get_me = _regular("getMe", returns=User)

    send_message = _regular("sendMessage", "chat_id", "text", returns=Message)
    forward_message = _regular(
        "forwardMessage", "chat_id", "from_chat_id", "message_id", returns=Message
    )
    copy_message = _regular(
        "copyMessage", "chat_id", "from_chat_id", "message_id", returns=MessageId
    )
    send_photo = _regular("sendPhoto", "chat_id", "photo", returns=Message)
    send_audio = _regular("sendAudio", "chat_id", "audio", returns=Message)
    send_document = _regular("sendDocument", "chat_id", "document", returns=Message)
    send_video = _regular("sendVideo", "chat_id", "video", returns=Message)
    send_animation = _regular("sendAnimation", "chat_id", "animation", returns=Message)
    send_voice = _regular("sendVoice", "chat_id", "voice", returns=Message)
    send_video_note = _regular("sendVideoNote", "chat_id", "video_note", returns=Message)
    send_sticker = _regular("sendSticker", "chat_id", "sticker", returns=Message)
    send_media_group = _regular(
        "sendMediaGroup", "chat_id", "media", returns=list[Message]
    )
    send_location = _regular(
        "sendLocation", "chat_id", "latitude", "longitude", returns=Message
    )
    send_venue = _regular(
        "sendVenue",
        "chat_id",
        "latitude",
        "longitude",
        "title",
        "address",
        returns=Message,
    )
    send_contact = _regular(
        "sendContact", "chat_id", "phone_number", "first_name", returns=Message
    )
    send_poll = _regular("sendPoll", "chat_id", "question", "options", returns=Message)
    send_dice = _regular("sendDice", "chat_id", "emoji", returns=Message)
    send_chat_action = _regular("sendChatAction", "chat_id", "action", returns=bool)
    send_invoice = _regular(
        "sendInvoice",
        "chat_id",
        "title",
        "description",
        "payload",
        "provider_token",
        "currency",
        "prices",
        returns=Message,
    )
    send_game = _regular("sendGame", "chat_id", "game_short_name", returns=Message)

    get_user_profile_photos = _regular(
        "getUserProfilePhotos", "user_id", returns=UserProfilePhotos
    )
    set_passport_data_errors = _regular(
        "setPassportDataErrors", "user_id", "errors", returns=bool
    )

    ban_chat_member = _regular("banChatMember", "chat_id", "user_id", returns=bool)
    unban_chat_member = _regular("unbanChatMember", "chat_id", "user_id", returns=bool)
    restrict_chat_member = _regular(
        "restrictChatMember", "chat_id", "user_id", "permissions", returns=bool
    )
    promote_chat_member = _regular(
        "promoteChatMember", "chat_id", "user_id", returns=bool
    )
    set_chat_administrator_custom_title = _regular(
        "setChatAdministratorCustomTitle",
        "chat_id",
        "user_id",
        "custom_title",
        returns=bool,
    )
    set_chat_permissions = _regular(
        "setChatPermissions", "chat_id", "permissions", returns=bool
    )
    export_chat_invite_link = _regular("exportChatInviteLink", "chat_id", returns=str)
    create_chat_invite_link = _regular(
        "createChatInviteLink", "chat_id", returns=ChatInviteLink
    )
    edit_chat_invite_link = _regular(
        "editChatInviteLink", "chat_id", "invite_link", returns=ChatInviteLink
    )
    revoke_chat_invite_link = _regular(
        "revokeChatInviteLink", "chat_id", "invite_link", returns=ChatInviteLink
    )
    set_chat_photo = _regular("setChatPhoto", "chat_id", "photo", returns=bool)
    delete_chat_photo = _regular("deleteChatPhoto", "chat_id", returns=bool)
    set_chat_title = _regular("setChatTitle", "chat_id", "title", returns=bool)
    set_chat_description = _regular(
        "setChatDescription", "chat_id", "description", returns=bool
    )
    pin_chat_message = _regular(
        "pinChatMessage", "chat_id", "message_id", returns=bool
    )
    unpin_chat_message = _regular(
        "unpinChatMessage", "chat_id", "message_id", returns=bool
    )
    unpin_all_chat_messages = _regular("unpinAllChatMessages", "chat_id", returns=bool)
    leave_chat = _regular("leaveChat", "chat_id", returns=bool)
    get_chat = _regular("getChat", "chat_id", returns=Chat)
    get_chat_administrators = _regular(
        "getChatAdministrators", "chat_id", returns=list[ChatMember]
    )
    get_chat_member_count = _regular("getChatMemberCount", "chat_id", returns=int)
    get_chat_member = _regular(
        "getChatMember", "chat_id", "user_id", returns=ChatMember
    )
    set_chat_sticker_set = _regular(
        "setChatStickerSet", "chat_id", "sticker_set_name", returns=bool
    )
    delete_chat_sticker_set = _regular("deleteChatStickerSet", "chat_id", returns=bool)
    delete_message = _regular("deleteMessage", "chat_id", "message_id", returns=bool)

    answer_callback_query = _regular(
        "answerCallbackQuery", "callback_query_id", returns=bool
    )
    answer_inline_query = _regular(
        "answerInlineQuery", "inline_query_id", "results", returns=bool
    )
    answer_shipping_query = _regular(
        "answerShippingQuery", "shipping_query_id", "ok", returns=bool
    )
    answer_pre_checkout_query = _regular(
        "answerPreCheckoutQuery", "pre_checkout_query_id", "ok", returns=bool
    )

    edit_message_text = _regular(
        "editMessageText", "chat_id", "message_id", "text", returns=_EDITED
    )
    edit_message_text_inline = _inline("editMessageText", "text")
    edit_message_caption = _regular(
        "editMessageCaption", "chat_id", "message_id", returns=_EDITED
    )
    edit_message_caption_inline = _inline("editMessageCaption")
    edit_message_media = _regular(
        "editMessageMedia", "chat_id", "message_id", "media", returns=_EDITED
    )
    edit_message_media_inline = _inline("editMessageMedia", "media")
    edit_message_reply_markup = _regular(
        "editMessageReplyMarkup", "chat_id", "message_id", returns=_EDITED
    )
    edit_message_reply_markup_inline = _inline("editMessageReplyMarkup")
    edit_message_live_location = _regular(
        "editMessageLiveLocation",
        "chat_id",
        "message_id",
        "latitude",
        "longitude",
        returns=_EDITED,
    )
    edit_message_live_location_inline = _inline(
        "editMessageLiveLocation", "latitude", "longitude"
    )
    stop_message_live_location = _regular(
        "stopMessageLiveLocation", "chat_id", "message_id", returns=_EDITED
    )
    stop_message_live_location_inline = _inline("stopMessageLiveLocation")
    stop_poll = _regular("stopPoll", "chat_id", "message_id", returns=Poll)
    stop_poll_inline = _inline("stopPoll", returns=None)
