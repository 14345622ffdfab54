"""Per-update context object.

A :class:`Context` wraps one :class:`~botctx.api_models.Update` together with
the :class:`~botctx.api.Api` and the bot's own identity. It does two things:

1. Projects the update into canonical views. ``ctx.msg`` is the message of
   the update no matter whether it arrived as ``message``,
   ``edited_message``, inside a ``callback_query``, or as a channel post;
   ``ctx.chat``, ``ctx.sender_chat``, ``ctx.from_user`` and
   ``ctx.inline_message_id`` follow from it (see :mod:`botctx.projection`).
2. Offers context-aware shortcuts for the Bot API with those values filled
   in, so ``ctx.reply("hi")`` is ``api.send_message(ctx.chat.id, "hi")``.

Shortcuts resolve everything they need before calling the API. When the
update lacks a value (a chat for a poll answer, say) they raise
:class:`~botctx.errors.MissingContext` naming the Bot API method, and the
API is never touched. On success they return the API call's awaitable
unchanged.

Edit-style shortcuts target the inline message when the update carries an
``inline_message_id`` and the chat message otherwise. Inline calls take no
``signal``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from .api import Api, Other, Signal
from .api_models import (
    CallbackQuery,
    Chat,
    ChatInviteLink,
    ChatMember,
    ChatMemberUpdated,
    ChatPermissions,
    ChosenInlineResult,
    InlineQuery,
    Message,
    MessageId,
    Poll,
    PollAnswer,
    PreCheckoutQuery,
    ShippingQuery,
    Update,
    UpdateKind,
    User,
    UserProfilePhotos,
)
from .errors import require
from .logging import get_logger
from .projection import (
    resolve_chat,
    resolve_from,
    resolve_inline_message_id,
    resolve_msg,
    resolve_sender_chat,
)

logger = get_logger(__name__)

__all__ = ["Context"]


class Context:
    __slots__ = ("_api", "_me", "_update")

    def __init__(self, update: Update, api: Api, me: User) -> None:
        self._update = update
        self._api = api
        self._me = me

    def __repr__(self) -> str:
        return f"Context(update_id={self._update.update_id}, kind={self.kind})"

    @property
    def update(self) -> Update:
        return self._update

    @property
    def api(self) -> Api:
        return self._api

    @property
    def me(self) -> User:
        """The bot itself, as returned by getMe."""
        return self._me

    @property
    def kind(self) -> UpdateKind | None:
        return self._update.kind

    # update shortcuts

    @property
    def message(self) -> Message | None:
        return self._update.message

    @property
    def edited_message(self) -> Message | None:
        return self._update.edited_message

    @property
    def channel_post(self) -> Message | None:
        return self._update.channel_post

    @property
    def edited_channel_post(self) -> Message | None:
        return self._update.edited_channel_post

    @property
    def inline_query(self) -> InlineQuery | None:
        return self._update.inline_query

    @property
    def chosen_inline_result(self) -> ChosenInlineResult | None:
        return self._update.chosen_inline_result

    @property
    def callback_query(self) -> CallbackQuery | None:
        return self._update.callback_query

    @property
    def shipping_query(self) -> ShippingQuery | None:
        return self._update.shipping_query

    @property
    def pre_checkout_query(self) -> PreCheckoutQuery | None:
        return self._update.pre_checkout_query

    @property
    def poll(self) -> Poll | None:
        return self._update.poll

    @property
    def poll_answer(self) -> PollAnswer | None:
        return self._update.poll_answer

    @property
    def my_chat_member(self) -> ChatMemberUpdated | None:
        return self._update.my_chat_member

    @property
    def chat_member(self) -> ChatMemberUpdated | None:
        return self._update.chat_member

    # aggregation shortcuts

    @property
    def msg(self) -> Message | None:
        """message, edited_message, callback_query.message, channel_post, edited_channel_post."""
        return resolve_msg(self._update)

    @property
    def chat(self) -> Chat | None:
        return resolve_chat(self._update)

    @property
    def sender_chat(self) -> Chat | None:
        return resolve_sender_chat(self._update)

    @property
    def from_user(self) -> User | None:
        """The acting user; a query's sender wins over the sender of any message."""
        return resolve_from(self._update)

    @property
    def inline_message_id(self) -> str | None:
        return resolve_inline_message_id(self._update)

    # resolution

    def _chat_id(self, operation: str) -> int:
        return require(self.chat, operation).id

    def _message_id(self, operation: str) -> int:
        return require(self.msg, operation).message_id

    def _from_id(self, operation: str) -> int:
        return require(self.from_user, operation).id

    def _dual_target(
        self,
        operation: str,
        regular: Callable[..., Awaitable[Any]],
        inline: Callable[..., Awaitable[Any]],
        *args: Any,
        other: Other | None,
        signal: Signal | None,
    ) -> Awaitable[Any]:
        inline_id = self.inline_message_id
        if inline_id is not None:
            logger.debug("context.dispatch", operation=operation, target="inline")
            return inline(inline_id, *args, other)
        chat_id = self._chat_id(operation)
        message_id = self._message_id(operation)
        logger.debug("context.dispatch", operation=operation, target="chat")
        return regular(chat_id, message_id, *args, other, signal)

    # sending

    def reply(
        self, text: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        """Send a text message to the chat of this update (sendMessage)."""
        return self._api.send_message(
            self._chat_id("sendMessage"), text, other, signal
        )

    def forward_message(
        self,
        chat_id: int | str,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message]:
        """Forward the message of this update to ``chat_id``."""
        return self._api.forward_message(
            chat_id,
            self._chat_id("forwardMessage"),
            self._message_id("forwardMessage"),
            other,
            signal,
        )

    def copy_message(
        self,
        chat_id: int | str,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[MessageId]:
        """Copy the message of this update to ``chat_id`` without a link back."""
        return self._api.copy_message(
            chat_id,
            self._chat_id("copyMessage"),
            self._message_id("copyMessage"),
            other,
            signal,
        )

    def reply_with_photo(
        self, photo: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_photo(self._chat_id("sendPhoto"), photo, other, signal)

    def reply_with_audio(
        self, audio: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_audio(self._chat_id("sendAudio"), audio, other, signal)

    def reply_with_document(
        self, document: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_document(
            self._chat_id("sendDocument"), document, other, signal
        )

    def reply_with_video(
        self, video: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_video(self._chat_id("sendVideo"), video, other, signal)

    def reply_with_animation(
        self, animation: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_animation(
            self._chat_id("sendAnimation"), animation, other, signal
        )

    def reply_with_voice(
        self, voice: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_voice(self._chat_id("sendVoice"), voice, other, signal)

    def reply_with_video_note(
        self, video_note: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_video_note(
            self._chat_id("sendVideoNote"), video_note, other, signal
        )

    def reply_with_sticker(
        self, sticker: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_sticker(
            self._chat_id("sendSticker"), sticker, other, signal
        )

    def reply_with_media_group(
        self,
        media: Sequence[Any],
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[list[Message]]:
        """Send 2-10 photos, videos, documents or audios as an album."""
        return self._api.send_media_group(
            self._chat_id("sendMediaGroup"), media, other, signal
        )

    def reply_with_location(
        self,
        latitude: float,
        longitude: float,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message]:
        return self._api.send_location(
            self._chat_id("sendLocation"), latitude, longitude, other, signal
        )

    def reply_with_venue(
        self,
        latitude: float,
        longitude: float,
        title: str,
        address: str,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message]:
        return self._api.send_venue(
            self._chat_id("sendVenue"),
            latitude,
            longitude,
            title,
            address,
            other,
            signal,
        )

    def reply_with_contact(
        self,
        phone_number: str,
        first_name: str,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message]:
        return self._api.send_contact(
            self._chat_id("sendContact"), phone_number, first_name, other, signal
        )

    def reply_with_poll(
        self,
        question: str,
        options: Sequence[str],
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message]:
        return self._api.send_poll(
            self._chat_id("sendPoll"), question, options, other, signal
        )

    def reply_with_dice(
        self, emoji: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message]:
        return self._api.send_dice(self._chat_id("sendDice"), emoji, other, signal)

    def reply_with_chat_action(
        self, action: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        """Show a status such as ``typing`` for up to five seconds."""
        return self._api.send_chat_action(
            self._chat_id("sendChatAction"), action, other, signal
        )

    def reply_with_invoice(
        self,
        title: str,
        description: str,
        payload: str,
        provider_token: str,
        currency: str,
        prices: Sequence[Any],
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message]:
        return self._api.send_invoice(
            self._chat_id("sendInvoice"),
            title,
            description,
            payload,
            provider_token,
            currency,
            prices,
            other,
            signal,
        )

    def reply_with_game(
        self,
        game_short_name: str,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message]:
        return self._api.send_game(
            self._chat_id("sendGame"), game_short_name, other, signal
        )

    # users and members

    def get_user_profile_photos(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[UserProfilePhotos]:
        return self._api.get_user_profile_photos(
            self._from_id("getUserProfilePhotos"), other, signal
        )

    def set_passport_data_errors(
        self,
        errors: Sequence[Any],
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.set_passport_data_errors(
            self._from_id("setPassportDataErrors"), errors, None, signal
        )

    def ban_author(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        """Ban the acting user from the chat of this update."""
        return self._api.ban_chat_member(
            self._chat_id("banChatMember"),
            self._from_id("banChatMember"),
            other,
            signal,
        )

    kick_author = ban_author

    def ban_chat_member(
        self,
        user_id: int,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.ban_chat_member(
            self._chat_id("banChatMember"), user_id, other, signal
        )

    kick_chat_member = ban_chat_member

    def unban_chat_member(
        self,
        user_id: int,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.unban_chat_member(
            self._chat_id("unbanChatMember"), user_id, other, signal
        )

    def restrict_author(
        self,
        permissions: ChatPermissions | Other,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.restrict_chat_member(
            self._chat_id("restrictChatMember"),
            self._from_id("restrictChatMember"),
            permissions,
            other,
            signal,
        )

    def restrict_chat_member(
        self,
        user_id: int,
        permissions: ChatPermissions | Other,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.restrict_chat_member(
            self._chat_id("restrictChatMember"), user_id, permissions, other, signal
        )

    def promote_author(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        return self._api.promote_chat_member(
            self._chat_id("promoteChatMember"),
            self._from_id("promoteChatMember"),
            other,
            signal,
        )

    def promote_chat_member(
        self,
        user_id: int,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.promote_chat_member(
            self._chat_id("promoteChatMember"), user_id, other, signal
        )

    def set_chat_administrator_author_custom_title(
        self, custom_title: str, signal: Signal | None = None
    ) -> Awaitable[bool]:
        return self._api.set_chat_administrator_custom_title(
            self._chat_id("setChatAdministratorCustomTitle"),
            self._from_id("setChatAdministratorCustomTitle"),
            custom_title,
            None,
            signal,
        )

    def set_chat_administrator_custom_title(
        self, user_id: int, custom_title: str, signal: Signal | None = None
    ) -> Awaitable[bool]:
        return self._api.set_chat_administrator_custom_title(
            self._chat_id("setChatAdministratorCustomTitle"),
            user_id,
            custom_title,
            None,
            signal,
        )

    def get_author(self, signal: Signal | None = None) -> Awaitable[ChatMember]:
        """Chat membership of the acting user."""
        return self._api.get_chat_member(
            self._chat_id("getChatMember"),
            self._from_id("getChatMember"),
            None,
            signal,
        )

    def get_chat_member(
        self, user_id: int, signal: Signal | None = None
    ) -> Awaitable[ChatMember]:
        return self._api.get_chat_member(
            self._chat_id("getChatMember"), user_id, None, signal
        )

    # chat administration

    def set_chat_permissions(
        self,
        permissions: ChatPermissions | Other,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.set_chat_permissions(
            self._chat_id("setChatPermissions"), permissions, other, signal
        )

    def export_chat_invite_link(self, signal: Signal | None = None) -> Awaitable[str]:
        return self._api.export_chat_invite_link(
            self._chat_id("exportChatInviteLink"), None, signal
        )

    def create_chat_invite_link(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[ChatInviteLink]:
        return self._api.create_chat_invite_link(
            self._chat_id("createChatInviteLink"), other, signal
        )

    def edit_chat_invite_link(
        self,
        invite_link: str,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[ChatInviteLink]:
        return self._api.edit_chat_invite_link(
            self._chat_id("editChatInviteLink"), invite_link, other, signal
        )

    def revoke_chat_invite_link(
        self, invite_link: str, signal: Signal | None = None
    ) -> Awaitable[ChatInviteLink]:
        return self._api.revoke_chat_invite_link(
            self._chat_id("revokeChatInviteLink"), invite_link, None, signal
        )

    def set_chat_photo(self, photo: Any, signal: Signal | None = None) -> Awaitable[bool]:
        return self._api.set_chat_photo(
            self._chat_id("setChatPhoto"), photo, None, signal
        )

    def delete_chat_photo(self, signal: Signal | None = None) -> Awaitable[bool]:
        return self._api.delete_chat_photo(
            self._chat_id("deleteChatPhoto"), None, signal
        )

    def set_chat_title(self, title: str, signal: Signal | None = None) -> Awaitable[bool]:
        return self._api.set_chat_title(
            self._chat_id("setChatTitle"), title, None, signal
        )

    def set_chat_description(
        self, description: str | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        """Change the description; ``None`` clears it."""
        return self._api.set_chat_description(
            self._chat_id("setChatDescription"), description, None, signal
        )

    def pin_chat_message(
        self,
        message_id: int,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        return self._api.pin_chat_message(
            self._chat_id("pinChatMessage"), message_id, other, signal
        )

    def unpin_chat_message(
        self, message_id: int | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        """Unpin ``message_id``, or the most recent pinned message when omitted."""
        return self._api.unpin_chat_message(
            self._chat_id("unpinChatMessage"), message_id, None, signal
        )

    def unpin_all_chat_messages(self, signal: Signal | None = None) -> Awaitable[bool]:
        return self._api.unpin_all_chat_messages(
            self._chat_id("unpinAllChatMessages"), None, signal
        )

    def leave_chat(self, signal: Signal | None = None) -> Awaitable[bool]:
        return self._api.leave_chat(self._chat_id("leaveChat"), None, signal)

    def get_chat(self, signal: Signal | None = None) -> Awaitable[Chat]:
        return self._api.get_chat(self._chat_id("getChat"), None, signal)

    def get_chat_administrators(
        self, signal: Signal | None = None
    ) -> Awaitable[list[ChatMember]]:
        return self._api.get_chat_administrators(
            self._chat_id("getChatAdministrators"), None, signal
        )

    def get_chat_member_count(self, signal: Signal | None = None) -> Awaitable[int]:
        return self._api.get_chat_member_count(
            self._chat_id("getChatMemberCount"), None, signal
        )

    get_chat_members_count = get_chat_member_count

    def set_chat_sticker_set(
        self, sticker_set_name: str, signal: Signal | None = None
    ) -> Awaitable[bool]:
        return self._api.set_chat_sticker_set(
            self._chat_id("setChatStickerSet"), sticker_set_name, None, signal
        )

    def delete_chat_sticker_set(self, signal: Signal | None = None) -> Awaitable[bool]:
        return self._api.delete_chat_sticker_set(
            self._chat_id("deleteChatStickerSet"), None, signal
        )

    def delete_message(self, signal: Signal | None = None) -> Awaitable[bool]:
        """Delete the message of this update."""
        return self._api.delete_message(
            self._chat_id("deleteMessage"),
            self._message_id("deleteMessage"),
            None,
            signal,
        )

    # queries

    def answer_callback_query(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        query = require(self.callback_query, "answerCallbackQuery")
        return self._api.answer_callback_query(query.id, other, signal)

    def answer_inline_query(
        self,
        results: Sequence[Any],
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[bool]:
        query = require(self.inline_query, "answerInlineQuery")
        return self._api.answer_inline_query(query.id, results, other, signal)

    def answer_shipping_query(
        self, ok: bool, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        query = require(self.shipping_query, "answerShippingQuery")
        return self._api.answer_shipping_query(query.id, ok, other, signal)

    def answer_pre_checkout_query(
        self, ok: bool, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[bool]:
        query = require(self.pre_checkout_query, "answerPreCheckoutQuery")
        return self._api.answer_pre_checkout_query(query.id, ok, other, signal)

    # editing

    def edit_message_text(
        self, text: str, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message | bool]:
        return self._dual_target(
            "editMessageText",
            self._api.edit_message_text,
            self._api.edit_message_text_inline,
            text,
            other=other,
            signal=signal,
        )

    def edit_message_caption(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message | bool]:
        return self._dual_target(
            "editMessageCaption",
            self._api.edit_message_caption,
            self._api.edit_message_caption_inline,
            other=other,
            signal=signal,
        )

    def edit_message_media(
        self, media: Any, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message | bool]:
        return self._dual_target(
            "editMessageMedia",
            self._api.edit_message_media,
            self._api.edit_message_media_inline,
            media,
            other=other,
            signal=signal,
        )

    def edit_message_reply_markup(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message | bool]:
        return self._dual_target(
            "editMessageReplyMarkup",
            self._api.edit_message_reply_markup,
            self._api.edit_message_reply_markup_inline,
            other=other,
            signal=signal,
        )

    def edit_message_live_location(
        self,
        latitude: float,
        longitude: float,
        other: Other | None = None,
        signal: Signal | None = None,
    ) -> Awaitable[Message | bool]:
        return self._dual_target(
            "editMessageLiveLocation",
            self._api.edit_message_live_location,
            self._api.edit_message_live_location_inline,
            latitude,
            longitude,
            other=other,
            signal=signal,
        )

    def stop_message_live_location(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Message | bool]:
        return self._dual_target(
            "stopMessageLiveLocation",
            self._api.stop_message_live_location,
            self._api.stop_message_live_location_inline,
            other=other,
            signal=signal,
        )

    def stop_poll(
        self, other: Other | None = None, signal: Signal | None = None
    ) -> Awaitable[Poll | Any]:
        return self._dual_target(
            "stopPoll",
            self._api.stop_poll,
            self._api.stop_poll_inline,
            other=other,
            signal=signal,
        )
