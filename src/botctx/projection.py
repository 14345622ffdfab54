"""Canonical views of an update.

Every function here is pure: the same update always projects to the same
values, and nothing is mutated. The precedence orders are part of the
public contract; handlers rely on them to ignore which variant fired.
"""

from __future__ import annotations

from .api_models import Chat, Message, Update, User

__all__ = [
    "resolve_chat",
    "resolve_from",
    "resolve_inline_message_id",
    "resolve_msg",
    "resolve_sender_chat",
]


def resolve_msg(update: Update) -> Message | None:
    """message, edited_message, callback_query.message, channel_post, edited_channel_post."""
    if update.message is not None:
        return update.message
    if update.edited_message is not None:
        return update.edited_message
    query = update.callback_query
    if query is not None and query.message is not None:
        return query.message
    if update.channel_post is not None:
        return update.channel_post
    return update.edited_channel_post


def resolve_chat(update: Update) -> Chat | None:
    msg = resolve_msg(update)
    if msg is None:
        return None
    return msg.chat


def resolve_sender_chat(update: Update) -> Chat | None:
    msg = resolve_msg(update)
    if msg is None:
        return None
    return msg.sender_chat


def resolve_from(update: Update) -> User | None:
    """The acting user.

    Query variants win over any embedded message: for a callback query the
    acting user is whoever pressed the button, not the message author.
    """
    for query in (
        update.callback_query,
        update.inline_query,
        update.shipping_query,
        update.pre_checkout_query,
        update.chosen_inline_result,
    ):
        if query is not None:
            return query.from_
    msg = resolve_msg(update)
    if msg is None:
        return None
    return msg.from_


def resolve_inline_message_id(update: Update) -> str | None:
    query = update.callback_query
    if query is not None and query.inline_message_id is not None:
        return query.inline_message_id
    chosen = update.chosen_inline_result
    if chosen is not None:
        return chosen.inline_message_id
    return None
