from __future__ import annotations

import pytest

from botctx import Context
from botctx.api_models import Message, Update, UpdateKind
from botctx.projection import (
    resolve_chat,
    resolve_from,
    resolve_inline_message_id,
    resolve_msg,
    resolve_sender_chat,
)
from tests.factories import (
    ALICE,
    BOB,
    BOT,
    CHANNEL,
    GROUP,
    all_variants,
    callback_update,
    chosen_update,
    message,
    minimal_variants,
    update_of,
)

VARIANTS = all_variants()


def _manual_msg(update: Update) -> Message | None:
    if update.message is not None:
        return update.message
    if update.edited_message is not None:
        return update.edited_message
    if update.callback_query is not None and update.callback_query.message is not None:
        return update.callback_query.message
    if update.channel_post is not None:
        return update.channel_post
    return update.edited_channel_post


def _manual_from(update: Update):
    for query in (
        update.callback_query,
        update.inline_query,
        update.shipping_query,
        update.pre_checkout_query,
        update.chosen_inline_result,
    ):
        if query is not None:
            return query.from_
    msg = _manual_msg(update)
    return msg.from_ if msg is not None else None


EXPECTED = {
    # kind: (msg source, chat id, from id, inline id)
    UpdateKind.MESSAGE: ("message", GROUP.id, ALICE.id, None),
    UpdateKind.EDITED_MESSAGE: ("edited_message", GROUP.id, ALICE.id, None),
    UpdateKind.CHANNEL_POST: ("channel_post", CHANNEL.id, None, None),
    UpdateKind.EDITED_CHANNEL_POST: ("edited_channel_post", CHANNEL.id, None, None),
    UpdateKind.INLINE_QUERY: (None, None, BOB.id, None),
    UpdateKind.CHOSEN_INLINE_RESULT: (None, None, BOB.id, "inl-7"),
    UpdateKind.CALLBACK_QUERY: ("callback_query", GROUP.id, BOB.id, None),
    UpdateKind.SHIPPING_QUERY: (None, None, BOB.id, None),
    UpdateKind.PRE_CHECKOUT_QUERY: (None, None, BOB.id, None),
    UpdateKind.POLL: (None, None, None, None),
    UpdateKind.POLL_ANSWER: (None, None, None, None),
    UpdateKind.MY_CHAT_MEMBER: (None, None, None, None),
    UpdateKind.CHAT_MEMBER: (None, None, None, None),
}


def _source_message(update: Update, source: str | None) -> Message | None:
    if source is None:
        return None
    if source == "callback_query":
        assert update.callback_query is not None
        return update.callback_query.message
    return getattr(update, source)


def test_expected_table_covers_every_variant() -> None:
    assert set(EXPECTED) == set(UpdateKind) == set(VARIANTS)


@pytest.mark.parametrize("kind", list(UpdateKind), ids=lambda k: k.value)
def test_projections_per_variant(kind: UpdateKind) -> None:
    update = VARIANTS[kind]
    source, chat_id, from_id, inline_id = EXPECTED[kind]

    msg = resolve_msg(update)
    chat = resolve_chat(update)
    user = resolve_from(update)

    assert update.kind is kind
    assert msg is _source_message(update, source)
    assert (chat.id if chat is not None else None) == chat_id
    assert (user.id if user is not None else None) == from_id
    assert resolve_inline_message_id(update) == inline_id


CASES = [
    pytest.param(update, id=f"{kind.value}-{label}")
    for label, variants in (("full", VARIANTS), ("minimal", minimal_variants()))
    for kind, update in variants.items()
]


def _manual_inline_id(update: Update) -> str | None:
    query = update.callback_query
    if query is not None and query.inline_message_id is not None:
        return query.inline_message_id
    if update.chosen_inline_result is not None:
        return update.chosen_inline_result.inline_message_id
    return None


@pytest.mark.parametrize("update", CASES)
def test_context_matches_manual_projection(update: Update, fake_api) -> None:
    kind = update.kind
    assert kind is not None
    ctx = Context(update, fake_api, BOT)

    manual_msg = _manual_msg(update)
    assert ctx.msg == manual_msg
    assert ctx.chat == (manual_msg.chat if manual_msg is not None else None)
    assert ctx.sender_chat == (
        manual_msg.sender_chat if manual_msg is not None else None
    )
    assert ctx.from_user == _manual_from(update)
    assert ctx.inline_message_id == _manual_inline_id(update)
    assert getattr(ctx, kind.value) is update.payload
    assert fake_api.calls == []


def test_callback_message_used_when_no_direct_message() -> None:
    embedded = message(55, from_=BOT)
    update = callback_update(msg=embedded)

    assert resolve_msg(update) is embedded
    assert resolve_chat(update) is embedded.chat


def test_callback_from_beats_embedded_message_author() -> None:
    update = callback_update(msg=message(55, from_=BOT), from_=ALICE)

    user = resolve_from(update)

    assert user is not None
    assert user.id == ALICE.id
    assert update.callback_query is not None
    assert update.callback_query.message is not None
    assert update.callback_query.message.from_ == BOT


def test_sender_chat_of_anonymous_group_admin() -> None:
    update = update_of(
        UpdateKind.MESSAGE, message(from_=None, sender_chat=GROUP, chat=GROUP)
    )

    assert resolve_sender_chat(update) == GROUP
    assert resolve_from(update) is None


def test_degenerate_message_without_optional_fields() -> None:
    update = update_of(
        UpdateKind.MESSAGE, message(from_=None, sender_chat=None, text=None)
    )

    assert resolve_msg(update) is update.message
    assert resolve_chat(update) == GROUP
    assert resolve_sender_chat(update) is None
    assert resolve_from(update) is None
    assert resolve_inline_message_id(update) is None


def test_degenerate_callback_query_without_message_or_inline_id() -> None:
    update = callback_update()

    assert resolve_msg(update) is None
    assert resolve_chat(update) is None
    assert resolve_from(update) == BOB
    assert resolve_inline_message_id(update) is None


def test_chosen_inline_result_without_inline_id() -> None:
    update = chosen_update()

    assert resolve_inline_message_id(update) is None
    assert resolve_from(update) == BOB


def test_update_without_known_variant_projects_to_nothing() -> None:
    update = Update(update_id=99)

    assert resolve_msg(update) is None
    assert resolve_chat(update) is None
    assert resolve_sender_chat(update) is None
    assert resolve_from(update) is None
    assert resolve_inline_message_id(update) is None


def test_repeated_projection_is_stable(fake_api) -> None:
    update = VARIANTS[UpdateKind.CALLBACK_QUERY]
    ctx = Context(update, fake_api, BOT)

    first = (ctx.msg, ctx.chat, ctx.from_user, ctx.sender_chat, ctx.inline_message_id)
    second = (ctx.msg, ctx.chat, ctx.from_user, ctx.sender_chat, ctx.inline_message_id)

    assert first == second
    assert ctx.update is update
    assert update == all_variants()[UpdateKind.CALLBACK_QUERY]


def test_minimal_builders_cover_every_variant() -> None:
    variants = minimal_variants()

    assert set(variants) == set(UpdateKind)
    assert all(update.kind is kind for kind, update in variants.items())


@pytest.mark.parametrize("kind", list(UpdateKind), ids=lambda k: k.value)
def test_minimal_variants_project_without_optional_fields(kind: UpdateKind) -> None:
    update = minimal_variants()[kind]
    source, chat_id, from_id, _ = EXPECTED[kind]
    if kind in (UpdateKind.MESSAGE, UpdateKind.EDITED_MESSAGE):
        from_id = None
    if kind is UpdateKind.CALLBACK_QUERY:
        chat_id = None

    user = resolve_from(update)
    chat = resolve_chat(update)

    assert resolve_msg(update) is _source_message(update, source)
    assert (chat.id if chat is not None else None) == chat_id
    assert (user.id if user is not None else None) == from_id
    assert resolve_sender_chat(update) is None
    assert resolve_inline_message_id(update) is None
