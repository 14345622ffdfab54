from __future__ import annotations

from pathlib import Path

import anyio
import msgspec
import typer

from . import __version__
from .api import Api
from .api_models import Chat, Message, User, decode_update
from .client import HttpBotClient
from .config import ConfigError
from .errors import BotError
from .logging import setup_logging
from .projection import (
    resolve_chat,
    resolve_from,
    resolve_inline_message_id,
    resolve_msg,
    resolve_sender_chat,
)
from .settings import load_settings


def _format_user(user: User | None) -> str:
    if user is None:
        return "none"
    label = f"{user.id}"
    if user.username:
        label = f"{label} (@{user.username})"
    if user.is_bot:
        label = f"{label} [bot]"
    return label


def _format_chat(chat: Chat | None) -> str:
    if chat is None:
        return "none"
    name = chat.title or chat.username or chat.first_name
    if name:
        return f"{chat.id} ({chat.type}, {name})"
    return f"{chat.id} ({chat.type})"


def _format_message(msg: Message | None) -> str:
    if msg is None:
        return "none"
    return f"{msg.message_id} in chat {msg.chat.id}"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def inspect_cmd(
    path: Path = typer.Argument(..., help="JSON file holding one Bot API update."),
    debug: bool = typer.Option(False, "--debug", help="Log to the console."),
) -> None:
    """Show how an update projects onto message, chat and sender."""
    setup_logging(debug=debug)
    try:
        update = decode_update(path.read_bytes())
    except OSError as exc:
        typer.echo(f"error: cannot read {path}: {exc}", err=True)
        raise typer.Exit(code=1) from None
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        typer.echo(f"error: invalid update in {path}: {exc}", err=True)
        raise typer.Exit(code=1) from None

    kind = update.kind
    inline_id = resolve_inline_message_id(update)
    lines = [
        f"update_id: {update.update_id}",
        f"kind: {kind.value if kind is not None else 'unknown'}",
        f"msg: {_format_message(resolve_msg(update))}",
        f"chat: {_format_chat(resolve_chat(update))}",
        f"sender_chat: {_format_chat(resolve_sender_chat(update))}",
        f"from: {_format_user(resolve_from(update))}",
        f"inline_message_id: {inline_id or 'none'}",
    ]
    typer.echo("\n".join(lines))


async def _fetch_me(config_path: Path | None) -> User:
    settings, _ = load_settings(config_path)
    async with HttpBotClient.from_settings(settings) as client:
        return await Api(client).get_me()


def me_cmd(
    config_path: Path | None = typer.Option(
        None, "--config", help="Path to botctx.toml."
    ),
    debug: bool = typer.Option(False, "--debug", help="Log to the console."),
) -> None:
    """Call getMe with the configured token."""
    setup_logging(debug=debug)
    try:
        me = anyio.run(_fetch_me, config_path)
    except ConfigError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    except BotError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    typer.echo(f"bot: {_format_user(me)}")
    typer.echo(f"name: {me.first_name}")
    typer.echo(f"inline queries: {'yes' if me.supports_inline_queries else 'no'}")


def create_app() -> typer.Typer:
    app = typer.Typer(
        add_completion=False,
        no_args_is_help=True,
        help="Inspect Telegram updates and the bot behind a token.",
    )

    @app.callback()
    def _root(
        version: bool = typer.Option(
            False,
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ) -> None:
        pass

    app.command(name="inspect")(inspect_cmd)
    app.command(name="me")(me_cmd)
    return app


def main() -> None:
    app = create_app()
    app()
