"""Per-update context objects for Telegram bots."""

from __future__ import annotations

__version__ = "0.1.0"

from .api import Api, BotTransport
from .api_models import Update, UpdateKind, decode_update
from .context import Context
from .errors import (
    ApiError,
    BotError,
    HttpError,
    MissingContext,
    RequestAborted,
    require,
)

__all__ = [
    "Api",
    "ApiError",
    "BotError",
    "BotTransport",
    "Context",
    "HttpError",
    "MissingContext",
    "RequestAborted",
    "Update",
    "UpdateKind",
    "__version__",
    "decode_update",
    "require",
]
