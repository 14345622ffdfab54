from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import anyio
import pytest


class FakeApi:
    """Records every API method call at call time and returns an awaitable."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)

        async def _result(*args: Any) -> dict[str, Any]:
            return {"method": name, "args": args}

        def _record(*args: Any) -> Any:
            self.calls.append((name, args))
            return _result(*args)

        return _record


class RecordingTransport:
    def __init__(self, result: Any = True) -> None:
        self.result = result
        self.calls: list[tuple[str, dict[str, Any], anyio.Event | None]] = []

    async def call(
        self,
        method: str,
        params: Mapping[str, Any],
        *,
        signal: anyio.Event | None = None,
    ) -> Any:
        self.calls.append((method, dict(params), signal))
        return self.result


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
