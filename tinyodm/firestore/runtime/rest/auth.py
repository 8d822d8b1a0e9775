"""Bearer token sources for authenticated requests."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

TokenFactory = Callable[[], Awaitable[str]] | Callable[[], str]


@runtime_checkable
class TokenSource(Protocol):
    """Anything that can produce an OAuth2 access token."""

    async def token(self) -> str:
        """Return a currently valid access token."""
        ...


class StaticTokenSource:
    """Always returns the same token (emulator, short scripts, tests)."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ValueError("token must be non-empty")
        self._token = token

    async def token(self) -> str:
        return self._token


class CallableTokenSource:
    """Wraps a sync or async callable, e.g. a credentials library's refresh hook."""

    def __init__(self, factory: TokenFactory) -> None:
        self._factory = factory

    async def token(self) -> str:
        result = self._factory()
        if inspect.isawaitable(result):
            result = await result
        return result
