"""Execution contexts on which completion callbacks run."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Protocol


class ExecutionContext(Protocol):
    def submit(self, fn: Callable[..., Any], /, *args: Any) -> object: ...


class ImmediateContext:
    """Runs callbacks inline on the thread that completed the request."""

    def submit(self, fn: Callable[..., Any], /, *args: Any) -> None:
        fn(*args)


class LoopContext:
    """Schedules callbacks on an asyncio event loop, from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def submit(self, fn: Callable[..., Any], /, *args: Any) -> asyncio.Handle:
        return self._loop.call_soon_threadsafe(fn, *args)


DEFAULT_CONTEXT = ImmediateContext()


__all__ = [
    "ExecutionContext",
    "ImmediateContext",
    "LoopContext",
    "DEFAULT_CONTEXT",
]
