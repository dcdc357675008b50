"""
request_sdk.tier1_runtime.dispatch
───────────────────────────────────
Completion delivery. A request's callback never runs on the transport path;
it is handed to one designated execution context chosen when the client is
built:

    CompletionDispatcher()                  # the loop running the request
    CompletionDispatcher(loop=ui_loop)      # a specific event loop (thread-safe)
    CompletionDispatcher(executor=pool)     # a concurrent.futures executor

Usage:
    dispatcher = CompletionDispatcher(loop=main_loop)
    dispatcher.deliver(on_complete, outcome)
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import Any

from request_sdk.tier0_core.errors import ConfigurationError
from request_sdk.tier0_core.logging import get_logger

log = get_logger(__name__)

CompletionCallback = Callable[[Any], None]


class CompletionDispatcher:
    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        executor: Executor | None = None,
    ) -> None:
        if loop is not None and executor is not None:
            raise ConfigurationError(
                "dispatcher_conflict",
                "Pass either a loop or an executor, not both.",
            )
        self._loop = loop
        self._executor = executor

    def deliver(self, callback: CompletionCallback, outcome: Any) -> None:
        """Schedule ``callback(outcome)`` on the designated context."""
        if self._executor is not None:
            future = self._executor.submit(callback, outcome)
            future.add_done_callback(_log_callback_failure)
        elif self._loop is not None:
            self._loop.call_soon_threadsafe(callback, outcome)
        else:
            asyncio.get_running_loop().call_soon(callback, outcome)


def _log_callback_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        log.error("completion.callback_failed", error=repr(exc))


__all__ = ["CompletionDispatcher", "CompletionCallback"]
