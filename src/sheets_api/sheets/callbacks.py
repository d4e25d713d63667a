"""Adapt completion-callback calls into awaitables."""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Callable


async def from_callback(func: Callable[..., Any], *args: Any) -> Any:
    """Call ``func(*args, callback)`` and await the value it reports.

    ``func`` runs in the event loop's default executor, since the Google API
    client blocks on I/O. It must eventually fire ``callback(error, value)``,
    from any thread. A non-None ``error`` is raised as-is; otherwise ``value``
    is returned. Only the first callback counts.

    If ``func`` raises, that exception propagates, even if it already
    called back.
    """
    loop = asyncio.get_running_loop()
    outcome = loop.create_future()

    def settle(error: BaseException | None, value: Any) -> None:
        if outcome.done():
            return
        if error is not None:
            outcome.set_exception(error)
        else:
            outcome.set_result(value)

    def callback(error: BaseException | None, value: Any = None) -> None:
        loop.call_soon_threadsafe(settle, error, value)

    try:
        await loop.run_in_executor(None, functools.partial(func, *args, callback))
    except BaseException:
        # The raised exception wins over anything already reported.
        if outcome.done():
            outcome.exception()
        else:
            outcome.cancel()
        raise
    return await outcome
