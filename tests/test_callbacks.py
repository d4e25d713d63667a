"""Tests for the callback-to-awaitable adapter."""

import asyncio
import gc
import threading

import pytest

from sheets_api.sheets.callbacks import from_callback


class TestFromCallback:
    """Test settling of callback-style calls."""

    def test_resolves_value(self):
        """Should return the reported value."""

        def call(x, callback):
            callback(None, x * 2)

        assert asyncio.run(from_callback(call, 21)) == 42

    def test_rejects_with_same_error(self):
        """Should raise the reported error object as-is."""
        error = KeyError("missing")

        def call(callback):
            callback(error)

        with pytest.raises(KeyError) as exc_info:
            asyncio.run(from_callback(call))
        assert exc_info.value is error

    def test_first_callback_wins(self):
        """Should ignore callbacks after the first."""

        def call(callback):
            callback(None, "first")
            callback(RuntimeError("second"))
            callback(None, "third")

        assert asyncio.run(from_callback(call)) == "first"

    def test_callback_after_return(self):
        """Should wait for a callback fired later from another thread."""

        def call(callback):
            threading.Timer(0.01, callback, args=(None, "late")).start()

        assert asyncio.run(from_callback(call)) == "late"

    def test_raising_func_propagates(self):
        """Should propagate an exception raised instead of a callback."""

        def call(callback):
            raise TypeError("bad arguments")

        with pytest.raises(TypeError, match="bad arguments"):
            asyncio.run(from_callback(call))

    def test_raise_after_callback_leaves_nothing_unretrieved(self):
        """Should propagate the raised exception and consume the reported one."""

        def call(callback):
            callback(KeyError("reported"))
            raise TypeError("raised")

        async def run():
            loop = asyncio.get_running_loop()
            contexts = []
            loop.set_exception_handler(lambda loop, context: contexts.append(context))
            with pytest.raises(TypeError, match="raised"):
                await from_callback(call)
            await asyncio.sleep(0)
            gc.collect()
            return contexts

        assert asyncio.run(run()) == []
