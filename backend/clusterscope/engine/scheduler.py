"""Frame schedulers driving the domain animation.

The animator only needs ``now()``, ``request_frame(cb)`` and
``cancel_frame(handle)``. Callbacks receive the frame timestamp in ms.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from typing import Any, Callable, Protocol

FrameCallback = Callable[[float], None]
FrameHandle = Any


class FrameScheduler(Protocol):
    def now(self) -> float: ...

    def request_frame(self, callback: FrameCallback) -> FrameHandle: ...

    def cancel_frame(self, handle: FrameHandle) -> None: ...


class ManualFrameScheduler:
    """Deterministic scheduler; frames run only when ``advance`` is called."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._pending: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    def now(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, ms: float) -> None:
        """Move the clock and run the frame callbacks queued before the move."""
        self._now += ms
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(self._now)

    def run_until_idle(self, frame_ms: float = 16.0, max_frames: int = 10_000) -> int:
        frames = 0
        while self._pending and frames < max_frames:
            self.advance(frame_ms)
            frames += 1
        return frames


class AsyncioFrameScheduler:
    """~60 fps frames on the running asyncio loop."""

    def __init__(self, frame_ms: float = 1000 / 60, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.frame_ms = frame_ms
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return time.perf_counter() * 1000

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        loop = self._get_loop()
        return loop.call_later(self.frame_ms / 1000, lambda: callback(self.now()))

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
