"""Domain Animator: padded axis ranges and eased transitions between them.

The target domain comes from the zoomed scope's raw coordinates. Collapse
never moves it, so changing the collapse parameter never restarts an
animation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

if TYPE_CHECKING:
    from clusterscope.engine.scheduler import FrameHandle, FrameScheduler

logger = logging.getLogger(__name__)

Domain = tuple[float, float]

ANIMATION_DURATION_MS = 400.0
DOMAIN_PADDING = 0.05


def padded_domain(values: Iterable[float], padding: float = DOMAIN_PADDING) -> Domain:
    """[min, max] widened by ``padding`` of the span on each side."""
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return (0.0, 1.0)
    lo = float(np.min(arr))
    hi = float(np.max(arr))
    if not (np.isfinite(lo) and np.isfinite(hi)):
        return (0.0, 1.0)
    if lo == hi:
        eps = abs(lo or 1.0) * padding
        lo -= eps
        hi += eps
    pad = (hi - lo) * padding
    return (lo - pad, hi + pad)


def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return 1 - 2 * (1 - t) ** 2


def tween_domain(start: Domain, end: Domain, t: float) -> Domain:
    e = ease_in_out_quad(t)
    return (start[0] + (end[0] - start[0]) * e, start[1] + (end[1] - start[1]) * e)


FrameListener = Callable[[Domain, Domain, bool], None]


class DomainAnimator:
    """Tweens the displayed x/y domains toward the latest target.

    Starting a new animation cancels the pending frame of the previous one and
    starts from the last rendered value, so the axes never snap.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        initial_x: Domain = (0.0, 1.0),
        initial_y: Domain = (0.0, 1.0),
        duration_ms: float = ANIMATION_DURATION_MS,
    ) -> None:
        self.scheduler = scheduler
        self.duration_ms = duration_ms
        self.current_x: Domain = initial_x
        self.current_y: Domain = initial_y
        self.target_x: Domain = initial_x
        self.target_y: Domain = initial_y
        self._from_x: Domain = initial_x
        self._from_y: Domain = initial_y
        self._start = 0.0
        self._handle: FrameHandle | None = None
        self._listeners: list[FrameListener] = []

    @property
    def animating(self) -> bool:
        return self._handle is not None

    def subscribe(self, listener: FrameListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def jump_to(self, target_x: Domain, target_y: Domain) -> None:
        """Set the domains without animating (first render, dataset reset)."""
        self.cancel()
        self.current_x = self.target_x = self._from_x = target_x
        self.current_y = self.target_y = self._from_y = target_y

    def animate_to(self, target_x: Domain, target_y: Domain) -> bool:
        """Start animating toward a new target. Returns False when unchanged."""
        if target_x == self.target_x and target_y == self.target_y:
            return False
        self.cancel()
        self._from_x = self.current_x
        self._from_y = self.current_y
        self.target_x = target_x
        self.target_y = target_y
        self._start = self.scheduler.now()
        self._handle = self.scheduler.request_frame(self._step)
        logger.debug("Domain animation started: x=%s y=%s", target_x, target_y)
        return True

    def cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    def _step(self, now: float) -> None:
        if self.duration_ms > 0:
            t = min(1.0, max(0.0, (now - self._start) / self.duration_ms))
        else:
            t = 1.0
        self.current_x = tween_domain(self._from_x, self.target_x, t)
        self.current_y = tween_domain(self._from_y, self.target_y, t)
        done = t >= 1.0
        self._handle = None if done else self.scheduler.request_frame(self._step)
        for listener in list(self._listeners):
            listener(self.current_x, self.current_y, done)
