"""In-memory view sessions: one engine and domain animator per client.

Nothing is persisted; the oldest session is evicted past ``max_sessions``.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from clusterscope.analytics.domain import DomainAnimator
from clusterscope.corpus import Corpus
from clusterscope.engine.config import EngineConfig
from clusterscope.engine.context import ViewParams
from clusterscope.engine.scheduler import AsyncioFrameScheduler, FrameScheduler
from clusterscope.engine.view import ViewEngine

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    pass


@dataclass
class ViewSession:
    id: str
    engine: ViewEngine
    animator: DomainAnimator


class SessionStore:
    def __init__(
        self,
        max_sessions: int = 256,
        scheduler_factory: Callable[[], FrameScheduler] = AsyncioFrameScheduler,
    ) -> None:
        self.max_sessions = max_sessions
        self.scheduler_factory = scheduler_factory
        self._sessions: OrderedDict[str, ViewSession] = OrderedDict()

    def create(
        self,
        corpus: Corpus,
        params: ViewParams | None = None,
        config: EngineConfig | None = None,
        scheduler: FrameScheduler | None = None,
    ) -> ViewSession:
        animator = DomainAnimator(scheduler or self.scheduler_factory())
        engine = ViewEngine(corpus, params=params, config=config, animator=animator)
        session = ViewSession(id=uuid.uuid4().hex, engine=engine, animator=animator)
        self._sessions[session.id] = session

        while len(self._sessions) > self.max_sessions:
            _, evicted = self._sessions.popitem(last=False)
            evicted.animator.cancel()
            logger.info("Evicted session %s", evicted.id)
        return session

    def get(self, session_id: str) -> ViewSession:
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFound(session_id)
        session.animator.cancel()

    def __len__(self) -> int:
        return len(self._sessions)


_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    global _store
    if _store is None:
        from clusterscope.config import settings

        _store = SessionStore(settings.max_sessions)
    return _store
