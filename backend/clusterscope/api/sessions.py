"""/api/sessions: stateful views with animated axis domains.

A session keeps one ViewEngine and DomainAnimator alive between requests so
parameter changes recompute incrementally and axis transitions animate from
whatever was last rendered.
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from clusterscope.api.view import params_changes
from clusterscope.corpus import Corpus
from clusterscope.dependencies import get_corpus
from clusterscope.engine.context import ViewParams
from clusterscope.engine.snapshot import context_to_snapshot
from clusterscope.models.requests import SessionCreateRequest, ToggleModelRequest, ViewParamsIn
from clusterscope.models.responses import SessionResponse
from clusterscope.sessions import SessionNotFound, SessionStore, ViewSession, get_session_store

router = APIRouter(prefix="/sessions")

_SENTINEL = object()  # marks end of queue

# A stream with no frame for this long has lost its animation (cancelled)
_FRAME_TIMEOUT_S = 2.0


def _get_session(session_id: str, store: SessionStore) -> ViewSession:
    try:
        return store.get(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}") from None


def _respond(session: ViewSession, start: float) -> SessionResponse:
    elapsed = (time.perf_counter() - start) * 1000
    return SessionResponse(
        session_id=session.id,
        snapshot=context_to_snapshot(session.engine.ctx, session.animator),
        processing_time_ms=round(elapsed, 1),
    )


@router.post("", response_model=SessionResponse)
async def create_session(
    req: SessionCreateRequest | None = None,
    corpus: Corpus = Depends(get_corpus),
    store: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    start = time.perf_counter()
    params = ViewParams(**params_changes(req.params)) if req is not None else None
    session = store.create(corpus, params=params)
    return _respond(session, start)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)) -> SessionResponse:
    start = time.perf_counter()
    return _respond(_get_session(session_id, store), start)


@router.post("/{session_id}/params", response_model=SessionResponse)
async def update_params(
    session_id: str,
    req: ViewParamsIn,
    store: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    start = time.perf_counter()
    session = _get_session(session_id, store)
    session.engine.update(**params_changes(req))
    return _respond(session, start)


@router.post("/{session_id}/models/toggle", response_model=SessionResponse)
async def toggle_model(
    session_id: str,
    req: ToggleModelRequest,
    store: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    start = time.perf_counter()
    session = _get_session(session_id, store)
    session.engine.toggle_model(req.model)
    return _respond(session, start)


@router.post("/{session_id}/models/all", response_model=SessionResponse)
async def select_all_models(session_id: str, store: SessionStore = Depends(get_session_store)) -> SessionResponse:
    start = time.perf_counter()
    session = _get_session(session_id, store)
    session.engine.select_all_models()
    return _respond(session, start)


@router.post("/{session_id}/models/clear", response_model=SessionResponse)
async def clear_models(session_id: str, store: SessionStore = Depends(get_session_store)) -> SessionResponse:
    start = time.perf_counter()
    session = _get_session(session_id, store)
    session.engine.clear_models()
    return _respond(session, start)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)) -> None:
    try:
        store.delete(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}") from None


async def _stream_domain(session: ViewSession) -> AsyncGenerator[str, None]:
    """Yield SSE frame events until the session's axis animation settles."""
    animator = session.animator
    queue: asyncio.Queue = asyncio.Queue()

    def _on_frame(x, y, done: bool) -> None:
        queue.put_nowait({"x": list(x), "y": list(y), "done": done})
        if done:
            queue.put_nowait(_SENTINEL)

    unsubscribe = animator.subscribe(_on_frame)
    try:
        if not animator.animating:
            queue.put_nowait({"x": list(animator.current_x), "y": list(animator.current_y), "done": True})
            queue.put_nowait(_SENTINEL)

        while True:
            try:
                item = await asyncio.wait_for(queue.get(), timeout=_FRAME_TIMEOUT_S)
            except asyncio.TimeoutError:
                break
            if item is _SENTINEL:
                break
            yield f"event: frame\ndata: {json.dumps(item)}\n\n"
    finally:
        unsubscribe()

    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.get("/{session_id}/domain/stream")
async def stream_domain(session_id: str, store: SessionStore = Depends(get_session_store)) -> StreamingResponse:
    session = _get_session(session_id, store)
    return StreamingResponse(
        _stream_domain(session),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
