"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clusterscope.config import settings
from clusterscope.corpus import CorpusError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.clusterscope_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ClusterScope",
        description="Reactive aggregation engine for clustered survey respondents",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all derivation modules to trigger registration
    from clusterscope.engine.pipeline import load_derivations

    load_derivations()

    @app.exception_handler(CorpusError)
    async def _corpus_error(request: Request, exc: CorpusError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    from clusterscope.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()


def main() -> None:
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="ClusterScope API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on changes")
    args = parser.parse_args()

    uvicorn.run(
        "clusterscope.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.clusterscope_log_level.lower(),
    )


if __name__ == "__main__":
    main()
