"""FastAPI application exposing repository analysis over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..logging import get_logger
from ..orchestrator import Orchestrator

logger = get_logger("service")


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application."""

    app = FastAPI(title="GitGrade Service", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    async def get_orchestrator() -> Orchestrator:
        # One orchestrator per request keeps runs isolated.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="healthy")

    @app.get("/analyze", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
    async def analyze(
        repo: Optional[str] = None,
        roadmap: bool = False,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        if not repo:
            return JSONResponse(status_code=400, content={"error": "Missing repo URL"})

        def _run() -> Dict[str, Any]:
            report = orchestrator.analyze_remote(repo, with_roadmap=roadmap)
            return report.to_dict()

        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, _run)
        except Exception as exc:
            logger.error("Analysis of %s failed: %s", repo, exc)
            logger.debug("Analysis traceback", exc_info=True)
            return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})

    return app


def run_service(host: str = "0.0.0.0", port: int = 18080, **app_kwargs: Any) -> None:  # pragma: no cover - integration path
    app = create_app(**app_kwargs)
    logger.info("GitGrade server listening on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port)
