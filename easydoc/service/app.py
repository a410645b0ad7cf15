"""FastAPI application entrypoint for easydoc service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError
from ..merge import StaticCommentHost, build_comparator_registry
from ..models import MethodSignature
from ..orchestrator import GenerateOutcome, Orchestrator


class MergeRequest(BaseModel):
    existing: Optional[str] = None
    generated: str
    parameters: List[str] = Field(default_factory=list)
    type_parameters: List[str] = Field(default_factory=list)
    exceptions: List[str] = Field(default_factory=list)
    has_return: bool = False


class MergeResponse(BaseModel):
    comment: str


class GenerateRequest(BaseModel):
    path: str
    use_ai: bool = False
    overwrite: bool = True
    symbol: Optional[str] = None
    dry_run: bool = False


class RemoveRequest(BaseModel):
    path: str
    symbol: Optional[str] = None
    dry_run: bool = False


class FileOutcome(BaseModel):
    path: str
    diff: str
    symbols_written: int
    dry_run: bool


class OutcomeResponse(BaseModel):
    status: str
    files: List[FileOutcome] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str


def create_app(
    orchestrator_factory: Optional[Callable[[], Orchestrator]] = None,
) -> FastAPI:
    """Create the FastAPI application exposing easydoc operations."""

    app = FastAPI(title="EasyDoc Service", version="1.0.0")
    comparators = build_comparator_registry()
    comparator = comparators["java"]
    async def get_orchestrator() -> Orchestrator:
        if orchestrator_factory is None:
            return Orchestrator(comparators=comparators)
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/merge", response_model=MergeResponse)
    async def merge(payload: MergeRequest) -> MergeResponse:
        signature = MethodSignature(
            parameters=tuple(payload.parameters),
            type_parameters=tuple(payload.type_parameters),
            exceptions=tuple(payload.exceptions),
            has_return=payload.has_return,
        )
        host = StaticCommentHost(comment=payload.existing, signature=signature)
        return MergeResponse(comment=comparator.merge_comments(host, payload.generated))

    @app.post("/generate", response_model=OutcomeResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> OutcomeResponse:
        def _run_generate() -> List[GenerateOutcome]:
            return orchestrator.run_generate(
                payload.path,
                use_ai=payload.use_ai,
                overwrite=payload.overwrite,
                symbol=payload.symbol,
                dry_run=payload.dry_run,
            )

        outcomes = await asyncio.get_running_loop().run_in_executor(None, _run_generate)
        return _outcome_response(outcomes)

    @app.post("/remove", response_model=OutcomeResponse)
    async def remove(
        payload: RemoveRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> OutcomeResponse:
        def _run_remove() -> List[GenerateOutcome]:
            return orchestrator.run_remove(
                payload.path, symbol=payload.symbol, dry_run=payload.dry_run
            )

        outcomes = await asyncio.get_running_loop().run_in_executor(None, _run_remove)
        return _outcome_response(outcomes)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def _outcome_response(outcomes: List[GenerateOutcome]) -> OutcomeResponse:
    if not outcomes:
        return OutcomeResponse(status="unchanged")
    return OutcomeResponse(
        status="ok",
        files=[
            FileOutcome(
                path=str(outcome.path),
                diff=outcome.diff,
                symbols_written=outcome.symbols_written,
                dry_run=outcome.dry_run,
            )
            for outcome in outcomes
        ],
    )


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
