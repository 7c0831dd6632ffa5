"""FastAPI application entrypoint for codeingest service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..analyzer import analyze
from ..detector import detect_stack
from ..errors import InvalidPathError
from ..models import CodebaseAnalysis, Stack


class PathRequest(BaseModel):
    path: str


class RouteModel(BaseModel):
    method: str
    path: str
    file: str
    handler: Optional[str] = None


class FieldModel(BaseModel):
    name: str
    type: str


class ModelRecord(BaseModel):
    name: str
    fields: List[FieldModel]
    file: str


class ControllerRecord(BaseModel):
    name: str
    actions: List[str]
    file: str


class ComponentRecord(BaseModel):
    name: str
    props: List[str]
    file: str
    events: List[str] = []


class ServiceRecord(BaseModel):
    name: str
    functions: List[str]
    file: str


class AnalysisResponse(BaseModel):
    path: str
    language: str
    framework: Optional[str] = None
    routes: List[RouteModel]
    models: List[ModelRecord]
    controllers: List[ControllerRecord]
    components: List[ComponentRecord]
    services: List[ServiceRecord]
    config: Dict[str, Any]
    readme: Optional[str] = None
    counts: Dict[str, int]


class DetectResponse(BaseModel):
    language: str
    framework: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def create_app(
    analyze_fn: Callable[[str], CodebaseAnalysis] = analyze,
    detect_fn: Callable[[str], Stack] = detect_stack,
) -> FastAPI:
    """Create the FastAPI application exposing codeingest operations."""

    app = FastAPI(title="CodeIngest Service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalysisResponse)
    async def analyze_codebase(payload: PathRequest) -> AnalysisResponse:
        loop = asyncio.get_running_loop()
        analysis = await loop.run_in_executor(None, analyze_fn, payload.path)
        return AnalysisResponse(**analysis.to_dict(), counts=analysis.counts())

    @app.post("/detect", response_model=DetectResponse)
    async def detect(payload: PathRequest) -> DetectResponse:
        loop = asyncio.get_running_loop()
        language, framework = await loop.run_in_executor(None, detect_fn, payload.path)
        return DetectResponse(language=language, framework=framework)

    @app.exception_handler(InvalidPathError)
    async def invalid_path_handler(_: Any, exc: InvalidPathError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
