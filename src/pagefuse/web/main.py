"""
FastAPI application exposing asset extraction and enhanced scraping.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Dict, Optional
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from pagefuse import __version__
from pagefuse.config.config import Config, settings
from pagefuse.exceptions import PageFuseError
from pagefuse.extractor.asset_extractor import AssetExtractor
from pagefuse.observability import export_prometheus, increment
from pagefuse.pipeline import ScrapePipeline, extract_assets_payload

logger = structlog.get_logger(__name__)


class ExtractAssetsRequest(BaseModel):
    html: Optional[str] = None
    url: Optional[str] = None


class ScrapeRequest(BaseModel):
    url: Optional[str] = None


def _component(request: Request) -> str:
    return request.url.path.strip("/") or "root"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def create_app(config: Optional[Config] = None, pipeline: Optional[ScrapePipeline] = None) -> FastAPI:
    """Build the service. ``pipeline`` may be injected to replace the provider or enricher."""
    config = config if config is not None else settings
    extractor = AssetExtractor()
    scrape_pipeline = pipeline or ScrapePipeline(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting PageFuse service", version=__version__)
        app.state.start_time = time.time()
        yield
        await scrape_pipeline.aclose()
        logger.info("PageFuse service stopped")

    app = FastAPI(title="PageFuse", version=__version__, lifespan=lifespan)
    app.state.pipeline = scrape_pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.web.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next: Callable) -> Any:
        """Bind a request id for log correlation and time the request."""
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(PageFuseError)
    async def handle_pagefuse_error(request: Request, exc: PageFuseError) -> JSONResponse:
        component = _component(request)
        increment("requests", labels={"endpoint": component, "outcome": type(exc).__name__})
        logger.error(f"[{component}] Error", component=component, error=str(exc), error_type=type(exc).__name__)
        return _error_response(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        component = _component(request)
        increment("requests", labels={"endpoint": component, "outcome": "bad_request"})
        logger.warning(f"[{component}] Malformed request body", component=component)
        return _error_response(400, "Request body must be a JSON object")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        component = _component(request)
        increment("requests", labels={"endpoint": component, "outcome": "internal_error"})
        logger.exception(f"[{component}] Unexpected error", component=component)
        return _error_response(500, str(exc) or "Internal server error")

    @app.post("/extract-assets")
    async def extract_assets(body: ExtractAssetsRequest) -> Dict[str, Any]:
        """Extract the asset manifest from posted HTML."""
        payload = await run_in_threadpool(extract_assets_payload, body.html, body.url, extractor)
        increment("requests", labels={"endpoint": "extract-assets", "outcome": "success"})
        return payload

    @app.post("/scrape-url-enhanced")
    async def scrape_url_enhanced(body: ScrapeRequest) -> Dict[str, Any]:
        """Scrape a URL through the provider and fuse it with extracted assets."""
        payload = await scrape_pipeline.run(body.url or "")
        increment("requests", labels={"endpoint": "scrape-url-enhanced", "outcome": "success"})
        return payload

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": __version__,
            "components": {
                "provider": "configured" if config.provider.api_key else "missing_api_key",
                "enrichment": "remote" if config.assets.base_url else "in_process",
            },
        }

    @app.get("/metrics")
    async def get_prometheus_metrics() -> Response:
        """Endpoint for Prometheus to scrape."""
        return Response(export_prometheus(), media_type="text/plain")

    return app


app = create_app()


def run_web_server(config: Optional[Config] = None, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the FastAPI server."""
    import uvicorn

    config = config if config is not None else settings
    host = host or config.web.host
    port = port or config.web.port
    logger.info("Starting PageFuse web service", host=host, port=port)
    uvicorn.run(app if config is settings else create_app(config), host=host, port=port)
