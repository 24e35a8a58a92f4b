"""FastAPI boundary exposing the extraction pipeline."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from .. import __version__
from ..config import Settings
from ..events import create_sink
from ..extractor import ErrorKind, ExtractionResult
from ..pipeline import MediaPipeline

logger = logging.getLogger(__name__)


class ScrapeRequest(BaseModel):
    """Request body for an extraction."""
    url: Optional[str] = None


def create_app(settings: Optional[Settings] = None, pipeline: Optional[MediaPipeline] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Loaded settings; defaults apply when omitted
        pipeline: Pipeline to serve; built from settings when omitted

    Returns:
        Configured FastAPI app
    """
    settings = settings or Settings()
    pipeline = pipeline or MediaPipeline(settings.extractor, create_sink(settings.events))

    app = FastAPI(
        title="Media Scout",
        description="Extract image and video URLs from any web page",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def respond(result: ExtractionResult) -> JSONResponse:
        return JSONResponse(result.to_response(), status_code=result.http_status)

    # ==================== API ROUTES ====================

    @app.post("/api/scrape")
    async def scrape(request: Request):
        """Extract media from the page named in the request body."""
        url = None
        try:
            body = ScrapeRequest.model_validate(await request.json())
            url = body.url
        except ValidationError:
            return respond(ExtractionResult.failure(ErrorKind.INVALID_URL, "URL is required", status=400))
        except Exception as e:
            return respond(await pipeline.unhandled(url, e))

        return respond(await pipeline.extract(url))

    @app.get("/api/health")
    async def health():
        return {
            "status": "ok",
            "renderService": bool(settings.extractor.render_service_url),
        }

    return app


def run_server(settings: Settings, debug: bool = False):
    """
    Run the API server.

    Args:
        settings: Loaded settings, including host and port
        debug: Enable uvicorn debug logging
    """
    import uvicorn

    app = create_app(settings)
    logger.info("Serving on http://%s:%s", settings.server.host, settings.server.port)
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="debug" if debug else "info",
    )
