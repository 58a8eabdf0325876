"""
Veo Relay HTTP Server

FastAPI server that provides:
- GET /health - Liveness check
- POST /generate - Start a Veo video generation job
- GET /status?op=<operationName> - Poll a generation job

Every response is JSON. Errors are always rendered as {"error": message}.

Usage:
    # Start server
    python -m uvicorn services.relay.server:app --host 0.0.0.0 --port 3001

    # Or via main.py
    python main.py server
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import Config, get_config
from services.video_generation import (
    DEFAULT_STYLE,
    StylePreset,
    VeoClient,
    build_prompt,
    interpret_operation,
)

logger = logging.getLogger(__name__)

DEFAULT_ASPECT_RATIO = "16:9"


# Request/Response Models
class GenerateRequest(BaseModel):
    """Request to generate a video."""
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = None
    style: Any = DEFAULT_STYLE.value
    aspect_ratio: Optional[str] = Field(default=DEFAULT_ASPECT_RATIO, alias="aspectRatio")


class GenerateResponse(BaseModel):
    """Response from generate endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    operation_name: str = Field(alias="operationName")
    status: str = "processing"


def get_video_client(request: Request) -> VeoClient:
    """Dependency returning the client bound to this application."""
    return request.app.state.video_client


router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": request.app.state.config.server.service_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    body: Optional[GenerateRequest] = None,
    client: VeoClient = Depends(get_video_client),
):
    """
    Start video generation.

    The style hint is appended to the prompt; unknown styles fall back to
    the default preset. Returns the upstream operation name to poll via
    /status.
    """
    if body is None or not body.prompt:
        raise HTTPException(status_code=400, detail="Prompt is required")

    style = StylePreset.resolve(body.style)
    aspect_ratio = body.aspect_ratio or DEFAULT_ASPECT_RATIO

    logger.info(
        f'Starting video generation: "{body.prompt[:80]}..." '
        f"style={style.value} aspect={aspect_ratio}"
    )

    try:
        operation_name = await client.start_generation(
            build_prompt(body.prompt, style),
            aspect_ratio=aspect_ratio,
        )
    except Exception as e:
        logger.error(f"Generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Video generation failed")

    return GenerateResponse(operation_name=operation_name, status="processing")


@router.get("/status")
async def get_status(
    op: Optional[str] = None,
    client: VeoClient = Depends(get_video_client),
):
    """Poll a generation job by operation name."""
    if not op:
        raise HTTPException(status_code=400, detail="Operation name is required (param: op)")

    try:
        operation = await client.poll_operation(op)
        result = interpret_operation(operation)
    except Exception as e:
        logger.error(f"Status check failed for {op}: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Status check failed")

    return result.to_response()


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {message}"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    config: Config = app.state.config

    logger.info(f"Starting Veo relay ({config.server.service_name}), model={config.api.video_model}")
    logger.info(f"Allowed origins: {', '.join(config.server.allowed_origins)}")
    for issue in config.validate():
        logger.warning(issue)

    yield

    logger.info("Shutting down Veo relay...")


def create_app(
    config: Optional[Config] = None,
    video_client: Optional[VeoClient] = None,
) -> FastAPI:
    """
    Build the relay application.

    Args:
        config: Configuration (loaded from the environment if omitted)
        video_client: Upstream client (built from config if omitted)
    """
    config = config or get_config()

    app = FastAPI(
        title="Veo Relay API",
        description="Relay for Google Veo video generation with status polling",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.video_client = video_client or VeoClient(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(router)

    return app


app = create_app()
