# sitegen/main.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from . import errors
from .config import Settings
from .graph_logic import GenerationPipeline, build_followup_prompt, build_retry_prompt
from .models import (
    CodeBundle,
    FollowupRequest,
    GenerateRequest,
    GenerationErrorPayload,
    HealthResponse,
    RAW_RESPONSE_LIMIT,
    RetryRequest,
)
from .ollama_client import OllamaClient

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate a valid and complete application."


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, (str, int, float)) and not value)


def create_app(settings: Settings, http_client: Optional[httpx.Client] = None) -> FastAPI:
    """
    Builds the relay app around one settings object.
    An `http_client` passed in is left open at shutdown; one created here is closed.
    """
    owns_client = http_client is None
    if http_client is None:
        http_client = httpx.Client(timeout=settings.backend_timeout)

    pipeline = GenerationPipeline(OllamaClient.from_settings(settings, http_client))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Relay server for %s using model: %s", settings.generate_url, settings.model)
        yield
        if owns_client:
            http_client.close()

    app = FastAPI(title="Sitegen Relay API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.max_body_bytes:
            return JSONResponse(
                status_code=413,
                content={"error": "Request body is too large."},
            )
        return await call_next(request)

    @app.exception_handler(errors.ValidationError)
    async def handle_validation_error(request: Request, exc: errors.ValidationError):
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request body")
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={"error": f"{where}: {message}" if where else message},
        )

    def process_generative_request(prompt: str):
        """Runs the generation graph; every failure becomes an HTTP 200 error payload."""
        final_state = {}
        try:
            final_state = pipeline.run(prompt)
            if error_message := final_state.get("error_message"):
                logger.error("Generation failed (%s): %s", final_state.get("error_type"), error_message)
            else:
                return CodeBundle(**final_state["bundle"])
        except Exception:
            logger.exception("Unexpected error during generation")

        return GenerationErrorPayload(
            error=GENERATION_FAILED_MESSAGE,
            rawResponse=(final_state.get("raw_response") or "")[:RAW_RESPONSE_LIMIT],
        )

    # --- API Endpoints ---

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        return HealthResponse(status="ok", model=settings.model)

    @app.post("/generate")
    def generate(request: GenerateRequest):
        """Generates a fresh code bundle from a free-text prompt."""
        prompt = request.prompt or ""
        if not prompt.strip():
            raise errors.ValidationError("prompt is required")
        return process_generative_request(prompt)

    @app.post("/followup")
    def followup(request: FollowupRequest):
        """Regenerates the bundle with a requested change applied to the current code."""
        if _is_missing(request.prompt) or _is_missing(request.code):
            raise errors.ValidationError("A prompt and code are required.")
        return process_generative_request(build_followup_prompt(request.prompt, request.code))

    @app.post("/retry")
    def retry(request: RetryRequest):
        """Asks the model again after a reply that could not be parsed."""
        if _is_missing(request.originalPrompt) or _is_missing(request.badJson):
            raise errors.ValidationError("Original prompt and bad JSON are required.")
        return process_generative_request(build_retry_prompt(request.originalPrompt, request.badJson))

    return app
