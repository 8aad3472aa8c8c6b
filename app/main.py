from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from utility.config import RelayConfig, load_config
from utility.dto import ErrorResponse, TranslateResponse
from utility.errors import RelayError
from utility.gemini_client import GeminiClient
from utility.log import setup_logging
from utility.relay_service import RelayService

logger = logging.getLogger(__name__)


# -----------------------------
# Helpers
# -----------------------------
async def read_json_body(request: Request) -> Any:
    """Parsed JSON body, or None when the body is empty or not JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


# -----------------------------
# FastAPI app
# -----------------------------
def create_app(
    config: Optional[RelayConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the relay app around one RelayConfig.
    `transport` replaces the real network, for tests.
    """
    config = config or load_config()

    app = FastAPI(title="Gemini Relay")
    app.state.config = config
    app.state.relay = RelayService(config, GeminiClient(config, transport=transport))

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RelayError, relay_error_handler)

    # -----------------------------
    # Startup
    # -----------------------------
    @app.on_event("startup")
    async def startup():
        if not config.api_key:
            logger.warning("GEMINI_API_KEY is not set; every request will fail until it is provided")
        logger.info(
            "Relay ready (translate model %s, speech model %s, origins %s)",
            config.translate_model, config.speech_model, ", ".join(config.allowed_origins),
        )

    # -----------------------------
    # HTTP Endpoints
    # -----------------------------
    @app.post("/api/translate", response_model=TranslateResponse)
    async def translate(request: Request):
        body = await read_json_body(request)
        translated = await app.state.relay.translate(body)
        return TranslateResponse(translated_text=translated)

    @app.post("/api/generate-speech")
    async def generate_speech(request: Request):
        body = await read_json_body(request)
        raw = await app.state.relay.generate_speech(body)
        # Upstream bytes go back untouched
        return Response(content=raw, media_type="application/json")

    return app


app = create_app()


def main():
    setup_logging()
    config = app.state.config
    logger.info("Starting server on port %s", config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
