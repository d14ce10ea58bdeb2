"""
FastAPI application for the WOPI proof service

The proof service is built once here and shared read-only by every request
through ``app.state.proof_service``.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wopi_proof import __version__
from wopi_proof.api.routes import proof
from wopi_proof.api.schemas import HealthResponse
from wopi_proof.core.config import Settings, get_settings
from wopi_proof.core.log import configure_logging
from wopi_proof.core.paths import is_using_external_config
from wopi_proof.core.proof.canonical import ProofEncodingError
from wopi_proof.core.proof.service import ProofService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the proof key before the first request is served."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level, settings.log_format)

    service: ProofService = app.state.proof_service
    logger.info(
        f"Proof key: {service.key_store.path} "
        f"(external config: {is_using_external_config()})"
    )
    if service.key_store.load() is None:
        logger.warning("Proof headers disabled: no proof key available")
    elif not service.enabled:
        logger.info("Proof headers disabled by configuration")
    yield


def create_app(
    settings: Optional[Settings] = None,
    proof_service: Optional[ProofService] = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        settings: Settings to use (default: global settings)
        proof_service: Prebuilt service (default: built from settings)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="WOPI Proof API",
        description="X-WOPI-Proof headers and discovery proof-key attributes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.proof_service = proof_service or ProofService.from_settings(settings)

    @app.exception_handler(ProofEncodingError)
    async def proof_encoding_error_handler(request: Request, exc: ProofEncodingError):
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "field": exc.field},
        )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        service: ProofService = app.state.proof_service
        return HealthResponse(status="ok", proof_key=service.has_proof_key)

    app.include_router(proof.router)
    return app


def run(settings: Optional[Settings] = None) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = settings or get_settings()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
