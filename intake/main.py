"""
Claim Review Intake Service

FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from intake.api import router as submissions_router
from intake.clients.root_client import RemoteClaimClient, RootClaimClient
from intake.core.config import DEFAULT_MAX_BODY_BYTES, Settings
from intake.core.errors import IntakeError, PayloadTooLargeError
from intake.submission.handler import SubmissionHandler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    client: Optional[RemoteClaimClient] = None,
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
) -> FastAPI:
    """
    Build the application.

    Args:
        client: Platform client to use. When omitted, settings are read from
            the environment at startup and a RootClaimClient is created; a
            missing ROOT_API_KEY aborts startup.
        max_body_bytes: Largest request body accepted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management."""
        logger.info("Starting Claim Review Intake Service")
        owned_client = None
        claim_client = client

        if claim_client is None:
            settings = Settings.from_env()
            owned_client = RootClaimClient(settings)
            claim_client = owned_client
            app.state.max_body_bytes = settings.max_body_bytes
            logging.getLogger().setLevel(settings.log_level)

        app.state.submission_handler = SubmissionHandler(claim_client)
        yield

        if owned_client is not None:
            await owned_client.aclose()
        logger.info("Shutting down Claim Review Intake Service")

    app = FastAPI(
        title="Claim Review Intake Service",
        description="""
        Receives engineer damage reviews and photos for insurance claims and
        forwards them to the Root insurance platform.

        ## Workflow

        1. The form posts to `POST /submit-claim/{claim_number}`
        2. The submission is validated (max 5 images, 4MB each)
        3. The claim blocks are updated with the review and suggested work
        4. Each image is uploaded as a claim attachment, in order

        The first failure stops the run; earlier updates are not rolled back.
        """,
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.max_body_bytes = max_body_bytes

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        """Reject oversized bodies before any route reads them."""
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > request.app.state.max_body_bytes:
                logger.warning(f"Rejected {request.url.path}: body of {content_length} bytes")
                error = PayloadTooLargeError()
                return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return await call_next(request)

    @app.exception_handler(IntakeError)
    async def intake_error_handler(request: Request, exc: IntakeError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Method not allowed" if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED else exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None)
        )

    app.include_router(submissions_router)

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with system info."""
        return {
            "system": "Claim Review Intake Service",
            "version": "1.0.0",
            "status": "operational",
            "docs": "/docs"
        }

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
