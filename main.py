from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
from openai import AsyncOpenAI
import httpx
import os
import sys
import logging
import uvicorn
from middleware.body_limit import BodySizeLimitMiddleware
from models.mail_transport import MailProviderKind
from routers import send_email, site, summarize, ui
from services.api_client import ApiClient
from services.errors import SummarizerError, ConfigurationError, InvalidRequestError
from services.mail_service import MailService
from services.summarizer_service import SummarizerService
from utils.settings import Settings, load_settings

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one readable message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


def create_app(settings: Settings) -> FastAPI:
    """
    Build the application and its clients.

    The LLM client, the shared HTTP client and the services are created here
    once and stored on ``app.state``; routers receive them through Depends.
    """
    # No local timeouts: LLM and mail calls take as long as the providers do
    http_client = httpx.AsyncClient(timeout=None)
    api_http_client = httpx.AsyncClient(base_url=settings.api_base, timeout=None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"API listening on http://localhost:{settings.port}")
        logger.info(f"  Model: {settings.model}")
        logger.info(f"  Mail provider: {MailProviderKind.from_name(settings.mail.provider).value}")
        logger.info(f"  Allowed origin: {settings.client_origin}")
        logger.info("=" * 60)
        yield
        await http_client.aclose()
        await api_http_client.aclose()

    app = FastAPI(title="Meeting Notes Summarizer", lifespan=lifespan)

    app.state.settings = settings
    app.state.summarizer_service = SummarizerService(
        AsyncOpenAI(api_key=settings.llm_api_key, base_url=settings.llm_base_url),
        settings.model
    )
    app.state.mail_service = MailService(settings.mail, http_client)
    app.state.api_client = ApiClient(api_http_client)

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SummarizerError)
    async def summarizer_error_handler(request: Request, exc: SummarizerError):
        logger.warning(
            f"Request failed: path={request.url.path}, "
            f"kind={type(exc).__name__}, error={exc.message}"
        )
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return await summarizer_error_handler(
            request, InvalidRequestError(format_validation_errors(exc))
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.get("/api/health")
    async def health():
        return {
            "status": "ok",
            "model": settings.model,
            "mailProvider": MailProviderKind.from_name(settings.mail.provider).value,
        }

    # Include routers; the site fallback must stay last
    app.include_router(summarize.router)
    app.include_router(send_email.router)
    app.include_router(ui.router)
    app.include_router(site.router)

    return app


try:
    settings = load_settings()
except ConfigurationError as e:
    logger.error(f"Configuration error: {e.message}")
    sys.exit(1)

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=settings.port)
