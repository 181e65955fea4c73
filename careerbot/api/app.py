"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from careerbot.api.deps import build_services
from careerbot.api.limiter import limiter
from careerbot.config import settings
from careerbot.errors import (
    CareerBotError,
    ConfigurationError,
    IndexWriteError,
    LLMServiceError,
    ScrapeServiceError,
    ScrapeTimeoutError,
    SearchUnavailableError,
)

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and build the service adapters on startup."""
    logging.basicConfig(level=settings.log_level)
    missing = settings.missing_credentials()
    if missing:
        logger.warning(f"Missing environment variables: {', '.join(missing)}")
    app.state.services = build_services(settings)
    yield


app = FastAPI(
    title="Career Coach API",
    description="LinkedIn scraping, job-market search and AI career coaching",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return error_response(429, f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are rejected before the handler runs."""
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    return error_response(400, f"Invalid request: {problems}")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


def _status_for(exc: CareerBotError) -> tuple[int, str]:
    # Configuration first: some config errors also subclass service errors
    if isinstance(exc, ConfigurationError):
        return 503, "Service configuration error"
    if isinstance(exc, ScrapeTimeoutError):
        return 504, "LinkedIn scraping timed out or failed"
    if isinstance(exc, ScrapeServiceError):
        return 502, "LinkedIn scraping failed"
    if isinstance(exc, (SearchUnavailableError, IndexWriteError)):
        return 503, "Search service temporarily unavailable"
    if isinstance(exc, LLMServiceError):
        return 502, "AI service temporarily unavailable"
    return 500, "Internal server error"


@app.exception_handler(CareerBotError)
async def service_error_handler(request: Request, exc: CareerBotError):
    status_code, message = _status_for(exc)
    logger.error(f"{request.method} {request.url.path} failed ({status_code}): {exc}")
    return error_response(status_code, message)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from careerbot.api.routes import jobs, linkedin, search, statistics  # noqa: E402

app.include_router(linkedin.router, tags=["LinkedIn"])
app.include_router(jobs.router, tags=["Jobs"])
app.include_router(statistics.router, tags=["Statistics"])
app.include_router(search.router, tags=["Search"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
