import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.router import limiter, router
from config import settings
from services.errors import ReviewError
from services.gemini_client import GeminiGateway
from services.session_store import SessionStore

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="JobSuit API",
    description="ATS resume scoring, keyword gaps and AI bullet rewriting",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = limiter
app.state.gateway = GeminiGateway.from_settings(settings)
app.state.store = SessionStore(
    retain_results_on_failed_reanalysis=settings.retain_results_on_failed_reanalysis,
    ttl_seconds=settings.session_ttl_minutes * 60,
    max_sessions=settings.max_sessions,
)
if not app.state.gateway.is_configured:
    logger.warning("GEMINI_API_KEY is not set; uploads and analysis will be refused")


@app.exception_handler(ReviewError)
async def review_error_handler(_: Request, exc: ReviewError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.include_router(router)
