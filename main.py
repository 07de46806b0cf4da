"""
Jyotish Chat: FastAPI Application

Architecture:
  - Kundali: six AstrologyAPI.com facets fetched concurrently per request;
    failed facets come back as null instead of failing the chart
  - Chat: Gemini generateContent, Kundali injected as a priming turn pair
    on every call, one-shot fallback to the default model on 404
  - State: none server-side; the client keeps the Kundali and history
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from jyotish_chat.api.routes import router
from jyotish_chat.services.astrology_api import AstrologyAPIClient
from jyotish_chat.services.gemini_client import GeminiClient

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("=" * 60)
    logger.info("Jyotish Chat starting...")
    logger.info("=" * 60)

    app.state.astrology_client = AstrologyAPIClient(settings)
    app.state.gemini_client = GeminiClient(settings)

    if not settings.ASTROLOGY_API_KEY:
        logger.warning("ASTROLOGY_API_KEY not set; every kundali request will fail")
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set; chat requests will be rejected")
    logger.info(f"Gemini model: {settings.GEMINI_MODEL}")

    yield

    # ── Shutdown ──────────────────────────────────────────────────
    await app.state.astrology_client.aclose()
    await app.state.gemini_client.aclose()
    logger.info("Jyotish Chat shut down cleanly.")


app = FastAPI(
    title="Jyotish Chat",
    description=(
        "Chat with a Vedic astrologer about your own Kundali.\n\n"
        "**Chart**: AstrologyAPI.com (planets, houses, dashas, yogas, ascendant)\n"
        "**Chat**: Gemini, with the chart injected as context on every turn"
    ),
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {
        "service": "Jyotish Chat",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
        "kundali": "/api/kundali",
        "chat": "/api/chat",
    }
