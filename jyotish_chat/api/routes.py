"""
API routes for Jyotish Chat.

Endpoint groups:

  /health    : Service health + which credentials are configured
  /kundali   : Fetch all chart facets for a birth moment
  /chat      : One chat turn about the user's Kundali

The service keeps no session state: the client holds the Kundali returned
by /kundali and the conversation, and sends both back on every /chat call.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from jyotish_chat.models.birth_data import KundaliRequest
from jyotish_chat.models.chat import ChatRequest, ChatResponse
from jyotish_chat.services.astrology_api import AstrologyAPIClient
from jyotish_chat.services.chart_summary import summarise
from jyotish_chat.services.gemini_client import ChatError, GeminiClient
from jyotish_chat.services.kundali_service import fetch_all_facets

logger = logging.getLogger(__name__)

router = APIRouter()


# ─────────────────────────────────────────────
# Dependencies (clients are created in the app lifespan)
# ─────────────────────────────────────────────

def get_astrology_client(request: Request) -> AstrologyAPIClient:
    return request.app.state.astrology_client


def get_gemini_client(request: Request) -> GeminiClient:
    return request.app.state.gemini_client


# ─────────────────────────────────────────────
# Health
# ─────────────────────────────────────────────

@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "astrology_api": "configured" if settings.ASTROLOGY_API_KEY else "missing key",
        "gemini": "configured" if settings.GEMINI_API_KEY else "missing key",
        "gemini_model": settings.GEMINI_MODEL,
    }


# ─────────────────────────────────────────────
# Kundali
# ─────────────────────────────────────────────

@router.post("/kundali")
async def get_kundali(
    request: KundaliRequest,
    client: AstrologyAPIClient = Depends(get_astrology_client),
):
    """
    Fetch the Kundali used as chat context.

    Individual facets may be missing (returned as null), but the planets
    facet must be a list or the chart is rejected with 502.
    """
    birth_data = request.to_birth_data()
    composite = await fetch_all_facets(client, birth_data)

    if not composite.is_usable():
        details = composite.model_dump_json(by_alias=True)
        logger.error(f"Invalid astrology API response: {details}")
        return JSONResponse(
            status_code=502,
            content={
                "error": (
                    "Unable to fetch valid kundali data. Please check your Astrology "
                    "API key/user ID and try again."
                ),
                "details": details,
            },
        )

    return {
        "success": True,
        "data": composite.to_context(),
        "userInfo": {
            "name": request.name,
            "dob": request.display_dob(),
            "tob": request.display_tob(),
            "pob": request.pob,
        },
        "summary": summarise(composite),
        "missing": composite.missing_facets(),
    }


# ─────────────────────────────────────────────
# Chat
# ─────────────────────────────────────────────

@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    client: GeminiClient = Depends(get_gemini_client),
):
    """
    Send the conversation to Gemini with the Kundali injected as context.

    `messages` is the visible history only; the chart priming turns are
    rebuilt from `kundaliContext` on every call.
    """
    try:
        reply = await client.chat(request.messages, request.kundali_context, request.user_info)
    except ChatError as e:
        logger.error(f"Chat error: {e}")
        return JSONResponse(status_code=500, content={"error": str(e) or "Failed to get AI response"})
    return ChatResponse(reply=reply)
