"""
Prompt construction for the Jyotish chat.

Gemini has no memory between calls, so the Kundali is injected on every
request as a synthetic priming pair (user shares chart → model greets)
ahead of the real conversation. The pair is rebuilt from the chart each
time and is never part of the caller's history.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from jyotish_chat.models.chat import ConversationTurn, UserIdentity

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are Jyotish, an expert Vedic astrologer with deep knowledge of:
- Kundali (birth chart) analysis
- Planetary positions, degrees, and their significance
- All 12 houses and their lords
- Rashi (zodiac signs) and their characteristics
- Nakshatras (lunar mansions) and their influence
- Dasha systems (Vimshottari dasha - mahadasha, antardasha, pratyantar dasha)
- Yogas (planetary combinations) - both auspicious and inauspicious
- Retrograde planets and their special effects
- Combustion, exaltation, debilitation of planets
- Transit effects on natal chart
- Divisional charts (Navamsa D9, etc.)
- Remedies (gemstones, mantras, rituals)

You speak like a warm, wise, experienced human astrologer, not like a robot.
Use a friendly, personalized tone. Address the person by name when you know it.
Mix Sanskrit terms with their English meanings (e.g., "your Lagna (ascendant) is in Vrishchika (Scorpio)").
Give specific, insightful readings based on their actual chart data provided to you.
Be positive but honest. Give actionable guidance.
When you don't have specific data, say so gracefully and offer what you can.
Keep answers conversational but rich in astrological wisdom."""

GREETING_TEMPLATE = (
    "Namaste! \U0001F64F I have carefully studied your Kundali, {name}. "
    "I can see your complete birth chart with all planetary positions, house placements, "
    "dashas, and yogas. I'm ready to guide you through the cosmic blueprint of your life. "
    "What would you like to explore first: your personality and life path, career prospects, "
    "relationships, health, or perhaps your current dasha period and what it means for you?"
)

USER_ROLE = "user"
MODEL_ROLE = "model"


def _turn(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def build_priming_pair(
    chart_context: Optional[Dict[str, Any]],
    user_identity: Optional[UserIdentity] = None,
) -> Optional[Tuple[Dict[str, Any], Dict[str, Any]]]:
    """
    Build the (user, model) turns that hand the chart to the LLM.
    Returns None when there is no chart to share.
    """
    if not chart_context:
        return None

    who = user_identity or UserIdentity()
    context_message = (
        f"Here is the complete Vedic birth chart (Kundali) data for {who.name or 'the user'}, "
        f"born on {who.dob or ''} at {who.tob or ''} in {who.pob or ''}:\n\n"
        f"{json.dumps(chart_context, indent=2, ensure_ascii=False)}\n\n"
        "Please analyze this Kundali data and be ready to answer questions about it. "
        "Greet the user warmly."
    )
    greeting = GREETING_TEMPLATE.format(name=who.name or "dear one")
    return _turn(USER_ROLE, context_message), _turn(MODEL_ROLE, greeting)


def build_contents(
    messages: Sequence[ConversationTurn],
    chart_context: Optional[Dict[str, Any]] = None,
    user_identity: Optional[UserIdentity] = None,
) -> List[Dict[str, Any]]:
    """Priming pair (if any) followed by the conversation, in Gemini `contents` form."""
    contents: List[Dict[str, Any]] = []

    priming = build_priming_pair(chart_context, user_identity)
    if priming:
        contents.extend(priming)

    for msg in messages:
        role = USER_ROLE if msg.role == "user" else MODEL_ROLE
        contents.append(_turn(role, msg.content))

    logger.debug(f"Built {len(contents)} turns (priming={'yes' if priming else 'no'})")
    return contents
