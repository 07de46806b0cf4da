"""
Gemini chat client.

One POST per chat turn to {base}/{model}:generateContent. If the
configured model answers 404 (unknown or retired model name), the same
body is retried once against DEFAULT_MODEL. When that retry does not
produce text, the error reported is the original 404.
"""
import logging
import re
from typing import Any, Dict, Optional, Sequence

import httpx

from config import Settings
from jyotish_chat.models.chat import ConversationTurn, UserIdentity
from jyotish_chat.services.prompt_builder import SYSTEM_PROMPT, build_contents

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

# Held constant across calls so the tone stays consistent
GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.85,
    "maxOutputTokens": 1500,
    "topP": 0.95,
}


class ChatError(Exception):
    """The chat call produced no usable reply."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


def build_url(base_url: str, model: str) -> str:
    """Gemini models use :generateContent; older text models use :generateText."""
    base = f"{base_url.rstrip('/')}/{model}"
    if re.match(r"^gemini-", model, re.IGNORECASE):
        return f"{base}:generateContent"
    return f"{base}:generateText"


def extract_text(response: httpx.Response) -> Optional[str]:
    """First candidate → first part → text, or None."""
    try:
        data = response.json()
    except ValueError:
        return None
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"] or None
    except (KeyError, IndexError, TypeError):
        return None


class GeminiClient:
    """Gemini generateContent client with a one-shot default-model fallback."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.api_key = settings.GEMINI_API_KEY
        self.model = settings.GEMINI_MODEL or DEFAULT_MODEL
        self.base_url = settings.GEMINI_API_BASE_URL
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)

    def build_body(
        self,
        messages: Sequence[ConversationTurn],
        chart_context: Optional[Dict[str, Any]] = None,
        user_identity: Optional[UserIdentity] = None,
    ) -> Dict[str, Any]:
        return {
            "system_instruction": {"parts": [{"text": SYSTEM_PROMPT}]},
            "contents": build_contents(messages, chart_context, user_identity),
            "generationConfig": dict(GENERATION_CONFIG),
        }

    async def _post(self, model: str, body: Dict[str, Any]) -> httpx.Response:
        url = build_url(self.base_url, model)
        logger.info(f"[gemini] using model={model} url={url}")
        try:
            return await self._http.post(
                url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=body,
            )
        except httpx.HTTPError as e:
            raise ChatError(f"Gemini request failed: {str(e) or type(e).__name__}") from e

    async def chat(
        self,
        messages: Sequence[ConversationTurn],
        chart_context: Optional[Dict[str, Any]] = None,
        user_identity: Optional[UserIdentity] = None,
    ) -> str:
        """
        Send the conversation (with chart priming) and return the reply text.

        Raises:
            ChatError: no API key, the call failed after the fallback
                policy, or the reply had no text.
        """
        if not self.api_key:
            raise ChatError("GEMINI_API_KEY environment variable is not set")

        body = self.build_body(messages, chart_context, user_identity)
        res = await self._post(self.model, body)

        if res.is_success:
            text = extract_text(res)
            if not text:
                raise ChatError("No response from Gemini", status=res.status_code)
            return text

        detail = res.text
        if res.status_code == 404:
            if self.model != DEFAULT_MODEL:
                logger.warning(f"[gemini] model {self.model} failed, retrying with {DEFAULT_MODEL}")
                retry_text = await self._fallback(body)
                if retry_text:
                    return retry_text
            raise ChatError(
                f"Gemini API error: 404 - {detail}. The model \"{self.model}\" was not found "
                f"at {self.base_url} or is not supported for generateContent. Set "
                "GEMINI_MODEL to a supported model or run scripts/list_models.py to see "
                "available models.",
                status=404,
            )

        raise ChatError(f"Gemini API error: {res.status_code} - {detail}", status=res.status_code)

    async def _fallback(self, body: Dict[str, Any]) -> Optional[str]:
        """Retry once on DEFAULT_MODEL with the identical body; None on any failure."""
        try:
            retry = await self._post(DEFAULT_MODEL, body)
        except ChatError as e:
            logger.warning(f"[gemini] fallback to {DEFAULT_MODEL} failed: {e}")
            return None

        if not retry.is_success:
            logger.warning(f"[gemini] fallback to {DEFAULT_MODEL} failed: {retry.status_code}")
            return None
        return extract_text(retry)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
