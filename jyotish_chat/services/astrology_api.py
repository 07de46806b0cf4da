"""
AstrologyAPI.com client (async).

Every endpoint is a POST with a JSON body built from BirthData and a
Basic auth header of base64(user_id:api_key). No retries here: a failed
call raises ProviderError and the caller decides what to do with it.
"""
import base64
import logging
from typing import Any, Dict, Optional

import httpx

from config import Settings
from jyotish_chat.models.birth_data import BirthData
from jyotish_chat.models.kundali import Facet

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """A facet call returned a non-2xx status or never got a response."""

    def __init__(self, facet: str, status: Optional[int], body: str):
        self.facet = facet
        self.status = status
        self.body = body
        super().__init__(f"API error [{facet}]: {status} - {body}")


class AstrologyAPIClient:
    """AstrologyAPI.com client, one method per chart facet."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = settings.ASTROLOGY_API_BASE_URL.rstrip("/")
        self.user_id = settings.ASTROLOGY_USER_ID
        self.api_key = settings.ASTROLOGY_API_KEY
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)

    def _headers(self) -> Dict[str, str]:
        token = base64.b64encode(f"{self.user_id}:{self.api_key}".encode()).decode()
        return {
            "Authorization": f"Basic {token}",
            "Content-Type": "application/json",
        }

    async def fetch_facet(self, facet: Facet, birth_data: BirthData) -> Any:
        """POST one facet request and return the decoded JSON body."""
        endpoint = Facet(facet).value
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await self._http.post(
                url, headers=self._headers(), json=birth_data.to_payload(),
            )
        except httpx.HTTPError as e:
            raise ProviderError(endpoint, None, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise ProviderError(endpoint, response.status_code, response.text)
        return response.json()

    async def get_planets(self, birth_data: BirthData) -> Any:
        """Planet positions: sign, house, degree, retrograde flag."""
        return await self.fetch_facet(Facet.PLANETS, birth_data)

    async def get_birth_chart(self, birth_data: BirthData) -> Any:
        """Rasi (D1) chart: planets grouped by sign."""
        return await self.fetch_facet(Facet.BIRTH_CHART, birth_data)

    async def get_house_cusps(self, birth_data: BirthData) -> Any:
        return await self.fetch_facet(Facet.HOUSE_CUSPS, birth_data)

    async def get_mahadasha(self, birth_data: BirthData) -> Any:
        """Vimshottari Maha Dasha periods."""
        return await self.fetch_facet(Facet.MAHADASHA, birth_data)

    async def get_current_dasha(self, birth_data: BirthData) -> Any:
        """Running maha/antar/pratyantar dasha."""
        return await self.fetch_facet(Facet.CURRENT_DASHA, birth_data)

    async def get_yogas(self, birth_data: BirthData) -> Any:
        return await self.fetch_facet(Facet.YOGAS, birth_data)

    async def get_ascendant(self, birth_data: BirthData) -> Any:
        return await self.fetch_facet(Facet.ASCENDANT, birth_data)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
