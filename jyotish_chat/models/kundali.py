"""
Pydantic models for Kundali (birth chart) data fetched from AstrologyAPI.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Facet(str, Enum):
    """AstrologyAPI endpoint paths, one per chart facet."""
    PLANETS = "planets"
    BIRTH_CHART = "horo_chart/D1"
    HOUSE_CUSPS = "house_cusps"
    MAHADASHA = "dashas/mahadasha"
    CURRENT_DASHA = "dashas/current_mahadasha_full"
    YOGAS = "yoga_list"
    ASCENDANT = "ascendant_report"


class FacetResult(BaseModel):
    """Outcome of one facet call: either a payload or an error string."""
    facet: Facet
    ok: bool
    payload: Any = None
    error: Optional[str] = None


class KundaliComposite(BaseModel):
    """
    Best-effort combination of all facet calls for one birth-data query.

    Any field may be None when its facet call failed. The composite is only
    usable as chat context when `planets` is a list.
    Serialised with the camelCase names the chat client sends back.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    planets: Any = None
    houses: Any = None
    current_dasha: Any = Field(default=None, alias="currentDasha")
    mahadasha: Any = None
    yogas: Any = None
    ascendant: Any = None

    def is_usable(self) -> bool:
        return isinstance(self.planets, list)

    def missing_facets(self) -> List[str]:
        data = self.to_context()
        return [k for k, v in data.items() if v is None]

    def to_context(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
