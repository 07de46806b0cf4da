"""
Chart summary adapter.

AstrologyAPI payloads differ slightly between plans and versions
(`sign` vs `rasi`, `is_retrograde` vs `retro`, ...). The raw composite
is what the LLM sees; this module only pulls a small, display-ready
summary out of it, tolerating the known alternate key names.
"""
from typing import Any, Dict, List, Optional

from jyotish_chat.models.kundali import KundaliComposite

LAGNA_NAMES = ("ascendant", "lagna")


def _first(entry: Dict, *keys: str) -> Any:
    for key in keys:
        value = entry.get(key)
        if value not in (None, ""):
            return value
    return None


def extract_planet_summary(composite: KundaliComposite, limit: int = 6) -> Optional[List[Dict]]:
    """
    Short planet table: name, sign, house, is_retro.
    Returns None if the planets facet is missing or not a list.
    """
    if not composite.is_usable():
        return None

    summary = []
    for p in composite.planets[:limit]:
        if not isinstance(p, dict):
            continue
        retro = _first(p, "is_retrograde", "retro")
        if isinstance(retro, str):
            retro = retro.strip().lower() in ("true", "r", "yes", "1")
        summary.append({
            "name": _first(p, "name", "planet"),
            "sign": _first(p, "sign", "rasi"),
            "house": p.get("house"),
            "is_retro": bool(retro),
        })
    return summary


def extract_ascendant(composite: KundaliComposite) -> Optional[str]:
    """Lagna sign from the ascendant report, else from the Ascendant planet entry."""
    asc = composite.ascendant
    if isinstance(asc, dict) and asc.get("ascending_sign"):
        return asc["ascending_sign"]

    if composite.is_usable():
        for p in composite.planets:
            if not isinstance(p, dict):
                continue
            name = str(_first(p, "name", "planet") or "").strip().lower()
            if name in LAGNA_NAMES:
                return _first(p, "sign", "rasi")
    return None


def extract_current_dasha(composite: KundaliComposite) -> Optional[str]:
    """Running Maha Dasha lord, if the current-dasha facet has one."""
    current = composite.current_dasha
    if not isinstance(current, dict):
        return None
    dasha = _first(current, "major_dasha", "current_mahadasha")
    if isinstance(dasha, dict):
        return dasha.get("planet")
    return dasha


def summarise(composite: KundaliComposite) -> Dict[str, Any]:
    return {
        "ascendant": extract_ascendant(composite),
        "current_dasha": extract_current_dasha(composite),
        "planets": extract_planet_summary(composite),
    }
