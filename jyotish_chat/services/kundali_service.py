"""
Kundali aggregation service.

Fetches the six chart facets used as chat context concurrently and folds
them into a single KundaliComposite. A failed facet never fails the whole
chart: it is logged and left as None. Whether the result is good enough
to chat about (planets must be a list) is decided by the caller.
"""
import asyncio
import logging
from typing import List, Tuple

from jyotish_chat.models.birth_data import BirthData
from jyotish_chat.models.kundali import Facet, FacetResult, KundaliComposite
from jyotish_chat.services.astrology_api import AstrologyAPIClient

logger = logging.getLogger(__name__)

# Composite field → facet, in the order the composite is filled
CONTEXT_FACETS: List[Tuple[str, Facet]] = [
    ("planets", Facet.PLANETS),
    ("houses", Facet.HOUSE_CUSPS),
    ("current_dasha", Facet.CURRENT_DASHA),
    ("mahadasha", Facet.MAHADASHA),
    ("yogas", Facet.YOGAS),
    ("ascendant", Facet.ASCENDANT),
]


async def _settle(client: AstrologyAPIClient, facet: Facet, birth_data: BirthData) -> FacetResult:
    """Run one facet call and capture its outcome instead of raising."""
    try:
        payload = await client.fetch_facet(facet, birth_data)
        return FacetResult(facet=facet, ok=True, payload=payload)
    except Exception as e:
        logger.warning(f"Facet {facet.value} failed: {e}")
        return FacetResult(facet=facet, ok=False, error=str(e))


async def fetch_all_facets(client: AstrologyAPIClient, birth_data: BirthData) -> KundaliComposite:
    """
    Gather all context facets for one birth-data query.

    Waits for every call to settle (success or failure) and never raises
    for a facet failure. Field order is fixed regardless of which call
    finishes first.
    """
    results = await asyncio.gather(
        *(_settle(client, facet, birth_data) for _, facet in CONTEXT_FACETS)
    )

    fields = {
        field: result.payload if result.ok else None
        for (field, _), result in zip(CONTEXT_FACETS, results)
    }
    composite = KundaliComposite(**fields)

    failed = [r.facet.value for r in results if not r.ok]
    if failed:
        logger.warning(f"Kundali fetched with {len(failed)}/{len(results)} facets missing: {failed}")
    else:
        logger.info("Kundali fetched: all facets present")
    return composite
