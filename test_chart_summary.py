# tests for the chart summary adapter

from jyotish_chat.models.kundali import KundaliComposite
from jyotish_chat.services.chart_summary import (
    extract_ascendant,
    extract_current_dasha,
    extract_planet_summary,
    summarise,
)


def test_planet_summary_tolerates_alternate_keys():
    composite = KundaliComposite(planets=[
        {"name": "Sun", "sign": "Leo", "house": 10, "is_retrograde": False},
        {"planet": "Saturn", "rasi": "Capricorn", "house": 3, "retro": "R"},
        "not-a-dict",
    ])

    assert extract_planet_summary(composite) == [
        {"name": "Sun", "sign": "Leo", "house": 10, "is_retro": False},
        {"name": "Saturn", "sign": "Capricorn", "house": 3, "is_retro": True},
    ]


def test_planet_summary_respects_limit():
    composite = KundaliComposite(planets=[{"name": f"P{i}"} for i in range(9)])
    assert len(extract_planet_summary(composite)) == 6
    assert len(extract_planet_summary(composite, limit=3)) == 3


def test_no_planets_no_summary():
    assert extract_planet_summary(KundaliComposite()) is None


def test_ascendant_prefers_report():
    composite = KundaliComposite(
        planets=[{"name": "Ascendant", "sign": "Aries"}],
        ascendant={"ascending_sign": "Libra"},
    )
    assert extract_ascendant(composite) == "Libra"


def test_ascendant_from_lagna_entry():
    composite = KundaliComposite(planets=[{"name": "Sun"}, {"name": "Lagna", "rasi": "Virgo"}])
    assert extract_ascendant(composite) == "Virgo"


def test_current_dasha_variants():
    a = KundaliComposite(currentDasha={"major_dasha": {"planet": "Jupiter"}})
    b = KundaliComposite(currentDasha={"current_mahadasha": "Mercury"})
    assert extract_current_dasha(a) == "Jupiter"
    assert extract_current_dasha(b) == "Mercury"
    assert extract_current_dasha(KundaliComposite()) is None


def test_summarise_empty_composite():
    assert summarise(KundaliComposite()) == {"ascendant": None, "current_dasha": None, "planets": None}
