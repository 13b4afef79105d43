import re
from types import MappingProxyType
from typing import FrozenSet, Iterable, Optional

from brandmatch.geo_tables import COUNTRIES, METRO_AREAS, US_REGIONS, US_STATES
from brandmatch.models import BrandProfile, LocationRelevance, LocationTier


def _alias_pattern(aliases: Iterable[str]) -> re.Pattern:
    """Compile an alternation that matches any alias as a whole word."""
    ordered = sorted(set(aliases), key=len, reverse=True)
    return re.compile(r"(?<!\w)(?:" + "|".join(re.escape(a) for a in ordered) + r")(?!\w)")


_METRO_PATTERNS = MappingProxyType({
    metro: _alias_pattern(aliases) for metro, aliases in METRO_AREAS.items()
})
# Full state names may appear anywhere. They are matched in one longest-first pass so
# "west virginia" is consumed before "virginia" can match inside it. Washington, DC
# maps to None so it is not read as Washington state.
_STATE_NAME_LOOKUP = MappingProxyType({
    **{v: state for state, variants in US_STATES.items() for v in variants if len(v) > 2},
    **{name: None for name in ("washington, dc", "washington dc", "washington, d.c.", "washington d.c.")},
})
_STATE_NAMES = _alias_pattern(_STATE_NAME_LOOKUP)
# Two-letter state codes only count as a whole comma-separated part ("Austin, TX")
_STATE_CODES = MappingProxyType({
    state: frozenset(v for v in variants if len(v) == 2)
    for state, variants in US_STATES.items()
})
_COUNTRY_PATTERNS = MappingProxyType({
    country: _alias_pattern(variants) for country, variants in COUNTRIES.items()
})


def _normalize(text: Optional[str]) -> str:
    return (text or "").lower().strip()


def _parts(text: str):
    return [p.strip() for p in text.split(",")]


def _metros_in(text: str) -> FrozenSet[str]:
    return frozenset(m for m, pat in _METRO_PATTERNS.items() if pat.search(text))


def states_in(text: str) -> FrozenSet[str]:
    """US states named (or abbreviated as a comma-separated part) in lower-cased text."""
    if not text:
        return frozenset()
    parts = set(_parts(text))
    named = {_STATE_NAME_LOOKUP[m.group(0)] for m in _STATE_NAMES.finditer(text)}
    coded = {state for state, codes in _STATE_CODES.items() if parts & codes}
    return frozenset((named | coded) - {None})


def regions_in(states: Iterable[str]) -> FrozenSet[str]:
    states = set(states)
    return frozenset(r for r, members in US_REGIONS.items() if states.intersection(members))


def countries_in(text: str) -> FrozenSet[str]:
    if not text:
        return frozenset()
    return frozenset(c for c, pat in _COUNTRY_PATTERNS.items() if pat.search(text))


def match_location_tier(
    source_city: Optional[str],
    source_country: Optional[str],
    candidate_location: Optional[str],
) -> LocationTier:
    """
    Determine the finest granularity at which a source location and a candidate
    location coincide.

    Tiers are checked in the order city, state, region, country; the first one
    that matches wins. Matching is containment on lower-cased text only.

    Args:
        source_city (Optional[str]): City or region of the brand profile.
        source_country (Optional[str]): Country of the brand profile.
        candidate_location (Optional[str]): Free-form candidate location, e.g. "City, Country".

    Returns:
        LocationTier: Matched tier, LocationTier.NONE if nothing matches.
    """
    city = _normalize(source_city)
    country = _normalize(source_country)
    candidate = _normalize(candidate_location)
    if not candidate or not (city or country):
        return LocationTier.NONE

    # City: direct containment or a shared metro area
    candidate_city = _parts(candidate)[0]
    if city and candidate_city and (city in candidate_city or candidate_city in city):
        return LocationTier.CITY
    if city and _metros_in(city) & _metros_in(candidate):
        return LocationTier.CITY

    source = ", ".join(p for p in (city, country) if p)

    source_states = states_in(source)
    candidate_states = states_in(candidate)
    if source_states & candidate_states:
        return LocationTier.STATE

    if regions_in(source_states) & regions_in(candidate_states):
        return LocationTier.REGION

    if countries_in(source) & countries_in(candidate):
        return LocationTier.COUNTRY

    return LocationTier.NONE


def classify_location_relevance(
    source: BrandProfile,
    candidate_location: Optional[str],
    state_counts_as_city: bool = True,
) -> LocationRelevance:
    """
    Score how relevant a candidate's location is to a brand profile.

    A state-level match scores as a city match (100 / 0 km) in the discovery
    flow; the geo-insight flow passes state_counts_as_city=False to score it
    as a same-country match (75 / 50 km) instead.

    Args:
        source (BrandProfile): Brand profile initiating the search.
        candidate_location (Optional[str]): Candidate's free-form location text.
        state_counts_as_city (bool): Scoring variant for state-level matches.

    Returns:
        LocationRelevance: Tier, flags, relevance score and estimated distance.
    """
    tier = match_location_tier(source.city_region, source.country, candidate_location)

    if tier is LocationTier.CITY:
        return LocationRelevance(tier, True, False, 100, 0)
    if tier is LocationTier.STATE and state_counts_as_city:
        return LocationRelevance(tier, False, False, 100, 0)
    if tier is LocationTier.NONE:
        return LocationRelevance(tier, False, False, 25, 500)
    # State (geo-insight variant), region and country
    return LocationRelevance(tier, False, True, 75, 50)
