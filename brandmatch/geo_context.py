from typing import Dict, List, Optional
from loguru import logger

from brandmatch.models import (
    BrandProfile,
    CandidateBrand,
    GeoPriorityResult,
    LocalOpportunity,
    LocationInsight,
    LocationRelevance,
)
from brandmatch.matchers.location_matcher import classify_location_relevance

LOCATION_BOOST_FACTOR = 0.1


def determine_collaboration_potential(relevance: LocationRelevance) -> str:
    if relevance.same_city:
        return "high"
    if relevance.same_country:
        return "medium"
    return "low"


def generate_local_opportunities(relevance: LocationRelevance) -> List[LocalOpportunity]:
    """Collaboration formats that are feasible at the given distance."""
    opportunities = []

    if relevance.same_city:
        opportunities.append(LocalOpportunity(
            "local_event", "Co-host local popup events or workshops", "high"))
        opportunities.append(LocalOpportunity(
            "shared_retail", "Share retail space or cross-promote in local stores", "high"))

    if relevance.same_country:
        opportunities.append(LocalOpportunity(
            "regional_campaign", "Launch joint regional marketing campaigns", "medium"))
        opportunities.append(LocalOpportunity(
            "distribution_partnership", "Share distribution networks and logistics", "medium"))

    opportunities.append(LocalOpportunity(
        "digital_collaboration", "Virtual collaborations and digital co-marketing", "high"))
    return opportunities


def build_location_insight(profile: BrandProfile, candidate: CandidateBrand) -> Optional[LocationInsight]:
    """
    Build a geo-context insight for a single candidate.

    Uses the geo-insight scoring variant, where a same-state match counts as
    same country rather than same city.

    Returns:
        Optional[LocationInsight]: None when the profile lacks a city or country,
                                   or the candidate has no location.
    """
    if not (candidate.location and profile.city_region and profile.country):
        return None

    relevance = classify_location_relevance(profile, candidate.location, state_counts_as_city=False)
    return LocationInsight(
        matched_brand_name=candidate.name,
        distance_km=relevance.estimated_distance_km,
        location_relevance_score=relevance.relevance_score,
        same_city=relevance.same_city,
        same_country=relevance.same_country,
        collaboration_potential=determine_collaboration_potential(relevance),
        local_opportunities=generate_local_opportunities(relevance),
    )


def _base_score(candidate: CandidateBrand) -> float:
    return candidate.cultural_align_score or candidate.match_score or 0


def calculate_geo_priority_scores(
    insights: List[LocationInsight],
    candidates: List[CandidateBrand],
) -> List[GeoPriorityResult]:
    """
    Re-rank candidates by boosting their base score with location relevance.

    Args:
        insights (List[LocationInsight]): Insights from build_location_insight.
        candidates (List[CandidateBrand]): All candidates, with or without an insight.

    Returns:
        List[GeoPriorityResult]: One entry per candidate, in input order.
    """
    by_name: Dict[str, LocationInsight] = {i.matched_brand_name: i for i in insights}
    results = []
    for cand in candidates:
        insight = by_name.get(cand.name)
        base = _base_score(cand)
        priority = base
        if insight:
            priority = min(100, base + insight.location_relevance_score * LOCATION_BOOST_FACTOR)

        results.append(GeoPriorityResult(
            brand_name=cand.name,
            base_score=base,
            geo_priority_score=round(priority, 2),
            location_boost=insight.location_relevance_score if insight else 0,
            collaboration_potential=insight.collaboration_potential if insight else "low",
        ))
    return results


def analyze_geo_context(
    profile: BrandProfile,
    candidates: List[CandidateBrand],
) -> Dict[str, GeoPriorityResult]:
    """
    Compute location insights and geo priority scores for a profile's candidates.

    Returns:
        Dict[str, GeoPriorityResult]: Mapping of brand name → geo priority result.
    """
    insights = []
    for cand in candidates:
        insight = build_location_insight(profile, cand)
        if insight:
            insights.append(insight)

    logger.debug(f"🌍 Geo context for '{profile.name}': {len(insights)}/{len(candidates)} brands located")
    return {r.brand_name: r for r in calculate_geo_priority_scores(insights, candidates)}
