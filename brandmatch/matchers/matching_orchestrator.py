# brandmatch/matchers/matching_orchestrator.py

import asyncio
from typing import List
from loguru import logger

from brandmatch.config import DEFAULT_BRAND_COUNT, MAX_FILTERED_MATCHES, MIN_OVERLAP_SCORE
from brandmatch.models import BrandMatch, BrandProfile, CandidateBrand, DiscoveryResult
from brandmatch.geo_context import analyze_geo_context
from brandmatch.search_query_set import generate_search_queries
from brandmatch.search_fetcher import fetch_search_results
from brandmatch.matchers.llm_discovery import discover_brands_with_llm, extract_brands_from_results
from brandmatch.matchers.match_classifier import (
    calculate_geographic_boost,
    determine_collaboration_level,
    determine_match_type,
    generate_collaboration_description,
    is_local_brand,
)


def remove_duplicate_brands(candidates: List[CandidateBrand]) -> List[CandidateBrand]:
    """Drop candidates whose name repeats an earlier one, ignoring case and surrounding whitespace."""
    seen = set()
    unique = []
    for cand in candidates:
        key = cand.name.lower().strip()
        if key in seen:
            continue
        seen.add(key)
        unique.append(cand)
    return unique


def classify_candidate(profile: BrandProfile, candidate: CandidateBrand, overlap_score: float) -> BrandMatch:
    """Run every rule-based classifier over a single candidate."""
    return BrandMatch(
        candidate=candidate,
        match_type=determine_match_type(candidate, profile),
        overlap_score=overlap_score,
        collaboration_possibility=(
            candidate.collaboration_possibility or determine_collaboration_level(candidate).value
        ),
        collaboration_description=(
            candidate.collaboration_description or generate_collaboration_description(candidate)
        ),
        geographic_boost=calculate_geographic_boost(candidate, profile),
        is_local=is_local_brand(candidate, profile),
    )


def _attach_geo_context(profile: BrandProfile, matches: List[BrandMatch]) -> None:
    geo = analyze_geo_context(profile, [m.candidate for m in matches])
    for match in matches:
        match.geo_priority = geo.get(match.candidate.name)


async def discover_aligned_brands(
    profile: BrandProfile,
    brand_count: int = DEFAULT_BRAND_COUNT,
) -> DiscoveryResult:
    """
    Discover partner brands by asking the LLM directly, then classify them.

    Repeated brand names keep their first occurrence only.

    Args:
        profile (BrandProfile): Brand profile to find partners for.
        brand_count (int): Number of brands to request from the LLM.

    Returns:
        DiscoveryResult: Classified matches for this profile.
    """
    candidates = await discover_brands_with_llm(profile, brand_count)
    # Geo context and trends are keyed by brand name
    candidates = remove_duplicate_brands(candidates)

    matches = [
        classify_candidate(profile, cand, (cand.match_score or 0) / 100)
        for cand in candidates
    ]
    _attach_geo_context(profile, matches)

    logger.debug(f"🤝 Discovered {len(matches)} aligned brands for '{profile.name}'")
    return DiscoveryResult(
        profile=profile,
        search_query=f"LLM brand discovery for {profile.name}",
        matches=matches,
    )


async def analyze_brand_matches(profile: BrandProfile) -> DiscoveryResult:
    """
    Find partner brands through web search plus LLM extraction, then classify them.

    Candidates are de-duplicated by name, filtered by overlap score and capped
    to the best MAX_FILTERED_MATCHES.

    Args:
        profile (BrandProfile): Brand profile to find partners for.

    Returns:
        DiscoveryResult: Classified matches, highest overlap first.
    """
    queries = generate_search_queries(profile)
    if not queries:
        logger.debug(f"No search queries could be built for '{profile.name}'")
        return DiscoveryResult(profile=profile, search_query="")

    # 1) Web search, all queries in parallel
    results_by_query = await fetch_search_results(queries)

    # 2) LLM extraction per result page
    extracted = await asyncio.gather(*[
        extract_brands_from_results(results, profile)
        for results in results_by_query.values()
    ])
    all_candidates = [cand for page in extracted for cand in page]

    # 3) De-duplicate, filter and rank
    unique = remove_duplicate_brands(all_candidates)
    filtered = sorted(
        (c for c in unique if (c.overlap_score or 0) >= MIN_OVERLAP_SCORE),
        key=lambda c: c.overlap_score,
        reverse=True,
    )[:MAX_FILTERED_MATCHES]

    matches = [classify_candidate(profile, cand, cand.overlap_score) for cand in filtered]
    _attach_geo_context(profile, matches)

    logger.debug(
        f"📊 Analyzed {len(all_candidates)} extracted brands for '{profile.name}', "
        f"kept {len(matches)}"
    )
    return DiscoveryResult(
        profile=profile,
        search_query="; ".join(queries),
        matches=matches,
    )
