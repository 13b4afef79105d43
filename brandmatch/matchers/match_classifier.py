from typing import List, Optional

from brandmatch.models import (
    BrandProfile,
    CandidateBrand,
    CollaborationLevel,
    LocationTier,
    MatchTag,
)
from brandmatch.matchers.location_matcher import classify_location_relevance

HIGH_COLLABORATION_PHRASES = (
    "seeking partnerships",
    "recently funded",
    "series a",
    "open to collaborations",
)
MEDIUM_COLLABORATION_PHRASES = (
    "partnerships",
    "collaborations",
    "established",
)
MEDIUM_MATCH_SCORE = 70

GEOGRAPHIC_BOOST = {
    LocationTier.CITY: 15,
    LocationTier.STATE: 10,
    LocationTier.REGION: 5,
    LocationTier.COUNTRY: 5,
    LocationTier.NONE: 0,
}


def _markers_overlap(source_markers: Optional[List[str]], candidate_markers: Optional[List[str]]) -> bool:
    """True if any marker is a case-insensitive substring of any marker on the other side."""
    source = [m.lower() for m in source_markers or [] if isinstance(m, str) and m.strip()]
    candidate = [m.lower() for m in candidate_markers or [] if isinstance(m, str) and m.strip()]
    return any(s in c or c in s for s in source for c in candidate)


def determine_match_type(candidate: CandidateBrand, source: BrandProfile) -> MatchTag:
    """
    Pick the single best reason a candidate is shown as a match.

    Rules are tried in order and the first one satisfied wins:
    location, exact industry, overlapping cultural markers, then the
    partnership-opportunity fallback.

    Args:
        candidate (CandidateBrand): Candidate brand, possibly with missing fields.
        source (BrandProfile): Brand profile the search was run for.

    Returns:
        MatchTag: Match tag for this pair.
    """
    relevance = classify_location_relevance(source, candidate.location)
    if relevance.tier is not LocationTier.NONE:
        return MatchTag.LOCATION_BASED

    if candidate.industry and candidate.industry == source.industry:
        return MatchTag.INDUSTRY_SIMILAR

    if _markers_overlap(source.cultural_markers, candidate.cultural_markers):
        return MatchTag.CULTURAL_ALIGNMENT

    return MatchTag.PARTNERSHIP_OPPORTUNITY


def determine_collaboration_level(candidate: CandidateBrand) -> CollaborationLevel:
    """Estimate openness to partnership from keywords in the candidate's description."""
    description = (candidate.description or "").lower()

    if any(phrase in description for phrase in HIGH_COLLABORATION_PHRASES):
        return CollaborationLevel.HIGH

    score = candidate.match_score
    if any(phrase in description for phrase in MEDIUM_COLLABORATION_PHRASES) or (
        isinstance(score, (int, float)) and score > MEDIUM_MATCH_SCORE
    ):
        return CollaborationLevel.MEDIUM

    return CollaborationLevel.LOW


def generate_collaboration_description(candidate: CandidateBrand) -> str:
    """Short human-readable label for the candidate's collaboration potential."""
    level = candidate.collaboration_possibility or determine_collaboration_level(candidate).value
    description = (candidate.description or "").lower()

    if level == CollaborationLevel.HIGH.value:
        if "funded" in description:
            return "Recently funded, actively seeking partnerships"
        if "growing" in description:
            return "High growth potential, open to collaborations"
        return "Active partnership seeker"

    if level == CollaborationLevel.MEDIUM.value:
        if "established" in description:
            return "Established brand, selective partnerships"
        return "Open to strategic partnerships"

    return "Limited collaboration indicators"


def calculate_geographic_boost(candidate: CandidateBrand, source: BrandProfile) -> int:
    """Ranking boost for candidates located close to the brand profile."""
    relevance = classify_location_relevance(source, candidate.location)
    return GEOGRAPHIC_BOOST[relevance.tier]


def is_local_brand(candidate: CandidateBrand, source: BrandProfile) -> bool:
    relevance = classify_location_relevance(source, candidate.location)
    return relevance.tier in (LocationTier.CITY, LocationTier.STATE)
