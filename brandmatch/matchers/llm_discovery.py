import json
import re
from typing import Any, List, Optional
from loguru import logger

from brandmatch.config import LLM_MODEL, MIN_MATCH_SCORE
from brandmatch.models import BrandProfile, CandidateBrand, SearchResult
from brandmatch.clients import OpenAIClient

DISCOVERY_SYSTEM_PROMPT = (
    "You are a brand partnership expert. Return ONLY valid JSON arrays. "
    "Focus on real, existing brands."
)

EXTRACTION_SYSTEM_PROMPT = (
    "You are an expert business analyst specializing in identifying strategic "
    "partnerships and brand collaborations."
)

DISCOVERY_PROMPT_TEMPLATE = """Find {count} real brands that could partner with "{name}".

TARGET BRAND PROFILE:
- Name: {name}
- Industry: {industry}
- Location: {location}
- Mission: {mission}
- Cultural Markers: {markers}
- Collaboration Interests: {interests}

Find brands that:
1. Share similar values and target audiences
2. Are geographically accessible (prioritize {location} and surrounding areas)
3. Could realistically collaborate (events, partnerships, cross-promotions)
4. Are complementary rather than direct competitors

Return ONLY a valid JSON array with this exact structure:
[
  {{
    "name": "Brand Name",
    "industry": "Industry",
    "location": "City, Country",
    "culturalTasteMarkers": ["marker1", "marker2"],
    "collaborationInterests": ["type1", "type2"],
    "website": "https://website.com",
    "description": "Brief description",
    "matchScore": 75,
    "sourceUrl": "",
    "culturalAlignScore": 75,
    "collaborationPossibility": "High",
    "collaborationDescription": "Partnership potential"
  }}
]

Return exactly {count} brands as a valid JSON array."""

EXTRACTION_PROMPT_TEMPLATE = """Analyze these search results and extract potential brand partnership opportunities for "{name}" ({industry}, {location}).

Target brand details:
- Industry: {industry}
- Mission: {mission}
- Location: {location}
- Cultural markers: {markers}

Search Results:
{results}

Extract up to {max_brands} potential brand partners from these results. For each brand, provide:
1. Company/brand name
2. Industry sector
3. Location (city, country)
4. Website URL (if available)
5. Brief description (1-2 sentences)
6. Match type (industry_similar, location_based, cultural_alignment, or partnership_opportunity)
7. Overlap score (0.0-1.0 based on compatibility)

Return ONLY a valid JSON array with this structure:
[
  {{
    "name": "Brand Name",
    "industry": "Industry",
    "location": "City, Country",
    "website": "https://...",
    "description": "Brief description",
    "matchType": "industry_similar",
    "overlapScore": 0.75
  }}
]

Focus on real companies that could realistically partner with {name}. Exclude generic results, news articles, or non-business entities."""

MAX_BRANDS_PER_RESULT_PAGE = 8
_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


def extract_json_array(text: Optional[str]) -> List[Any]:
    """
    Parse the JSON array embedded in an LLM reply.

    Takes the outermost [...] span if the reply wraps it in prose or code fences,
    otherwise tries the whole reply.

    Raises:
        ValueError: If no JSON can be parsed (json.JSONDecodeError is a subclass).
    """
    content = (text or "").strip()
    found = _JSON_ARRAY.search(content)
    parsed = json.loads(found.group(0) if found else content)
    return parsed if isinstance(parsed, list) else []


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


def parse_candidate(item: Any) -> Optional[CandidateBrand]:
    """Convert one LLM JSON object into a CandidateBrand; None if it is not an object."""
    if not isinstance(item, dict):
        return None
    return CandidateBrand(
        name=_text(item.get("name")) or "",
        industry=_text(item.get("industry")),
        location=_text(item.get("location")),
        cultural_markers=_text_list(item.get("culturalTasteMarkers")),
        collaboration_interests=_text_list(item.get("collaborationInterests")),
        website=_text(item.get("website")),
        description=_text(item.get("description")),
        match_score=_number(item.get("matchScore")),
        source_url=_text(item.get("sourceUrl")),
        cultural_align_score=_number(item.get("culturalAlignScore")),
        collaboration_possibility=_text(item.get("collaborationPossibility")),
        collaboration_description=_text(item.get("collaborationDescription")),
        overlap_score=_number(item.get("overlapScore")),
    )


def validate_discovered(candidates: List[CandidateBrand], min_score: float = MIN_MATCH_SCORE) -> List[CandidateBrand]:
    """
    Keep complete candidates with a usable match score and fill in defaults.

    A candidate needs a name, industry, description and a numeric match score of
    at least min_score.
    """
    valid = []
    for cand in candidates:
        if not (cand.name and cand.industry and cand.description):
            continue
        if cand.match_score is None or cand.match_score < min_score:
            continue
        cand.match_score = cand.match_score or 75
        cand.cultural_align_score = cand.cultural_align_score or cand.match_score or 75
        cand.collaboration_possibility = cand.collaboration_possibility or "Medium"
        cand.collaboration_description = cand.collaboration_description or "Partnership potential"
        valid.append(cand)
    return valid


def build_discovery_prompt(profile: BrandProfile, brand_count: int) -> str:
    return DISCOVERY_PROMPT_TEMPLATE.format(
        count=brand_count,
        name=profile.name,
        industry=profile.industry or "",
        location=profile.location,
        mission=profile.mission_statement or "",
        markers=", ".join(profile.cultural_markers),
        interests=", ".join(profile.collaboration_interests),
    )


def build_extraction_prompt(profile: BrandProfile, results: List[SearchResult]) -> str:
    results_text = "\n\n".join(
        f"Title: {r.title}\nURL: {r.link}\nDescription: {r.snippet}" for r in results
    )
    return EXTRACTION_PROMPT_TEMPLATE.format(
        name=profile.name,
        industry=profile.industry or "",
        location=profile.location,
        mission=profile.mission_statement or "",
        markers=", ".join(profile.cultural_markers) or "N/A",
        results=results_text,
        max_brands=MAX_BRANDS_PER_RESULT_PAGE,
    )


async def discover_brands_with_llm(profile: BrandProfile, brand_count: int) -> List[CandidateBrand]:
    """
    Ask the LLM directly for partner brands matching a brand profile.

    Args:
        profile (BrandProfile): Brand profile to find partners for.
        brand_count (int): Number of brands to request.

    Returns:
        List[CandidateBrand]: Validated candidates. Empty on API or parse failure.
    """
    # Cache here - Cache discovered brands by (profile fields, brand_count)
    try:
        openai_client = OpenAIClient()
        resp = await openai_client.chat_completions_create(
            model=LLM_MODEL,
            messages=[
                {"role": "system", "content": DISCOVERY_SYSTEM_PROMPT},
                {"role": "user", "content": build_discovery_prompt(profile, brand_count)},
            ],
            temperature=0.3,
            max_tokens=2500,
        )
        content = resp.choices[0].message.content
    except Exception as e:
        logger.debug(f"⚠️ LLM discovery failed for '{profile.name}': {e}")
        return []

    if not content:
        return []

    try:
        items = extract_json_array(content)
    except ValueError as e:
        logger.debug(f"⚠️ Failed to parse LLM discovery response for '{profile.name}': {e}")
        logger.debug(f"Response content: {content}")
        return []

    candidates = [c for c in (parse_candidate(i) for i in items) if c is not None]
    logger.debug(f"🔎 LLM discovered {len(candidates)} brands for '{profile.name}'")
    return validate_discovered(candidates)


async def extract_brands_from_results(
    results: List[SearchResult],
    profile: BrandProfile,
) -> List[CandidateBrand]:
    """
    Use the LLM to pull candidate partner brands out of one page of search results.

    Args:
        results (List[SearchResult]): Search results for a single query.
        profile (BrandProfile): Brand profile the search was run for.

    Returns:
        List[CandidateBrand]: Named candidates. Empty if there were no results or on failure.
    """
    if not results:
        return []

    try:
        openai_client = OpenAIClient()
        resp = await openai_client.chat_completions_create(
            model=LLM_MODEL,
            messages=[
                {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": build_extraction_prompt(profile, results)},
            ],
            temperature=0.3,
        )
        items = extract_json_array(resp.choices[0].message.content)
    except Exception as e:
        logger.debug(f"⚠️ LLM extraction failed for '{profile.name}': {e}")
        return []

    candidates = [c for c in (parse_candidate(i) for i in items) if c is not None and c.name]
    return candidates[:MAX_BRANDS_PER_RESULT_PAGE]
