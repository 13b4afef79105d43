import os
import asyncio
import argparse
import pandas as pd
import csv
from typing import Dict, List
import sys
from loguru import logger

from brandmatch.models import BrandMatch, BrandProfile, DiscoveryResult
from brandmatch.matchers.matching_orchestrator import analyze_brand_matches, discover_aligned_brands
from brandmatch.trends import calculate_overall_trend, compare_with_previous
from brandmatch.config import INPUT_CSV, OUTPUT_CSV, BATCH_SIZE, LOG_LEVEL, DEFAULT_BRAND_COUNT
from brandmatch.clients import GoogleSearchClient

OUTPUT_COLUMNS = [
    "Brand profile",
    "Brand",
    "Industry",
    "Location",
    "Website",
    "Match type",
    "Overlap score",
    "Score",
    "Collaboration possibility",
    "Collaboration description",
    "Geographic boost",
    "Local",
    "Geo priority score",
    "Trend",
    "Trend percentage",
]
PREVIOUS_SCORE_COLUMNS = frozenset({"Brand profile", "Brand", "Score"})


def _split_list(value) -> List[str]:
    """Split a ';'-separated CSV cell into a list."""
    if not value:
        return []
    return [part.strip() for part in value.split(";") if part.strip()]


def load_profiles_from_csv(file_path: str, nrows: int = None) -> List[BrandProfile]:
    """Load brand profiles from CSV and convert to BrandProfile objects."""
    df = pd.read_csv(file_path, nrows=nrows)
    profiles = []
    for _, row in df.iterrows():
        # Helper to safely extract values from pandas Series, converting NaN to None
        def safe_get(col):
            if col not in row.index:
                return None
            val = row[col]
            if pd.isna(val):
                return None
            return str(val).strip() or None

        name = safe_get("Brand name")
        if not name:
            logger.debug(f"Skipping row without a brand name: {row.to_dict()}")
            continue

        profiles.append(BrandProfile(
            name=name,
            industry=safe_get("Industry"),
            country=safe_get("Country"),
            city_region=safe_get("City/Region"),
            mission_statement=safe_get("Mission"),
            cultural_markers=_split_list(safe_get("Cultural markers")),
            collaboration_interests=_split_list(safe_get("Collaboration interests")),
        ))
    return profiles


def load_previous_scores(file_path: str) -> Dict[str, Dict[str, float]]:
    """
    Read scores from a previous output CSV, keyed by brand profile then brand.

    Returns an empty mapping if there is no previous output or it lacks the
    brand profile, brand and score columns.
    """
    if not os.path.exists(file_path):
        return {}
    try:
        df = pd.read_csv(file_path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        logger.warning(f"Could not read previous results from {file_path}: {e}")
        return {}
    if not PREVIOUS_SCORE_COLUMNS <= set(df.columns):
        missing = sorted(PREVIOUS_SCORE_COLUMNS - set(df.columns))
        logger.warning(f"Previous results in {file_path} lack columns {missing}, skipping trends")
        return {}

    previous: Dict[str, Dict[str, float]] = {}
    for _, row in df.iterrows():
        if pd.isna(row.get("Score")):
            continue
        previous.setdefault(str(row["Brand profile"]), {})[str(row["Brand"])] = float(row["Score"])
    return previous


def match_score(match: BrandMatch) -> float:
    """Score tracked across runs: cultural alignment, else match score, else overlap."""
    cand = match.candidate
    return cand.cultural_align_score or cand.match_score or round(match.overlap_score * 100, 2)


def attach_trends(result: DiscoveryResult, previous: Dict[str, float]) -> str:
    """Attach a TrendResult to every match and return the overall trend for the profile."""
    current = {m.candidate.name: match_score(m) for m in result.matches}
    trends = {t.brand_name: t for t in compare_with_previous(current, previous)}
    for match in result.matches:
        match.trend = trends.get(match.candidate.name)
    return calculate_overall_trend(list(trends.values()))


def to_row(result: DiscoveryResult, match: BrandMatch) -> list:
    cand = match.candidate
    return [
        result.profile.name,
        cand.name,
        cand.industry or "",
        cand.location or "",
        cand.website or "",
        match.match_type.value,
        round(match.overlap_score, 2),
        match_score(match),
        match.collaboration_possibility,
        match.collaboration_description,
        match.geographic_boost,
        match.is_local,
        match.geo_priority.geo_priority_score if match.geo_priority else "",
        match.trend.trend_direction if match.trend else "",
        match.trend.trend_percentage if match.trend else "",
    ]


def batch_iter(profiles: List[BrandProfile], batch_size: int):
    """
    Yield index and BrandProfile slices of size `batch_size` for batched processing.
    """
    n = len(profiles)
    for i in range(0, n, batch_size):
        yield i, profiles[i:i+batch_size]


async def process_profile(profile: BrandProfile, mode: str, brand_count: int) -> DiscoveryResult:
    """
    Run one brand profile through the selected discovery pipeline.

    Args:
        profile (BrandProfile): Input brand profile.
        mode (str): "discover" for direct LLM discovery, "analyze" for search + extraction.
        brand_count (int): Number of brands to request in discover mode.

    Returns:
        DiscoveryResult: Classified matches for this profile.
    """
    if mode == "analyze":
        return await analyze_brand_matches(profile)
    return await discover_aligned_brands(profile, brand_count)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Find and classify partner brands for brand profiles.")
    parser.add_argument("--mode", choices=["discover", "analyze"], default="discover",
                        help="discover: ask the LLM directly; analyze: web search + LLM extraction")
    parser.add_argument("--input", default=INPUT_CSV, help="CSV of brand profiles")
    parser.add_argument("--output", default=OUTPUT_CSV, help="CSV to write matches to")
    parser.add_argument("--brand-count", type=int, default=DEFAULT_BRAND_COUNT,
                        help="brands to request per profile in discover mode")
    parser.add_argument("--limit", type=int, default=None, help="only process the first N profiles")
    return parser.parse_args(argv)


async def main(argv=None):
    """
    Orchestrate the full batch processing pipeline.

    - Loads brand profiles from the input CSV.
    - Processes each batch asynchronously to discover and classify partner brands.
    - Compares scores with the previous output to attach trends.
    - Writes results incrementally to the output CSV.
    """
    args = parse_args(argv)

    # Initialize logs
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    profiles = load_profiles_from_csv(args.input, nrows=args.limit)
    logger.info(f"Loaded {len(profiles)} brand profiles from {args.input}")

    # Read the previous run before the output file is replaced
    output_path = args.output
    previous_scores = load_previous_scores(output_path)
    if os.path.exists(output_path):
        os.remove(output_path)
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(OUTPUT_COLUMNS)

    # Process in batches, but use async.gather for parallelism within each batch
    try:
        for start_idx, batch_profiles in batch_iter(profiles, BATCH_SIZE):
            logger.info(f"Processing profiles {start_idx}..{start_idx + len(batch_profiles) - 1}")

            results = await asyncio.gather(*[
                process_profile(profile, args.mode, args.brand_count) for profile in batch_profiles
            ])

            with open(output_path, "a", newline="") as f:
                writer = csv.writer(f)
                for result in results:
                    overall = attach_trends(result, previous_scores.get(result.profile.name, {}))
                    logger.info(f"'{result.profile.name}': {result.match_count} matches, trend {overall}")
                    for match in result.matches:
                        writer.writerow(to_row(result, match))
    finally:
        # Cleanup: close the search client session to prevent unclosed connector warnings
        if args.mode == "analyze" and GoogleSearchClient._initialized:
            await GoogleSearchClient().close()


if __name__ == "__main__":
    asyncio.run(main())
