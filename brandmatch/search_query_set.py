from typing import List
from brandmatch.config import MAX_SEARCH_QUERIES
from brandmatch.models import BrandProfile


def generate_search_queries(profile: BrandProfile, limit: int = MAX_SEARCH_QUERIES) -> List[str]:
    """
    Build web search queries for finding partner brands for a profile.

    Industry queries need both an industry and a location; cultural queries use
    the first three markers; generic partnership queries only need a location.

    Args:
        profile (BrandProfile): Brand profile to search for.
        limit (int): Maximum number of queries to return.

    Returns:
        List[str]: Ordered queries, most specific first.
                   Example: ['"Coffee" companies Portland partnership collaboration', ...]
    """
    queries = []
    industry = profile.industry or ""
    location = profile.location
    markers = [m for m in profile.cultural_markers if m]

    if industry and location:
        queries.append(f'"{industry}" companies {location} partnership collaboration')
        queries.append(f"{industry} brands {location} similar companies")

    if markers:
        queries.append(f"brands {' '.join(markers[:3])} {location} partnership".replace("  ", " "))

    if location:
        queries.append(f"startup companies {location} brand partnerships")
        queries.append(f"business collaboration opportunities {location}")

    return queries[:limit]
