import asyncio
import time
from datetime import datetime
from typing import Dict, List
from loguru import logger
from brandmatch.models import SearchResult
from brandmatch.clients import GoogleSearchClient


async def _search_one(search_client: GoogleSearchClient, query: str) -> List[SearchResult]:
    """
    Execute a single web search and convert the items to SearchResult records.

    Args:
        search_client (GoogleSearchClient): The search client singleton instance.
        query (str): Search query text.

    Returns:
        List[SearchResult]: Results for the query. Returns an empty list on timeout or failure.
    """
    start = time.perf_counter()
    logger.debug(f"▶️ [{datetime.now().strftime('%H:%M:%S')}] START search for '{query}'")
    try:
        items = await search_client.search(query)
        results = [
            SearchResult(
                title=item.get("title", ""),
                link=item.get("link", ""),
                snippet=item.get("snippet") or "",
            )
            for item in items
            if isinstance(item, dict)
        ]
        duration = time.perf_counter() - start
        logger.debug(
            f"✅ [{datetime.now().strftime('%H:%M:%S')}] Completed search for '{query}' "
            f"in {duration:.2f}s ({len(results)} results)"
        )
        return results
    except asyncio.TimeoutError:
        logger.debug(f"⏱️ [{datetime.now().strftime('%H:%M:%S')}] TIMEOUT search for '{query}'")
        return []
    except Exception as e:
        logger.debug(f"⚠️ [{datetime.now().strftime('%H:%M:%S')}] ERROR searching '{query}': {e}")
        return []


async def fetch_search_results(queries: List[str]) -> Dict[str, List[SearchResult]]:
    """
    Run all queries for one brand profile in parallel.

    Args:
        queries (List[str]): Queries from generate_search_queries.

    Returns:
        Dict[str, List[SearchResult]]: Mapping of query → results, in query order.
                                        Failed queries map to an empty list.
    """
    search_client = GoogleSearchClient()

    results = await asyncio.gather(
        *[_search_one(search_client, q) for q in queries],
        return_exceptions=True,
    )

    by_query: Dict[str, List[SearchResult]] = {}
    for query, res in zip(queries, results):
        if isinstance(res, Exception):
            logger.debug(f"Search failed for '{query}': {res}")
            res = []
        by_query[query] = res
    return by_query
