"""
Singleton Google Custom Search client with rate limiting using aiolimiter.
"""
from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from typing import Any, Dict, List, Optional
from loguru import logger

from brandmatch.config import (
    CONCURRENCY,
    GOOGLE_SEARCH_API_KEY,
    GOOGLE_SEARCH_ENGINE_ID,
    GOOGLE_SEARCH_URL,
    SEARCH_RESULTS_PER_QUERY,
)


class GoogleSearchError(RuntimeError):
    """Raised when the Custom Search API returns an error payload."""


class GoogleSearchClient:
    """
    Singleton client for the Google Custom Search JSON API.
    Uses AsyncLimiter for rate limiting instead of semaphores.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not GoogleSearchClient._initialized:
            if not GOOGLE_SEARCH_API_KEY or not GOOGLE_SEARCH_ENGINE_ID:
                raise ValueError(
                    "GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_ENGINE_ID must be set in environment or config"
                )
            self.api_key = GOOGLE_SEARCH_API_KEY
            self.engine_id = GOOGLE_SEARCH_ENGINE_ID
            self.base_url = GOOGLE_SEARCH_URL
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            GoogleSearchClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=30))
        return self._session

    async def search(self, query: str, num: int = SEARCH_RESULTS_PER_QUERY) -> List[Dict[str, Any]]:
        """
        Run a single web search and return the raw result items.

        Args:
            query: Search query text.
            num: Number of results to request (the API caps this at 10).

        Returns:
            List of result item dictionaries; empty when the search has no hits.
        """
        async with self.rate_limiter:
            session = await self._get_session()
            params = {
                "key": self.api_key,
                "cx": self.engine_id,
                "q": query,
                "num": min(num, 10),
            }

            try:
                async with session.get(self.base_url, params=params) as resp:
                    data = await resp.json()

                    if "error" in data:
                        error = data["error"]
                        raise GoogleSearchError(
                            f"Custom Search API error ({error.get('code', 'unknown')}): "
                            f"{error.get('message', 'no details')}"
                        )

                    return data.get("items", []) or []
            except Exception as e:
                logger.debug(f"⚠️ Google search request failed for '{query}': {e}")
                raise

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
