"""
Singleton OpenAI client shared by the brand discovery and search-result
extraction prompts, rate limited with aiolimiter.
"""
import os
from aiolimiter import AsyncLimiter
from openai import AsyncOpenAI
from loguru import logger

from brandmatch.config import OPENAI_API_KEY, CONCURRENCY


class OpenAIClient:
    """
    Singleton OpenAI client for the brand matching pipeline.

    Every profile in a batch sends one discovery prompt (discover mode) or one
    extraction prompt per search query (analyze mode) concurrently, so all calls
    go through one AsyncOpenAI instance and one AsyncLimiter. Construction
    raises ValueError when no API key is configured.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not OpenAIClient._initialized:
            api_key = OPENAI_API_KEY or os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError("OPENAI_API_KEY must be set in environment or config")

            self.client = AsyncOpenAI(api_key=api_key)
            # Token bucket: CONCURRENCY requests per second, capped well below
            # the per-minute limits of the paid tiers
            self.rate_limiter = AsyncLimiter(max_rate=min(CONCURRENCY, 500), time_period=1.0)
            OpenAIClient._initialized = True

    async def chat_completions_create(self, **kwargs):
        """
        Create a chat completion with rate limiting.
        Accepts all arguments that AsyncOpenAI.chat.completions.create accepts.
        Errors are logged and re-raised; callers in llm_discovery fall back to
        an empty brand list.

        Returns:
            The response from OpenAI's chat completions API.
        """
        async with self.rate_limiter:
            try:
                return await self.client.chat.completions.create(**kwargs)
            except Exception as e:
                logger.debug(f"⚠️ OpenAI API request failed: {e}")
                raise
