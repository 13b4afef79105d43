"""Client singletons for external API interactions."""
from brandmatch.clients.google_search_client import GoogleSearchClient, GoogleSearchError
from brandmatch.clients.openai_client import OpenAIClient

__all__ = ["GoogleSearchClient", "GoogleSearchError", "OpenAIClient"]
