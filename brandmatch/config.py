# brandmatch/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# API Keys
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
GOOGLE_SEARCH_API_KEY = os.getenv("GOOGLE_SEARCH_API_KEY")
GOOGLE_SEARCH_ENGINE_ID = os.getenv("GOOGLE_SEARCH_ENGINE_ID")

# Runtime parameters
BATCH_SIZE = 5
CONCURRENCY = 10
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")

# Discovery / analysis thresholds
DEFAULT_BRAND_COUNT = 15
MIN_MATCH_SCORE = 20
MIN_OVERLAP_SCORE = 0.3
MAX_SEARCH_QUERIES = 4
MAX_FILTERED_MATCHES = 20
SEARCH_RESULTS_PER_QUERY = 10
TREND_THRESHOLD_PCT = 5

# URLs
GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"

# File names
INPUT_CSV = "brand_profiles.csv"
OUTPUT_CSV = "brand_matches.csv"
