"""
Typed data models for the brand matching pipeline.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MatchTag(str, Enum):
    """Reason code attached to a candidate explaining why it was surfaced."""
    LOCATION_BASED = "location_based"
    INDUSTRY_SIMILAR = "industry_similar"
    CULTURAL_ALIGNMENT = "cultural_alignment"
    PARTNERSHIP_OPPORTUNITY = "partnership_opportunity"


class CollaborationLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class LocationTier(str, Enum):
    """Granularity at which two locations were found to coincide."""
    CITY = "city"
    STATE = "state"
    REGION = "region"
    COUNTRY = "country"
    NONE = "none"


@dataclass
class BrandProfile:
    """Brand profile the search is run for, loaded from CSV."""
    name: str
    industry: Optional[str] = None
    country: Optional[str] = None
    city_region: Optional[str] = None
    mission_statement: Optional[str] = None
    cultural_markers: List[str] = field(default_factory=list)
    collaboration_interests: List[str] = field(default_factory=list)

    @property
    def location(self) -> str:
        """Preferred single location string used in prompts and queries."""
        return self.country or self.city_region or ""


@dataclass
class CandidateBrand:
    """Candidate partner brand parsed from an LLM response. Any field may be missing."""
    name: str = ""
    industry: Optional[str] = None
    location: Optional[str] = None
    cultural_markers: List[str] = field(default_factory=list)
    collaboration_interests: List[str] = field(default_factory=list)
    website: Optional[str] = None
    description: Optional[str] = None
    match_score: Optional[float] = None  # 0-100
    source_url: Optional[str] = None
    cultural_align_score: Optional[float] = None  # 0-100
    collaboration_possibility: Optional[str] = None
    collaboration_description: Optional[str] = None
    overlap_score: Optional[float] = None  # 0.0-1.0


@dataclass
class LocationRelevance:
    """How close a candidate's location is to a brand profile's location."""
    tier: LocationTier
    same_city: bool
    same_country: bool
    relevance_score: int  # 100, 75 or 25
    estimated_distance_km: int  # 0, 50 or 500


@dataclass
class SearchResult:
    """Single item returned by the web search API."""
    title: str
    link: str
    snippet: str = ""


@dataclass
class LocalOpportunity:
    type: str
    description: str
    feasibility: str


@dataclass
class LocationInsight:
    """Geo-context insight for one (profile, candidate) pair."""
    matched_brand_name: str
    distance_km: int
    location_relevance_score: int
    same_city: bool
    same_country: bool
    collaboration_potential: str  # high / medium / low
    local_opportunities: List[LocalOpportunity] = field(default_factory=list)


@dataclass
class GeoPriorityResult:
    brand_name: str
    base_score: float
    geo_priority_score: float
    location_boost: int
    collaboration_potential: str


@dataclass
class TrendResult:
    """Score movement of a candidate brand between two runs."""
    brand_name: str
    trend_direction: str  # rising / falling / stable / new
    trend_percentage: float
    previous_score: Optional[float]
    current_score: float
    is_new: bool


@dataclass
class BrandMatch:
    """Classified candidate ready for output."""
    candidate: CandidateBrand
    match_type: MatchTag
    overlap_score: float
    collaboration_possibility: str
    collaboration_description: str
    geographic_boost: int = 0
    is_local: bool = False
    geo_priority: Optional[GeoPriorityResult] = None
    trend: Optional[TrendResult] = None


@dataclass
class DiscoveryResult:
    """Final result of a discovery or analysis run for one brand profile."""
    profile: BrandProfile
    search_query: str
    matches: List[BrandMatch] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matches)
