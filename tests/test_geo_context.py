from brandmatch.models import BrandProfile, CandidateBrand
from brandmatch.geo_context import (
    analyze_geo_context,
    build_location_insight,
    calculate_geo_priority_scores,
)


def _austin():
    return BrandProfile(name="Hill Country Co", city_region="Austin, TX", country="United States")


def test_insight_needs_profile_city_and_country():
    profile = BrandProfile(name="No City", country="United States")
    candidate = CandidateBrand(name="Houston Hats", location="Houston, Texas")

    assert build_location_insight(profile, candidate) is None
    assert build_location_insight(_austin(), CandidateBrand(name="Nowhere")) is None


def test_same_state_is_same_country_for_geo_insights():
    insight = build_location_insight(_austin(), CandidateBrand(name="Houston Hats", location="Houston, Texas"))

    assert insight.same_city is False
    assert insight.same_country is True
    assert insight.location_relevance_score == 75
    assert insight.distance_km == 50
    assert insight.collaboration_potential == "medium"
    assert [o.type for o in insight.local_opportunities] == [
        "regional_campaign",
        "distribution_partnership",
        "digital_collaboration",
    ]


def test_same_city_insight():
    insight = build_location_insight(_austin(), CandidateBrand(name="Austin Ale", location="Austin, Texas"))

    assert insight.same_city is True
    assert insight.collaboration_potential == "high"
    assert [o.type for o in insight.local_opportunities][:2] == ["local_event", "shared_retail"]


def test_far_away_insight_only_offers_digital():
    insight = build_location_insight(_austin(), CandidateBrand(name="Kyoto Tea", location="Kyoto, Japan"))

    assert insight.collaboration_potential == "low"
    assert insight.location_relevance_score == 25
    assert [o.type for o in insight.local_opportunities] == ["digital_collaboration"]


def test_geo_priority_scores_are_boosted_and_capped():
    local = CandidateBrand(name="Austin Ale", location="Austin, Texas", cultural_align_score=95, match_score=50)
    far = CandidateBrand(name="Kyoto Tea", location="Kyoto, Japan", match_score=60.333)
    unknown = CandidateBrand(name="Mystery", match_score=40)
    insights = [
        build_location_insight(_austin(), local),
        build_location_insight(_austin(), far),
    ]

    results = calculate_geo_priority_scores(insights, [local, far, unknown])

    assert results[0].base_score == 95
    assert results[0].geo_priority_score == 100
    assert results[0].location_boost == 100
    assert results[1].geo_priority_score == 62.83
    assert results[1].collaboration_potential == "low"
    assert results[2].geo_priority_score == 40
    assert results[2].location_boost == 0
    assert results[2].collaboration_potential == "low"


def test_analyze_geo_context_keys_by_brand_name():
    local = CandidateBrand(name="Austin Ale", location="Austin, Texas", match_score=70)
    unknown = CandidateBrand(name="Mystery", match_score=40)

    geo = analyze_geo_context(_austin(), [local, unknown])

    assert set(geo) == {"Austin Ale", "Mystery"}
    assert geo["Austin Ale"].geo_priority_score == 80
