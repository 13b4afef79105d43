import pytest

from brandmatch.models import BrandProfile, LocationTier
from brandmatch.matchers.location_matcher import (
    classify_location_relevance,
    countries_in,
    match_location_tier,
    states_in,
)


def _profile(city=None, country=None):
    return BrandProfile(name="Source", city_region=city, country=country)


def test_metro_alias_is_city_tier():
    relevance = classify_location_relevance(_profile("New York", "United States"), "Brooklyn, NY")

    assert relevance.tier is LocationTier.CITY
    assert relevance.same_city is True
    assert relevance.relevance_score == 100
    assert relevance.estimated_distance_km == 0


def test_country_alias_is_country_tier():
    relevance = classify_location_relevance(_profile("", "Germany"), "Berlin, Deutschland")

    assert relevance.tier is LocationTier.COUNTRY
    assert relevance.same_city is False
    assert relevance.same_country is True
    assert relevance.relevance_score == 75
    assert relevance.estimated_distance_km == 50


def test_city_tier_wins_over_country_tier():
    """Santa Monica is in the LA metro set and both sides name the US: the finer tier wins."""
    tier = match_location_tier("Los Angeles", "United States", "Santa Monica, USA")
    assert tier is LocationTier.CITY


def test_direct_city_containment():
    tier = match_location_tier("Portland", "United States", "Portland, Oregon")
    assert tier is LocationTier.CITY


def test_state_match_scores_as_city_in_discovery_variant():
    source = _profile("Austin, TX", "United States")

    relevance = classify_location_relevance(source, "Houston, Texas")

    assert relevance.tier is LocationTier.STATE
    assert relevance.same_city is False
    assert relevance.same_country is False
    assert relevance.relevance_score == 100
    assert relevance.estimated_distance_km == 0


def test_state_match_scores_as_country_in_geo_variant():
    source = _profile("Austin, TX", "United States")

    relevance = classify_location_relevance(source, "Houston, Texas", state_counts_as_city=False)

    assert relevance.tier is LocationTier.STATE
    assert relevance.same_city is False
    assert relevance.same_country is True
    assert relevance.relevance_score == 75
    assert relevance.estimated_distance_km == 50


def test_state_name_inside_longer_state_name_does_not_match():
    assert states_in("charleston, west virginia") == {"west virginia"}

    relevance = classify_location_relevance(
        _profile("Richmond, Virginia", "United States"), "Charleston, West Virginia"
    )

    assert relevance.tier is not LocationTier.STATE


def test_washington_dc_is_not_washington_state():
    assert states_in("washington, dc") == frozenset()
    assert states_in("washington d.c., united states") == frozenset()

    tier = match_location_tier("Washington, DC", None, "Seattle, Washington")

    assert tier is LocationTier.NONE


def test_same_region_different_state():
    relevance = classify_location_relevance(_profile("Portland", "Oregon"), "Seattle, WA")

    assert relevance.tier is LocationTier.REGION
    assert relevance.same_country is True
    assert relevance.relevance_score == 75
    assert relevance.estimated_distance_km == 50


def test_unrelated_locations_fall_through_to_none():
    relevance = classify_location_relevance(_profile("Paris", "France"), "Tokyo, Japan")

    assert relevance.tier is LocationTier.NONE
    assert relevance.same_city is False
    assert relevance.same_country is False
    assert relevance.relevance_score == 25
    assert relevance.estimated_distance_km == 500


def test_missing_locations_are_none_tier():
    assert classify_location_relevance(_profile(), None).tier is LocationTier.NONE
    assert classify_location_relevance(_profile(), "Berlin, Germany").tier is LocationTier.NONE
    assert classify_location_relevance(_profile("Berlin", "Germany"), "").tier is LocationTier.NONE


def test_abbreviations_inside_words_do_not_match():
    # "germany" ends in "ny" but is not New York
    assert states_in("germany") == frozenset()
    assert match_location_tier("", "Germany", "Albany, NY") is LocationTier.NONE


def test_state_codes_only_match_as_a_whole_part():
    assert states_in("austin, tx") == frozenset({"texas"})
    assert states_in("rio de janeiro, brazil") == frozenset()


def test_no_diacritic_folding():
    assert countries_in("madrid, españa") == frozenset({"spain"})
    assert match_location_tier("", "Spain", "Madrid, Espana") is LocationTier.NONE


@pytest.mark.parametrize(
    "city, country, candidate_location",
    [
        ("New York", "United States", "Manhattan, New York"),
        ("Austin, TX", "United States", "Dallas, TX"),
        ("Portland", "Oregon", "San Diego, California"),
        ("London", "UK", "Manchester, England"),
        ("Paris", "France", "Lagos, Nigeria"),
        ("", "", ""),
        (None, "???", "somewhere"),
    ],
)
@pytest.mark.parametrize("state_counts_as_city", [True, False])
def test_scores_are_always_from_the_fixed_sets(city, country, candidate_location, state_counts_as_city):
    relevance = classify_location_relevance(
        _profile(city, country), candidate_location, state_counts_as_city=state_counts_as_city
    )

    assert relevance.tier in set(LocationTier)
    assert relevance.relevance_score in {100, 75, 25}
    assert relevance.estimated_distance_km in {0, 50, 500}
