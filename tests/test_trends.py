import pytest

from brandmatch.trends import (
    calculate_overall_trend,
    calculate_trend_direction,
    calculate_trend_percentage,
    compare_with_previous,
)


@pytest.mark.parametrize(
    "previous, current, expected",
    [
        (None, 50, "stable"),
        (0, 50, "stable"),
        (100, 106, "rising"),
        (100, 105, "stable"),
        (100, 95, "stable"),
        (100, 94, "falling"),
    ],
)
def test_trend_direction_threshold(previous, current, expected):
    assert calculate_trend_direction(previous, current) == expected


def test_trend_percentage():
    assert calculate_trend_percentage(80, 100) == 25.0
    assert calculate_trend_percentage(70, 80) == 14.29
    assert calculate_trend_percentage(0, 10) == 0.0
    assert calculate_trend_percentage(None, 10) == 0.0


def test_compare_with_previous_marks_new_brands():
    trends = compare_with_previous(
        current={"Stumptown": 90, "Blue Bottle": 60},
        previous={"Stumptown": 80, "Intelligentsia": 70},
    )

    by_name = {t.brand_name: t for t in trends}
    assert set(by_name) == {"Stumptown", "Blue Bottle"}
    assert by_name["Stumptown"].trend_direction == "rising"
    assert by_name["Stumptown"].trend_percentage == 12.5
    assert by_name["Stumptown"].is_new is False
    assert by_name["Blue Bottle"].trend_direction == "new"
    assert by_name["Blue Bottle"].previous_score is None
    assert by_name["Blue Bottle"].is_new is True


def test_overall_trend():
    trends = compare_with_previous({"A": 50, "B": 50}, {"A": 100, "B": 100})
    assert calculate_overall_trend(trends) == "falling"

    trends = compare_with_previous({"A": 50, "B": 50}, {"A": 100})
    assert calculate_overall_trend(trends) == "stable"

    trends = compare_with_previous({"A": 50}, {})
    assert calculate_overall_trend(trends) == "rising"

    assert calculate_overall_trend([]) == "stable"
