"""
Unit tests for DurationAdvisor.
"""

import pytest

from dayplan.services.duration_advisor import GENERIC_DURATIONS, DurationAdvisor


@pytest.fixture
def advisor():
    return DurationAdvisor()


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Morning workout", [30, 45, 60, 90]),
        ("Running in the park", [30, 45, 60, 90]),
        ("Team meeting", [15, 30, 60]),
        ("Meditation", [10, 15, 20, 30]),
        ("Read a chapter", [30, 45, 60, 90]),
        ("Write report", [30, 60, 90, 120]),
        ("Do the laundry", [15, 30, 45, 60]),
        ("Evening walk", [10, 15, 30, 45]),
    ],
)
def test_keyword_rules(advisor, title: str, expected: list[int]) -> None:
    assert advisor.suggest(title) == expected


def test_keywords_match_at_word_start_only(advisor) -> None:
    assert advisor.match_rule("Brunch with friends") is None
    assert advisor.suggest("Brunch with friends") == list(GENERIC_DURATIONS)


def test_description_is_searched(advisor) -> None:
    rule = advisor.match_rule("Morning routine", "ten minutes of mindful breathing")
    assert rule is not None
    assert rule.name == "meditation"


def test_first_matching_rule_wins(advisor) -> None:
    assert advisor.match_rule("Call the gym").name == "workout"


def test_estimate_is_ranked_first(advisor) -> None:
    assert advisor.suggest("Deep focus", estimated_minutes=50) == [50, *GENERIC_DURATIONS]


def test_estimate_already_offered_is_not_duplicated(advisor) -> None:
    assert advisor.suggest("Team sync", estimated_minutes=30) == [30, 15, 60]


def test_suggestions_are_never_empty_and_positive(advisor) -> None:
    for title in ["", "x", "Workout", "Plan the week"]:
        durations = advisor.suggest(title)
        assert durations
        assert all(d > 0 for d in durations)


def test_default_minutes(advisor) -> None:
    assert advisor.default_minutes("Team meeting") == 60
    assert advisor.default_minutes("Meditation") == 10
    assert advisor.default_minutes("Meditation", estimated_minutes=25) == 25


def test_empty_fallback_is_rejected() -> None:
    with pytest.raises(ValueError):
        DurationAdvisor(fallback=())
