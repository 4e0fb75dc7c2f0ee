"""
Duration suggestions for plan items.

Keyword heuristic over an item's title and description. Not correctness
critical: it only pre-selects sensible options for the schedule pickers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from dayplan.core.logger import setup_logger

logger = setup_logger(__name__)

# Duration options offered when nothing more specific applies
GENERIC_DURATIONS: tuple[int, ...] = (15, 30, 45, 60, 90, 120, 150, 180, 240, 300)


@dataclass(frozen=True)
class DurationRule:
    name: str
    keywords: tuple[str, ...]
    durations: tuple[int, ...]


# Order matters: the first matching rule wins.
DURATION_RULES: tuple[DurationRule, ...] = (
    DurationRule(
        "workout",
        ("workout", "exercise", "gym", "run", "training", "yoga", "swim"),
        (30, 45, 60, 90),
    ),
    DurationRule(
        "meeting",
        ("meeting", "call", "sync", "standup", "interview"),
        (15, 30, 60),
    ),
    DurationRule(
        "meditation",
        ("meditat", "mindful", "breath"),
        (10, 15, 20, 30),
    ),
    DurationRule(
        "reading",
        ("read", "study", "learn", "course", "homework"),
        (30, 45, 60, 90),
    ),
    DurationRule(
        "writing",
        ("write", "writing", "report", "essay", "journal"),
        (30, 60, 90, 120),
    ),
    DurationRule(
        "chores",
        ("clean", "laundry", "groceries", "cook", "dishes"),
        (15, 30, 45, 60),
    ),
    DurationRule(
        "walk",
        ("walk", "stretch"),
        (10, 15, 30, 45),
    ),
)


def _compile(rule: DurationRule) -> re.Pattern[str]:
    # Keywords match at the start of a word so "run" hits "running" but not "brunch"
    alternatives = "|".join(re.escape(keyword) for keyword in rule.keywords)
    return re.compile(rf"\b(?:{alternatives})")


class DurationAdvisor:
    """Suggests ranked duration options (minutes) for an item."""

    def __init__(
        self,
        rules: tuple[DurationRule, ...] = DURATION_RULES,
        fallback: tuple[int, ...] = GENERIC_DURATIONS,
        default_minutes: int = 60,
    ):
        if not fallback:
            raise ValueError("fallback durations must not be empty")
        self._rules = [(rule, _compile(rule)) for rule in rules]
        self._fallback = fallback
        self._default_minutes = default_minutes

    def match_rule(self, title: str, description: Optional[str] = None) -> Optional[DurationRule]:
        text = f"{title} {description or ''}".lower()
        for rule, pattern in self._rules:
            if pattern.search(text):
                return rule
        return None

    def suggest(
        self,
        title: str,
        description: Optional[str] = None,
        estimated_minutes: Optional[int] = None,
    ) -> list[int]:
        """
        Ranked duration options for an item.

        Args:
            title: Item title
            description: Optional description, searched together with the title
            estimated_minutes: Known estimate (activities), ranked first

        Returns:
            Non-empty list of positive durations in minutes
        """
        rule = self.match_rule(title, description)
        durations = list(rule.durations if rule else self._fallback)
        if estimated_minutes and estimated_minutes > 0:
            durations = [estimated_minutes] + [d for d in durations if d != estimated_minutes]
        logger.debug(
            f"Duration suggestions for '{title}': {durations} "
            f"(rule={rule.name if rule else 'generic'})"
        )
        return durations

    def default_minutes(
        self,
        title: str,
        description: Optional[str] = None,
        estimated_minutes: Optional[int] = None,
    ) -> int:
        """Pre-selected duration: the estimate, else the default when offered, else the top option."""
        suggestions = self.suggest(title, description, estimated_minutes)
        if estimated_minutes and estimated_minutes > 0:
            return estimated_minutes
        if self._default_minutes in suggestions:
            return self._default_minutes
        return suggestions[0]
