"""API routers."""

from dayplan.api import activities, goals, habits, plans, stats

__all__ = [
    "activities",
    "goals",
    "habits",
    "plans",
    "stats",
]
