"""
Prompt templates for the score fetcher.

This module builds the single instruction sent to the generative search API:
- A static calendar mapping each month to the tournaments usually in play
- The scores prompt, which pins the response to the "## 🏆" heading format

The calendar is domain knowledge. January is split into day windows because
the Australian swing changes week to week.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Tuple

# Section-start marker the prompt asks for and the validator looks for
SECTION_MARKER = "## "


@dataclass(frozen=True)
class MonthSchedule:
    """
    Tournaments for one calendar month.

    windows holds (last_day, tournaments) pairs checked in order; the first
    window whose last_day is >= the day of month wins, otherwise default.
    """
    default: str
    windows: Tuple[Tuple[int, str], ...] = ()

    def tournaments_for(self, day: int) -> str:
        for last_day, tournaments in self.windows:
            if day <= last_day:
                return tournaments
        return self.default


TOURNAMENT_CALENDAR: Dict[int, MonthSchedule] = {
    1: MonthSchedule(
        default="Australian Open",
        windows=(
            (11, "United Cup, ATP Hong Kong Open, ASB Classic Auckland, Brisbane International"),
            (17, "Adelaide International, ASB Classic Auckland ATP"),
        ),
    ),
    2: MonthSchedule("Australian Open (if early Feb), Rotterdam, Dubai, Doha"),
    3: MonthSchedule("Indian Wells Masters, Miami Open"),
    4: MonthSchedule("Monte Carlo Masters, Barcelona Open"),
    5: MonthSchedule("Madrid Masters, Rome Masters, French Open"),
    6: MonthSchedule("French Open, Queens Club, Halle, Wimbledon"),
    7: MonthSchedule("Wimbledon, Hamburg, Washington"),
    8: MonthSchedule("Montreal/Toronto Masters, Cincinnati Masters, US Open"),
    9: MonthSchedule("US Open, Laver Cup"),
    10: MonthSchedule("Shanghai Masters, Vienna, Paris Masters"),
    11: MonthSchedule("ATP Finals Turin, WTA Finals, Davis Cup Finals"),
    12: MonthSchedule("Off-season exhibitions"),
}


SCORES_PROMPT = """Search the web for tennis match results from today {today}.

Tournaments: {tournaments}

RULES:
- Start your response with "## 🏆" immediately
- NO introduction like "Here are the results" or "It is January..."
- NO explanation, just the formatted scores

FORMAT:
## 🏆 Tournament Name
- Player1 def. Player2: 6-4, 6-3 ✓
- Player3 vs Player4: 6-2, 3-1 🔴 LIVE

Use ✓ for completed, 🔴 LIVE for in-progress."""


def get_active_tournaments(today: Optional[date] = None) -> str:
    """
    Look up the tournaments usually in play on a given date.

    Args:
        today: Date to look up (defaults to the local current date)

    Returns:
        Comma-separated tournament names
    """
    if today is None:
        today = date.today()
    return TOURNAMENT_CALENDAR[today.month].tournaments_for(today.day)


def format_prompt_date(day: date) -> str:
    """Format a date as e.g. 'Friday, January 9, 2026'."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def build_scores_prompt(today: Optional[date] = None) -> str:
    """
    Build the complete scores prompt for a date.

    Args:
        today: Date the results are requested for

    Returns:
        Complete prompt string
    """
    if today is None:
        today = date.today()

    return SCORES_PROMPT.format(
        today=format_prompt_date(today),
        tournaments=get_active_tournaments(today),
    )
