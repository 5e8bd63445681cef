"""Fixed English month and day name tables."""

from __future__ import annotations

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
ABBR_MONTH_NAMES: tuple[str, ...] = tuple(name[:3] for name in MONTH_NAMES)

DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
ABBR_DAY_NAMES: tuple[str, ...] = tuple(name[:3] for name in DAY_NAMES)

_MONTH_INDEX = {abbr.lower(): i for i, abbr in enumerate(ABBR_MONTH_NAMES, start=1)}
_DAY_INDEX = {abbr.lower(): i for i, abbr in enumerate(ABBR_DAY_NAMES)}

# Alternation sources for building regexes (full names first so they win).
MONTHS_PATTERN = "|".join(name.lower() for name in MONTH_NAMES + ABBR_MONTH_NAMES if name != "May")
MONTHS_PATTERN += "|may"
ABBR_MONTHS_PATTERN = "|".join(abbr.lower() for abbr in ABBR_MONTH_NAMES)
DAYS_PATTERN = "|".join(name.lower() for name in DAY_NAMES)
ABBR_DAYS_PATTERN = "|".join(abbr.lower() for abbr in ABBR_DAY_NAMES)


def month_number(name: str) -> int:
    """1-based month number from a name whose first three letters identify it."""
    return _MONTH_INDEX.get(name[:3].lower(), 0)


def day_number(name: str) -> int:
    """Weekday number (0=Sunday) from a name whose first three letters identify it."""
    return _DAY_INDEX.get(name[:3].lower(), 0)
