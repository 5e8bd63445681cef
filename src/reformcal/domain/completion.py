"""Fragment completion: era and century fixes, then reference-date filling.

:func:`finalize_fragments` runs at the end of every parse and turns the
parser's raw fields into their final form.  :func:`complete_fragments`
runs later, when a date value is being built, and fills the fields a
partial date needs from a reference date (usually today).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from reformcal.domain.conversion import UNIX_EPOCH_JD
from reformcal.domain.fragments import Fragments
from reformcal.domain.zones import zone_to_offset

if TYPE_CHECKING:
    from reformcal.domain.value import DateValue

logger = logging.getLogger(__name__)

ReferenceProvider = Callable[[], "DateValue"]

# (name, fields).  A template with no name only takes part in scoring.
COMPLETION_TABLE: tuple[tuple[str | None, tuple[str, ...]], ...] = (
    ("time", ("hour", "min", "sec")),
    (None, ("jd",)),
    ("ordinal", ("year", "yday", "hour", "min", "sec")),
    ("civil", ("year", "mon", "mday", "hour", "min", "sec")),
    ("commercial", ("cwyear", "cweek", "cwday", "hour", "min", "sec")),
    ("wday", ("wday", "hour", "min", "sec")),
    ("wnum0", ("year", "wnum0", "wday", "hour", "min", "sec")),
    ("wnum1", ("year", "wnum1", "wday", "hour", "min", "sec")),
    (None, ("cwyear", "cweek", "wday", "hour", "min", "sec")),
    (None, ("year", "wnum0", "cwday", "hour", "min", "sec")),
    (None, ("year", "wnum1", "cwday", "hour", "min", "sec")),
)

# Fragment fields a reference date can supply, mapped to its attributes.
_REFERENCE_FIELDS: dict[str, str] = {
    "year": "year",
    "mon": "month",
    "mday": "day",
    "cwyear": "cwyear",
    "cweek": "cweek",
    "cwday": "cwday",
    "wday": "wday",
}

_LEADING_DEFAULTS: dict[str, dict[str, int]] = {
    "civil": {"mon": 1, "mday": 1},
    "commercial": {"cweek": 1, "cwday": 1},
    "wnum0": {"wnum0": 0, "wday": 0},
    "wnum1": {"wnum1": 0, "wday": 1},
}


def complete_year(year: int, pivot: int = 69) -> int:
    """Expand a two-digit year: ``pivot..99`` is 19xx, the rest 20xx."""
    return year + (1900 if year >= pivot else 2000)


def finalize_fragments(frags: Fragments) -> Fragments:
    """Apply a BCE marker and two-digit century completion, then derive the offset.

    The transient control flags are cleared; the result carries only
    public fields.
    """
    if frags.is_bc_era:
        if frags.cwyear is not None:
            frags.cwyear = 1 - frags.cwyear
        if frags.year is not None:
            frags.year = 1 - frags.year

    if frags.needs_century_completion:
        if frags.cwyear is not None and 0 <= frags.cwyear <= 99:
            frags.cwyear = complete_year(frags.cwyear)
        if frags.year is not None and 0 <= frags.year <= 99:
            frags.year = complete_year(frags.year)

    if frags.zone is not None and frags.offset is None:
        frags.offset = zone_to_offset(frags.zone)

    frags.needs_century_completion = None
    frags.is_bc_era = False
    return frags


def rewrite_seconds(frags: Fragments) -> Fragments:
    """Replace a Unix ``seconds`` field by ``jd`` and time-of-day fields."""
    if frags.seconds is None:
        return frags
    result = frags.copy()
    seconds = result.seconds
    if result.offset is not None:
        seconds = seconds + result.offset

    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, rest = divmod(rest, 60)
    whole = int(rest // 1)

    result.jd = UNIX_EPOCH_JD + int(days)
    result.hour = int(hours)
    result.min = int(minutes)
    result.sec = whole
    fraction = rest - whole
    if fraction:
        result.sec_fraction = fraction
    result.seconds = None
    return result


def best_template(frags: Fragments) -> tuple[str | None, tuple[str, ...]] | None:
    """The completion template sharing the most fields with *frags*.

    Ties go to the earlier template; ``None`` when nothing matches.
    """
    best: tuple[str | None, tuple[str, ...]] | None = None
    best_count = 0
    for name, names in COMPLETION_TABLE:
        n = frags.count(names)
        if n > best_count:
            best, best_count = (name, names), n
    return best


def complete_fragments(
    frags: Fragments,
    today: ReferenceProvider,
    *,
    with_time: bool = True,
) -> Fragments:
    """Fill the fields a partial date needs from the reference date.

    *today* is only called when a field actually has to be borrowed.
    With *with_time*, a time-only input lands on the reference day.
    Hour, minute, and second always end up set, with a second above 59
    clamped to 59.
    """
    result = frags.copy()
    template = best_template(result)
    reference: DateValue | None = None

    def ref() -> DateValue:
        nonlocal reference
        if reference is None:
            reference = today()
        return reference

    if template is not None:
        name, names = template
        if name == "time":
            if with_time and result.jd is None:
                result.jd = ref().jd
        elif name == "ordinal":
            if result.year is None:
                result.year = ref().year
            if result.yday is None:
                result.yday = 1
        elif name == "wday":
            if result.count(names) < len(names):
                reference_date = ref()
                result.jd = reference_date.jd - reference_date.wday + result.wday
        elif name is not None:
            _fill_leading(result, names, ref)
            for field_name, default in _LEADING_DEFAULTS[name].items():
                if getattr(result, field_name) is None:
                    setattr(result, field_name, default)
        logger.debug("completed with %s template", name or "unnamed")

    if result.hour is None:
        result.hour = 0
    if result.min is None:
        result.min = 0
    if result.sec is None:
        result.sec = 0
    elif result.sec > 59:
        result.sec = 59
    return result


def _fill_leading(frags: Fragments, names: tuple[str, ...], ref: ReferenceProvider) -> None:
    """Copy fields from the reference until the first one already present."""
    for field_name in names:
        if getattr(frags, field_name) is not None:
            break
        attr = _REFERENCE_FIELDS.get(field_name)
        if attr is None:
            continue
        setattr(frags, field_name, getattr(ref(), attr))
