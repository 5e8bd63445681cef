"""Strict matchers for fixed interchange formats.

Each matcher accepts exactly one family of layouts (ISO 8601, RFC 3339,
XML Schema, RFC 2822, HTTP-date, JIS X 0301), anchored at both ends of
the input, and returns the same fragment map the free-form parser does.
Input that does not fit the layout raises
:class:`~reformcal.domain.errors.MalformedFixedFormatError`.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from reformcal.domain.completion import complete_year
from reformcal.domain.errors import InputTooLongError, MalformedFixedFormatError
from reformcal.domain.fragments import Fragments
from reformcal.domain.names import ABBR_DAYS_PATTERN, ABBR_MONTHS_PATTERN, DAYS_PATTERN, day_number, month_number
from reformcal.domain.parser import DEFAULT_LIMIT, JIS_ERA_BASES, sec_fraction
from reformcal.domain.zones import zone_to_offset

JIS_DEFAULT_ERA = "h"

_ISO8601_EXT_DATETIME = re.compile(
    r"""
    \A\s*(?:
      ([-+]?\d{2,}|-)               # year or '-'
      -(\d{2})?                     # mon
      (?:-(\d{2}))?                 # mday
    |
      ([-+]?\d{2,})?                # year
      -(\d{3})                      # yday
    |
      (\d{4}|\d{2})?                # cwyear
      -w(\d{2})                     # cweek
      -(\d)                         # cwday
    |
      -w-(\d)                       # cwday alone
    )
    (?:t
      (\d{2}):(\d{2})
      (?::(\d{2})(?:[,.](\d+))?)?
      (z|[-+]\d{2}(?::?\d{2})?)?
    )?\s*\Z
    """,
    re.I | re.X,
)

_ISO8601_BAS_DATETIME = re.compile(
    r"""
    \A\s*(?:
      ([-+]?(?:\d{4}|\d{2})|--)     # year or '--'
      (\d{2}|-)                     # mon or '-'
      (\d{2})                       # mday
    |
      ([-+]?(?:\d{4}|\d{2}))        # year
      (\d{3})                       # yday
    |
      -(\d{3})                      # yday alone
    |
      (\d{4}|\d{2})                 # cwyear
      w(\d{2})                      # cweek
      (\d)                          # cwday
    |
      -w(\d{2})                     # cweek
      (\d)                          # cwday
    |
      -w-(\d)                       # cwday alone
    )
    (?:t?
      (\d{2})(\d{2})
      (?:(\d{2})(?:[,.](\d+))?)?
      (z|[-+]\d{2}(?:\d{2})?)?
    )?\s*\Z
    """,
    re.I | re.X,
)

_ISO8601_EXT_TIME = re.compile(
    r"\A\s*(\d{2}):(\d{2})(?::(\d{2})(?:[,.](\d+))?(z|[-+]\d{2}(?::?\d{2})?)?)?\s*\Z",
    re.I,
)
_ISO8601_BAS_TIME = re.compile(
    r"\A\s*(\d{2})(\d{2})(?:(\d{2})(?:[,.](\d+))?(z|[-+]\d{2}(?:\d{2})?)?)?\s*\Z",
    re.I,
)

_RFC3339 = re.compile(
    r"\A\s*(-?\d{4})-(\d{2})-(\d{2})(?:t|\s)(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(z|[-+]\d{2}:\d{2})\s*\Z",
    re.I,
)

_XMLSCHEMA_DATETIME = re.compile(
    r"\A\s*(-?\d{4,})(?:-(\d{2})(?:-(\d{2}))?)?"
    r"(?:t(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?)?(z|[-+]\d{2}:\d{2})?\s*\Z",
    re.I,
)
_XMLSCHEMA_TIME = re.compile(
    r"\A\s*(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(z|[-+]\d{2}:\d{2})?\s*\Z",
    re.I,
)
_XMLSCHEMA_TRUNC = re.compile(
    r"\A\s*(?:--(\d{2})(?:-(\d{2}))?|---(\d{2}))(z|[-+]\d{2}:\d{2})?\s*\Z",
    re.I,
)

_RFC2822 = re.compile(
    r"\A\s*(?:(" + ABBR_DAYS_PATTERN + r")\s*,\s+)?"
    r"(\d{1,2})\s+(" + ABBR_MONTHS_PATTERN + r")\s+(-?\d{2,})\s+"
    r"(\d{2}):(\d{2})(?::(\d{2}))?\s*"
    r"([-+]\d{4}|ut|gmt|e[sd]t|c[sd]t|m[sd]t|p[sd]t|[a-ik-z])\s*\Z",
    re.I,
)

_HTTPDATE_TYPE1 = re.compile(
    r"\A\s*(" + ABBR_DAYS_PATTERN + r")\s*,\s+(\d{2})\s+(" + ABBR_MONTHS_PATTERN + r")\s+"
    r"(-?\d{4})\s+(\d{2}):(\d{2}):(\d{2})\s+(gmt)\s*\Z",
    re.I,
)
_HTTPDATE_TYPE2 = re.compile(
    r"\A\s*(" + DAYS_PATTERN + r")\s*,\s+(\d{2})\s*-\s*(" + ABBR_MONTHS_PATTERN + r")\s*-\s*"
    r"(\d{2})\s+(\d{2}):(\d{2}):(\d{2})\s+(gmt)\s*\Z",
    re.I,
)
_HTTPDATE_TYPE3 = re.compile(
    r"\A\s*(" + ABBR_DAYS_PATTERN + r")\s+(" + ABBR_MONTHS_PATTERN + r")\s+(\d{1,2})\s+"
    r"(\d{2}):(\d{2}):(\d{2})\s+(\d{4})\s*\Z",
    re.I,
)

# Era years are two digits, so a written year past 99 of an era does not
# read back.
_JISX0301 = re.compile(
    r"""
    \A\s*([mtshr])?(\d{2})\.(\d{2})\.(\d{2})
    (?:t
      (?:(\d{2}):(\d{2})(?::(\d{2})(?:[,.](\d*))?)?
      (z|[-+]\d{2}(?::?\d{2})?)?)?
    )?\s*\Z
    """,
    re.I | re.X,
)


def _check_limit(text: str, limit: int | None) -> None:
    if limit is not None and len(text) > limit:
        raise InputTooLongError(
            f"string length ({len(text)}) exceeds the limit {limit}",
            length=len(text),
            limit=limit,
        )


def _year69(text: str) -> int:
    year = int(text)
    return complete_year(year) if len(text) < 4 else year


def _set_zone(frags: Fragments, zone: str | None) -> None:
    if zone:
        frags.zone = zone
        frags.offset = zone_to_offset(zone)


def _require(frags: Fragments, format_name: str, text: str) -> Fragments:
    if frags.is_empty():
        raise MalformedFixedFormatError(
            f"invalid {format_name} string: {text!r}", format=format_name, input=text
        )
    return frags


# --- ISO 8601 ---


def match_iso8601(text: str, *, limit: int | None = DEFAULT_LIMIT) -> Fragments:
    """Extended or basic ISO 8601 date, date-time, or time."""
    _check_limit(text, limit)
    frags = _iso8601_fragments(text)
    return _require(frags, "iso8601", text)


def _iso8601_fragments(text: str) -> Fragments:
    frags = Fragments()
    if match := _ISO8601_EXT_DATETIME.match(text):
        _iso8601_ext(match, frags)
    elif match := _ISO8601_BAS_DATETIME.match(text):
        _iso8601_bas(match, frags)
    elif match := _ISO8601_EXT_TIME.match(text):
        _iso8601_time(match, frags)
    elif match := _ISO8601_BAS_TIME.match(text):
        _iso8601_time(match, frags)
    return frags


def _iso8601_ext(match: re.Match[str], frags: Fragments) -> None:
    g = (None,) + match.groups()
    if g[1] is not None:
        if g[3] is not None:
            frags.mday = int(g[3])
        if g[1] != "-":
            frags.year = _year69(g[1])
        if g[2] is None:
            if g[1] != "-":
                return
        else:
            frags.mon = int(g[2])
    elif g[5] is not None:
        frags.yday = int(g[5])
        if g[4] is not None:
            frags.year = _year69(g[4])
    elif g[8] is not None:
        frags.cweek = int(g[7])
        frags.cwday = int(g[8])
        if g[6] is not None:
            frags.cwyear = _year69(g[6])
    elif g[9] is not None:
        frags.cwday = int(g[9])

    if g[10] is not None:
        frags.hour = int(g[10])
        frags.min = int(g[11])
        if g[12] is not None:
            frags.sec = int(g[12])
    if g[13] is not None:
        frags.sec_fraction = sec_fraction(g[13])
    _set_zone(frags, g[14])


def _iso8601_bas(match: re.Match[str], frags: Fragments) -> None:
    g = (None,) + match.groups()
    if g[3] is not None:
        frags.mday = int(g[3])
        if g[1] != "--":
            frags.year = _year69(g[1])
        if g[2].startswith("-"):
            if g[1] != "--":
                return
        else:
            frags.mon = int(g[2])
    elif g[5] is not None:
        frags.yday = int(g[5])
        frags.year = _year69(g[4])
    elif g[6] is not None:
        frags.yday = int(g[6])
    elif g[9] is not None:
        frags.cweek = int(g[8])
        frags.cwday = int(g[9])
        frags.cwyear = _year69(g[7])
    elif g[11] is not None:
        frags.cweek = int(g[10])
        frags.cwday = int(g[11])
    elif g[12] is not None:
        frags.cwday = int(g[12])

    if g[13] is not None:
        frags.hour = int(g[13])
        frags.min = int(g[14])
        if g[15] is not None:
            frags.sec = int(g[15])
    if g[16] is not None:
        frags.sec_fraction = sec_fraction(g[16])
    _set_zone(frags, g[17])


def _iso8601_time(match: re.Match[str], frags: Fragments) -> None:
    hour, minute, second, fraction, zone = match.groups()
    frags.hour = int(hour)
    frags.min = int(minute)
    if second is not None:
        frags.sec = int(second)
    if fraction is not None:
        frags.sec_fraction = sec_fraction(fraction)
    _set_zone(frags, zone)


# --- RFC 3339 / XML Schema ---


def match_rfc3339(text: str, *, limit: int | None = DEFAULT_LIMIT) -> Fragments:
    """Full RFC 3339 date-time; the zone is mandatory."""
    _check_limit(text, limit)
    frags = Fragments()
    match = _RFC3339.match(text)
    if match is not None:
        year, mon, mday, hour, minute, second, fraction, zone = match.groups()
        frags.year = int(year)
        frags.mon = int(mon)
        frags.mday = int(mday)
        frags.hour = int(hour)
        frags.min = int(minute)
        frags.sec = int(second)
        _set_zone(frags, zone)
        if fraction is not None:
            frags.sec_fraction = sec_fraction(fraction)
    return _require(frags, "rfc3339", text)


def match_xmlschema(text: str, *, limit: int | None = DEFAULT_LIMIT) -> Fragments:
    """XML Schema date-time, time, or truncated ``--MM-DD`` / ``---DD`` forms."""
    _check_limit(text, limit)
    frags = Fragments()
    if match := _XMLSCHEMA_DATETIME.match(text):
        year, mon, mday, hour, minute, second, fraction, zone = match.groups()
        frags.year = int(year)
        if mon is not None:
            frags.mon = int(mon)
        if mday is not None:
            frags.mday = int(mday)
        if hour is not None:
            frags.hour = int(hour)
            frags.min = int(minute)
            frags.sec = int(second)
        if fraction is not None:
            frags.sec_fraction = sec_fraction(fraction)
        _set_zone(frags, zone)
    elif match := _XMLSCHEMA_TIME.match(text):
        _iso8601_time(match, frags)
    elif match := _XMLSCHEMA_TRUNC.match(text):
        mon, mday, day_only, zone = match.groups()
        if mon is not None:
            frags.mon = int(mon)
        if mday is not None:
            frags.mday = int(mday)
        if day_only is not None:
            frags.mday = int(day_only)
        _set_zone(frags, zone)
    return _require(frags, "xmlschema", text)


# --- RFC 2822 / HTTP-date ---


def match_rfc2822(text: str, *, limit: int | None = DEFAULT_LIMIT) -> Fragments:
    """RFC 2822 date-time; years under four digits use the 50 pivot."""
    _check_limit(text, limit)
    frags = Fragments()
    match = _RFC2822.match(text)
    if match is not None:
        wday, mday, mon, year, hour, minute, second, zone = match.groups()
        if wday is not None:
            frags.wday = day_number(wday)
        frags.mday = int(mday)
        frags.mon = month_number(mon)
        frags.year = complete_year(int(year), 50) if len(year) < 4 else int(year)
        frags.hour = int(hour)
        frags.min = int(minute)
        if second is not None:
            frags.sec = int(second)
        _set_zone(frags, zone)
    return _require(frags, "rfc2822", text)


def match_httpdate(text: str, *, limit: int | None = DEFAULT_LIMIT) -> Fragments:
    """HTTP-date in IMF-fixdate, RFC 850, or asctime layout."""
    _check_limit(text, limit)
    frags = Fragments()
    if match := _HTTPDATE_TYPE1.match(text):
        wday, mday, mon, year, hour, minute, second, zone = match.groups()
        frags.year = int(year)
    elif match := _HTTPDATE_TYPE2.match(text):
        wday, mday, mon, year, hour, minute, second, zone = match.groups()
        frags.year = int(year)
        if 0 <= frags.year <= 99:
            frags.year = complete_year(frags.year)
    elif match := _HTTPDATE_TYPE3.match(text):
        wday, mon, mday, hour, minute, second, year = match.groups()
        zone = None
        frags.year = int(year)
    else:
        return _require(frags, "httpdate", text)

    frags.wday = day_number(wday)
    frags.mday = int(mday)
    frags.mon = month_number(mon)
    frags.hour = int(hour)
    frags.min = int(minute)
    frags.sec = int(second)
    if zone is not None:
        frags.zone = zone
        frags.offset = 0
    return frags


# --- JIS X 0301 ---


def match_jisx0301(text: str, *, limit: int | None = DEFAULT_LIMIT) -> Fragments:
    """Japanese era date such as ``H13.02.03``; other input falls back to ISO 8601."""
    _check_limit(text, limit)
    match = _JISX0301.match(text)
    if match is None:
        return _require(_iso8601_fragments(text), "jisx0301", text)

    era, year, mon, mday, hour, minute, second, fraction, zone = match.groups()
    frags = Fragments(
        year=JIS_ERA_BASES[(era or JIS_DEFAULT_ERA).lower()] + int(year),
        mon=int(mon),
        mday=int(mday),
    )
    if hour is not None:
        frags.hour = int(hour)
        if minute is not None:
            frags.min = int(minute)
        if second is not None:
            frags.sec = int(second)
    if fraction:
        frags.sec_fraction = sec_fraction(fraction)
    _set_zone(frags, zone)
    return frags


FIXED_FORMATS: dict[str, Callable[..., Fragments]] = {
    "iso8601": match_iso8601,
    "rfc3339": match_rfc3339,
    "xmlschema": match_xmlschema,
    "rfc2822": match_rfc2822,
    "rfc822": match_rfc2822,
    "httpdate": match_httpdate,
    "jisx0301": match_jisx0301,
}


def match_fixed(format_name: str, text: str, *, limit: int | None = DEFAULT_LIMIT) -> Fragments:
    """Dispatch to the matcher registered under *format_name*."""
    try:
        matcher = FIXED_FORMATS[format_name]
    except KeyError:
        raise MalformedFixedFormatError(
            f"unknown format {format_name!r}", format=format_name, input=text
        ) from None
    return matcher(text, limit=limit)
