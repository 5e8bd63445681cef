"""Free-form date/time text parser.

Extracts loosely-structured date and time fragments from arbitrary text.
The input is first reduced to a small alphabet, then matchers run over a
working view of it in a fixed order.  Every successful matcher marks its
span as consumed, so later matchers see blanks there and cannot match the
same characters again.

Day names and times are always tried.  Date shapes are tried in priority
order (European, US, ISO, JIS era, VMS, slash, dot, ISO week/ordinal,
apostrophe year, month name, ordinal day, digit blob) and the first hit
wins.  A post-pass picks up a standalone era marker and a leftover one
or two digit number.

The parser never fails on content: unrecognized text yields an empty or
partial :class:`~reformcal.domain.fragments.Fragments`.  The only hard
failure is input longer than the configured limit, checked before any
pattern runs.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from enum import IntFlag
from fractions import Fraction

from reformcal.domain.completion import finalize_fragments
from reformcal.domain.errors import InputTooLongError
from reformcal.domain.fragments import Fragments
from reformcal.domain.names import MONTHS_PATTERN, day_number, month_number
from reformcal.domain.zones import zone_to_offset

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 128

# Era offsets for JIS X 0301 initials (Meiji, Taisho, Showa, Heisei, Reiwa).
JIS_ERA_BASES: dict[str, int] = {"m": 1867, "t": 1911, "s": 1925, "h": 1988, "r": 2018}

_ERA = r"c(?:e|\.e\.)|b(?:ce|\.c\.e\.)|a(?:d|\.d\.)|b(?:c|\.c\.)"
_ABBR_MONTHS = r"jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"

_NOISE = re.compile(r"(?:[^-+',./:@\w\[\]]|_)+")

_DAY = re.compile(r"\b(sun|mon|tue|wed|thu|fri|sat)[^-/\d\s]*", re.I)

_TIME = re.compile(
    r"""
    (                                       # whole time
      \d+\s*
      (?:
        (?:
          :\s*\d+
          (?:\s*:\s*\d+(?:[,.]\d*)?)?
        |
          h(?:\s*\d+m?(?:\s*\d+s?)?)?
        )
        (?:\s*[ap](?:m\b|\.m\.))?
      |
        [ap](?:m\b|\.m\.)
      )
    )
    (?:
      \s*
      (                                     # zone
        (?:gmt|utc?)?[-+]\d+(?:[,.:]\d+(?::\d+)?)?
      |
        [a-z.\s]+(?:standard|daylight)\stime\b
      |
        [a-z]+(?:\sdst)?\b
      )
    )?
    """,
    re.I | re.X,
)

_TIME_DETAIL = re.compile(
    r"""
    \A(\d+)\s*
    (?:
      :\s*(\d+)(?:\s*:\s*(\d+)([,.]\d*)?)?
    |
      h(?:\s*(\d+)m?(?:\s*(\d+)s?)?)?
    )?
    (?:\s*([ap])(?:m\b|\.m\.))?
    """,
    re.I | re.X,
)

_EU = re.compile(
    r"('?\d+)[^-\d\s]*\s*(" + MONTHS_PATTERN + r")[^-\d\s']*"
    r"(?:\s*(?:\b(" + _ERA + r")(?!(?<!\.)[a-z]))?\s*('?-?\d+(?:(?:st|nd|rd|th)\b)?))?",
    re.I,
)
_US = re.compile(
    r"\b(" + MONTHS_PATTERN + r")[^-\d\s']*\s*('?\d+)[^-\d\s']*"
    r"(?:\s*,?\s*(?:\b(" + _ERA + r")(?!(?<!\.)[a-z]))?\s*('?-?\d+))?",
    re.I,
)
_ISO = re.compile(r"('?[-+]?\d+)-(\d+)-('?-?\d+)")
_JIS = re.compile(r"\b([mtshr])(\d+)\.(\d+)\.(\d+)", re.I)
_VMS11 = re.compile(r"('?-?\d+)-(" + MONTHS_PATTERN + r")[^-/.]*-('?-?\d+)", re.I)
_VMS12 = re.compile(r"\b(" + MONTHS_PATTERN + r")[^-/.]*-('?-?\d+)(?:-('?-?\d+))?", re.I)
_SLA = re.compile(r"('?-?\d+)/\s*('?\d+)(?:\D\s*('?-?\d+))?")
_DOT = re.compile(r"('?-?\d+)\.\s*('?\d+)\.\s*('?-?\d+)")
_ISO21 = re.compile(r"\b(\d{2}|\d{4})?-?w(\d{2})(?:-?(\d))?\b", re.I)
_ISO22 = re.compile(r"-w-(\d)\b", re.I)
_ISO23 = re.compile(r"--(\d{2})?-(\d{2})\b")
_ISO24 = re.compile(r"--(\d{2})(\d{2})?\b")
_ISO25_GUARD = re.compile(r"[,.](\d{2}|\d{4})-\d{3}\b")
_ISO25 = re.compile(r"\b(\d{2}|\d{4})-(\d{3})\b")
_ISO26_GUARD = re.compile(r"\d-\d{3}\b")
_ISO26 = re.compile(r"\b-(\d{3})\b")
_YEAR = re.compile(r"'(\d+)\b")
_MON = re.compile(r"\b(" + _ABBR_MONTHS + r")\S*", re.I)
_MDAY = re.compile(r"(\d+)(st|nd|rd|th)\b", re.I)
_DDD = re.compile(
    r"""
    ([-+]?)(\d{2,14})
    (?:\s*t?\s*(\d{2,6})?(?:[,.](\d*))?)?
    (?:\s*(z\b|[-+]\d{1,4}\b|\[[-+]?\d[^\]]*\]))?
    """,
    re.I | re.X,
)
_BC = re.compile(r"\b(bc\b|bce\b|b\.c\.|b\.c\.e\.)", re.I)
_FRAG = re.compile(r"\A\s*(\d{1,2})\s*\Z")

_H = re.compile(r"h", re.I)


class CharClass(IntFlag):
    """Character classes present in the working text."""

    ALPHA = 1
    DIGIT = 2
    DASH = 4
    DOT = 8
    SLASH = 16


class _Scanner:
    """Working view over an immutable input; consumed spans read as blanks."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.consumed: list[tuple[int, int]] = []
        self._view = source

    @property
    def view(self) -> str:
        return self._view

    def search(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        return pattern.search(self._view)

    def consume(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        match = pattern.search(self._view)
        if match is not None:
            self.consumed.append(match.span())
            self._view = self._render()
        return match

    def has(self, required: CharClass) -> bool:
        return (self.classes() & required) == required

    def classes(self) -> CharClass:
        flags = CharClass(0)
        for ch in self._view:
            if ch.isascii() and ch.isalpha():
                flags |= CharClass.ALPHA
            elif ch.isdigit():
                flags |= CharClass.DIGIT
            elif ch == "-":
                flags |= CharClass.DASH
            elif ch == ".":
                flags |= CharClass.DOT
            elif ch == "/":
                flags |= CharClass.SLASH
        return flags

    def _render(self) -> str:
        chars = list(self.source)
        for start, end in self.consumed:
            chars[start:end] = " " * (end - start)
        return "".join(chars)


def parse_fragments(
    text: str,
    *,
    complete_century: bool = True,
    limit: int | None = DEFAULT_LIMIT,
) -> Fragments:
    """Parse free-form *text* into finalized fragments.

    Two-digit years are completed with the 69 pivot when
    *complete_century* is set and the text did not mark the year as
    explicit (sign, or more than two digits).  Era markers are applied.

    Raises:
        InputTooLongError: When the stripped text exceeds *limit*.
    """
    text = text.strip()
    if limit is not None and len(text) > limit:
        raise InputTooLongError(
            f"string length ({len(text)}) exceeds the limit {limit}",
            length=len(text),
            limit=limit,
        )

    scan = _Scanner(_NOISE.sub(" ", text))
    frags = Fragments(needs_century_completion=complete_century)

    if scan.has(CharClass.ALPHA):
        _parse_day(scan, frags)
    if scan.has(CharClass.DIGIT):
        _parse_time(scan, frags)

    for required, matcher in _DATE_MATCHERS:
        if scan.has(required) and matcher(scan, frags):
            logger.debug("date matched by %s", matcher.__name__.lstrip("_"))
            break

    if scan.has(CharClass.ALPHA):
        _parse_bc(scan, frags)
    if scan.has(CharClass.DIGIT):
        _parse_frag(scan, frags)

    return finalize_fragments(frags)


# --- Always-run matchers ---


def _parse_day(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_DAY)
    if match is None:
        return False
    frags.wday = day_number(match.group(1))
    return True


def _parse_time(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_TIME)
    if match is None:
        return False
    _parse_time_detail(match.group(1), frags)
    zone = match.group(2)
    if zone:
        frags.zone = zone
        frags.offset = zone_to_offset(zone)
    return True


def _parse_time_detail(text: str, frags: Fragments) -> None:
    match = _TIME_DETAIL.match(text)
    if match is None:
        return
    hour = int(match.group(1))
    min_colon, sec_colon, frac, min_h, sec_h, ampm = match.group(2, 3, 4, 5, 6, 7)

    if min_colon is not None:
        frags.hour = hour
        frags.min = int(min_colon)
        if sec_colon is not None:
            frags.sec = int(sec_colon)
            if frac is not None and len(frac) > 1:
                frags.sec_fraction = sec_fraction(frac[1:])
    elif min_h is not None:
        frags.hour = hour
        frags.min = int(min_h)
        if sec_h is not None:
            frags.sec = int(sec_h)
    elif _H.search(text) or ampm is not None:
        frags.hour = hour

    if ampm is not None:
        current = frags.hour if frags.hour is not None else hour
        if ampm.lower() == "p" and current != 12:
            frags.hour = current + 12
        elif ampm.lower() == "a" and current == 12:
            frags.hour = 0


# --- Date-shape matchers ---


def _parse_eu(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_EU)
    if match is None:
        return False
    mday, mon, era, year = match.groups()
    _assign_ymd(frags, year, month_number(mon), mday, _is_bc(era))
    return True


def _parse_us(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_US)
    if match is None:
        return False
    mon, mday, era, year = match.groups()
    _assign_ymd(frags, year, month_number(mon), mday, _is_bc(era))
    return True


def _parse_iso(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_ISO)
    if match is None:
        return False
    _assign_ymd(frags, *match.groups(), False)
    return True


def _parse_jis(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_JIS)
    if match is None:
        return False
    era, year, mon, mday = match.groups()
    frags.year = JIS_ERA_BASES[era.lower()] + int(year)
    frags.mon = int(mon)
    frags.mday = int(mday)
    return True


def _parse_vms(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_VMS11)
    if match is not None:
        mday, mon, year = match.groups()
        _assign_ymd(frags, year, month_number(mon), mday, False)
        return True
    match = scan.consume(_VMS12)
    if match is not None:
        mon, mday, year = match.groups()
        _assign_ymd(frags, year, month_number(mon), mday, False)
        return True
    return False


def _parse_sla(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_SLA)
    if match is None:
        return False
    _assign_ymd(frags, *match.groups(), False)
    return True


def _parse_dot(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_DOT)
    if match is None:
        return False
    _assign_ymd(frags, *match.groups(), False)
    return True


def _parse_iso2(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_ISO21)
    if match is not None:
        cwyear, cweek, cwday = match.groups()
        if cwyear is not None:
            frags.cwyear = int(cwyear)
        frags.cweek = int(cweek)
        if cwday is not None:
            frags.cwday = int(cwday)
        return True

    match = scan.consume(_ISO22)
    if match is not None:
        frags.cwday = int(match.group(1))
        return True

    match = scan.consume(_ISO23)
    if match is not None:
        if match.group(1) is not None:
            frags.mon = int(match.group(1))
        frags.mday = int(match.group(2))
        return True

    match = scan.consume(_ISO24)
    if match is not None:
        frags.mon = int(match.group(1))
        if match.group(2) is not None:
            frags.mday = int(match.group(2))
        return True

    if scan.search(_ISO25_GUARD) is None:
        match = scan.consume(_ISO25)
        if match is not None:
            frags.year = int(match.group(1))
            frags.yday = int(match.group(2))
            return True

    if scan.search(_ISO26_GUARD) is None:
        match = scan.consume(_ISO26)
        if match is not None:
            frags.yday = int(match.group(1))
            return True

    return False


def _parse_year(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_YEAR)
    if match is None:
        return False
    frags.year = int(match.group(1))
    return True


def _parse_mon(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_MON)
    if match is None:
        return False
    frags.mon = month_number(match.group(1))
    return True


def _parse_mday(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_MDAY)
    if match is None:
        return False
    frags.mday = int(match.group(1))
    return True


def _parse_ddd(scan: _Scanner, frags: Fragments) -> bool:
    """Continuous digits, read by length as a date, a time, or both."""
    match = scan.consume(_DDD)
    if match is None:
        return False
    sign, digits, time_digits, fraction, zone = match.groups()
    negative = sign == "-"
    n = len(digits)
    # a fraction with no separate time part means the digits are a time
    as_time = time_digits is None and fraction is not None

    def year_of(text: str) -> int:
        return -int(text) if negative else int(text)

    if n == 2:
        if as_time:
            frags.sec = int(digits[-2:])
        else:
            frags.mday = int(digits[:2])
    elif n == 4:
        if as_time:
            frags.sec = int(digits[-2:])
            frags.min = int(digits[-4:-2])
        else:
            frags.mon = int(digits[:2])
            frags.mday = int(digits[2:4])
    elif n == 6:
        if as_time:
            frags.sec = int(digits[-2:])
            frags.min = int(digits[-4:-2])
            frags.hour = int(digits[-6:-4])
        else:
            frags.year = year_of(digits[:2])
            frags.mon = int(digits[2:4])
            frags.mday = int(digits[4:6])
    elif n in (8, 10, 12, 14):
        if as_time:
            frags.sec = int(digits[-2:])
            frags.min = int(digits[-4:-2])
            frags.hour = int(digits[-6:-4])
            frags.mday = int(digits[-8:-6])
            if n >= 10:
                frags.mon = int(digits[-10:-8])
            if n == 12:
                frags.year = year_of(digits[-12:-10])
            elif n == 14:
                frags.year = year_of(digits[-14:-10])
                frags.needs_century_completion = False
        else:
            frags.year = year_of(digits[:4])
            frags.mon = int(digits[4:6])
            frags.mday = int(digits[6:8])
            if n >= 10:
                frags.hour = int(digits[8:10])
            if n >= 12:
                frags.min = int(digits[10:12])
            if n >= 14:
                frags.sec = int(digits[12:14])
            frags.needs_century_completion = False
    elif n == 3:
        if as_time:
            frags.sec = int(digits[-2:])
            frags.min = int(digits[-3:-2])
        else:
            frags.yday = int(digits[:3])
    elif n == 5:
        if as_time:
            frags.sec = int(digits[-2:])
            frags.min = int(digits[-4:-2])
            frags.hour = int(digits[-5:-4])
        else:
            frags.year = year_of(digits[:2])
            frags.yday = int(digits[2:5])
    elif n == 7:
        if as_time:
            frags.sec = int(digits[-2:])
            frags.min = int(digits[-4:-2])
            frags.hour = int(digits[-6:-4])
            frags.mday = int(digits[-7:-6])
        else:
            frags.year = year_of(digits[:4])
            frags.yday = int(digits[4:7])

    if time_digits:
        tl = len(time_digits)
        if tl in (2, 4, 6):
            if fraction is not None:
                frags.sec = int(time_digits[-2:])
                if tl >= 4:
                    frags.min = int(time_digits[-4:-2])
                if tl >= 6:
                    frags.hour = int(time_digits[-6:-4])
            else:
                frags.hour = int(time_digits[:2])
                if tl >= 4:
                    frags.min = int(time_digits[2:4])
                if tl >= 6:
                    frags.sec = int(time_digits[4:6])

    if fraction:
        frags.sec_fraction = sec_fraction(fraction)

    if zone:
        if zone.startswith("["):
            _assign_bracket_zone(frags, zone[1:-1])
        else:
            frags.zone = zone
            frags.offset = zone_to_offset(zone)
    return True


def _assign_bracket_zone(frags: Fragments, inner: str) -> None:
    """``[-5:EST]`` names zone ``EST`` at offset -5; ``[9]`` means ``+9``."""
    name, colon, label = inner.partition(":")
    if colon:
        frags.zone = label
        frags.offset = zone_to_offset(name)
        return
    frags.zone = inner
    frags.offset = zone_to_offset("+" + inner if inner[:1].isdigit() else inner)


# --- Post-pass matchers ---


def _parse_bc(scan: _Scanner, frags: Fragments) -> bool:
    if scan.consume(_BC) is None:
        return False
    frags.is_bc_era = True
    return True


def _parse_frag(scan: _Scanner, frags: Fragments) -> bool:
    match = scan.consume(_FRAG)
    if match is None:
        return False
    n = int(match.group(1))
    if frags.hour is not None and frags.mday is None and 1 <= n <= 31:
        frags.mday = n
    if frags.mday is not None and frags.hour is None and 0 <= n <= 24:
        frags.hour = n
    return True


_DATE_MATCHERS: tuple[tuple[CharClass, Callable[[_Scanner, Fragments], bool]], ...] = (
    (CharClass.ALPHA | CharClass.DIGIT, _parse_eu),
    (CharClass.ALPHA | CharClass.DIGIT, _parse_us),
    (CharClass.DIGIT | CharClass.DASH, _parse_iso),
    (CharClass.DIGIT | CharClass.DOT, _parse_jis),
    (CharClass.ALPHA | CharClass.DIGIT | CharClass.DASH, _parse_vms),
    (CharClass.DIGIT | CharClass.SLASH, _parse_sla),
    (CharClass.DIGIT | CharClass.DOT, _parse_dot),
    (CharClass.DIGIT, _parse_iso2),
    (CharClass.DIGIT, _parse_year),
    (CharClass.ALPHA, _parse_mon),
    (CharClass.DIGIT, _parse_mday),
    (CharClass.DIGIT, _parse_ddd),
)


# --- Shared helpers ---


def sec_fraction(digits: str) -> Fraction:
    """Exact fraction for the digits after a decimal separator."""
    return Fraction(int(digits), 10 ** len(digits))


def _is_bc(era: str | None) -> bool:
    if era is None:
        return False
    return era.lower().replace(".", "") not in ("ad", "ce")


def _sign_or_digit_at(text: str) -> int:
    pos = 0
    while pos < len(text) and text[pos] not in "+-" and not text[pos].isdigit():
        pos += 1
    return pos


def _digit_at(text: str) -> int:
    pos = 0
    while pos < len(text) and not text[pos].isdigit():
        pos += 1
    return pos


def _digit_span(text: str, pos: int) -> int:
    end = pos
    while end < len(text) and text[end].isdigit():
        end += 1
    return end - pos


def _leading_int(text: str) -> int:
    """Integer value of a sign-plus-digits run; a bare sign reads as 0."""
    digits = text.lstrip("+-")
    if not digits:
        return 0
    return -int(digits) if text.startswith("-") else int(digits)


def _assign_ymd(
    frags: Fragments,
    y: str | None,
    m: str | int | None,
    d: str | None,
    bc: bool,
) -> None:
    """Assign year/month/day roles to up to three loosely-typed tokens.

    The branch order below is load-bearing: ambiguous real-world strings
    depend on exactly this precedence.
    """
    explicit: bool | None = None
    if m is not None and not isinstance(m, str):
        m = str(m)

    # two tokens are a (month, day) pair
    if y is not None and m is not None and d is None:
        y, m, d = None, y, m

    # promote a long or apostrophe-marked day to year
    if y is None:
        if d is not None and len(d) > 2:
            y, d = d, None
        if d is not None and d.startswith("'"):
            y, d = d, None

    # noise, digits, trailing noise: the digits become the day
    if y is not None:
        pos = _sign_or_digit_at(y)
        if pos < len(y):
            bp = pos
            if y[pos] in "+-":
                pos += 1
            ep = pos + _digit_span(y, pos)
            if ep < len(y):
                y, d = d, y[bp:ep]

    # apostrophe or long month slot: (month, day, year) order
    if m is not None and (m.startswith("'") or len(m) > 2):
        y, m, d = m, d, y

    # apostrophe or long day slot: it is the year
    if d is not None and (d.startswith("'") or len(d) > 2):
        y, d = d, y

    if y is not None:
        pos = _sign_or_digit_at(y)
        if pos < len(y):
            bp = pos
            if y[pos] in "+-":
                explicit = False
                pos += 1
            span = _digit_span(y, pos)
            if span > 2:
                explicit = False
            frags.year = _leading_int(y[bp : pos + span])

    if bc:
        frags.is_bc_era = True

    if m is not None:
        pos = _digit_at(m)
        if pos < len(m):
            frags.mon = int(m[pos : pos + _digit_span(m, pos)])

    if d is not None:
        pos = _digit_at(d)
        if pos < len(d):
            frags.mday = int(d[pos : pos + _digit_span(d, pos)])

    if explicit is not None:
        frags.needs_century_completion = False
