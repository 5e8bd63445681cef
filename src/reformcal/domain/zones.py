"""Zone abbreviations and numeric offsets mapped to fixed UTC offsets.

There is no timezone database here: a zone is a name or a numeric
offset, and it always maps to one offset in seconds east of UTC.
A trailing ``daylight time`` or ``dst`` adds one hour to a named zone.
"""

from __future__ import annotations

import re
from fractions import Fraction

_H = 3600

ZONE_TABLE: dict[str, int] = {
    # Universal
    "ut": 0,
    "utc": 0,
    "gmt": 0,
    "z": 0,
    "wet": 0,
    "west": 1 * _H,
    "bst": 1 * _H,
    # North America
    "est": -5 * _H,
    "edt": -4 * _H,
    "cst": -6 * _H,
    "cdt": -5 * _H,
    "mst": -7 * _H,
    "mdt": -6 * _H,
    "pst": -8 * _H,
    "pdt": -7 * _H,
    "ast": -4 * _H,
    "adt": -3 * _H,
    "akst": -9 * _H,
    "akdt": -8 * _H,
    "hst": -10 * _H,
    "hast": -10 * _H,
    "hadt": -9 * _H,
    "nst": -(3 * _H + 1800),
    "ndt": -(2 * _H + 1800),
    # Europe and Africa
    "cet": 1 * _H,
    "cest": 2 * _H,
    "met": 1 * _H,
    "mest": 2 * _H,
    "mewt": 1 * _H,
    "mez": 1 * _H,
    "mesz": 2 * _H,
    "eet": 2 * _H,
    "eest": 3 * _H,
    "msk": 3 * _H,
    "wat": 1 * _H,
    "cat": 2 * _H,
    "eat": 3 * _H,
    "sast": 2 * _H,
    # Asia and Oceania
    "ist": 5 * _H + 1800,
    "pkt": 5 * _H,
    "ict": 7 * _H,
    "wib": 7 * _H,
    "hkt": 8 * _H,
    "sgt": 8 * _H,
    "awst": 8 * _H,
    "jst": 9 * _H,
    "kst": 9 * _H,
    "acst": 9 * _H + 1800,
    "acdt": 10 * _H + 1800,
    "aest": 10 * _H,
    "aedt": 11 * _H,
    "nzst": 12 * _H,
    "nzdt": 13 * _H,
    "idle": 12 * _H,
    "idlw": -12 * _H,
    # Long names
    "alaskan": -9 * _H,
    "arab": 3 * _H,
    "arabian": 4 * _H,
    "atlantic": -4 * _H,
    "aus central": 9 * _H + 1800,
    "aus eastern": 10 * _H,
    "central": -6 * _H,
    "central europe": 1 * _H,
    "central european": 1 * _H,
    "china": 8 * _H,
    "e. europe": 2 * _H,
    "eastern": -5 * _H,
    "gmt standard": 0,
    "hawaiian": -10 * _H,
    "india": 5 * _H + 1800,
    "israel": 2 * _H,
    "korea": 9 * _H,
    "mountain": -7 * _H,
    "new zealand": 12 * _H,
    "pacific": -8 * _H,
    "romance": 1 * _H,
    "russian": 3 * _H,
    "singapore": 8 * _H,
    "taipei": 8 * _H,
    "tokyo": 9 * _H,
    "us eastern": -5 * _H,
    "us mountain": -7 * _H,
    "w. europe": 1 * _H,
}

# Military single-letter zones: A-I east +1..+9, K-M east +10..+12,
# N-Y west -1..-12, Z is UTC.  J is local time and has no entry.
ZONE_TABLE.update({letter: (i + 1) * _H for i, letter in enumerate("abcdefghi")})
ZONE_TABLE.update({letter: (i + 10) * _H for i, letter in enumerate("klm")})
ZONE_TABLE.update({letter: -(i + 1) * _H for i, letter in enumerate("nopqrstuvwxy")})

_LEADING_INT = re.compile(r"\s*[-+]?\d+")
_SPACES = re.compile(r"\s+")

_MAX_FRACTION_DIGITS = 7


def zone_to_offset(zone: str | None) -> int | Fraction | None:
    """Offset in seconds east of UTC for *zone*, or ``None`` when unknown.

    Accepts names from :data:`ZONE_TABLE` (optionally followed by
    ``standard time``, ``daylight time`` or ``dst``), and signed numeric
    offsets ``±HH``, ``±HHMM``, ``±HHMMSS``, ``±HH:MM[:SS]`` and
    fractional hours ``±HH.F``, each optionally prefixed by ``gmt`` or ``utc``.
    """
    if not zone:
        return None

    text = zone
    dst = False
    width = _ends_with_word(text, "time")
    if width:
        head = text[:-width]
        inner = _ends_with_word(head, "standard")
        if inner:
            text = head[:-inner]
        else:
            inner = _ends_with_word(head, "daylight")
            if inner:
                text = head[:-inner]
                dst = True
    else:
        width = _ends_with_word(text, "dst")
        if width:
            text = text[:-width]
            dst = True

    name = _SPACES.sub(" ", text)
    offset = ZONE_TABLE.get(name.lower())
    if offset is not None:
        return offset + _H if dst else offset

    if len(name) > 3 and name[:3].lower() in ("gmt", "utc"):
        name = name[3:]
    if not name or name[0] not in "+-":
        return None
    sign = -1 if name[0] == "-" else 1
    body = name[1:]
    if not body:
        return None

    if ":" in body:
        return _colon_offset(body, sign)
    if "." in body or "," in body:
        return _fractional_offset(body, sign)
    return _compact_offset(body, sign)


def format_offset(offset: int) -> str:
    """Render an offset in seconds as ``+HH:MM``."""
    sign = "-" if offset < 0 else "+"
    hours, rest = divmod(abs(offset), 3600)
    return f"{sign}{hours:02d}:{rest // 60:02d}"


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def _ends_with_word(text: str, word: str) -> int:
    """Length of a trailing ``<spaces><word>`` in *text*, or 0."""
    n = len(word)
    if len(text) <= n or text[-n:].lower() != word or not text[-(n + 1)].isspace():
        return 0
    count = n + 1
    while count < len(text) and text[-(count + 1)].isspace():
        count += 1
    return count


def _colon_offset(body: str, sign: int) -> int | None:
    parts = body.split(":")
    hour = _to_int(parts[0])
    minute = _to_int(parts[1]) if len(parts) > 1 else 0
    second = _to_int(parts[2]) if len(parts) > 2 else 0
    if not 0 <= hour <= 23 or not 0 <= minute <= 59 or not 0 <= second <= 59:
        return None
    return sign * (second + minute * 60 + hour * 3600)


def _fractional_offset(body: str, sign: int) -> int | Fraction | None:
    sep = "." if "." in body else ","
    hour_text, frac_text = body.split(sep, 1)
    hour = _to_int(hour_text)
    if not 0 <= hour <= 23:
        return None
    frac_text = frac_text[:_MAX_FRACTION_DIGITS]
    n = len(frac_text)
    if n == 0:
        return sign * hour * 3600

    # each hundredth of an hour is 36 seconds
    seconds = _to_int(frac_text) * 36
    if sign < 0:
        hour = -hour
        seconds = -seconds
    if n <= 2:
        if n == 1:
            seconds *= 10
        return seconds + hour * 3600
    offset = Fraction(seconds, 10 ** (n - 2)) + hour * 3600
    return int(offset) if offset.denominator == 1 else offset


def _compact_offset(body: str, sign: int) -> int:
    length = len(body)
    if length <= 2:
        return sign * _to_int(body) * 3600
    # odd lengths have a one-digit hour
    hour_width = 2 - length % 2
    hour = _to_int(body[:hour_width])
    minute = _to_int(body[hour_width : hour_width + 2])
    second = _to_int(body[hour_width + 2 : hour_width + 4]) if length >= 5 else 0
    return sign * (second + minute * 60 + hour * 3600)
