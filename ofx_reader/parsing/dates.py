"""
OFX date parsing.

OFX dates look like YYYYMMDD[HHMM[SS[.XXX]]][[gmt offset[:tz name]]], e.g.
"20230115120000.500[-5:EST]". Fractional seconds are dropped and the
bracketed offset is applied to the UTC reading of the date.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional
from .config.settings import ParserSettings, DEFAULT_SETTINGS
from .exceptions import InvalidDateError

_FRACTION_RE = re.compile(r'\.\d+')
_OFFSET_RE = re.compile(r'\[(?P<sign>[+-])?(?P<hh>\d{1,2})(?::[A-Za-z]{2,5})?\]')
_BRACKET_RE = re.compile(r'\[[^\]]+\]')
_REFERENCE = datetime(2000, 1, 1)


def parse_offset(raw: str) -> Optional[timezone]:
    """Return the fixed offset of a "[-3:BRT]" style annotation, or None."""
    m = _OFFSET_RE.search(raw)
    if m is None:
        return None
    hours = int(m.group('hh'))
    if m.group('sign') == '-':
        hours = -hours
    return timezone(timedelta(hours=hours))


def parse_ofx_date(raw: str, field: str = None, settings: ParserSettings = DEFAULT_SETTINGS) -> datetime:
    """
    Parse an OFX date into a timezone-aware datetime.

    The date is read as UTC; when an offset annotation is present the result
    is the same instant expressed in that offset, so
    "20230115120000[-5:EST]" gives 2023-01-15 07:00:00-05:00.

    Args:
        raw: Date string from the document
        field: Element path used in the error message

    Raises:
        InvalidDateError: if what remains is not a date in one of the
            configured formats
    """
    text = _FRACTION_RE.sub('', raw or '')

    try:
        offset = parse_offset(text)
    except ValueError:
        # offsets of 24 hours or more
        raise InvalidDateError(raw, field) from None
    if offset is not None:
        text = _BRACKET_RE.sub('', text)
    text = text.strip()

    parsed = None
    for fmt in settings.date_formats:
        # strptime accepts one-digit fields; only try layouts of the same width
        if len(_REFERENCE.strftime(fmt)) != len(text):
            continue
        try:
            parsed = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue

    if parsed is None:
        raise InvalidDateError(raw, field)

    parsed = parsed.replace(tzinfo=timezone.utc)
    if offset is not None:
        parsed = parsed.astimezone(offset)
    return parsed
