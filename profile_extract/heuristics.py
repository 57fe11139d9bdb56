"""
Field classification heuristics shared by every parser.

All functions here are pure: they take strings and return strings/bools, so
each can be tested on its own.
"""

import re
from dataclasses import dataclass
from typing import Optional, List, Iterable
from urllib.parse import unquote

from .config import SCRAPING_CONSTANTS, DATE_PATTERNS
from .logger import get_logger

log = get_logger('heuristics')

_DURATION_RE = re.compile(DATE_PATTERNS['DURATION_REGEX'])
_YEAR_RE = re.compile(DATE_PATTERNS['YEAR_REGEX'])
_MONTH_RE = re.compile(r'\b(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)', re.IGNORECASE)


@dataclass
class DateRange:
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    duration: Optional[str] = None


def _has_current_keyword(text: str) -> bool:
    return any(kw in text for kw in DATE_PATTERNS['CURRENT_KEYWORDS'])


def is_date_line(text: str) -> bool:
    """Date range, "Present"-like keyword or duration together with a year/duration."""
    has_separator = DATE_PATTERNS['DATE_RANGE_SEPARATOR'] in text
    has_current = _has_current_keyword(text)
    has_duration = bool(_DURATION_RE.search(text))
    has_year = bool(_YEAR_RE.search(text))
    return (has_separator or has_current) and (has_duration or has_year)


def is_location_like(text: str) -> bool:
    """Short, no digits, no duration separator, few words."""
    return (
        len(text) < SCRAPING_CONSTANTS['MAX_LOCATION_LENGTH']
        and DATE_PATTERNS['DURATION_SEPARATOR'] not in text
        and not re.search(r'\d', text)
        and len(text.split()) <= SCRAPING_CONSTANTS['MAX_LOCATION_WORD_COUNT']
    )


def is_description_like(text: str) -> bool:
    """Long text with many words."""
    return (
        len(text.split()) > SCRAPING_CONSTANTS['MIN_DESCRIPTION_WORD_COUNT']
        or len(text) > SCRAPING_CONSTANTS['MIN_DESCRIPTION_LENGTH']
    )


def looks_like_month_date(text: str) -> bool:
    return bool(_MONTH_RE.search(text))


def normalize_current_keyword(value: str) -> str:
    """Map any ongoing keyword (case-insensitive) to the canonical "Present"."""
    for keyword in DATE_PATTERNS['CURRENT_KEYWORDS']:
        if value.strip().lower() == keyword.lower():
            return DATE_PATTERNS['PRESENT']
    return value


def parse_date_range(text: Optional[str], include_duration: bool = False) -> DateRange:
    """
    Parse strings like "Jan 2020 - Present · 2 yrs 3 mos" or "2016 - 2020".

    With include_duration the trailing "· duration" part is split off first,
    and a lone date means "from" only (still ongoing, end unknown). Without it
    a lone date (e.g. a graduation year) is used for both ends.
    """
    if not text:
        return DateRange()

    range_part = text.strip()
    duration = None

    separator = DATE_PATTERNS['DURATION_SEPARATOR']
    if include_duration and separator in range_part:
        head, _, tail = range_part.partition(separator)
        range_part = head.strip()
        duration = tail.strip() or None

    range_separator = DATE_PATTERNS['DATE_RANGE_SEPARATOR']
    if range_separator in range_part:
        start, _, end = range_part.partition(range_separator)
        from_date = start.strip() or None
        to_date = end.strip() or None
        if to_date:
            to_date = normalize_current_keyword(to_date)
    else:
        single = range_part.strip() or None
        if single and not include_duration:
            single = normalize_current_keyword(single)
        from_date = single
        to_date = None if include_duration else single

    return DateRange(from_date=from_date, to_date=to_date, duration=duration)


def normalize_lines(texts: Iterable[str]) -> List[str]:
    """Trim, collapse inner whitespace and drop empties."""
    lines = []
    for text in texts:
        if not text:
            continue
        line = ' '.join(text.split())
        if line:
            lines.append(line)
    return lines


def to_plain_text(texts: Iterable[str]) -> str:
    return '\n'.join(normalize_lines(texts))


def map_contact_heading(heading: str) -> Optional[str]:
    """Map a contact panel heading to a contact type."""
    lower = heading.lower()
    if 'profile' in lower:
        return 'linkedin'
    if 'website' in lower:
        return 'website'
    if 'email' in lower:
        return 'email'
    if 'phone' in lower:
        return 'phone'
    if 'twitter' in lower or 'x.com' in lower:
        return 'twitter'
    if 'birthday' in lower:
        return 'birthday'
    if 'address' in lower:
        return 'address'
    return None


def map_interest_tab(tab_name: str) -> str:
    """Map an interests tab label to a category."""
    tab_lower = tab_name.strip().lower()
    if 'compan' in tab_lower:
        return 'company'
    if 'group' in tab_lower:
        return 'group'
    if 'school' in tab_lower:
        return 'school'
    if 'newsletter' in tab_lower:
        return 'newsletter'
    if 'voice' in tab_lower or 'influencer' in tab_lower:
        return 'influencer'
    return tab_lower


def decode_redirect_url(url: str) -> str:
    """Unwrap "/redir/redirect?url=..." links to their target."""
    if 'linkedin.com/redir/redirect' not in url:
        return url
    match = re.search(r'url=([^&]+)', url)
    if not match:
        return url
    return unquote(match.group(1))
