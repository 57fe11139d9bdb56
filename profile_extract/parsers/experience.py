"""
Experience parser.

Field position gives the first text (title); every later field is classified by
shape - date line, then location, then description - so a field that matches
several heuristics always resolves the same way.

Single-position items: first = position title, second = "Company · Employment
type" when it carries the " · " separator, otherwise the company. This is a
heuristic and can swap title/company on atypical rows.
"""

from dataclasses import dataclass
from typing import Optional, List

from ..config import SCRAPING_CONSTANTS
from ..heuristics import (
    is_date_line, is_location_like, is_description_like,
    parse_date_range, normalize_lines, to_plain_text,
)
from ..models import Experience, Position, ParseInput, ExtractedLink
from .base import BaseParser

EMPLOYMENT_TYPES = {
    'full-time', 'part-time', 'self-employed', 'freelance', 'contract',
    'internship', 'apprenticeship', 'seasonal', 'temporary', 'volunteer',
}

ITEM_SEPARATOR = ' · '


@dataclass
class _Meta:
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


def is_employment_type(text: str) -> bool:
    return text.strip().lower() in EMPLOYMENT_TYPES


def extract_meta(lines: List[str]) -> _Meta:
    meta = _Meta()
    for line in lines:
        if meta.from_date is None and is_date_line(line):
            parsed = parse_date_range(line, include_duration=True)
            meta.from_date = parsed.from_date
            meta.to_date = parsed.to_date
            meta.duration = parsed.duration
            continue
        if meta.location is None and is_location_like(line):
            meta.location = line
            continue
        if meta.description is None and is_description_like(line):
            meta.description = line
    return meta


def _position(title: str, employment_type: Optional[str], meta: _Meta, lines: List[str]) -> Position:
    return Position(
        title=title,
        employment_type=employment_type,
        from_date=meta.from_date,
        to_date=meta.to_date,
        duration=meta.duration,
        location=meta.location,
        description=meta.description,
        plain_text=to_plain_text(lines),
    )


def parse_position(texts: List[str]) -> Optional[Position]:
    """One role under a shared employer."""
    lines = normalize_lines(texts)
    if not lines:
        return None

    title = lines[0]
    employment_type = None
    if len(lines) > 1:
        second = lines[1]
        if is_employment_type(second) or (not is_date_line(second) and not is_location_like(second)):
            employment_type = second

    meta = extract_meta(lines[2:] if employment_type else lines[1:])
    return _position(title, employment_type, meta, lines)


def parse_single_experience(lines: List[str], links: List[ExtractedLink]) -> Optional[Experience]:
    title = lines[0] if lines else None
    if not title:
        return None

    second = lines[1] if len(lines) > 1 else ''
    company = second or None
    employment_type = None
    meta_lines = lines[2:]

    if second and is_date_line(second):
        # "Title / dates / ..." with no company line
        company = None
        meta_lines = lines[1:]
    elif ITEM_SEPARATOR in second:
        parts = [part.strip() for part in second.split(ITEM_SEPARATOR)]
        company = parts[0] or None
        employment_type = parts[1] if len(parts) > 1 and parts[1] else None

    if not company and links:
        company = links[0].text or None

    position = _position(title, employment_type, extract_meta(meta_lines), lines)
    return Experience(
        company=company,
        company_url=links[0].url if links else None,
        positions=[position],
        plain_text=to_plain_text(lines),
    )


class ExperienceParser(BaseParser[Experience]):
    section_name = 'experience'

    def parse(self, input: ParseInput) -> Optional[Experience]:
        lines = normalize_lines(input.texts)
        if not lines:
            return None

        if input.sub_items:
            positions = []
            for sub_item in input.sub_items:
                position = parse_position(sub_item.texts)
                if position and self.validate_position(position):
                    positions.append(position)
            if not positions:
                return None
            return Experience(
                company=lines[0],
                company_url=input.links[0].url if input.links else None,
                positions=positions,
                plain_text=to_plain_text(lines),
            )

        return parse_single_experience(lines, input.links)

    def validate_position(self, position: Position) -> bool:
        return bool(position.title) and len(position.title) <= SCRAPING_CONSTANTS['MAX_TITLE_LENGTH']

    def validate(self, item: Experience) -> bool:
        if not item.positions:
            return False

        limit = SCRAPING_CONSTANTS['MAX_TITLE_LENGTH']
        if item.company and len(item.company) > limit:
            return False

        primary = item.positions[0]
        if primary.title and len(primary.title) > limit:
            return False

        has_position_signal = any([
            primary.title, primary.from_date, primary.location, primary.description,
        ])
        return bool(item.company) or has_position_signal
