"""
Top card parser: name, headline, origin.
"""

import re
from typing import Optional

from ..config import SCRAPING_CONSTANTS
from ..heuristics import normalize_lines
from ..models import TopCard, ParseInput
from .base import BaseParser


class TopCardParser(BaseParser[TopCard]):
    section_name = 'top-card'

    def parse(self, input: ParseInput) -> Optional[TopCard]:
        lines = normalize_lines(input.texts)
        if not lines:
            return None

        name = lines[0]
        headline = lines[1] if len(lines) > 1 else None
        origin = lines[2] if len(lines) > 2 else None

        if origin:
            origin = re.sub(r'\bContact info\b.*', '', origin, flags=re.IGNORECASE).strip() or None

        return TopCard(
            name=name,
            headline=None if headline == name else headline,
            origin=origin,
        )

    def validate(self, item: TopCard) -> bool:
        return bool(item.name) and len(item.name) <= SCRAPING_CONSTANTS['MAX_TITLE_LENGTH']
