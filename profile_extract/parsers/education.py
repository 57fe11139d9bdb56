"""
Education parser: institution, degree, dates, description.
"""

import re
from typing import Optional

from ..config import SCRAPING_CONSTANTS, DATE_PATTERNS
from ..heuristics import parse_date_range, normalize_lines, to_plain_text
from ..models import Education, ParseInput
from .base import BaseParser


class EducationParser(BaseParser[Education]):
    section_name = 'education'

    def parse(self, input: ParseInput) -> Optional[Education]:
        lines = normalize_lines(input.texts)
        if not lines:
            return None

        institution_name = lines[0]
        degree = None
        date_str = ''

        if len(lines) >= 3:
            degree = lines[1]
            date_str = lines[2]
        elif len(lines) == 2:
            second = lines[1]
            if DATE_PATTERNS['DATE_RANGE_SEPARATOR'] in second or re.search(r'\d', second):
                date_str = second
            else:
                degree = second

        dates = parse_date_range(date_str)
        description = '\n'.join(lines[3:]).strip() or None

        return Education(
            institution_name=institution_name,
            degree=degree,
            url=input.links[0].url if input.links else None,
            from_date=dates.from_date,
            to_date=dates.to_date,
            description=description,
            plain_text=to_plain_text(lines),
        )

    def validate(self, item: Education) -> bool:
        name = item.institution_name or ''
        return 0 < len(name) <= SCRAPING_CONSTANTS['MAX_TITLE_LENGTH']
