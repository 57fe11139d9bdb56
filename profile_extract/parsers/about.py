"""
About parser: the free-text summary.
"""

from typing import Optional

from ..heuristics import normalize_lines
from ..models import About, ParseInput
from .base import BaseParser


class AboutParser(BaseParser[About]):
    section_name = 'about'

    def parse(self, input: ParseInput) -> Optional[About]:
        lines = [line for line in normalize_lines(input.texts) if line.lower() != 'about']
        if not lines:
            return None
        return About(text='\n'.join(lines))

    def validate(self, item: About) -> bool:
        return bool(item.text)
