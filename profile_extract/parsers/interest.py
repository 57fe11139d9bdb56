"""
Interest parser: a followed company, group, school, newsletter or voice.
"""

from typing import Optional

from ..heuristics import normalize_lines, to_plain_text
from ..models import Interest, ParseInput
from .base import BaseParser


class InterestParser(BaseParser[Interest]):
    section_name = 'interest'

    def parse(self, input: ParseInput) -> Optional[Interest]:
        lines = normalize_lines(input.texts)
        if not lines or not input.links:
            return None

        return Interest(
            name=lines[0],
            category=input.context.get('category', 'unknown'),
            url=input.links[0].url,
            plain_text=to_plain_text(lines),
        )

    def validate(self, item: Interest) -> bool:
        return bool(item.name) and bool(item.url)
