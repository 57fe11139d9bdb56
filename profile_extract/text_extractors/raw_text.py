"""
Raw text fallback extraction.

Flattens the rendered text line by line. Field position is the only signal
left at this point, so order is preserved and only adjacent repeats collapse.
"""

from typing import Optional, List

from ..config import SCRAPING_CONSTANTS
from ..models import ExtractedText
from ..nodes import Node
from ..logger import get_logger
from .base import BaseTextExtractor

log = get_logger('text.raw')


class RawTextExtractor(BaseTextExtractor):
    """Last resort: every rendered line, lowest confidence."""

    name = 'raw-text'
    priority = 3

    def __init__(self, max_line_length: int = SCRAPING_CONSTANTS['MAX_FALLBACK_TEXT_LENGTH']):
        self.max_line_length = max_line_length

    async def can_handle(self, node: Node) -> bool:
        try:
            text = await node.inner_text()
        except Exception:
            return False
        return bool(text and text.strip())

    async def extract(self, node: Node) -> Optional[ExtractedText]:
        try:
            raw_text = await node.inner_text()
        except Exception as e:
            log.debug(f"RawTextExtractor.extract error: {e}")
            return None

        if not raw_text or not raw_text.strip():
            return None

        lines = self.split_lines(raw_text)
        if not lines:
            return None

        return ExtractedText(
            texts=lines,
            links=[],
            confidence=self.compute_confidence(lines),
        )

    def split_lines(self, raw_text: str) -> List[str]:
        lines = []
        for line in raw_text.split('\n'):
            line = line.strip()
            if not line or len(line) >= self.max_line_length:
                continue
            # collapse adjacent repeats only
            if lines and lines[-1] == line:
                continue
            lines.append(line)
        return lines

    @staticmethod
    def compute_confidence(texts: List[str]) -> float:
        if len(texts) >= 4:
            return 0.4
        if len(texts) >= 2:
            return 0.3
        if len(texts) >= 1:
            return 0.15
        return 0.0
