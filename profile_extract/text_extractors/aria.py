"""
Accessibility-hint text extraction.

Reads span[aria-hidden="true"]: the visible duplicate of text that is also
exposed to screen readers. Decorative classes churn, but this duplication
stays, which makes it the strongest signal available.
"""

from typing import Optional, List

from ..models import ExtractedText
from ..nodes import Node
from ..logger import get_logger
from .base import BaseTextExtractor, collapse_overlaps, extract_links, detect_sub_items, score_confidence

log = get_logger('text.aria')

ARIA_SELECTOR = 'span[aria-hidden="true"]'


class AriaTextExtractor(BaseTextExtractor):
    """Extract ordered text from accessibility-duplicated spans."""

    name = 'aria'
    priority = 0

    field_scores = (0.4, 0.3, 0.15)

    async def can_handle(self, node: Node) -> bool:
        try:
            return await node.count(ARIA_SELECTOR) > 0
        except Exception:
            return False

    async def extract(self, node: Node) -> Optional[ExtractedText]:
        try:
            texts = await self.read_texts(node)
            if not texts:
                return None

            links = await extract_links(node)
            sub_items = await detect_sub_items(node, self.read_texts)

            return ExtractedText(
                texts=texts,
                links=links,
                sub_items=sub_items or None,
                confidence=score_confidence(texts, links, sub_items, self.field_scores),
            )
        except Exception as e:
            log.debug(f"AriaTextExtractor.extract error: {e}")
            return None

    async def read_texts(self, node: Node) -> List[str]:
        spans = await node.query_all(ARIA_SELECTOR)
        raw_texts = []
        for span in spans:
            try:
                text = await span.text_content()
            except Exception:
                continue
            if text:
                raw_texts.append(text)
        return collapse_overlaps(raw_texts)
