"""
Semantic text extraction.

Reads headings and paragraphs; falls back to generic inline spans only when
neither is present. Survives class renames, not element-type changes.
"""

from typing import Optional, List

from ..models import ExtractedText
from ..nodes import Node
from ..logger import get_logger
from .base import BaseTextExtractor, collapse_overlaps, extract_links, detect_sub_items, score_confidence

log = get_logger('text.semantic')

HEADING_SELECTOR = 'h1, h2, h3, h4, h5, h6'


class SemanticTextExtractor(BaseTextExtractor):
    """Extract ordered text from headings, paragraphs, then spans."""

    name = 'semantic'
    priority = 1

    field_scores = (0.6, 0.45, 0.25)

    async def can_handle(self, node: Node) -> bool:
        try:
            return await node.count(f'{HEADING_SELECTOR}, p, span') > 0
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
            log.debug(f"SemanticTextExtractor.extract error: {e}")
            return None

    async def read_texts(self, node: Node) -> List[str]:
        raw_texts = await _texts_of(node, HEADING_SELECTOR)
        raw_texts += await _texts_of(node, 'p')

        texts = collapse_overlaps(raw_texts)
        if texts:
            return texts

        span_texts = collapse_overlaps(await _texts_of(node, 'span'))
        return [text for text in span_texts if len(text) > 1]


async def _texts_of(node: Node, selector: str) -> List[str]:
    texts = []
    for element in await node.query_all(selector):
        text = await element.text_content()
        if text:
            texts.append(text)
    return texts
