"""
Base class for text extractors, plus helpers shared by the structured ones.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Awaitable, Callable, Sequence, Tuple

from ..config import SCRAPING_CONSTANTS, PROFILE_HOST
from ..models import ExtractedLink, ExtractedText
from ..nodes import Node
from ..logger import get_logger

log = get_logger('text')

TextReader = Callable[[Node], Awaitable[List[str]]]


class BaseTextExtractor(ABC):
    """Turns one candidate node into ordered text fragments + links."""

    name: str = ""
    priority: int = 0

    @abstractmethod
    async def can_handle(self, node: Node) -> bool:
        """
        Cheap feasibility probe.

        Must not raise: a failing probe means "cannot handle".
        """
        pass

    @abstractmethod
    async def extract(self, node: Node) -> Optional[ExtractedText]:
        """
        Extract text from a candidate node.

        Returns None when the node yields no usable text. Node query errors
        are swallowed here and reported as None.
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} priority={self.priority}>"


def collapse_overlaps(texts: Sequence[str], max_length: int = SCRAPING_CONSTANTS['MAX_FALLBACK_TEXT_LENGTH']) -> List[str]:
    """
    Drop duplicate and overlapping fragments, keeping first-seen order.

    A fragment is discarded when it is empty, longer than max_length, equal
    to a kept fragment, contains a kept fragment longer than 3 chars, or is
    itself longer than 3 chars and contained in a kept fragment.
    """
    kept: List[str] = []
    seen = set()

    for raw in texts:
        if raw is None:
            continue
        text = raw.strip()
        if not text or len(text) > max_length or text in seen:
            continue

        overlaps = any(
            (len(existing) > 3 and existing in text) or (len(text) > 3 and text in existing)
            for existing in kept
        )
        if overlaps:
            continue

        seen.add(text)
        kept.append(text)

    return kept


async def extract_links(node: Node) -> List[ExtractedLink]:
    """All anchors with an href under the node. Failing anchors are skipped."""
    links: List[ExtractedLink] = []
    try:
        anchors = await node.query_all('a[href]')
    except Exception as e:
        log.debug(f"Link lookup failed: {e}")
        return links

    for anchor in anchors:
        try:
            href = await anchor.get_attribute('href')
            if not href:
                continue
            text = (await anchor.text_content() or '').strip()
            links.append(ExtractedLink(
                url=href,
                text=' '.join(text.split()),
                is_external=PROFILE_HOST not in href,
            ))
        except Exception:
            continue

    return links


async def detect_sub_items(node: Node, read_texts: TextReader) -> List[ExtractedText]:
    """
    Nested repeating entries directly under the node (one employer, many roles).

    Only the first nested list is considered, and only when it holds more
    than one entry.
    """
    sub_items: List[ExtractedText] = []

    try:
        nested = await node.query('ul')
        if nested is None:
            return sub_items

        entries = await nested.query_all(':scope > li')
        if len(entries) <= 1:
            return sub_items

        for entry in entries:
            texts = await read_texts(entry)
            if not texts:
                continue
            sub_items.append(ExtractedText(
                texts=texts,
                links=await extract_links(entry),
                confidence=0.8 if len(texts) >= 2 else 0.5,
            ))
    except Exception as e:
        # Best-effort nested extraction.
        log.debug(f"Sub-item detection stopped early: {e}")

    return sub_items


def score_confidence(
    texts: Sequence[str],
    links: Sequence[ExtractedLink],
    sub_items: Sequence[ExtractedText],
    field_scores: Tuple[float, float, float],
) -> float:
    """
    Structural richness score in [0, 1].

    field_scores are the base scores for (>=3, 2, 1) fields.
    """
    three, two, one = field_scores
    count = len(texts)
    if count >= 3:
        score = three
    elif count == 2:
        score = two
    elif count == 1:
        score = one
    else:
        return 0.0

    if links:
        score += 0.2
    if sub_items:
        score += 0.2

    title = texts[0]
    if 3 <= len(title) <= 150:
        score += 0.2

    return round(min(score, 1.0), 4)
