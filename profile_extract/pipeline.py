"""
Extraction Pipeline - runs one section end to end.

Flow:
    section extractor -> candidate nodes (list / single) or raw blocks
      ├─ list/single: per node, text extractors in priority order
      │     first result >= threshold wins, else best attempt is kept
      │     -> parser.parse -> parser.validate
      └─ raw: parser.parse_raw (or one synthesized ParseInput per block)
    -> optional key-based dedup -> diagnostics (+ snippet on total failure)

Nothing in here raises: node errors, low confidence and parse rejections are
counted in diagnostics and the run carries on with the next item.
"""

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, List, Callable, Generic, TypeVar, Sequence, Tuple, Dict, Hashable

from .config import SCRAPING_CONSTANTS, PROFILE_HOST
from .models import (
    ExtractedLink, ExtractedText, ParseInput, PipelineDiagnostics, PipelineResult,
    PipelineStage, RawSection, TaggedNode,
)
from .nodes import Node
from .parsers.base import BaseParser, supports_raw
from .section_extractors.base import BaseSectionExtractor, SectionConfig
from .text_extractors.base import BaseTextExtractor
from .logger import get_logger

log = get_logger('pipeline')

T = TypeVar('T')

RAW_EXTRACTOR_NAME = 'raw-section'

# Raw blocks come pre-segmented by heading, so they carry no extractor score
RAW_SECTION_CONFIDENCE = 1.0
SYNTHESIZED_RAW_CONFIDENCE = 0.5


def deduplicate_items(items: Sequence[T], key_fn: Callable[[T], Hashable]) -> List[T]:
    """Keep the first item for each key, preserving order."""
    seen = set()
    unique = []
    for item in items:
        key = key_fn(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


@dataclass
class _RunStats:
    """Mutable counters for one run; frozen into PipelineDiagnostics at the end."""
    attempted: List[str] = field(default_factory=list)
    used: Counter = field(default_factory=Counter)
    confidences: List[float] = field(default_factory=list)
    items_found: int = 0
    items_failed: int = 0
    low_confidence: int = 0

    def attempt(self, name: str):
        if name not in self.attempted:
            self.attempted.append(name)

    def accept(self, name: str, confidence: float):
        self.used[name] += 1
        self.confidences.append(confidence)


class ExtractionPipeline(Generic[T]):
    """
    Orchestrates extraction for one section.

    Usage:
        pipeline = ExtractionPipeline(
            section_extractor=ExperienceSectionExtractor(),
            text_extractors=default_text_extractors(),
            parser=ExperienceParser(),
            confidence_threshold=0.3,
        )
        result = await pipeline.extract(SectionConfig(base_url, document))
    """

    def __init__(
        self,
        section_extractor: BaseSectionExtractor,
        text_extractors: Sequence[BaseTextExtractor],
        parser: BaseParser[T],
        confidence_threshold: float = 0.5,
        capture_html_on_failure: bool = False,
        key_fn: Optional[Callable[[T], Hashable]] = None,
        max_captured_html: int = SCRAPING_CONSTANTS['MAX_CAPTURED_HTML'],
    ):
        self.section_extractor = section_extractor
        # Lower priority number = tried first
        self.text_extractors = sorted(text_extractors, key=lambda e: e.priority)
        self.parser = parser
        self.confidence_threshold = confidence_threshold
        self.capture_html_on_failure = capture_html_on_failure
        self.key_fn = key_fn
        self.max_captured_html = max_captured_html
        self.stage = PipelineStage.NOT_STARTED

    @property
    def section_name(self) -> str:
        return self.parser.section_name or self.section_extractor.section_name

    async def extract(self, config: SectionConfig) -> PipelineResult[T]:
        start = time.perf_counter()
        stats = _RunStats()
        items: List[T] = []

        self.stage = PipelineStage.LOCATING_ITEMS
        try:
            located = await self.section_extractor.extract(config)
        except Exception as e:
            log.warning(f"{self.section_name}: locating items failed: {e}")
            located = None

        if located is None:
            pass
        elif located.kind == 'list':
            items = await self._process_nodes(located.items, stats)
        elif located.kind == 'single':
            candidates = [located.item] if located.item is not None else []
            items = await self._process_nodes(candidates, stats)
        elif located.kind == 'raw':
            items = self._process_raw(located.sections, config.section_context, stats)
        else:
            log.warning(f"{self.section_name}: unknown section result kind '{located.kind}'")

        self.stage = PipelineStage.DEDUPLICATING
        if self.key_fn is not None and items:
            before = len(items)
            items = deduplicate_items(items, self.key_fn)
            if len(items) < before:
                log.debug(f"{self.section_name}: dropped {before - len(items)} duplicate records")

        captured_html = None
        if not items and self.capture_html_on_failure:
            captured_html = await self._capture_snippet(config)

        self.stage = PipelineStage.DONE

        diagnostics = PipelineDiagnostics(
            section=self.section_name,
            extractors_attempted=tuple(stats.attempted),
            extractor_used=stats.used.most_common(1)[0][0] if stats.used else None,
            items_found=stats.items_found,
            items_parsed=len(stats.confidences),
            items_failed=stats.items_failed,
            low_confidence_items=stats.low_confidence,
            avg_confidence=sum(stats.confidences) / len(stats.confidences) if stats.confidences else 0.0,
            duration_ms=(time.perf_counter() - start) * 1000,
            captured_html=captured_html,
        )

        if items:
            log.debug(
                f"{self.section_name}: {len(items)} records via {diagnostics.extractor_used} "
                f"(confidence: {diagnostics.avg_confidence:.2f}, failed: {diagnostics.items_failed})"
            )
        else:
            log.debug(
                f"{self.section_name}: no records "
                f"(found {stats.items_found}, extractors tried: {', '.join(stats.attempted) or 'none'})"
            )

        return PipelineResult(items=items, diagnostics=diagnostics)

    # ------------------------------------------------------------------
    # list / single
    # ------------------------------------------------------------------

    async def _process_nodes(self, candidates: List[TaggedNode], stats: _RunStats) -> List[T]:
        stats.items_found = len(candidates)
        records: List[T] = []

        for index, candidate in enumerate(candidates):
            self.stage = PipelineStage.EXTRACTING_TEXT
            extracted, extractor_name = await self.extract_text(candidate.node, stats)
            if extracted is None:
                log.debug(f"{self.section_name}: item {index} produced no text")
                stats.items_failed += 1
                continue

            self.stage = PipelineStage.PARSING
            record = self._parse_one(ParseInput.from_extracted(extracted, candidate.context))
            if record is None:
                stats.items_failed += 1
                continue

            records.append(record)
            stats.accept(extractor_name, extracted.confidence)

        return records

    async def extract_text(self, node: Node, stats: Optional[_RunStats] = None) -> Tuple[Optional[ExtractedText], Optional[str]]:
        """
        Try text extractors in priority order.

        Returns the first result at/above the threshold, otherwise the best
        scoring attempt seen, otherwise (None, None).
        """
        stats = stats or _RunStats()
        best: Optional[ExtractedText] = None
        best_name: Optional[str] = None

        for extractor in self.text_extractors:
            stats.attempt(extractor.name)
            try:
                if not await extractor.can_handle(node):
                    continue
                result = await extractor.extract(node)
            except Exception as e:
                log.debug(f"{self.section_name}: {extractor.name} threw: {e}")
                continue

            if result is None or not result.texts:
                continue

            if result.confidence >= self.confidence_threshold:
                return result, extractor.name

            if best is None or result.confidence > best.confidence:
                best, best_name = result, extractor.name

        if best is not None:
            log.debug(
                f"{self.section_name}: low-confidence fallback {best_name} "
                f"({best.confidence:.2f} < {self.confidence_threshold})"
            )
            stats.low_confidence += 1
        return best, best_name

    def _parse_one(self, parse_input: ParseInput) -> Optional[T]:
        try:
            record = self.parser.parse(parse_input)
            if record is None:
                return None
            if not self.parser.validate(record):
                log.debug(f"{self.section_name}: record rejected by validation")
                return None
            return record
        except Exception as e:
            log.debug(f"{self.section_name}: parse error: {e}")
            return None

    # ------------------------------------------------------------------
    # raw
    # ------------------------------------------------------------------

    def _process_raw(self, sections: List[RawSection], context: Dict[str, str], stats: _RunStats) -> List[T]:
        stats.items_found = len(sections)
        self.stage = PipelineStage.PARSING

        if supports_raw(self.parser):
            stats.attempt(RAW_EXTRACTOR_NAME)
            try:
                records = self.parser.parse_raw(sections)
            except Exception as e:
                log.warning(f"{self.section_name}: raw parse failed: {e}")
                stats.items_failed += len(sections)
                return []

            valid = []
            for record in records:
                try:
                    accepted = self.parser.validate(record)
                except Exception:
                    accepted = False
                if accepted:
                    valid.append(record)
                    stats.accept(RAW_EXTRACTOR_NAME, RAW_SECTION_CONFIDENCE)
                else:
                    stats.items_failed += 1
            return valid

        # Degraded path: one generic ParseInput per block
        stats.attempt(RAW_EXTRACTOR_NAME)
        records = []
        for section in sections:
            record = self._parse_one(self._synthesize_input(section, context))
            if record is None:
                stats.items_failed += 1
                continue
            records.append(record)
            stats.accept(RAW_EXTRACTOR_NAME, SYNTHESIZED_RAW_CONFIDENCE)
        return records

    @staticmethod
    def _synthesize_input(section: RawSection, context: Dict[str, str]) -> ParseInput:
        texts = [text for text in (section.heading, section.text) if text and text.strip()]
        links = [
            ExtractedLink(url=anchor.href, text=(anchor.text or '').strip(), is_external=PROFILE_HOST not in anchor.href)
            for anchor in section.anchors if anchor.href
        ]
        return ParseInput(texts=texts, links=links, context=dict(context))

    # ------------------------------------------------------------------
    # failure capture
    # ------------------------------------------------------------------

    async def _capture_snippet(self, config: SectionConfig) -> Optional[str]:
        """Bounded markup excerpt of the section root, for self-heal. Never raises."""
        try:
            root = await self.section_extractor.resolve_scope(config.document)
            html = await root.inner_html()
        except Exception as e:
            log.debug(f"{self.section_name}: snippet capture failed: {e}")
            return None
        return html[:self.max_captured_html] if html else None
