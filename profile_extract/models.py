"""
Data models for profile extraction.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Generic, TypeVar, Union
from enum import Enum


T = TypeVar('T')


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------

@dataclass
class ExtractedLink:
    """A link found inside a candidate node."""
    url: str
    text: str = ""
    is_external: bool = False


@dataclass
class ExtractedText:
    """Ordered text fragments pulled from one candidate node."""
    texts: List[str]
    links: List[ExtractedLink] = field(default_factory=list)
    sub_items: Optional[List['ExtractedText']] = None
    confidence: float = 0.0


@dataclass
class ParseInput:
    """What a parser sees: extracted text plus section-scoped context."""
    texts: List[str]
    links: List[ExtractedLink] = field(default_factory=list)
    sub_items: Optional[List['ParseInput']] = None
    context: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_extracted(cls, extracted: ExtractedText, context: Optional[Dict[str, str]] = None) -> 'ParseInput':
        sub_items = None
        if extracted.sub_items:
            sub_items = [
                cls(texts=list(sub.texts), links=list(sub.links), context=dict(context or {}))
                for sub in extracted.sub_items
            ]
        return cls(
            texts=list(extracted.texts),
            links=list(extracted.links),
            sub_items=sub_items,
            context=dict(context or {}),
        )


# ---------------------------------------------------------------------------
# Section extraction results (closed tagged union)
# ---------------------------------------------------------------------------

@dataclass
class RawAnchor:
    href: Optional[str] = None
    text: Optional[str] = None


@dataclass
class RawSection:
    """A pre-segmented labeled block, e.g. one entry of a contact panel."""
    heading: str
    text: str = ""
    labels: List[str] = field(default_factory=list)
    anchors: List[RawAnchor] = field(default_factory=list)


@dataclass
class TaggedNode:
    """A candidate node plus the section context it was found in."""
    node: Any
    context: Dict[str, str] = field(default_factory=dict)


@dataclass
class ListResult:
    items: List[TaggedNode] = field(default_factory=list)
    kind: str = field(default="list", init=False)


@dataclass
class SingleResult:
    item: Optional[TaggedNode] = None
    kind: str = field(default="single", init=False)


@dataclass
class RawResult:
    sections: List[RawSection] = field(default_factory=list)
    kind: str = field(default="raw", init=False)


SectionResult = Union[ListResult, SingleResult, RawResult]


# ---------------------------------------------------------------------------
# Domain records
# ---------------------------------------------------------------------------

class RecordMixin:
    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Position(RecordMixin):
    title: Optional[str] = None
    employment_type: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    plain_text: str = ""


@dataclass
class Experience(RecordMixin):
    """One employer with one or more positions."""
    company: Optional[str] = None
    company_url: Optional[str] = None
    positions: List[Position] = field(default_factory=list)
    plain_text: str = ""


@dataclass
class Education(RecordMixin):
    institution_name: str
    degree: Optional[str] = None
    url: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    description: Optional[str] = None
    plain_text: str = ""


@dataclass
class Accomplishment(RecordMixin):
    category: str
    title: str
    issuer: Optional[str] = None
    issued_date: Optional[str] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    plain_text: str = ""


@dataclass
class Patent(RecordMixin):
    title: str
    issuer: Optional[str] = None
    number: Optional[str] = None
    issued_date: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    plain_text: str = ""


@dataclass
class Contact(RecordMixin):
    type: str
    value: str
    label: Optional[str] = None


@dataclass
class Interest(RecordMixin):
    name: str
    category: str
    url: Optional[str] = None
    plain_text: str = ""


@dataclass
class TopCard(RecordMixin):
    name: str
    headline: Optional[str] = None
    origin: Optional[str] = None


@dataclass
class About(RecordMixin):
    text: str


# ---------------------------------------------------------------------------
# Pipeline reporting
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    """Lifecycle of one section run."""
    NOT_STARTED = "not_started"
    LOCATING_ITEMS = "locating_items"
    EXTRACTING_TEXT = "extracting_text"
    PARSING = "parsing"
    DEDUPLICATING = "deduplicating"
    DONE = "done"


@dataclass(frozen=True)
class PipelineDiagnostics:
    """Advisory telemetry for one pipeline run. Never persisted."""
    section: str
    extractors_attempted: tuple = ()
    extractor_used: Optional[str] = None
    items_found: int = 0
    items_parsed: int = 0
    items_failed: int = 0
    low_confidence_items: int = 0
    avg_confidence: float = 0.0
    duration_ms: float = 0.0
    captured_html: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "section": self.section,
            "extractors_attempted": list(self.extractors_attempted),
            "extractor_used": self.extractor_used,
            "items_found": self.items_found,
            "items_parsed": self.items_parsed,
            "items_failed": self.items_failed,
            "low_confidence_items": self.low_confidence_items,
            "avg_confidence": round(self.avg_confidence, 3),
            "duration_ms": round(self.duration_ms, 1),
        }
        if self.captured_html:
            result["captured_html_length"] = len(self.captured_html)
        return result


@dataclass
class PipelineResult(Generic[T]):
    items: List[T]
    diagnostics: PipelineDiagnostics


class HealthStatus(Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    BROKEN = "broken"


@dataclass
class HealthReport:
    section: str
    status: HealthStatus
    extractor: Optional[str]
    confidence: float
    item_count: int
    message: str

    def to_dict(self) -> dict:
        return {
            "section": self.section,
            "status": self.status.value,
            "extractor": self.extractor,
            "confidence": round(self.confidence, 3),
            "item_count": self.item_count,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Selector versions
# ---------------------------------------------------------------------------

@dataclass
class SectionSelectorSet:
    item_selectors: List[str] = field(default_factory=list)
    container_selectors: Optional[List[str]] = None

    def to_dict(self) -> dict:
        result = {"itemSelectors": list(self.item_selectors)}
        if self.container_selectors is not None:
            result["containerSelectors"] = list(self.container_selectors)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> 'SectionSelectorSet':
        containers = data.get("containerSelectors")
        return cls(
            item_selectors=list(data.get("itemSelectors", [])),
            container_selectors=list(containers) if containers is not None else None,
        )


@dataclass
class SelectorVersion:
    """A named, timestamped set of item selectors per section."""
    version: str
    updated_at: str
    sections: Dict[str, SectionSelectorSet] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "updatedAt": self.updated_at,
            "sections": {name: s.to_dict() for name, s in self.sections.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SelectorVersion':
        return cls(
            version=data["version"],
            updated_at=data.get("updatedAt", ""),
            sections={
                name: SectionSelectorSet.from_dict(s)
                for name, s in data.get("sections", {}).items()
            },
        )
