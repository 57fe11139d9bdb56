"""
Self-heal hook.

When a section comes back empty, a caller can hand the failed selector chain
and a bounded markup excerpt to a SelfHealProvider and get back a candidate
SelectorVersion. The pipeline never calls this itself; callers decide whether
to register and activate what comes back.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List

from pydantic import BaseModel, Field

from .config import SCRAPING_CONSTANTS
from .exceptions import SelfHealError
from .models import SelectorVersion, SectionSelectorSet
from .nodes import Node
from .registry import SelectorRegistry, selector_registry
from .logger import get_logger

log = get_logger('self_heal')

EXPECTED_ITEM_SHAPE = 'array of item containers that contain human-visible text'


@dataclass
class SelfHealContext:
    section: str
    failed_selectors: List[str] = field(default_factory=list)
    expected_shape: str = EXPECTED_ITEM_SHAPE
    html_snippet: str = ''


class SelfHealProvider(ABC):
    """Proposes replacement selectors for a failing section."""

    @abstractmethod
    async def generate_selectors(self, context: SelfHealContext) -> Optional[SelectorVersion]:
        pass


def build_self_heal_prompt(context: SelfHealContext) -> str:
    return '\n\n'.join([
        f"Section: {context.section}",
        f"Failed selectors: {', '.join(context.failed_selectors) or 'none'}",
        f"Expected output shape: {context.expected_shape}",
        'Generate resilient selectors preferring ARIA, semantic tags, then data attributes.',
        'Avoid hashed class names.',
        'HTML snippet:',
        context.html_snippet,
    ])


async def capture_section_html(document: Node, max_length: int) -> str:
    """Markup of <main> (or the whole document) cut to max_length."""
    try:
        main = await document.query('main')
        html = await (main or document).inner_html()
    except Exception as e:
        log.debug(f"Could not capture html: {e}")
        return ''
    return (html or '')[:max_length]


async def attempt_self_heal(
    document: Node,
    section: str,
    failed_selectors: List[str],
    provider: Optional[SelfHealProvider] = None,
    max_html_length: int = SCRAPING_CONSTANTS['MAX_SELF_HEAL_HTML'],
) -> Optional[SelectorVersion]:
    """Ask the provider for new selectors. Returns None without a provider or on any failure."""
    if provider is None:
        return None

    try:
        context = SelfHealContext(
            section=section,
            failed_selectors=list(failed_selectors),
            html_snippet=await capture_section_html(document, max_html_length),
        )
        version = await provider.generate_selectors(context)
    except Exception as e:
        log.debug(f"self-heal failed for {section}: {e}")
        return None

    if version is not None:
        log.info(f"self-heal proposed selector version '{version.version}' for {section}")
    return version


# =============================================================================
# LLM provider
# =============================================================================

class SelectorSuggestion(BaseModel):
    """Structured output for selector repair"""
    analysis: str = Field(description="Short explanation of the markup structure and the selectors chosen")
    item_selectors: List[str] = Field(description="Ordered CSS selectors, each matching one element per item")
    container_selectors: List[str] = Field(default=[], description="Optional CSS selectors for the element wrapping all items")


class LlmSelfHealProvider(SelfHealProvider):
    """
    Asks Claude for a selector set and folds it into a copy of the active
    SelectorVersion under a new version id.
    """

    def __init__(self, handler=None, registry: Optional[SelectorRegistry] = None):
        self._handler = handler
        self.registry = registry or selector_registry

    @property
    def handler(self):
        if self._handler is None:
            # Imported lazily so the provider can be constructed without an API key
            from .llm_handler import LLMHandler
            self._handler = LLMHandler()
        return self._handler

    async def generate_selectors(self, context: SelfHealContext) -> Optional[SelectorVersion]:
        prompt = build_self_heal_prompt(context)
        result = await asyncio.to_thread(self.handler.call, prompt, SelectorSuggestion)
        suggestion: SelectorSuggestion = result['data']

        item_selectors = [s.strip() for s in suggestion.item_selectors if s and s.strip()]
        if not item_selectors:
            raise SelfHealError(f"No item selectors suggested for {context.section}")

        log.debug(f"{context.section}: suggested {item_selectors} ({suggestion.analysis[:120]})")
        return self.build_version(context.section, item_selectors, suggestion.container_selectors)

    def build_version(self, section: str, item_selectors: List[str], container_selectors: Optional[List[str]] = None) -> SelectorVersion:
        base = self.registry.get_active_version()
        now = datetime.now(timezone.utc)

        sections = dict(base.sections)
        previous = sections.get(section)
        sections[section] = SectionSelectorSet(
            item_selectors=list(item_selectors),
            container_selectors=list(container_selectors or (previous.container_selectors if previous else [])),
        )

        return SelectorVersion(
            version=f"{base.version}-heal-{section}-{now.strftime('%Y%m%d%H%M%S')}",
            updated_at=now.isoformat().replace('+00:00', 'Z'),
            sections=sections,
        )
