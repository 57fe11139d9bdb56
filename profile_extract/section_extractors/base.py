"""
Base class for section extractors.

A section extractor finds the candidate nodes for one logical section of a
profile. It knows three ways to get them:

    1. inline view   - the section as rendered on the currently loaded page,
                       found by its heading
    2. detail view   - a dedicated page holding the full collection, used when
                       the inline view is truncated behind "show all"
    3. selector chain - the active SelectorVersion's item selectors for the
                       section, tried in order until one matches

Node errors are caught per lookup and treated as "nothing here".
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, List, Dict

from ..models import SectionResult, TaggedNode, ListResult
from ..nodes import Node, Navigator
from ..registry import SelectorRegistry, selector_registry
from ..logger import get_logger

log = get_logger('section')

# Last resort when no registered selector matches
GENERIC_ITEM_SELECTOR = 'ul > li, ol > li'

# Lists inside an inline section card
INLINE_ITEM_SELECTORS = [
    '.pvs-list__paged-list-item',
    'li.artdeco-list__item',
    GENERIC_ITEM_SELECTOR,
]

HEADING_SELECTOR = 'h2, h3, [role="heading"]'


async def outermost(nodes: List[Node]) -> List[Node]:
    """Drop nodes nested inside another candidate (role entries inside an employer item)."""
    if len(nodes) < 2:
        return nodes

    kept = []
    for node in nodes:
        nested = False
        for other in nodes:
            if other is node:
                continue
            try:
                if await other.contains(node):
                    nested = True
                    break
            except Exception as e:
                log.debug(f"Containment check failed: {e}")
        if not nested:
            kept.append(node)
    return kept


@dataclass
class SectionConfig:
    """Inputs for one section extraction."""
    base_url: str
    document: Node
    section_context: Dict[str, str] = field(default_factory=dict)
    navigator: Optional[Navigator] = None
    # The document already is this section's detail page
    detail_view: bool = False


class BaseSectionExtractor(ABC):
    """Locates candidate nodes for a section."""

    section_name: str = ""
    heading: Optional[str] = None
    detail_path: Optional[str] = None

    def __init__(self, registry: Optional[SelectorRegistry] = None):
        self.registry = registry or selector_registry

    @abstractmethod
    async def extract(self, config: SectionConfig) -> SectionResult:
        pass

    def selector_chain(self) -> List[str]:
        section = self.registry.get_section(self.section_name)
        if section and section.item_selectors:
            return list(section.item_selectors)
        return ['main ul > li', 'main ol > li']

    async def resolve_scope(self, root: Node) -> Node:
        """First registered container that exists under root, else root."""
        section = self.registry.get_section(self.section_name)
        for selector in (section.container_selectors or []) if section else []:
            try:
                container = await root.query(selector)
            except Exception:
                continue
            if container is not None:
                return container
        return root

    async def find_items(self, root: Node) -> List[Node]:
        """Try the section's selector chain in order, then the generic fallback."""
        scope = await self.resolve_scope(root)

        for selector in self.selector_chain():
            # "main ..." selectors are absolute: resolve them from the root
            target = root if selector.startswith('main ') else scope
            try:
                items = await target.query_all(selector)
            except Exception as e:
                log.debug(f"{self.section_name}: selector '{selector}' failed: {e}")
                continue
            if items:
                items = await outermost(items)
                log.debug(f"{self.section_name}: found {len(items)} items with '{selector}'")
                return items

        try:
            items = await scope.query_all(GENERIC_ITEM_SELECTOR)
        except Exception as e:
            log.debug(f"{self.section_name}: generic list fallback failed: {e}")
            return []
        if items:
            items = await outermost(items)
            log.debug(f"{self.section_name}: found {len(items)} items with generic list fallback")
        return items

    async def find_inline_items(self, section: Node) -> List[Node]:
        for selector in INLINE_ITEM_SELECTORS:
            try:
                items = await section.query_all(selector)
            except Exception:
                continue
            if items:
                return await outermost(items)
        return []

    async def find_section_by_heading(self, root: Node, heading: str) -> Optional[Node]:
        """The first <section> whose heading starts with the given text."""
        wanted = heading.strip().lower()
        try:
            sections = await root.query_all('section')
        except Exception as e:
            log.debug(f"Section lookup failed: {e}")
            return None

        for section in sections:
            try:
                headings = await section.query_all(HEADING_SELECTOR)
                for node in headings[:2]:
                    text = (await node.text_content() or '').strip().lower()
                    if text.startswith(wanted):
                        return section
            except Exception:
                continue
        return None

    async def is_truncated(self, section: Node) -> bool:
        """True when the inline card links to the full detail view."""
        if not self.detail_path:
            return False
        marker = self.detail_path.strip('/')
        try:
            return await section.count(f'a[href*="{marker}"]') > 0
        except Exception:
            return False

    async def open_detail_view(self, config: SectionConfig) -> Optional[Node]:
        if not config.navigator or not self.detail_path:
            return None
        try:
            view = await config.navigator.open_detail_view(config.base_url, self.detail_path)
        except Exception as e:
            log.debug(f"{self.section_name}: detail view failed: {e}")
            return None
        if view is None:
            log.debug(f"{self.section_name}: detail view '{self.detail_path}' unavailable")
        return view

    async def locate_items(self, config: SectionConfig) -> List[Node]:
        """
        Inline view first, detail view when truncated or empty. The selector
        chain only runs on a detail view, never on an overview page.
        """
        if config.detail_view:
            return await self.find_items(config.document)

        inline_items: List[Node] = []

        if self.heading:
            section = await self.find_section_by_heading(config.document, self.heading)
            if section is not None:
                inline_items = await self.find_inline_items(section)
                truncated = await self.is_truncated(section)
                if inline_items and not (truncated and config.navigator):
                    log.debug(f"{self.section_name}: {len(inline_items)} items from inline view")
                    return inline_items

        view = await self.open_detail_view(config)
        if view is not None:
            items = await self.find_items(view)
            if items:
                log.debug(f"{self.section_name}: {len(items)} items from detail view")
                return items

        return inline_items

    def tag(self, nodes: List[Node], context: Dict[str, str]) -> List[TaggedNode]:
        return [TaggedNode(node=node, context=dict(context)) for node in nodes]


class ListSectionExtractor(BaseSectionExtractor):
    """Sections made of repeated items (experience, education, patents...)."""

    async def extract(self, config: SectionConfig) -> SectionResult:
        items = await self.locate_items(config)
        return ListResult(items=self.tag(items, config.section_context))
