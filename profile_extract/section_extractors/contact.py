"""
Contact info panel.

Items here are labeled blocks ("Email", "Phone", "Website"...) rather than a
repeated list, so the result is a list of pre-segmented RawSections.
"""

import re
from typing import List, Optional

from ..models import SectionResult, RawResult, RawSection, RawAnchor
from ..nodes import Node
from .base import BaseSectionExtractor, SectionConfig, log

BLOCK_HEADING_SELECTOR = 'h3, h2, header'

# Contact info opens as a modal over the profile
OVERLAY_SELECTOR = '[role="dialog"], .artdeco-modal'

_LABEL_RE = re.compile(r'^\((.+)\)$')


class ContactSectionExtractor(BaseSectionExtractor):
    section_name = 'contact'
    detail_path = 'overlay/contact-info/'

    async def extract(self, config: SectionConfig) -> SectionResult:
        if config.detail_view or await self.has_open_overlay(config.document):
            sections = await self.extract_raw_sections(config.document)
            if sections:
                return RawResult(sections=sections)

        view = await self.open_detail_view(config)
        if view is not None:
            return RawResult(sections=await self.extract_raw_sections(view))

        return RawResult(sections=[])

    async def has_open_overlay(self, root: Node) -> bool:
        try:
            return await root.count(OVERLAY_SELECTOR) > 0
        except Exception:
            return False

    async def extract_raw_sections(self, root: Node) -> List[RawSection]:
        scope = await self.resolve_scope(root)

        blocks: List[Node] = []
        for selector in self.selector_chain():
            try:
                blocks = await scope.query_all(selector)
            except Exception as e:
                log.debug(f"contact: selector '{selector}' failed: {e}")
                continue
            if blocks:
                break

        sections = []
        if blocks:
            for block in blocks:
                section = await self._read_block(block)
                if section:
                    sections.append(section)
            return sections

        # No block markup: every heading's parent is a block
        try:
            headings = await scope.query_all('h3')
        except Exception:
            return sections
        for heading in headings:
            try:
                parent = await heading.parent()
            except Exception:
                parent = None
            section = await self._read_block(parent) if parent is not None else None
            if section:
                sections.append(section)
        return sections

    async def _read_block(self, block: Node) -> Optional[RawSection]:
        try:
            heading_node = await block.query(BLOCK_HEADING_SELECTOR)
            if heading_node is None:
                return None
            heading = ' '.join((await heading_node.text_content() or '').split())
            if not heading:
                return None

            text = await block.inner_text()

            anchors = []
            for anchor in await block.query_all('a[href]'):
                try:
                    anchors.append(RawAnchor(
                        href=await anchor.get_attribute('href'),
                        text=await anchor.text_content(),
                    ))
                except Exception:
                    continue

            labels = []
            for span in await block.query_all('span'):
                try:
                    value = ' '.join((await span.text_content() or '').split())
                except Exception:
                    continue
                match = _LABEL_RE.match(value)
                if match and match.group(1).strip() not in labels:
                    labels.append(match.group(1).strip())

            return RawSection(heading=heading, text=' '.join(text.split()), labels=labels, anchors=anchors)
        except Exception as e:
            log.debug(f"contact: unreadable block: {e}")
            return None
