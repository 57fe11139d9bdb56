"""
About section: a single free-text block.
"""

from ..models import SectionResult, SingleResult, TaggedNode
from .base import BaseSectionExtractor, SectionConfig, log


class AboutSectionExtractor(BaseSectionExtractor):
    section_name = 'about'
    heading = 'About'

    async def extract(self, config: SectionConfig) -> SectionResult:
        section = await self.find_section_by_heading(config.document, self.heading)
        root = section if section is not None else config.document

        for selector in self.selector_chain():
            try:
                node = await root.query(selector)
            except Exception as e:
                log.debug(f"about: selector '{selector}' failed: {e}")
                continue
            if node is not None:
                return SingleResult(item=TaggedNode(node=node, context=dict(config.section_context)))

        if section is not None:
            return SingleResult(item=TaggedNode(node=section, context=dict(config.section_context)))
        return SingleResult(item=None)
