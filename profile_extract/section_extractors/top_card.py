"""
Top card: name, headline and location block at the top of a profile.
"""

from ..models import SectionResult, SingleResult, TaggedNode
from .base import BaseSectionExtractor, SectionConfig, log


class TopCardSectionExtractor(BaseSectionExtractor):
    section_name = 'top-card'

    async def extract(self, config: SectionConfig) -> SectionResult:
        scope = await self.resolve_scope(config.document)

        for selector in self.selector_chain():
            target = config.document if selector.startswith('main ') else scope
            try:
                node = await target.query(selector)
            except Exception as e:
                log.debug(f"top-card: selector '{selector}' failed: {e}")
                continue
            if node is not None:
                return SingleResult(item=TaggedNode(node=node, context=dict(config.section_context)))

        return SingleResult(item=None)
