"""
Interests section: items live in tab panels, one tab per category
(companies, groups, schools, newsletters, top voices).
"""

from typing import List, Optional

from ..heuristics import map_interest_tab
from ..models import SectionResult, ListResult, TaggedNode
from ..nodes import Node
from .base import BaseSectionExtractor, SectionConfig, log, outermost


class InterestSectionExtractor(BaseSectionExtractor):
    section_name = 'interest'
    heading = 'Interests'
    detail_path = 'details/interests/'

    async def extract(self, config: SectionConfig) -> SectionResult:
        if config.detail_view:
            return ListResult(items=await self.items_from_tabs(config.document, config))

        section = await self.find_section_by_heading(config.document, self.heading)
        if section is not None:
            items = await self.items_from_tabs(section, config)
            if items:
                return ListResult(items=items)

        view = await self.open_detail_view(config)
        if view is not None:
            return ListResult(items=await self.items_from_tabs(view, config))

        return ListResult(items=[])

    async def items_from_tabs(self, scope: Node, config: SectionConfig) -> List[TaggedNode]:
        collected: List[TaggedNode] = []

        try:
            tabs = await scope.query_all('[role="tab"]')
        except Exception as e:
            log.debug(f"interest: tab lookup failed: {e}")
            return collected

        try:
            panels = await scope.query_all('[role="tabpanel"]')
        except Exception as e:
            log.debug(f"interest: panel lookup failed: {e}")
            return collected

        for index, tab in enumerate(tabs):
            try:
                tab_name = (await tab.text_content() or '').strip()
            except Exception:
                continue
            if not tab_name:
                continue

            category = map_interest_tab(tab_name)

            try:
                await tab.click()
            except Exception as e:
                log.debug(f"interest: could not open tab '{tab_name}': {e}")
                continue

            panel = await self._panel_for(scope, tab, index, len(tabs), panels)
            if panel is None:
                continue

            context = dict(config.section_context)
            context['category'] = category
            for node in await self._panel_items(panel):
                collected.append(TaggedNode(node=node, context=dict(context)))

        return collected

    async def _panel_for(self, scope: Node, tab: Node, index: int, tab_count: int, panels: List[Node]) -> Optional[Node]:
        """
        Panel owned by a tab: aria-controls, then aria-labelledby, then the
        panel at the same position when there is one panel per tab. A single
        shared panel belongs only to the selected tab. Hidden panels are skipped.
        """
        try:
            panel = None
            panel_id = await tab.get_attribute('aria-controls')
            if panel_id:
                panel = await scope.query(f'[id="{panel_id}"]')

            tab_id = await tab.get_attribute('id')
            if panel is None and tab_id:
                panel = await scope.query(f'[role="tabpanel"][aria-labelledby~="{tab_id}"]')

            if panel is None and len(panels) == tab_count:
                panel = panels[index]

            if panel is None and len(panels) == 1 and await tab.get_attribute('aria-selected') == 'true':
                panel = panels[0]

            if panel is None or await panel.get_attribute('hidden') is not None:
                return None
            return panel
        except Exception:
            return None

    async def _panel_items(self, panel: Node) -> List[Node]:
        for selector in self.selector_chain():
            try:
                items = await panel.query_all(selector)
            except Exception:
                continue
            if items:
                return await outermost(items)
        return []
