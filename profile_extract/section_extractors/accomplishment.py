"""
Accomplishment sections (certifications, honors, projects, publications...).

All accomplishment kinds share one selector set; the kind travels with each
item as the "category" context so the parser can tag records with it.
"""

from typing import Optional

from ..models import SectionResult, ListResult
from ..registry import SelectorRegistry
from .base import ListSectionExtractor, SectionConfig


class AccomplishmentSectionExtractor(ListSectionExtractor):
    section_name = 'accomplishment'

    def __init__(
        self,
        url_path: str,
        category: str,
        heading: Optional[str] = None,
        registry: Optional[SelectorRegistry] = None,
    ):
        super().__init__(registry)
        self.url_path = url_path.strip('/')
        self.category = category
        self.heading = heading
        self.detail_path = f'details/{self.url_path}/'

    async def extract(self, config: SectionConfig) -> SectionResult:
        items = await self.locate_items(config)
        context = dict(config.section_context)
        context['category'] = self.category
        return ListResult(items=self.tag(items, context))
