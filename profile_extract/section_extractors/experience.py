"""
Experience section: one item per employer.
"""

from .base import ListSectionExtractor


class ExperienceSectionExtractor(ListSectionExtractor):
    section_name = 'experience'
    heading = 'Experience'
    detail_path = 'details/experience/'
