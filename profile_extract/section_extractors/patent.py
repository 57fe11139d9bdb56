"""
Patents section.
"""

from .base import ListSectionExtractor


class PatentSectionExtractor(ListSectionExtractor):
    section_name = 'patent'
    heading = 'Patents'
    detail_path = 'details/patents/'
