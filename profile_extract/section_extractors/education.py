"""
Education section: the main profile often shows every school inline, so the
inline card is tried before the detail view.
"""

from .base import ListSectionExtractor


class EducationSectionExtractor(ListSectionExtractor):
    section_name = 'education'
    heading = 'Education'
    detail_path = 'details/education/'
