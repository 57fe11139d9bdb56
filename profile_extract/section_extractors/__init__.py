"""
Section extractors: locate candidate nodes for one logical profile section.
"""

from .base import BaseSectionExtractor, ListSectionExtractor, SectionConfig
from .experience import ExperienceSectionExtractor
from .education import EducationSectionExtractor
from .accomplishment import AccomplishmentSectionExtractor
from .patent import PatentSectionExtractor
from .interest import InterestSectionExtractor
from .about import AboutSectionExtractor
from .top_card import TopCardSectionExtractor
from .contact import ContactSectionExtractor

__all__ = [
    'BaseSectionExtractor',
    'ListSectionExtractor',
    'SectionConfig',
    'ExperienceSectionExtractor',
    'EducationSectionExtractor',
    'AccomplishmentSectionExtractor',
    'PatentSectionExtractor',
    'InterestSectionExtractor',
    'AboutSectionExtractor',
    'TopCardSectionExtractor',
    'ContactSectionExtractor',
]
