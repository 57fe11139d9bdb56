"""
Parsers: turn extracted text into typed profile records.
"""

from .base import BaseParser, RawParser, supports_raw
from .experience import ExperienceParser
from .education import EducationParser
from .accomplishment import AccomplishmentParser
from .patent import PatentParser
from .interest import InterestParser
from .top_card import TopCardParser
from .about import AboutParser
from .contact import ContactParser

__all__ = [
    'BaseParser',
    'RawParser',
    'supports_raw',
    'ExperienceParser',
    'EducationParser',
    'AccomplishmentParser',
    'PatentParser',
    'InterestParser',
    'TopCardParser',
    'AboutParser',
    'ContactParser',
]
