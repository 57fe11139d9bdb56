"""
Text extraction strategies, tried in priority order (lower first).
"""

from .base import BaseTextExtractor, collapse_overlaps
from .aria import AriaTextExtractor
from .semantic import SemanticTextExtractor
from .raw_text import RawTextExtractor


def default_text_extractors():
    """A fresh list of all strategies in priority order."""
    return [AriaTextExtractor(), SemanticTextExtractor(), RawTextExtractor()]


__all__ = [
    'BaseTextExtractor',
    'AriaTextExtractor',
    'SemanticTextExtractor',
    'RawTextExtractor',
    'collapse_overlaps',
    'default_text_extractors',
]
