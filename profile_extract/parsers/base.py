"""
Base classes for parsers.

A parser maps a ParseInput (ordered texts + links + context) to one typed
record, or None when the input does not look like a record. validate() is a
separate, extraction-independent acceptance check.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Generic, TypeVar

from ..models import ParseInput, RawSection

T = TypeVar('T')


class BaseParser(ABC, Generic[T]):
    """Maps extracted text to a domain record."""

    section_name: str = ""

    @abstractmethod
    def parse(self, input: ParseInput) -> Optional[T]:
        pass

    @abstractmethod
    def validate(self, item: T) -> bool:
        pass


class RawParser(BaseParser[T]):
    """Parser that also understands pre-segmented raw blocks."""

    @abstractmethod
    def parse_raw(self, sections: List[RawSection]) -> List[T]:
        pass


def supports_raw(parser: BaseParser) -> bool:
    return isinstance(parser, RawParser)
