"""
Exceptions raised outside the extraction hot path.

The pipeline itself never raises: node failures, low confidence and parse
rejections are all reported through diagnostics instead.
"""


class ProfileExtractError(Exception):
    """Base class for profile extraction errors."""


class SelectorFileError(ProfileExtractError):
    """A selector version file could not be read or is malformed."""


class SelfHealError(ProfileExtractError):
    """A self-heal provider produced an unusable answer."""
