"""
Versioned selector registry.

Maps a section name to an ordered chain of candidate item selectors. One
process-wide instance (selector_registry) is seeded with DEFAULT_SELECTOR_VERSION,
but every section extractor takes a registry argument so tests and callers can
use their own.

Lifecycle: seed -> register/swap (by version id, or a self-heal result) -> save.
"""

import json
from pathlib import Path
from typing import Optional, Dict, List, Union

from .exceptions import SelectorFileError
from .models import SelectorVersion, SectionSelectorSet
from .logger import get_logger

log = get_logger('registry')


_LIST_ITEMS = [
    '.pvs-list__paged-list-item',
    'li.artdeco-list__item',
    'div[data-view-name="profile-component-entity"]',
    '[componentkey^="entity-collection-item"]',
]

DEFAULT_SELECTOR_VERSION = SelectorVersion(
    version='v1',
    updated_at='1970-01-01T00:00:00.000Z',
    sections={
        'experience': SectionSelectorSet(
            item_selectors=_LIST_ITEMS + ['main ul > li', 'main ol > li'],
            container_selectors=['main'],
        ),
        'education': SectionSelectorSet(
            item_selectors=_LIST_ITEMS + ['main ul > li', 'main ol > li'],
            container_selectors=['main'],
        ),
        'accomplishment': SectionSelectorSet(
            item_selectors=_LIST_ITEMS[:3] + ['main ul > li', 'main ol > li'],
            container_selectors=['main'],
        ),
        'patent': SectionSelectorSet(
            item_selectors=_LIST_ITEMS[:3] + ['main ul > li'],
            container_selectors=['main'],
        ),
        'interest': SectionSelectorSet(
            item_selectors=['.pvs-list__paged-list-item', 'li.artdeco-list__item', 'li'],
            container_selectors=['[role="tabpanel"]'],
        ),
        'about': SectionSelectorSet(
            item_selectors=[
                '[data-testid="expandable-text-box"]',
                '.inline-show-more-text',
                '.pv-shared-text-with-see-more',
            ],
            container_selectors=['main'],
        ),
        'top-card': SectionSelectorSet(
            item_selectors=[
                'section.artdeco-card:first-of-type',
                '.pv-top-card',
                '.ph5',
                'main section:first-of-type',
            ],
            container_selectors=['main'],
        ),
        'contact': SectionSelectorSet(
            item_selectors=[
                'section.pv-contact-info__contact-type',
                '.pv-contact-info section',
            ],
            container_selectors=['[role="dialog"]', '.artdeco-modal', 'main'],
        ),
    },
)


class SelectorRegistry:
    """Process-wide, mutable table of selector versions with one active pointer."""

    def __init__(self, default: Optional[SelectorVersion] = None):
        self._default = default or DEFAULT_SELECTOR_VERSION
        self._versions: Dict[str, SelectorVersion] = {self._default.version: self._default}
        self._active = self._default.version

    @property
    def active_version_id(self) -> str:
        return self._active

    def versions(self) -> List[str]:
        return list(self._versions)

    def get_active_version(self) -> SelectorVersion:
        return self._versions.get(self._active, self._default)

    def get_section(self, section_name: str) -> Optional[SectionSelectorSet]:
        return self.get_active_version().sections.get(section_name)

    def set_active_version(self, version: str) -> bool:
        """Activate a registered version. Unknown ids leave the pointer untouched."""
        if version not in self._versions:
            log.debug(f"Unknown selector version '{version}', keeping '{self._active}'")
            return False
        self._active = version
        log.info(f"Active selector version: {version}")
        return True

    def register(self, version: SelectorVersion):
        """Add or replace a version (does not activate it)."""
        self._versions[version.version] = version
        log.debug(f"Registered selector version '{version.version}' ({len(version.sections)} sections)")

    def load_from_file(self, file_path: Union[str, Path]) -> SelectorVersion:
        """Register a version from a JSON file and make it active."""
        path = Path(file_path)
        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
            version = SelectorVersion.from_dict(data)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            raise SelectorFileError(f"Cannot load selectors from {path}: {e}") from e

        self.register(version)
        self._active = version.version
        log.info(f"Loaded selector version '{version.version}' from {path}")
        return version

    def save_to_file(self, file_path: Union[str, Path], version: Optional[str] = None) -> bool:
        """Write the given (or active) version as JSON. Returns False if unknown."""
        selected = self._versions.get(version) if version else self.get_active_version()
        if selected is None:
            return False

        path = Path(file_path)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(selected.to_dict(), f, indent=2)
        log.info(f"Saved selector version '{selected.version}' to {path}")
        return True

    def reset(self):
        """Drop every registered version except the default."""
        self._versions = {self._default.version: self._default}
        self._active = self._default.version


selector_registry = SelectorRegistry()
