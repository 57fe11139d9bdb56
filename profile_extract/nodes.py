"""
Document node abstraction.

The extraction pipeline never touches a browser or a parser directly; it only
talks to Node handles. Two adapters are provided:

    PlaywrightNode  - live page, wraps a playwright Locator
    SoupNode        - static HTML, wraps a BeautifulSoup Tag

All Node methods are async so both adapters share one call shape. Any failure
inside an adapter is raised to the caller, which treats it as "this node
produced nothing".
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag
from playwright.async_api import Page, Locator

from .logger import get_logger

log = get_logger('nodes')


class Node(ABC):
    """Async, queryable handle into a document."""

    @abstractmethod
    async def query_all(self, selector: str) -> List['Node']:
        """All descendants matching a CSS selector, in document order."""

    @abstractmethod
    async def count(self, selector: str) -> int:
        pass

    @abstractmethod
    async def text_content(self) -> Optional[str]:
        """Raw concatenated text, like DOM textContent."""

    @abstractmethod
    async def inner_text(self) -> str:
        """Rendered text, one line per block."""

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        pass

    @abstractmethod
    async def inner_html(self) -> str:
        pass

    async def query(self, selector: str) -> Optional['Node']:
        """First descendant matching selector, or None."""
        nodes = await self.query_all(selector)
        return nodes[0] if nodes else None

    @abstractmethod
    async def parent(self) -> Optional['Node']:
        pass

    @abstractmethod
    async def contains(self, other: 'Node') -> bool:
        """True when other is a strict descendant of this node."""

    async def click(self) -> None:
        """Activate the node (tabs, "show more" buttons). No-op by default."""
        return None


# =============================================================================
# Playwright
# =============================================================================

class PlaywrightNode(Node):
    """Node backed by a playwright Locator."""

    def __init__(self, locator: Locator, timeout_ms: int = 2000):
        self._locator = locator
        self.timeout_ms = timeout_ms

    @classmethod
    def from_page(cls, page: Page, timeout_ms: int = 2000) -> 'PlaywrightNode':
        return cls(page.locator('body'), timeout_ms=timeout_ms)

    @property
    def locator(self) -> Locator:
        return self._locator

    async def query_all(self, selector: str) -> List[Node]:
        locators = await self._locator.locator(selector).all()
        return [PlaywrightNode(loc, self.timeout_ms) for loc in locators]

    async def query(self, selector: str) -> Optional[Node]:
        first = self._locator.locator(selector).first
        if await first.count() == 0:
            return None
        return PlaywrightNode(first, self.timeout_ms)

    async def count(self, selector: str) -> int:
        return await self._locator.locator(selector).count()

    async def text_content(self) -> Optional[str]:
        return await self._locator.text_content(timeout=self.timeout_ms)

    async def inner_text(self) -> str:
        return await self._locator.inner_text(timeout=self.timeout_ms)

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self._locator.get_attribute(name, timeout=self.timeout_ms)

    async def inner_html(self) -> str:
        return await self._locator.inner_html(timeout=self.timeout_ms)

    async def parent(self) -> Optional[Node]:
        parent = self._locator.locator('xpath=..')
        if await parent.count() == 0:
            return None
        return PlaywrightNode(parent, self.timeout_ms)

    async def contains(self, other: Node) -> bool:
        if not isinstance(other, PlaywrightNode):
            return False
        handle = await other.locator.element_handle(timeout=self.timeout_ms)
        return await self._locator.evaluate('(el, other) => el !== other && el.contains(other)', handle)

    async def click(self) -> None:
        await self._locator.click(timeout=self.timeout_ms)


# =============================================================================
# BeautifulSoup
# =============================================================================

# Elements that break a line when rendered
BLOCK_TAGS = {
    'address', 'article', 'aside', 'blockquote', 'dd', 'details', 'dialog',
    'div', 'dl', 'dt', 'fieldset', 'figcaption', 'figure', 'footer', 'form',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header', 'hr', 'li', 'main', 'nav',
    'ol', 'p', 'pre', 'section', 'summary', 'table', 'tr', 'ul',
}

# Elements whose text is never rendered
SKIP_TAGS = {'script', 'style', 'template', 'noscript', 'head'}


def _collect_rendered(tag: Tag, parts: List[str]):
    for child in tag.children:
        if isinstance(child, (Comment, Doctype)):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
            continue
        if not isinstance(child, Tag) or child.name in SKIP_TAGS:
            continue
        if child.name == 'br':
            parts.append('\n')
            continue
        block = child.name in BLOCK_TAGS
        if block:
            parts.append('\n')
        _collect_rendered(child, parts)
        if block:
            parts.append('\n')


def render_text(tag: Tag) -> str:
    """Approximate innerText for static HTML."""
    parts: List[str] = []
    _collect_rendered(tag, parts)
    lines = []
    for line in ''.join(parts).split('\n'):
        line = ' '.join(line.split())
        if line:
            lines.append(line)
    return '\n'.join(lines)


class SoupNode(Node):
    """Node backed by a BeautifulSoup Tag (saved pages, fixtures)."""

    def __init__(self, tag: Tag):
        self._tag = tag

    @classmethod
    def from_html(cls, html: str) -> 'SoupNode':
        soup = BeautifulSoup(html, 'html.parser')
        return cls(soup)

    @property
    def tag(self) -> Tag:
        return self._tag

    async def query_all(self, selector: str) -> List[Node]:
        return [SoupNode(t) for t in self._tag.select(selector)]

    async def query(self, selector: str) -> Optional[Node]:
        found = self._tag.select_one(selector)
        return SoupNode(found) if found is not None else None

    async def count(self, selector: str) -> int:
        return len(self._tag.select(selector))

    async def text_content(self) -> Optional[str]:
        return self._tag.get_text()

    async def inner_text(self) -> str:
        return render_text(self._tag)

    async def get_attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if isinstance(value, list):
            return ' '.join(value)
        return value

    async def inner_html(self) -> str:
        return self._tag.decode_contents()

    async def parent(self) -> Optional[Node]:
        parent = self._tag.parent
        return SoupNode(parent) if parent is not None else None

    async def contains(self, other: Node) -> bool:
        if not isinstance(other, SoupNode):
            return False
        return any(ancestor is self._tag for ancestor in other.tag.parents)


# =============================================================================
# Navigation to detail views
# =============================================================================

class Navigator(ABC):
    """Opens a dedicated detail view (e.g. the full experience list)."""

    @abstractmethod
    async def open_detail_view(self, base_url: str, path: str) -> Optional[Node]:
        """Return the root node of the detail view, or None if unavailable."""


def join_url(base_url: str, path: str) -> str:
    return base_url.rstrip('/') + '/' + path.lstrip('/')


class PlaywrightNavigator(Navigator):
    """Navigates the shared page to a detail view and returns its body."""

    def __init__(self, page: Page, wait_ms: int = 1500, timeout_ms: int = 2000):
        self.page = page
        self.wait_ms = wait_ms
        self.timeout_ms = timeout_ms

    async def open_detail_view(self, base_url: str, path: str) -> Optional[Node]:
        url = join_url(base_url, path)
        try:
            await self.page.goto(url, wait_until='domcontentloaded')
            await self.page.wait_for_timeout(self.wait_ms)
        except Exception as e:
            log.debug(f"Navigation to {url} failed: {e}")
            return None
        return PlaywrightNode.from_page(self.page, timeout_ms=self.timeout_ms)


class MappingNavigator(Navigator):
    """Serves pre-loaded detail views keyed by path (saved pages, tests)."""

    def __init__(self, views: Dict[str, Node]):
        self.views = {path.strip('/'): node for path, node in views.items()}
        self.requested: List[str] = []

    async def open_detail_view(self, base_url: str, path: str) -> Optional[Node]:
        key = path.strip('/')
        self.requested.append(key)
        return self.views.get(key)
