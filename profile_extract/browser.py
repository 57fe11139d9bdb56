"""
Document loaders.

Live pages go through Playwright; saved pages through BeautifulSoup. Both hand
back a Node plus a Navigator so section runners can follow detail views.

    async with open_document(url) as (document, navigator):
        experiences = await get_experiences(document, url, navigator)
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Tuple, Union, Dict

from playwright.async_api import async_playwright

from .config import Config
from .nodes import Node, Navigator, PlaywrightNode, PlaywrightNavigator, SoupNode, MappingNavigator
from .logger import get_logger

log = get_logger('browser')


@asynccontextmanager
async def open_document(url: str, headless: bool = None, wait_time: int = None):
    """Load a live page; yields (document, navigator) and closes the browser on exit."""
    headless = Config.HEADLESS if headless is None else headless
    wait_time = Config.PAGE_WAIT_MS if wait_time is None else wait_time

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless)
        try:
            page = await browser.new_page()
            await page.goto(url, wait_until='domcontentloaded', timeout=30000)
            try:
                await page.wait_for_load_state('networkidle', timeout=wait_time)
            except Exception:
                log.debug(f"networkidle not reached within {wait_time}ms, continuing")

            log.info(f"Loaded {url}")
            yield PlaywrightNode.from_page(page), PlaywrightNavigator(page, wait_ms=wait_time)
        finally:
            await browser.close()


def load_html_file(path: Union[str, Path], detail_views: Dict[str, Union[str, Path]] = None) -> Tuple[Node, Navigator]:
    """
    Parse a saved page. detail_views maps a detail path (e.g. "details/experience/")
    to another saved file served when a section asks for it.
    """
    document = SoupNode.from_html(Path(path).read_text(encoding='utf-8'))
    views = {
        detail_path: SoupNode.from_html(Path(view_path).read_text(encoding='utf-8'))
        for detail_path, view_path in (detail_views or {}).items()
    }
    return document, MappingNavigator(views)
