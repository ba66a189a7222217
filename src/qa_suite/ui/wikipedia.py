# src/qa_suite/ui/wikipedia.py
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    # Type-only so importing qa_suite.ui stays light for unit tests.
    from playwright.async_api import Locator, Page

MAIN_PAGE_PATH = "/wiki/Main_Page"

SEARCH_INPUT = "#searchInput"
SEARCH_RESULT_TITLES = '[aria-label="Search results"] bdi'
SITE_HEADER = 'a[title="Wikipedia"]'
ARTICLE_TITLE = 'h1 span[class*="page-title-main"]'


class WikipediaActions:
    """
    Page-level actions for the Wikipedia search flow.

    Relative paths resolve against the browser context's base_url, so the
    same actions run against any mirror configured in projects.yaml.
    """

    def __init__(self, page: "Page", *, timeout_ms: Optional[float] = None) -> None:
        self.page = page
        self.timeout_ms = timeout_ms

    # locators

    @property
    def header(self) -> "Locator":
        return self.page.locator(SITE_HEADER)

    @property
    def search_input(self) -> "Locator":
        return self.page.locator(SEARCH_INPUT)

    @property
    def search_results(self) -> "Locator":
        return self.page.locator(SEARCH_RESULT_TITLES)

    @property
    def article_title(self) -> "Locator":
        return self.page.locator(ARTICLE_TITLE)

    # actions

    async def open_main_page(self) -> None:
        await self.page.goto(MAIN_PAGE_PATH)
        await self.header.wait_for(timeout=self.timeout_ms)

    async def search(self, query: str) -> None:
        await self.search_input.fill(query)
        await self.search_results.first.wait_for(timeout=self.timeout_ms)

    async def result_titles(self) -> List[str]:
        return [t.strip() for t in await self.search_results.all_text_contents()]

    async def click_first_result(self) -> None:
        await self.search_results.first.click()
        await self.article_title.wait_for(timeout=self.timeout_ms)
