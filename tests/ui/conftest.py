"""Browser fixtures (async Playwright) shared by the UI suites."""

from __future__ import annotations

from typing import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from qa_suite.core.config import ProjectConfig
from qa_suite.ui.wikipedia import WikipediaActions

SITE_PROBE_TIMEOUT_S = 5.0


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def playwright() -> AsyncIterator[Playwright]:
    async with async_playwright() as p:
        yield p


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser(playwright: Playwright, project: ProjectConfig) -> AsyncIterator[Browser]:
    """Launch the project's browser once per session."""
    launcher = getattr(playwright, project.browser)
    try:
        browser = await launcher.launch(headless=project.headless)
    except PlaywrightError as e:
        pytest.skip(f"{project.browser} not available (run `playwright install {project.browser}`): {e}")
    yield browser
    await browser.close()


@pytest_asyncio.fixture(loop_scope="session")
async def context(browser: Browser, project: ProjectConfig) -> AsyncIterator[BrowserContext]:
    """Fresh, isolated context per test; relative goto() resolves against base_url."""
    context = await browser.new_context(base_url=project.base_url)
    yield context
    await context.close()


@pytest_asyncio.fixture(loop_scope="session")
async def page(context: BrowserContext) -> AsyncIterator[Page]:
    page = await context.new_page()
    yield page
    await page.close()


@pytest.fixture(scope="session")
def site_url(project: ProjectConfig) -> str:
    if not project.base_url:
        pytest.skip(f"project '{project.name}' has no base_url")
    return project.base_url.rstrip("/")


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def require_live_site(site_url: str) -> None:
    try:
        async with httpx.AsyncClient(timeout=SITE_PROBE_TIMEOUT_S, follow_redirects=True) as c:
            await c.get(site_url)
    except httpx.HTTPError as e:
        pytest.skip(f"Site not reachable at {site_url}: {type(e).__name__}: {e}")


@pytest.fixture
def wikipedia(page: Page) -> WikipediaActions:
    return WikipediaActions(page)
