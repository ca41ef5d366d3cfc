"""
Remote browser adapter (Playwright over CDP, e.g. Browserless).

Wraps the Playwright async API into the small surface the crawler needs:
connect, new context, new page, goto, content, title, close.
"""
import logging
from typing import Optional

from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
)

from dudleyscores.config import settings
from dudleyscores.errors import (
    BrowserConnectionError,
    NavigationTimeout,
    PageExtractionError,
)

logger = logging.getLogger('dudleyscores')

CONNECT_WAIT = wait_exponential_jitter(initial=0.5, max=6)


class BrowserPage:
    """Single tab in a remote browser context."""

    def __init__(self, page):
        self._page = page

    async def goto(self, url: str, timeout_ms: int, settle_ms: int) -> None:
        """Navigate and give client-side rendering time to settle."""
        try:
            await self._page.goto(url, wait_until='domcontentloaded', timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeout(f'Timed out after {timeout_ms}ms loading {url}') from exc
        except PlaywrightError as exc:
            raise PageExtractionError(f'Navigation failed for {url}: {exc}') from exc
        await self._page.wait_for_timeout(settle_ms)

    async def content(self) -> str:
        """Rendered HTML of the current page."""
        try:
            return await self._page.content()
        except PlaywrightError as exc:
            raise PageExtractionError(f'Cannot read page content: {exc}') from exc

    async def title(self) -> str:
        try:
            return await self._page.title()
        except PlaywrightError as exc:
            raise PageExtractionError(f'Cannot read page title: {exc}') from exc


class BrowserContext:
    """Isolated browser context (timezone, user agent)."""

    def __init__(self, context):
        self._context = context
        self._closed = False

    async def new_page(self) -> BrowserPage:
        return BrowserPage(await self._context.new_page())

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._context.close()


class BrowserSession:
    """Connection to a remote Chromium plus the Playwright driver behind it."""

    def __init__(self, playwright, browser):
        self._playwright = playwright
        self._browser = browser
        self._closed = False

    async def new_context(self, timezone: str, user_agent: str | None = None) -> BrowserContext:
        options = {'timezone_id': timezone}
        if user_agent:
            options['user_agent'] = user_agent
        return BrowserContext(await self._browser.new_context(**options))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()


async def _connect_once(endpoint: str) -> BrowserSession:
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.connect_over_cdp(endpoint)
    except Exception as exc:  # noqa: BLE001
        await playwright.stop()
        # endpoint carries the Browserless token; keep it out of logs
        logger.warning(f'Browser connect failed: {type(exc).__name__}')
        raise BrowserConnectionError(f'Cannot connect to browser endpoint: {type(exc).__name__}') from exc
    return BrowserSession(playwright, browser)


async def connect(endpoint: str, attempts: Optional[int] = None) -> BrowserSession:
    """
    Connect to a remote browser over CDP.

    Args:
        endpoint: CDP websocket URL
        attempts: Connection attempts before giving up (defaults to configured)

    Raises:
        BrowserConnectionError: endpoint unreachable (after retries)
    """
    if attempts is None:
        attempts = settings.connect_retries
    async for attempt in AsyncRetrying(
        reraise=True,
        stop=stop_after_attempt(max(1, attempts)),
        wait=CONNECT_WAIT,
        retry=retry_if_exception_type(BrowserConnectionError),
    ):
        with attempt:
            return await _connect_once(endpoint)
