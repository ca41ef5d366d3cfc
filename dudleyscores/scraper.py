"""
Club fixtures/results crawler.

Source: playrugbyleague.com competition pages, rendered by a remote browser.
URL pattern: {origin}/competitions/club/{club_slug}

The crawl is schema-agnostic: it scans generic container elements for text
that looks like a game and treats every page as optional. Only failing to
reach the browser or the club page aborts a crawl.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from typing import Awaitable, Callable, Optional
from urllib.parse import urldefrag, urljoin, urlparse
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup

from dudleyscores import browser
from dudleyscores.config import Settings, settings
from dudleyscores.extract import RESULT, extract_game
from dudleyscores.models import Dataset

logger = logging.getLogger('dudleyscores')

BLOCK_TAGS = ['li', 'tr', 'article', 'div']
WS_RE = re.compile(r'\s+')
SITE_SUFFIX_RE = re.compile(r'\s*\|\s*Play Rugby League.*', re.IGNORECASE)
UNKNOWN_GRADE = 'Unknown Grade'


def log_event(**kv):
    """Emit structured JSON log line."""
    logger.info(json.dumps(kv, separators=(',', ':'), default=str))


def unique_records(records: list) -> list:
    """Drop repeats (by serialized content), keeping first-seen order."""
    seen: set[str] = set()
    out = []
    for item in records:
        key = item if isinstance(item, str) else json.dumps(item, sort_keys=True, default=str)
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def discover_competition_links(
    soup: BeautifulSoup,
    base_url: str,
    origin: str,
    cap: int = settings.max_competitions,
) -> list[str]:
    """Unique same-origin competition links, in document order."""
    origin_host = urlparse(origin).netloc
    current = urldefrag(base_url)[0]
    seen: set[str] = set()
    out: list[str] = []
    for a in soup.select("a[href*='/competitions/']"):
        href = urldefrag(urljoin(base_url, a.get('href', '')))[0]
        parsed = urlparse(href)
        if parsed.scheme not in ('http', 'https') or parsed.netloc != origin_host:
            continue
        if '/competitions/' not in parsed.path or href == current or href in seen:
            continue
        seen.add(href)
        out.append(href)
        if len(out) >= cap:
            break
    return out


def extract_text_blocks(
    soup: BeautifulSoup,
    cap: int = settings.max_text_blocks,
    min_chars: int = settings.min_block_chars,
) -> list[str]:
    """Whitespace-collapsed text of list/table/card containers, in document order."""
    blocks: list[str] = []
    for el in soup.find_all(BLOCK_TAGS):
        text = WS_RE.sub(' ', el.get_text(' ')).strip()
        if len(text) < min_chars:
            continue
        blocks.append(text)
        if len(blocks) >= cap:
            break
    return blocks


def extract_match_links(
    soup: BeautifulSoup,
    base_url: str,
    cap: int = settings.max_match_links,
) -> list[str]:
    """Match-centre deep links on the page."""
    links = [urljoin(base_url, a.get('href', '')) for a in soup.select("a[href*='/match-centre/']")]
    return links[:cap]


def first_heading(soup: BeautifulSoup) -> str:
    heading = soup.find(['h1', 'h2'])
    return WS_RE.sub(' ', heading.get_text(' ')).strip() if heading else ''


def derive_grade_hint(title: Optional[str], heading: Optional[str]) -> str:
    """Grade label from the page title (minus site name), else the first heading."""
    grade = SITE_SUFFIX_RE.sub('', title or '').strip()
    return grade or (heading or '').strip() or UNKNOWN_GRADE


@dataclass
class PageOutcome:
    """Contribution of one competition page, or the reason it was skipped."""

    url: str
    upcoming: list[dict] = field(default_factory=list)
    results: list[dict] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.error is not None


async def _release(resource, label: str) -> None:
    if resource is None:
        return
    try:
        await resource.close()
    except Exception as e:  # noqa: BLE001
        logger.warning(f'Failed to close browser {label}: {e}')


class ClubScraper:
    """
    Club fixtures/results scraper.

    Visits the club page, then each competition page in turn, on a single
    browser tab.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        connect: Optional[Callable[[str], Awaitable]] = None,
    ):
        self.settings = config or settings
        self._connect = connect or partial(browser.connect, attempts=self.settings.connect_retries)

    def club_url(self, club_slug: str) -> str:
        """Build club competitions URL."""
        return f'{self.settings.site_origin}/competitions/club/{club_slug}'

    async def crawl(
        self,
        endpoint: str,
        club_slug: Optional[str] = None,
        season_year: Optional[int] = None,
        timezone: Optional[str] = None,
    ) -> dict:
        """
        Crawl the club's competitions into a dataset.

        Args:
            endpoint: Remote browser CDP endpoint
            club_slug: Club identifier in the site URL
            season_year: Season stamped on the dataset
            timezone: IANA timezone for the browser and parsed dates

        Returns:
            Dataset dict {updated, club, season, upcoming, results}

        Raises:
            BrowserConnectionError: browser endpoint unreachable
            NavigationTimeout, PageExtractionError: club page unavailable
        """
        cfg = self.settings
        club_slug = club_slug or cfg.club_slug
        season_year = int(season_year or cfg.season_year)
        timezone = timezone or cfg.timezone
        tz = ZoneInfo(timezone)
        now = datetime.now(tz)

        upcoming: list[dict] = []
        results: list[dict] = []

        session = await self._connect(endpoint)
        context = None
        try:
            context = await session.new_context(timezone=timezone, user_agent=cfg.user_agent)
            page = await context.new_page()

            club_url = self.club_url(club_slug)
            logger.info(f'Crawling club {club_slug}...')
            await page.goto(club_url, cfg.nav_timeout_ms, cfg.settle_ms)
            soup = BeautifulSoup(await page.content(), 'lxml')
            links = discover_competition_links(soup, club_url, cfg.site_origin, cfg.max_competitions)
            log_event(event='competitions', club=club_slug, count=len(links))

            for href in links:
                outcome = await self._scrape_competition(page, href, tz, now)
                if outcome.skipped:
                    logger.warning(f'Skipping competition {href}: {outcome.error}')
                    log_event(event='competition_skipped', url=href, error=outcome.error)
                    continue
                upcoming.extend(outcome.upcoming)
                results.extend(outcome.results)
        finally:
            await _release(context, 'context')
            await _release(session, 'session')

        dataset = Dataset(
            updated=datetime.now(tz).isoformat(timespec='seconds'),
            club=cfg.club_name,
            season=season_year,
            upcoming=unique_records(upcoming)[:cfg.max_records],
            results=unique_records(results)[:cfg.max_records],
        )
        log_event(
            event='crawl_complete',
            club=club_slug,
            upcoming=len(dataset.upcoming),
            results=len(dataset.results),
        )
        return dataset.model_dump()

    async def _scrape_competition(self, page, href: str, tz: ZoneInfo, now: datetime) -> PageOutcome:
        """Visit one competition page; failures become a skipped outcome."""
        cfg = self.settings
        try:
            await page.goto(href, cfg.nav_timeout_ms, cfg.settle_ms)
            soup = BeautifulSoup(await page.content(), 'lxml')
            blocks = extract_text_blocks(soup, cfg.max_text_blocks, cfg.min_block_chars)
            match_links = extract_match_links(soup, href, cfg.max_match_links)
            grade = derive_grade_hint(await page.title(), first_heading(soup))
        except Exception as e:  # noqa: BLE001
            return PageOutcome(href, error=str(e) or type(e).__name__)

        outcome = PageOutcome(href)
        for text in blocks:
            found = extract_game(text, href, grade, match_links, tz=tz, now=now)
            if found is None:
                continue
            kind, record = found
            if kind == RESULT:
                outcome.results.append(record)
            else:
                outcome.upcoming.append(record)

        logger.debug(
            f'{href}: {len(outcome.upcoming)} upcoming, {len(outcome.results)} results'
        )
        return outcome


async def scrape_all(
    endpoint: str,
    club_slug: Optional[str] = None,
    season_year: Optional[int] = None,
    timezone: Optional[str] = None,
    config: Optional[Settings] = None,
) -> dict:
    """Crawl once with a fresh scraper."""
    scraper = ClubScraper(config)
    return await scraper.crawl(endpoint, club_slug, season_year, timezone)
