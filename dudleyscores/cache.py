"""
Games cache + scrape/fallback orchestration.

Serves the last dataset while it is fresh, otherwise refreshes it from a live
crawl, falling back to the sample dataset. The cache lives in process memory
and is owned by the service instance.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from dudleyscores.config import Settings, settings
from dudleyscores.errors import ConfigurationMissing
from dudleyscores.sample_data import sample_dataset
from dudleyscores.scraper import ClubScraper, log_event

logger = logging.getLogger('dudleyscores')

SCRAPE = 'scrape'
FALLBACK = 'fallback'


@dataclass
class GamesCache:
    """Last assembled dataset and when it was stored."""

    data: Optional[dict] = None
    stored_at: float = 0.0

    def is_fresh(self, now: float, max_age_s: float) -> bool:
        return self.data is not None and (now - self.stored_at) < max_age_s

    def store(self, data: dict, now: float) -> None:
        """Replace the entry wholesale."""
        self.data = data
        self.stored_at = now


class RefreshOutcome(NamedTuple):
    data: dict
    source: str  # SCRAPE | FALLBACK


class GamesService:
    """
    Cache orchestrator.

    Neither read() nor refresh() raises: any crawl failure turns into the
    sample dataset tagged as fallback.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        cache: Optional[GamesCache] = None,
        scraper: Optional[ClubScraper] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = config or settings
        self.cache = cache if cache is not None else GamesCache()
        self.scraper = scraper or ClubScraper(self.settings)
        self._clock = clock
        self._inflight: Optional[asyncio.Future] = None

    async def read(self, prefer_fresh: bool = False) -> dict:
        """
        Current dataset.

        Args:
            prefer_fresh: Skip the cache and refresh

        Returns:
            Cached dataset if younger than the freshness window, else a
            refreshed one
        """
        if not prefer_fresh and self.cache.is_fresh(self._clock(), self.settings.cache_max_age_s):
            return self.cache.data
        outcome = await self.refresh()
        return outcome.data

    async def refresh(self) -> RefreshOutcome:
        """
        Refresh the cache; concurrent callers share one in-flight refresh.

        The shared refresh outlives any single caller, so cancelling one
        caller neither cancels the crawl nor leaves the cache unpopulated.
        """
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._refresh())
            self._inflight.add_done_callback(self._clear_inflight)
        return await asyncio.shield(self._inflight)

    def _clear_inflight(self, task: asyncio.Future) -> None:
        if self._inflight is task:
            self._inflight = None

    async def _refresh(self) -> RefreshOutcome:
        cfg = self.settings
        try:
            data = await self._scrape()
            source = SCRAPE
        except ConfigurationMissing as e:
            logger.info(f'{e}; serving sample data')
            data = sample_dataset(season=cfg.season_year, club=cfg.club_name)
            source = FALLBACK
        except Exception as e:  # noqa: BLE001
            logger.error(f'Scrape failed, falling back: {e}', exc_info=True)
            data = sample_dataset(season=cfg.season_year, club=cfg.club_name)
            source = FALLBACK

        self.cache.store(data, self._clock())
        log_event(
            event='refresh',
            source=source,
            upcoming=len(data['upcoming']),
            results=len(data['results']),
        )
        return RefreshOutcome(data, source)

    async def _scrape(self) -> dict:
        cfg = self.settings
        if not cfg.browserless_ws:
            raise ConfigurationMissing('BROWSERLESS_WS not configured')
        return await self.scraper.crawl(
            cfg.browserless_ws,
            club_slug=cfg.club_slug,
            season_year=cfg.season_year,
            timezone=cfg.timezone,
        )
