"""
Configuration for the club scores service.

All values come from the environment (or a local .env file) and are optional.
"""
from dataclasses import dataclass
import os

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable settings from environment."""

    # Remote Chromium (Browserless) CDP endpoint; empty means sample data only
    browserless_ws: str = os.getenv('BROWSERLESS_WS', '')
    club_slug: str = os.getenv('CLUB_SLUG', 'dudley-redhead-junior-rlfc-inc-12074')
    club_name: str = os.getenv('CLUB_NAME', 'Dudley Redhead JRLFC')
    season_year: int = int(os.getenv('SEASON_YEAR', '2025'))
    timezone: str = os.getenv('TZ', 'Australia/Sydney')
    site_origin: str = os.getenv('SITE_ORIGIN', 'https://www.playrugbyleague.com')
    user_agent: str = os.getenv(
        'USER_AGENT',
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120 Safari/537.36',
    )

    # Cache
    cache_max_age_s: float = float(os.getenv('CACHE_MAX_AGE_S', str(6 * 60 * 60)))

    # Browser navigation
    nav_timeout_ms: int = int(os.getenv('NAV_TIMEOUT_MS', '45000'))
    settle_ms: int = int(os.getenv('SETTLE_MS', '1500'))
    connect_retries: int = int(os.getenv('CONNECT_RETRIES', '3'))

    # Crawl safety caps
    max_competitions: int = 10
    max_text_blocks: int = 120
    min_block_chars: int = 25
    max_match_links: int = 100
    max_records: int = 200


settings = Settings()
