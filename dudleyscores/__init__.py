"""
Dudley Scores - club fixtures and results from playrugbyleague.com.

- Crawls the club's competition pages through a remote headless browser
- Extracts fixtures/results heuristically from rendered text
- Suppresses Minis/Mods (U6-U12) scores
- Serves JSON from an in-memory cache with sample-data fallback
"""

__version__ = '1.0.0'

from dudleyscores.cache import GamesCache, GamesService, RefreshOutcome
from dudleyscores.extract import extract_game
from dudleyscores.normalize import apply_score_suppression, is_minis_mods_grade
from dudleyscores.scraper import ClubScraper, scrape_all

__all__ = [
    'ClubScraper',
    'GamesCache',
    'GamesService',
    'RefreshOutcome',
    'apply_score_suppression',
    'extract_game',
    'is_minis_mods_grade',
    'scrape_all',
]
