"""
Hand-authored sample dataset.

Served when no browser endpoint is configured or a live crawl fails, so
callers always get the real response shape.
"""

from datetime import datetime, timezone
from typing import Optional

from dudleyscores.config import settings
from dudleyscores.models import Dataset, Fixture, Result
from dudleyscores.normalize import apply_score_suppression

SAMPLE_UPCOMING = [
    Fixture(
        date='2025-08-15T14:00:00+10:00',
        grade='U15 Div 1',
        home_team='Dudley Redhead',
        away_team='South Newcastle',
        venue='John Balcomb Field',
        source='sample',
    ),
]

SAMPLE_RESULTS = [
    Result(
        date='2025-08-09T10:00:00+10:00',
        grade='U13 Div 2',
        home_team='Macquarie',
        away_team='Dudley Redhead',
        score_home=12,
        score_away=18,
        status='FT',
        source='sample',
    ),
    # Minis/Mods: scores never published
    Result(
        date='2025-08-10T09:00:00+10:00',
        grade='U9',
        home_team='Dudley Redhead',
        away_team='Central',
        score_home=None,
        score_away=None,
        status='FT',
        source='sample',
    ),
]


def sample_dataset(
    season: Optional[int] = None,
    club: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    """
    Build the sample dataset.

    Args:
        season: Season year (defaults to configured)
        club: Club display name (defaults to configured)
        now: Timestamp for `updated` (defaults to current UTC time)

    Returns:
        Dataset dict with sanitized results
    """
    updated = (now or datetime.now(timezone.utc)).isoformat(timespec='seconds')
    dataset = Dataset(
        updated=updated,
        club=club or settings.club_name,
        season=int(season or settings.season_year),
        upcoming=[f.to_json() for f in SAMPLE_UPCOMING],
        results=[apply_score_suppression(r.to_json()) for r in SAMPLE_RESULTS],
    )
    return dataset.model_dump()
