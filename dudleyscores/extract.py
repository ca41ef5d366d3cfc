"""
Heuristic game extraction from rendered text blocks.

Each block of page text yields at most one record: an upcoming fixture or a
completed result. Matching is best-effort and never raises; text that does
not look like a game simply yields None.
"""
import logging
import re
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Optional
from urllib.parse import urlparse
from zoneinfo import ZoneInfo

from dateutil import parser as dtparser

from dudleyscores.config import settings
from dudleyscores.models import Fixture, Result
from dudleyscores.normalize import apply_score_suppression

logger = logging.getLogger('dudleyscores')

FIXTURE = 'fixture'
RESULT = 'result'
UNKNOWN_GRADE = 'Unknown Grade'

# Placeholder offset for fixtures whose date cannot be read
FIXTURE_PLACEHOLDER = timedelta(days=3)

TEAMS_RE = re.compile(
    r"([\w&.'()\- ]{2,}?)\s+vs?\.?\s+([\w&.'()\- ]{2,})",
    re.IGNORECASE,
)
VERSUS_RE = re.compile(r'\s+vs?\.?\s+', re.IGNORECASE)
SCORE_RE = re.compile(r'\b(\d{1,3})\s*[-–]\s*(\d{1,3})\b')
FULL_TIME_RE = re.compile(r'full\s*time|\bft\b', re.IGNORECASE)
VENUE_RE = re.compile(r'field|oval|park|ground|stadium', re.IGNORECASE)

_WEEKDAY = (
    r'(?:mon(?:day)?|tue(?:s(?:day)?)?|wed(?:nesday)?|thu(?:r(?:s(?:day)?)?)?'
    r'|fri(?:day)?|sat(?:urday)?|sun(?:day)?)\b\.?'
)
_MONTH = (
    r'(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?'
    r'|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b\.?'
)
_ORD = r'(?:st|nd|rd|th)?'
_YEAR = r'(?:,?\s+\d{4}\b)?'
_TIME = r'(?:,?\s+\d{1,2}:\d{2}(?:\s*[ap]\.?m\b\.?)?)?'

DATE_PATTERNS = [
    # 10/08, 10/08/2025
    re.compile(r'\b\d{1,2}/\d{1,2}(?:/\d{2,4})?\b' + _TIME, re.IGNORECASE),
    # Sat 10 Aug, 10th August 2025
    re.compile(rf'(?:\b{_WEEKDAY},?\s+)?\b\d{{1,2}}{_ORD}\s+{_MONTH}{_YEAR}' + _TIME, re.IGNORECASE),
    # Sat Aug 10
    re.compile(rf'\b{_WEEKDAY},?\s+{_MONTH}\s+\d{{1,2}}{_ORD}\b{_YEAR}' + _TIME, re.IGNORECASE),
    # Aug 10, Aug 10, 2025
    re.compile(rf'\b{_MONTH}\s+\d{{1,2}}{_ORD}\b{_YEAR}' + _TIME, re.IGNORECASE),
]

TIME_RE = re.compile(r'\b\d{1,2}[:.]\d{2}(?:\s*[ap]\.?m\b\.?)?', re.IGNORECASE)
# Round 5, Rd. 12, Match 12345, Div 1
LABEL_RE = re.compile(r'\b(?:round|rd|match|game|div(?:ision)?)\.?\s*\d+\b', re.IGNORECASE)

# Spans that are never part of a team name, masked before pairing teams
NOISE_PATTERNS = [LABEL_RE, *DATE_PATTERNS, TIME_RE, SCORE_RE, FULL_TIME_RE]

# Words that cannot be part of a team name; used to trim surrounding text
BOUNDARY_WORDS = {
    'ft', 'full', 'time', 'fulltime', 'v', 'vs', 'at', 'round', 'rd', 'venue',
    'kick', 'ko', 'result', 'results', 'bye', 'am', 'pm',
    'mon', 'monday', 'tue', 'tues', 'tuesday', 'wed', 'wednesday', 'thu',
    'thur', 'thurs', 'thursday', 'fri', 'friday', 'sat', 'saturday', 'sun',
    'sunday',
    'jan', 'january', 'feb', 'february', 'mar', 'march', 'apr', 'april',
    'may', 'jun', 'june', 'jul', 'july', 'aug', 'august', 'sep', 'sept',
    'september', 'oct', 'october', 'nov', 'november', 'dec', 'december',
}


def _is_boundary(word: str) -> bool:
    w = word.lower().strip(".,;:()'")
    if not w or w in ('-', '–'):
        return True
    return w in BOUNDARY_WORDS


def _mask_noise(text: str) -> str:
    """Blank out scores, dates, times, full-time markers and round labels."""
    for pattern in NOISE_PATTERNS:
        text = pattern.sub(' | ', text)
    return text


def _trim_name(words: Iterable[str]) -> str:
    kept = []
    for word in words:
        if _is_boundary(word):
            break
        kept.append(word)
    return ' '.join(kept)


def parse_teams(text: str) -> Optional[tuple[str, str]]:
    """
    Find a "<home> v <away>" pair in text.

    Surrounding words (dates, scores, full-time markers) are trimmed off
    each side; digits and punctuation inside a name are kept. Returns None
    unless both names keep at least 2 characters.
    """
    m = TEAMS_RE.search(_mask_noise(text))
    if not m:
        return None
    home = _trim_name(reversed(m.group(1).split()))
    home = ' '.join(reversed(home.split())).strip(' -–,')
    away = _trim_name(m.group(2).split()).strip(' -–,')
    if len(home) < 2 or len(away) < 2:
        return None
    return home, away


def parse_score_pair(text: str) -> Optional[tuple[int, int]]:
    """Find a score such as "12 - 18" or "12–18"."""
    m = SCORE_RE.search(text)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def looks_full_time(text: str) -> bool:
    """Check for a "full time" or standalone "FT" marker."""
    return bool(FULL_TIME_RE.search(text))


def infer_date_text(text: str) -> Optional[str]:
    """Pull the first date-like substring out of text."""
    for pattern in DATE_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(0).strip(' ,')
    return None


def parse_date(date_text: Optional[str], tz: tzinfo, reference: datetime) -> Optional[datetime]:
    """
    Parse a date-like string (Australian day-first order).

    Missing parts (year, time) are taken from the reference day at midnight.
    Naive results are localized to the club timezone.
    """
    if not date_text:
        return None
    default = reference.astimezone(tz).replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        dt = dtparser.parse(date_text, dayfirst=True, default=default)
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt


def match_url_for(text: str, match_links: Iterable[str], page_url: str) -> str:
    """Best-effort deep link: first match-centre URL whose last path segment is in the text."""
    for link in match_links:
        segment = urlparse(link).path.rstrip('/').rsplit('/', 1)[-1]
        if segment and segment in text:
            return link
    return page_url


def extract_game(
    text: str,
    page_url: str,
    grade_hint: str,
    match_links: Iterable[str] = (),
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
) -> Optional[tuple[str, dict]]:
    """
    Classify one text block as a fixture or a result.

    Args:
        text: Rendered text of one container element
        page_url: Competition page the text came from
        grade_hint: Grade label derived from the page
        match_links: Match-centre URLs seen on the page
        tz: Club timezone (defaults to configured)
        now: Reference time for placeholder dates (one value per crawl)

    Returns:
        (FIXTURE | RESULT, record dict), or None if the text is not a game
    """
    try:
        text = (text or '').strip()
        # A container wrapping several games is not one record
        if count_pairings(text) > 1:
            return None
        teams = parse_teams(text)
        if not teams:
            return None
        home, away = teams

        tz = tz or ZoneInfo(settings.timezone)
        now = now or datetime.now(tz)

        score = parse_score_pair(text)
        ft = looks_full_time(text)
        when = parse_date(infer_date_text(text), tz, now)

        if ft or score:
            result = Result(
                date=when or now,
                grade=grade_hint or UNKNOWN_GRADE,
                home_team=home,
                away_team=away,
                status='FT' if ft else 'Result',
                source=page_url,
                match_url=match_url_for(text, match_links, page_url),
                score_home=score[0] if score else None,
                score_away=score[1] if score else None,
            )
            return RESULT, apply_score_suppression(result.to_json())

        fixture = Fixture(
            date=when or now + FIXTURE_PLACEHOLDER,
            grade=grade_hint or UNKNOWN_GRADE,
            home_team=home,
            away_team=away,
            venue=text if VENUE_RE.search(text) else 'TBC',
            source=page_url,
        )
        return FIXTURE, fixture.to_json()

    except Exception as e:  # noqa: BLE001
        logger.debug(f'Extract error: {e}')
        return None


def count_pairings(text: str) -> int:
    """Number of "v"/"vs" separators in text."""
    return len(VERSUS_RE.findall(text or ''))
