"""
Shared fixtures: an in-memory stand-in for the remote browser.

Pages are served from a dict of url -> html (or an exception to raise on
navigation), so crawler tests run without network access.
"""
import pytest

from dudleyscores.config import Settings
from dudleyscores.errors import NavigationTimeout

ORIGIN = 'https://www.playrugbyleague.com'
CLUB_SLUG = 'dudley-redhead-junior-rlfc-inc-12074'
CLUB_URL = f'{ORIGIN}/competitions/club/{CLUB_SLUG}'


class FakePage:
    def __init__(self, site):
        self.site = site
        self.current = None

    async def goto(self, url, timeout_ms, settle_ms):
        self.site.visited.append(url)
        page = self.site.pages.get(url)
        if page is None:
            raise NavigationTimeout(f'Timed out after {timeout_ms}ms loading {url}')
        if isinstance(page, Exception):
            raise page
        self.current = url

    async def content(self):
        return self.site.pages[self.current]

    async def title(self):
        return self.site.titles.get(self.current, '')


class FakeContext:
    def __init__(self, site, fail_close=False):
        self.site = site
        self.fail_close = fail_close
        self.closed = False

    async def new_page(self):
        return FakePage(self.site)

    async def close(self):
        self.closed = True
        if self.fail_close:
            raise RuntimeError('context already gone')


class FakeSession:
    def __init__(self, site):
        self.site = site
        self.context = None
        self.context_options = None
        self.closed = False

    async def new_context(self, timezone, user_agent=None):
        self.context_options = {'timezone': timezone, 'user_agent': user_agent}
        self.context = FakeContext(self.site, fail_close=self.site.fail_context_close)
        return self.context

    async def close(self):
        self.closed = True


class FakeSite:
    """Pages, titles and a connect() coroutine compatible with ClubScraper."""

    def __init__(self, pages=None, titles=None, unreachable=False):
        self.pages = dict(pages or {})
        self.titles = dict(titles or {})
        self.unreachable = unreachable
        self.fail_context_close = False
        self.visited = []
        self.sessions = []

    async def connect(self, endpoint):
        if self.unreachable:
            raise ConnectionRefusedError(f'cannot reach {endpoint}')
        session = FakeSession(self)
        self.sessions.append(session)
        return session


CLUB_PAGE = f"""
<html><head><title>Dudley Redhead JRLFC | Play Rugby League</title></head>
<body>
  <nav>
    <a href="/competitions/u15-div-1">U15 Div 1</a>
    <a href="{ORIGIN}/competitions/u9">U9</a>
    <a href="/competitions/u13-div-2">U13 Div 2</a>
    <a href="/competitions/u15-div-1#ladder">U15 ladder</a>
    <a href="https://elsewhere.example.com/competitions/u15">Offsite</a>
    <a href="/news/season-launch">News</a>
    <a href="{CLUB_URL}">Club home</a>
  </nav>
</body></html>
"""

U15_PAGE = """
<html><head><title>U15 Div 1 | Play Rugby League</title></head>
<body>
  <h1>Under 15 Division 1</h1>
  <div class="fixtures">
    <ul>
      <li>Round 12 Dudley Redhead vs Central Sat 16 Aug 10:00 AM</li>
      <li>Round 12 Dudley Redhead vs Central Sat 16 Aug 10:00 AM</li>
      <li>Macquarie v Dudley Redhead Sat 9 Aug Full Time 12-18
          <a href="/match-centre/12345">Match 12345</a></li>
      <li>Club news and upcoming events for members</li>
    </ul>
  </div>
</body></html>
"""

U9_PAGE = """
<html><head><title></title></head>
<body>
  <h2>U9 Minis</h2>
  <table>
    <tr><td>Dudley Redhead</td><td>v</td><td>Central</td><td>FT 4 - 10</td></tr>
  </table>
</body></html>
"""


@pytest.fixture
def scraper_settings():
    """Settings with a fake endpoint and no render delay."""
    return Settings(
        browserless_ws='ws://browserless.test?token=abc',
        club_slug=CLUB_SLUG,
        season_year=2025,
        timezone='Australia/Sydney',
        site_origin=ORIGIN,
        settle_ms=0,
    )


@pytest.fixture
def club_site():
    """Club page linking three competitions; the U13 page times out."""
    return FakeSite(
        pages={
            CLUB_URL: CLUB_PAGE,
            f'{ORIGIN}/competitions/u15-div-1': U15_PAGE,
            f'{ORIGIN}/competitions/u9': U9_PAGE,
            f'{ORIGIN}/competitions/u13-div-2': NavigationTimeout('Timed out after 45000ms'),
        },
        titles={
            CLUB_URL: 'Dudley Redhead JRLFC | Play Rugby League',
            f'{ORIGIN}/competitions/u15-div-1': 'U15 Div 1 | Play Rugby League',
            f'{ORIGIN}/competitions/u9': '',
        },
    )


@pytest.fixture
def make_site():
    """Factory for custom fake sites."""
    return FakeSite
