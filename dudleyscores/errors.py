"""
Error taxonomy for the scrape pipeline.

Only connection-level errors leave the crawler; page-level errors are
swallowed per competition page and nothing escapes the cache service.
"""


class ScoresError(Exception):
    """Base class for pipeline errors."""
    pass


class ConfigurationMissing(ScoresError):
    """No browser-automation endpoint configured (triggers fallback)."""
    pass


class BrowserConnectionError(ScoresError, ConnectionError):
    """Remote browser endpoint unreachable or refused the session."""
    pass


class NavigationTimeout(ScoresError):
    """Page did not finish loading within the navigation timeout."""
    pass


class PageExtractionError(ScoresError):
    """Page navigated but its content could not be read."""
    pass
