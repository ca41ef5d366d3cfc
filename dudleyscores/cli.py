"""
CLI entrypoints for the club scores service.

Usage:
    dudleyscores games
    dudleyscores games --fresh
    dudleyscores refresh
"""
import argparse
import asyncio
import json
import logging
import sys

from dudleyscores.cache import GamesService, SCRAPE

logger = logging.getLogger('dudleyscores')


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def run_games(fresh: bool = False) -> dict:
    """
    Read the current dataset (refreshing when asked).

    Returns:
        Dataset dict
    """
    service = GamesService()
    return asyncio.run(service.read(prefer_fresh=fresh))


def run_refresh() -> dict:
    """
    Refresh once and summarize how the data was produced.

    Returns:
        Summary dict {source, updated, upcoming, results}
    """
    service = GamesService()
    outcome = asyncio.run(service.refresh())
    return {
        'source': outcome.source,
        'updated': outcome.data['updated'],
        'upcoming': len(outcome.data['upcoming']),
        'results': len(outcome.data['results']),
    }


def main(argv=None):
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog='dudleyscores',
        description='Club fixtures and results scraper',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', required=True)

    games_parser = subparsers.add_parser('games', help='Print the games dataset as JSON')
    games_parser.add_argument('--fresh', action='store_true', help='Crawl instead of using the cache')

    subparsers.add_parser('refresh', help='Refresh and report the data source')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == 'games':
        data = run_games(fresh=args.fresh)
        print(json.dumps(data, indent=2))
        sys.exit(0)

    elif args.command == 'refresh':
        summary = run_refresh()
        print(json.dumps(summary, indent=2))
        sys.exit(0 if summary['source'] == SCRAPE else 1)


if __name__ == '__main__':
    main()
