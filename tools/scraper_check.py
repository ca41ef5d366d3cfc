#!/usr/bin/env python3
"""
Quick health check for the club crawler.

Runs one live crawl and validates that it produced well-formed records.

Usage:
    BROWSERLESS_WS=wss://... python -m tools.scraper_check --limit 3
"""
import argparse
import asyncio
import random
import sys

from dudleyscores import ClubScraper, is_minis_mods_grade
from dudleyscores.config import settings
from dudleyscores.scraper import log_event


def main():
    parser = argparse.ArgumentParser(description='Quick crawler health check')
    parser.add_argument('--club', default=settings.club_slug)
    parser.add_argument('--season', type=int, default=settings.season_year)
    parser.add_argument('--limit', type=int, default=3)
    args = parser.parse_args()

    if not settings.browserless_ws:
        print('ERROR: BROWSERLESS_WS is not set')
        sys.exit(1)

    print(f'🏥 Health check: club {args.club}, season {args.season}, limit {args.limit}')

    scraper = ClubScraper()
    data = asyncio.run(scraper.crawl(settings.browserless_ws, args.club, args.season))
    records = data['upcoming'] + data['results']

    if not records:
        print('ERROR: No games returned from crawler')
        sys.exit(1)

    random.seed(42)
    sample = random.sample(records, min(args.limit, len(records)))

    for row in sample:
        for key in ['date', 'grade', 'homeTeam', 'awayTeam', 'source']:
            if not row.get(key):
                print(f'ERROR: {key} is missing/empty in {row}')
                sys.exit(1)

        if 'status' in row and is_minis_mods_grade(row['grade']):
            if row['scoreHome'] is not None or row['scoreAway'] is not None:
                print(f'ERROR: Minis/Mods score published for {row["grade"]}')
                sys.exit(1)

        print(f'✓ {row["grade"]}: {row["homeTeam"]} v {row["awayTeam"]}')
        print(f'  Date: {row["date"]}')
        if 'status' in row:
            print(f'  Score: {row["scoreHome"]}-{row["scoreAway"]} ({row["status"]})')
        else:
            print(f'  Venue: {row["venue"]}')

    log_event(event='health_check', upcoming=len(data['upcoming']), results=len(data['results']))
    print(f'\n✅ Health check passed ({len(data["upcoming"])} upcoming, {len(data["results"])} results)')
    sys.exit(0)


if __name__ == '__main__':
    main()
