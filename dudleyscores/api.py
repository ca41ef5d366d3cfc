"""
HTTP endpoints.

    GET /games   current dataset (cached while fresh)
    GET /cron    force a refresh (scheduler hook)
    GET /health  liveness

Run with any ASGI server, e.g. `uvicorn dudleyscores.api:app`.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dudleyscores import __version__
from dudleyscores.cache import GamesService

logger = logging.getLogger('dudleyscores')

NO_STORE = {'cache-control': 'no-store'}


def create_app(service: Optional[GamesService] = None) -> FastAPI:
    """Build the app around one games service (and its cache)."""
    app = FastAPI(title='dudleyscores', version=__version__)
    app.state.games = service or GamesService()
    start = datetime.now(timezone.utc).isoformat(timespec='seconds')

    @app.get('/')
    def root():
        return {'service': 'dudleyscores', 'status': 'ok', 'start': start}

    @app.get('/health')
    def health():
        return {'ok': True}

    @app.get('/games')
    async def games(request: Request):
        try:
            return await request.app.state.games.read(prefer_fresh=False)
        except Exception as e:  # noqa: BLE001
            logger.error(f'GET /games error: {e}', exc_info=True)
            return JSONResponse(
                {'error': 'games_failed', 'message': str(e)},
                status_code=500,
            )

    @app.get('/cron')
    async def cron(request: Request):
        try:
            outcome = await request.app.state.games.refresh()
        except Exception as e:  # noqa: BLE001
            logger.error(f'GET /cron error: {e}', exc_info=True)
            return JSONResponse(
                {'error': 'cron_failed', 'message': str(e)},
                status_code=500,
            )
        return JSONResponse(
            {'ok': True, 'source': outcome.source, 'updated': outcome.data['updated']},
            headers=NO_STORE,
        )

    return app


app = create_app()
