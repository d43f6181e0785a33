"""Entry point for the Record Keeper API.

Launches the FastAPI application with Uvicorn.  Host, port and log
level are read from the environment through ``Settings`` (``HOST``,
``PORT``, ``LOG_LEVEL``).  Intended to be executed from the project
root::

    python run.py
"""
import asyncio

from uvicorn import Config, Server

from record_keeper_api.app.core.config import settings
from record_keeper_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
