import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ezelectronics import __version__
from ezelectronics.core.config import get_settings
from ezelectronics.infrastructure.database.session import dispose_engine, init_db
from ezelectronics.interfaces.http.routers import create_api_router

settings = get_settings()
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("%s %s started", settings.project_name, __version__)
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        description="EZElectronics user account service",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))
    return app


def run() -> None:
    import uvicorn

    uvicorn.run(
        "ezelectronics.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


app = create_app()
