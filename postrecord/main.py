import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI

from postrecord.repos.posts_repo import FilePostsRepo
from postrecord.routers import posts, report
from postrecord.security import get_api_key
from postrecord.services.posts_service import PostsService
from postrecord.settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    service = PostsService(repo=FilePostsRepo(settings.POSTS_DIR), settings=settings)
    startup_report = await asyncio.to_thread(service.build_report)
    if not startup_report.is_healthy:
        logger.warning(
            f"{startup_report.files_with_errors} of {startup_report.files_checked} "
            f"posts in {settings.POSTS_DIR} failed to parse"
        )
    yield
    logger.info("postrecord API shut down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="postrecord API",
        description="Parsed blog posts and their ingestion report",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.include_router(posts.router, dependencies=[Depends(get_api_key)])
    app.include_router(report.router, dependencies=[Depends(get_api_key)])

    @app.get("/")
    async def root():
        return {"message": "postrecord API is running"}

    return app


app = create_app()
