from fastapi import Depends, Request

from postrecord.repos.posts_repo import FilePostsRepo
from postrecord.services.posts_service import PostsService
from postrecord.settings import Settings


def get_settings(request: Request) -> Settings:
    """Settings built once by create_app and stored on the app."""
    return request.app.state.settings


def get_posts_repo(settings: Settings = Depends(get_settings)):
    return FilePostsRepo(settings.POSTS_DIR)


def get_posts_service(
    repo=Depends(get_posts_repo),
    settings: Settings = Depends(get_settings),
):
    return PostsService(repo=repo, settings=settings)
