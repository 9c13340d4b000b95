import logging

from fastapi import APIRouter, Depends, HTTPException

from postrecord import dependencies as deps
from postrecord.schemas.report import BatchReport
from postrecord.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/report", response_model=BatchReport)
def get_report(service: PostsService = Depends(deps.get_posts_service)):
    """Parse and lint every post; one report entry per file."""
    try:
        return service.build_report()
    except Exception as e:
        logger.error(f"Unexpected error building report: {e}")
        raise HTTPException(status_code=500, detail="Failed to build report")
