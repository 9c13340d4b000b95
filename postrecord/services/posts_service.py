import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from postrecord.errors import ParseError, UnknownLayout
from postrecord.repos.posts_repo import derive_post_id
from postrecord.schemas.blog import PostDetail, PostSummary
from postrecord.schemas.post import Post
from postrecord.schemas.report import BatchReport, PostIssue, PostReport
from postrecord.services.post_parser import dumps, parse
from postrecord.services.post_validator import lint
from postrecord.settings import Settings
from postrecord.utils import calculate_reading_time, slugify

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo, settings: Settings):
        self.repo = repo
        self.settings = settings

    def build_report(self) -> BatchReport:
        """Parse and lint every post file independently, in parallel."""
        paths = self.repo.list_post_files()
        with ThreadPoolExecutor(max_workers=max(self.settings.MAX_WORKERS, 1)) as pool:
            reports = list(pool.map(self._process_file, paths))

        report = BatchReport(reports=sorted(reports, key=lambda r: r.path))
        logger.info(
            f"Checked {report.files_checked} posts: "
            f"{report.error_count} errors, {report.warning_count} warnings"
        )
        return report

    def list_posts(self) -> List[PostSummary]:
        reports = self.build_report().posts
        reports.sort(key=lambda r: r.published_date or datetime.date.min, reverse=True)
        return [_to_summary(r) for r in reports]

    def get_post(self, slug: str) -> Optional[PostDetail]:
        path = self.repo.get_post_file(slug)
        if not path:
            return None
        report = self._process_file(path)
        if report.post is None:
            return None
        return PostDetail(
            **_to_summary(report).model_dump(),
            body=report.post.body,
            extra=report.post.extra,
        )

    def create_post(
        self,
        title: str,
        *,
        layout: Optional[str] = None,
        keywords: Optional[str] = None,
        date: Optional[datetime.date] = None,
    ) -> Path:
        layout = layout or self.settings.DEFAULT_LAYOUT
        if layout not in self.settings.ALLOWED_LAYOUTS:
            raise UnknownLayout(layout, self.settings.ALLOWED_LAYOUTS)
        slug = slugify(title)
        if not slug:
            raise ValueError(f"Cannot derive a slug from title {title!r}")

        date = date or datetime.date.today()
        post = Post(layout=layout, title=title, keywords=keywords, body="")
        return self.repo.create_post_file(f"{date.isoformat()}-{slug}.md", dumps(post))

    def _process_file(self, path: Path) -> PostReport:
        try:
            raw_text = self.repo.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            published_date, slug = derive_post_id(path.name)
            return PostReport(
                path=str(path),
                slug=slug,
                published_date=published_date,
                issues=[
                    PostIssue(code="UnreadableFile", severity="error", message=str(e))
                ],
            )
        return process_document(
            raw_text, path=path, allowed_layouts=self.settings.ALLOWED_LAYOUTS
        )


def process_document(
    raw_text: str, *, path: Path, allowed_layouts: Iterable[str]
) -> PostReport:
    """Parse and lint one document, turning every failure into report issues."""
    published_date, slug = derive_post_id(Path(path).name)
    try:
        post = parse(raw_text)
    except ParseError as e:
        logger.warning(f"Skipped {path}: {e}")
        return PostReport(
            path=str(path),
            slug=slug,
            published_date=published_date,
            issues=[PostIssue.from_error(e, severity="error")],
        )
    except Exception as e:
        logger.warning(f"Failed to parse post {path}: {e}")
        return PostReport(
            path=str(path),
            slug=slug,
            published_date=published_date,
            issues=[
                PostIssue(
                    code=type(e).__name__,
                    severity="error",
                    message=f"Unexpected error while parsing: {e}",
                )
            ],
        )

    issues = [
        PostIssue.from_error(finding, severity="warning")
        for finding in lint(post, allowed_layouts)
    ]
    for issue in issues:
        logger.debug(f"{path}: {issue.message}")
    return PostReport(
        path=str(path),
        slug=slug,
        published_date=published_date,
        post=post,
        issues=issues,
    )


def _to_summary(report: PostReport) -> PostSummary:
    post = report.post
    return PostSummary(
        slug=report.slug,
        title=post.title,
        layout=post.layout,
        keywords=post.keywords,
        publishedDate=report.published_date,
        readingTime=calculate_reading_time(post.body),
        warnings=len(report.warnings),
    )
