"""
Command line entry point for checking and scaffolding blog posts.

Commands:
    postrecord lint [POSTS_DIR] [--layout NAME ...] [--strict]
    postrecord show FILE
    postrecord new TITLE [--layout NAME] [--keywords TEXT] [--date YYYY-MM-DD]
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from postrecord.errors import PostError
from postrecord.repos.posts_repo import FilePostsRepo, derive_post_id
from postrecord.services.post_parser import parse
from postrecord.services.posts_service import PostsService
from postrecord.services.report_formatter import format_report
from postrecord.settings import Settings

logger = logging.getLogger(__name__)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Parse, validate and create front matter blog posts."""
    settings = Settings()
    logging.basicConfig(
        level=(
            logging.DEBUG
            if verbose
            else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        ),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _service(
    ctx: click.Context,
    posts_dir: Optional[Path] = None,
    layouts: Tuple[str, ...] = (),
) -> PostsService:
    settings: Settings = ctx.obj["settings"]
    overrides = {}
    if posts_dir is not None:
        overrides["POSTS_DIR"] = posts_dir
    if layouts:
        overrides["ALLOWED_LAYOUTS"] = set(layouts)
    if overrides:
        settings = settings.model_copy(update=overrides)
    return PostsService(repo=FilePostsRepo(settings.POSTS_DIR), settings=settings)


@cli.command("lint")
@click.argument(
    "posts_dir", required=False, type=click.Path(path_type=Path, file_okay=False)
)
@click.option("--layout", "layouts", multiple=True, help="Allowed layout (repeatable)")
@click.option("--strict", is_flag=True, help="Exit non-zero on warnings too")
@click.pass_context
def lint_command(
    ctx: click.Context,
    posts_dir: Optional[Path],
    layouts: Tuple[str, ...],
    strict: bool,
) -> None:
    """Parse and lint every post, printing a report grouped by file."""
    report = _service(ctx, posts_dir, layouts).build_report()
    click.echo(format_report(report))
    if not report.is_healthy or (strict and report.warning_count):
        ctx.exit(1)


@cli.command("show")
@click.argument("file", type=click.Path(path_type=Path, exists=True, dir_okay=False))
@click.pass_context
def show_command(ctx: click.Context, file: Path) -> None:
    """Print the parsed record of a single post as JSON."""
    repo = FilePostsRepo(file.parent)
    try:
        post = parse(repo.read_text(file))
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"{file}: UnreadableFile: {e}", err=True)
        ctx.exit(1)
    except PostError as e:
        click.echo(f"{file}: {type(e).__name__}: {e}", err=True)
        ctx.exit(1)

    published_date, slug = derive_post_id(file.name)
    record = {
        "slug": slug,
        "published_date": published_date.isoformat() if published_date else None,
        **post.model_dump(),
    }
    click.echo(json.dumps(record, indent=2, ensure_ascii=False))


@cli.command("new")
@click.argument("title")
@click.option("--layout", default=None, help="Layout (defaults to DEFAULT_LAYOUT)")
@click.option("--keywords", default=None, help="Comma separated keywords")
@click.option(
    "--date",
    "date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Publish date",
)
@click.pass_context
def new_command(
    ctx: click.Context,
    title: str,
    layout: Optional[str],
    keywords: Optional[str],
    date,
) -> None:
    """Create `<date>-<slug>.md` in the posts directory."""
    service = _service(ctx)
    try:
        path = service.create_post(
            title,
            layout=layout,
            keywords=keywords,
            date=date.date() if date else None,
        )
    except FileExistsError as e:
        raise click.ClickException(f"Post already exists: {e.filename}")
    except (PostError, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(str(path))


if __name__ == "__main__":
    cli()
