import datetime
import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".markdown")
_POST_ID_PATTERN = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")


def derive_post_id(filename: str) -> Tuple[Optional[datetime.date], str]:
    """
    Split `<date>-<slug>.md` into its publish date and slug.

    Names that don't follow the convention keep their stem as slug and
    have no date.
    """
    stem = Path(filename).stem
    match = _POST_ID_PATTERN.match(stem)
    if not match:
        return None, stem
    try:
        published = datetime.date.fromisoformat(match.group("date"))
    except ValueError:
        return None, stem
    return published, match.group("slug")


class FilePostsRepo:
    def __init__(self, posts_dir: Path):
        self.posts_dir = Path(posts_dir)

    def list_post_files(self) -> List[Path]:
        if not self.posts_dir.is_dir():
            logger.warning(f"Posts directory not found: {self.posts_dir}")
            return []
        return sorted(
            path
            for path in self.posts_dir.rglob("*")
            if path.suffix in POST_SUFFIXES
            and path.is_file()
            and not path.name.startswith(".")
        )

    def read_text(self, path: Path) -> str:
        # newline="" keeps CRLF bodies untouched
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()

    def get_post_file(self, slug: str) -> Optional[Path]:
        for path in self.list_post_files():
            _, file_slug = derive_post_id(path.name)
            if file_slug == slug:
                return path
        return None

    def create_post_file(self, filename: str, text: str) -> Path:
        """Write a new post; refuses to overwrite an existing file."""
        self.posts_dir.mkdir(parents=True, exist_ok=True)
        path = self.posts_dir / filename
        with open(path, "x", encoding="utf-8", newline="") as fh:
            fh.write(text)
        logger.info(f"Created post {path}")
        return path
