import textwrap
from pathlib import Path

import pytest

from postrecord.settings import Settings


def doc(raw: str) -> str:
    """Dedent an indented test document and drop the leading newline."""
    return textwrap.dedent(raw).lstrip()


class FakePostsRepo:
    """
    In-memory stand-in for FilePostsRepo.
    Values that are exceptions are raised from read_text().
    """

    def __init__(self, files: dict):
        self.files = {Path(name): text for name, text in files.items()}
        self.created = {}

    def list_post_files(self):
        return sorted(self.files)

    def read_text(self, path):
        value = self.files[Path(path)]
        if isinstance(value, Exception):
            raise value
        return value

    def get_post_file(self, slug):
        from postrecord.repos.posts_repo import derive_post_id

        for path in self.list_post_files():
            if derive_post_id(path.name)[1] == slug:
                return path
        return None

    def create_post_file(self, filename, text):
        path = Path(filename)
        if path in self.files:
            raise FileExistsError(17, "File exists", filename)
        self.files[path] = text
        self.created[filename] = text
        return path


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_return=None, report=None):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._report = report

    def list_posts(self):
        return self._list_posts_return

    def get_post(self, slug: str):
        return self._get_post_return

    def build_report(self):
        return self._report


@pytest.fixture
def settings(tmp_path):
    return Settings(
        POSTS_DIR=tmp_path / "_posts",
        ALLOWED_LAYOUTS={"post", "page"},
        MAX_WORKERS=2,
        POSTRECORD_API_KEY="secret",
    )
