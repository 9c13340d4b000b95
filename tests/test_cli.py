import json

import pytest
from click.testing import CliRunner

from postrecord.cli import cli
from tests.conftest import doc

VALID = doc(
    """
    ---
    layout: post
    title: Strings Catalogs
    keywords: localization
    ---
    Xcode 15 introduced `.xcstrings`.
    """
)


@pytest.fixture
def posts_dir(tmp_path):
    path = tmp_path / "_posts"
    path.mkdir()
    (path / "2023-11-20-strings-catalogs.md").write_text(VALID)
    return path


def test_lint_healthy_directory(posts_dir):
    result = CliRunner().invoke(cli, ["lint", str(posts_dir)])

    assert result.exit_code == 0
    assert "Files checked: 1" in result.output
    assert "ALL POSTS VALID" in result.output


def test_lint_fails_on_parse_errors_but_reports_all(posts_dir):
    (posts_dir / "2023-11-21-broken.md").write_text("---\nlayout: post\n---\n")

    result = CliRunner().invoke(cli, ["lint", str(posts_dir)])

    assert result.exit_code == 1
    assert "Files checked: 2" in result.output
    assert "MissingRequiredField" in result.output


def test_lint_strict_fails_on_warnings(posts_dir):
    runner = CliRunner()

    relaxed = runner.invoke(cli, ["lint", str(posts_dir), "--layout", "page"])
    strict = runner.invoke(
        cli, ["lint", str(posts_dir), "--layout", "page", "--strict"]
    )

    assert relaxed.exit_code == 0
    assert "UnknownLayout" in relaxed.output
    assert strict.exit_code == 1


def test_show_prints_record(posts_dir):
    result = CliRunner().invoke(
        cli, ["show", str(posts_dir / "2023-11-20-strings-catalogs.md")]
    )

    assert result.exit_code == 0
    record = json.loads(result.output)
    assert record["slug"] == "strings-catalogs"
    assert record["published_date"] == "2023-11-20"
    assert record["title"] == "Strings Catalogs"
    assert record["body"] == "Xcode 15 introduced `.xcstrings`.\n"


def test_show_reports_parse_error(tmp_path):
    path = tmp_path / "bad.md"
    path.write_text("---\nlayout: post\ntitle: open\n")

    result = CliRunner().invoke(cli, ["show", str(path)])

    assert result.exit_code == 1
    assert "MalformedFrontMatter" in result.output


def test_show_reports_unreadable_file(tmp_path):
    path = tmp_path / "bad.md"
    path.write_bytes(b"\xff\xfe---\n")

    result = CliRunner().invoke(cli, ["show", str(path)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert "UnreadableFile" in result.output


def test_new_creates_post(tmp_path, monkeypatch):
    monkeypatch.setenv("POSTS_DIR", str(tmp_path / "_posts"))
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "new",
            "Remote Config Wrapper",
            "--keywords",
            "firebase",
            "--date",
            "2024-05-06",
        ],
    )

    assert result.exit_code == 0
    path = tmp_path / "_posts" / "2024-05-06-remote-config-wrapper.md"
    assert path.exists()
    shown = runner.invoke(cli, ["show", str(path)])
    assert json.loads(shown.output)["keywords"] == "firebase"

    again = runner.invoke(
        cli, ["new", "Remote Config Wrapper", "--date", "2024-05-06"]
    )
    assert again.exit_code == 1
    assert "already exists" in again.output


def test_new_rejects_unknown_layout(tmp_path, monkeypatch):
    monkeypatch.setenv("POSTS_DIR", str(tmp_path / "_posts"))

    result = CliRunner().invoke(cli, ["new", "Title", "--layout", "gallery"])

    assert result.exit_code == 1
    assert "Unknown layout" in result.output
