from pathlib import Path

from postrecord.settings import Settings, choose_env_file


def test_defaults():
    s = Settings()

    assert s.ALLOWED_LAYOUTS == {"post"}
    assert s.DEFAULT_LAYOUT == "post"
    assert s.POSTS_DIR == Path("_posts")


def test_allowed_layouts_from_environment(monkeypatch):
    monkeypatch.setenv("ALLOWED_LAYOUTS", '["post", "page"]')
    monkeypatch.setenv("POSTS_DIR", "content/posts")

    s = Settings()

    assert s.ALLOWED_LAYOUTS == {"post", "page"}
    assert s.POSTS_DIR == Path("content/posts")


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
