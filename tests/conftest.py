from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import Callable

import pytest


def write_file(root: Path, relative_path: str, content: str = "") -> Path:
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class MemoryFileSystem:
    """Files held in a dict keyed by absolute posix path.

    With ``scrambled`` set, listings come back in reverse order with every
    match repeated, the worst case an unordered directory walk can produce.
    """

    def __init__(self, files: dict[str, str], *, scrambled: bool = False) -> None:
        self.files = dict(files)
        self.scrambled = scrambled

    def list_files(self, pattern: str) -> list[str]:
        pattern_parts = pattern.split("/")
        matches = [
            path
            for path in self.files
            if len(path.split("/")) == len(pattern_parts)
            and all(fnmatchcase(part, glob) for part, glob in zip(path.split("/"), pattern_parts))
        ]
        if self.scrambled:
            matches = sorted(matches, reverse=True) * 2
        return matches

    def read_file(self, path: str) -> str:
        return self.files[path]

    def exists(self, path: str) -> bool:
        return path in self.files


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    # Keep a developer's .env or RIPTIDE_* variables out of the tests.
    monkeypatch.chdir(tmp_path)
    for name in (
        "RIPTIDE_SOURCE_EXT",
        "RIPTIDE_CONTROLLER_SUFFIX",
        "RIPTIDE_TASK_BASE_CLASS",
        "RIPTIDE_CLIENT_PAGE",
        "RIPTIDE_SERVER_PAGE",
        "RIPTIDE_TEMPLATE_PARSER",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def component(tmp_path) -> Path:
    root = tmp_path / "blog"
    root.mkdir()
    return root


@pytest.fixture
def make_file(component) -> Callable[..., Path]:
    def _make(relative_path: str, content: str = "") -> Path:
        return write_file(component, relative_path, content)
    return _make


@pytest.fixture
def full_component(component, make_file) -> Path:
    """A component with every resource kind present."""
    make_file("config/routes.rb", "get '/posts', _controller: 'posts'")
    make_file("views/posts/index/index.html", "<h1>Posts</h1>")
    make_file("views/posts/show/show.html", "<h1>Post</h1>")
    make_file("controllers/posts_controller.rb", "class PostsController; end")
    make_file("models/post.rb", "class Post; end")
    make_file("config/initializers/setup.rb", "puts 'setup'")
    make_file("config/initializers/client/boot.rb", "puts 'boot'")
    return component


@pytest.fixture
def memory_file_system() -> Callable[..., MemoryFileSystem]:
    return MemoryFileSystem
