"""File system access used by discovery and the emitters."""
from __future__ import annotations

import glob as glob_module
import os
from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def list_files(self, pattern: str) -> list[str]: ...
    def read_file(self, path: str) -> str: ...
    def exists(self, path: str) -> bool: ...


class LocalFileSystem:
    """Local disk access. Read errors (OSError) propagate to the caller."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def list_files(self, pattern: str) -> list[str]:
        """Return regular files matching a glob pattern, in no particular order."""
        return [match for match in glob_module.glob(pattern) if os.path.isfile(match)]

    def read_file(self, path: str) -> str:
        return Path(path).read_text(encoding=self.encoding)

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)


def join_pattern(root: str, *parts: str) -> str:
    """Build a glob pattern under ``root`` with glob metacharacters in root escaped."""
    escaped_root = glob_module.escape(root.rstrip("/\\") or root)
    return "/".join([escaped_root, *parts])
