"""Discover component resources by directory convention.

Layout under a component root:
  views/<controller>/<view>/<file>.<template ext>
  controllers/<name>_controller.<ext>
  models/<name>.<ext>
  config/routes.<ext>
  config/initializers/<name>.<ext>
  config/initializers/client/<name>.<ext>

Every listing is sorted by its full path string and de-duplicated, so a fixed
directory snapshot always yields the same resources in the same order.
"""
from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .filesystem import FileSystem, LocalFileSystem, join_pattern
from .handlers import HandlerRegistry, normalize_extension


class ResourceKind(str, Enum):
    ROUTES = "routes"
    VIEW = "view"
    CONTROLLER = "controller"
    MODEL = "model"
    INITIALIZER = "initializer"


@dataclass(frozen=True)
class DiscoveredResource:
    """A file found under the component root."""
    kind: ResourceKind
    absolute_path: str
    logical_name: str  # relative to the kind's folder, no extension

    @property
    def extension(self) -> str:
        return normalize_extension(posixpath.splitext(self.absolute_path)[1])


# ============================================================
# Pure path helpers
# ============================================================

def to_posix(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


def strip_extension(path: str) -> str:
    """Drop the final extension only: "a/b.email.html" -> "a/b.email"."""
    stem, _ext = posixpath.splitext(path)
    return stem


def relative_logical_name(path: str, base_dir: str) -> str:
    """Path relative to base_dir with its extension stripped."""
    return strip_extension(posixpath.relpath(path, base_dir))


def sorted_unique(paths: Iterable[str]) -> list[str]:
    """Sort lexicographically by path string, dropping repeats."""
    return unique_in_order(sorted(paths))


def unique_in_order(paths: Iterable[str]) -> list[str]:
    """Drop repeated paths, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[str] = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            unique.append(path)
    return unique


def implicit_controller_path(view_folder: str, *, suffix: str = "_controller", extension: str = "rb") -> str:
    """
    Derive the controller a view folder implies:
      <root>/views/widgets -> <root>/controllers/widgets_controller.rb
    """
    segments = to_posix(view_folder).rstrip("/").split("/")
    if len(segments) < 2:
        raise ValueError(f"Not a view folder: {view_folder}")
    segments[-2] = "controllers"
    return "/".join(segments) + f"{suffix}.{extension}"


def view_folder_of(view_path: str, views_root: str) -> str:
    """Return views/<controller> for a view file under views_root."""
    relative_parts = posixpath.relpath(view_path, views_root).split("/")
    return posixpath.join(views_root, relative_parts[0])


# ============================================================
# Discoverer
# ============================================================

class ResourceDiscoverer:
    """Enumerates resources of one component root."""

    def __init__(
        self,
        root_path: str,
        *,
        registry: HandlerRegistry,
        file_system: FileSystem | None = None,
        source_extension: str = "rb",
        controller_suffix: str = "_controller",
    ) -> None:
        self.root_path = to_posix(os.path.abspath(root_path)).rstrip("/") or "/"
        self.registry = registry
        self.file_system = file_system or LocalFileSystem()
        self.source_extension = normalize_extension(source_extension)
        self.controller_suffix = controller_suffix

    @property
    def views_root(self) -> str:
        return posixpath.join(self.root_path, "views")

    @property
    def controllers_root(self) -> str:
        return posixpath.join(self.root_path, "controllers")

    @property
    def models_root(self) -> str:
        return posixpath.join(self.root_path, "models")

    @property
    def config_root(self) -> str:
        return posixpath.join(self.root_path, "config")

    @property
    def initializers_root(self) -> str:
        return posixpath.join(self.config_root, "initializers")

    def _list(self, *parts: str) -> list[str]:
        pattern = join_pattern(self.root_path, *parts)
        return sorted_unique(to_posix(path) for path in self.file_system.list_files(pattern))

    def _resources(self, kind: ResourceKind, paths: Iterable[str], base_dir: str) -> list[DiscoveredResource]:
        return [
            DiscoveredResource(kind=kind, absolute_path=path, logical_name=relative_logical_name(path, base_dir))
            for path in paths
        ]

    def views(self) -> list[DiscoveredResource]:
        """Template files at views/<controller>/<view>/* with a registered extension."""
        known_extensions = self.registry.known_extensions()
        view_paths = [
            path
            for path in self._list("views", "*", "*", "*")
            if normalize_extension(posixpath.splitext(path)[1]) in known_extensions
        ]
        return self._resources(ResourceKind.VIEW, view_paths, self.views_root)

    def implicit_controller_candidates(self) -> list[str]:
        """One controller path per distinct views/<controller> folder holding views."""
        view_folders = sorted_unique(view_folder_of(view.absolute_path, self.views_root) for view in self.views())
        return [
            implicit_controller_path(folder, suffix=self.controller_suffix, extension=self.source_extension)
            for folder in view_folders
        ]

    def explicit_controller_paths(self) -> list[str]:
        return self._list("controllers", f"*{self.controller_suffix}.{self.source_extension}")

    def controllers(self) -> list[DiscoveredResource]:
        """
        Implicit candidates merged with explicit controller files. Union is by
        exact path; candidates without a file on disk are dropped.
        """
        candidates = unique_in_order(self.implicit_controller_candidates() + self.explicit_controller_paths())
        existing = [path for path in candidates if self.file_system.exists(path)]
        return self._resources(ResourceKind.CONTROLLER, sorted(existing), self.controllers_root)

    def models(self) -> list[DiscoveredResource]:
        paths = self._list("models", f"*.{self.source_extension}")
        return self._resources(ResourceKind.MODEL, paths, self.models_root)

    def routes(self) -> DiscoveredResource | None:
        """The optional config/routes file."""
        routes_path = posixpath.join(self.config_root, f"routes.{self.source_extension}")
        if not self.file_system.exists(routes_path):
            return None
        return DiscoveredResource(
            kind=ResourceKind.ROUTES,
            absolute_path=routes_path,
            logical_name=relative_logical_name(routes_path, self.config_root),
        )

    def initializers(self) -> list[DiscoveredResource]:
        """config/initializers/* then config/initializers/client/*, each sorted."""
        shared = self._list("config", "initializers", f"*.{self.source_extension}")
        client = self._list("config", "initializers", "client", f"*.{self.source_extension}")
        return self._resources(ResourceKind.INITIALIZER, unique_in_order(shared + client), self.initializers_root)

    def discover_all(self) -> dict[ResourceKind, list[DiscoveredResource]]:
        """Every kind at once, in emission order."""
        routes = self.routes()
        return {
            ResourceKind.ROUTES: [routes] if routes is not None else [],
            ResourceKind.VIEW: self.views(),
            ResourceKind.CONTROLLER: self.controllers(),
            ResourceKind.MODEL: self.models(),
            ResourceKind.INITIALIZER: self.initializers(),
        }
