"""Exceptions raised while assembling a component."""
from __future__ import annotations


class AssemblyError(RuntimeError):
    """Base class for assembly failures."""


class ComponentNotFoundError(AssemblyError):
    """Raised when the component root is missing or not a directory."""

    def __init__(self, root_path: str) -> None:
        self.root_path = root_path
        super().__init__(f"Component directory not found: {root_path}")


class TemplateParseError(AssemblyError):
    """Raised when the template parser rejects a view file."""

    def __init__(self, template_path_key: str, cause: BaseException) -> None:
        self.template_path_key = template_path_key
        self.cause = cause
        super().__init__(f"Failed to parse template {template_path_key}: {cause}")


class TaskNameError(AssemblyError):
    """Raised when a qualified task name has an empty segment."""


class CollaboratorLoadError(AssemblyError):
    """Raised when a module:attr import path cannot be resolved."""
