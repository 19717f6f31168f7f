"""Resolve "package.module:attr" import paths for pluggable collaborators."""
from __future__ import annotations

import importlib
import inspect
from typing import Any

from .errors import CollaboratorLoadError


def load_object(import_path: str) -> Any:
    """
    Import ``package.module:attr`` (or ``package.module.attr``). Classes are
    instantiated with no arguments so callers always get a ready object.
    """
    module_name, separator, attribute_path = import_path.partition(":")
    if not separator:
        module_name, _, attribute_path = import_path.rpartition(".")
    if not module_name or not attribute_path:
        raise CollaboratorLoadError(f"Invalid import path: {import_path!r} (expected module:attr)")

    try:
        module = importlib.import_module(module_name)
    except ImportError as import_error:
        raise CollaboratorLoadError(f"Cannot import {module_name!r}: {import_error}") from import_error

    target: Any = module
    for attribute in attribute_path.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as attribute_error:
            raise CollaboratorLoadError(f"{import_path!r}: no attribute {attribute!r}") from attribute_error

    if inspect.isclass(target):
        return target()
    return target


def parse_handler_option(raw_value: str) -> tuple[str, Any]:
    """Split a CLI ``ext=module:attr`` value into (ext, loaded handler)."""
    extension, separator, import_path = raw_value.partition("=")
    if not separator or not extension.strip() or not import_path.strip():
        raise CollaboratorLoadError(f"Invalid handler option: {raw_value!r} (expected ext=module:attr)")
    return extension.strip(), load_object(import_path.strip())
