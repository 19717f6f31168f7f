"""Template handler registry keyed by file extension."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable


DEFAULT_EXTENSIONS = ("html", "email")


@runtime_checkable
class Handler(Protocol):
    """Turns raw file content into template markup the parser understands."""

    def transform(self, raw_content: str) -> str: ...


class IdentityHandler:
    """Plain template markup, no preprocessing."""

    def transform(self, raw_content: str) -> str:
        return raw_content


@dataclass(frozen=True)
class CallableHandler:
    """Adapts a plain ``str -> str`` function to the Handler interface."""
    fn: Callable[[str], str]

    def transform(self, raw_content: str) -> str:
        return self.fn(raw_content)


def normalize_extension(extension_tag: str | None) -> str:
    """Lower-case a tag and drop a leading dot: ".HTML" -> "html"."""
    if not extension_tag:
        return ""
    return extension_tag.strip().lstrip(".").lower()


@dataclass
class HandlerRegistry:
    """
    Maps extension tags to handlers.

    Writes are expected during process initialization only; assembly runs
    read it afterwards without locking. The last registration for a tag wins.
    """
    handlers_by_extension: dict[str, Handler] = field(default_factory=dict)

    def register(self, extension_tag: str, handler: Handler | Callable[[str], str]) -> None:
        """Register (or replace) the handler for an extension tag."""
        extension = normalize_extension(extension_tag)
        if not extension:
            raise ValueError("Extension tag must not be empty")

        if not isinstance(handler, Handler):
            if not callable(handler):
                raise TypeError(f"Handler for {extension!r} must define transform() or be callable")
            handler = CallableHandler(handler)

        self.handlers_by_extension[extension] = handler

    def handler_for(self, extension_tag: str | None) -> Handler | None:
        """Return the handler for a tag, or None to signal "skip this file"."""
        extension = normalize_extension(extension_tag)
        if not extension:
            return None
        return self.handlers_by_extension.get(extension)

    def known_extensions(self) -> frozenset[str]:
        return frozenset(self.handlers_by_extension)


def create_default_registry() -> HandlerRegistry:
    """Build a registry with the default template tags."""
    registry = HandlerRegistry()
    for extension in DEFAULT_EXTENSIONS:
        registry.register(extension, IdentityHandler())
    return registry
