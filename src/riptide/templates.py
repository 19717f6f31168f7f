"""Parsed template types and the parser interface consumed by the view emitter."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence, Union


BindingKey = Union[str, int]


@dataclass(frozen=True)
class ParsedTemplate:
    """One named template: its markup and its binding table."""
    markup: str
    # key -> expressions, both in parser insertion order; expressions are opaque source
    bindings: Mapping[BindingKey, Sequence[str]] = field(default_factory=dict)


ParsedTemplateSet = Mapping[str, ParsedTemplate]


class TemplateParser(Protocol):
    """Splits transformed markup into named templates."""

    def parse(self, markup: str, template_path_key: str) -> ParsedTemplateSet: ...


class PlainTemplateParser:
    """
    Fallback parser: the whole file becomes a single ``<key>/body`` template
    with no bindings. Used when no real markup parser is configured.
    """

    section_name = "body"

    def parse(self, markup: str, template_path_key: str) -> ParsedTemplateSet:
        return {f"{template_path_key}/{self.section_name}": ParsedTemplate(markup=markup)}
