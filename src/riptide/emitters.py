"""Code emitters: one pure function per resource kind, each returning Ruby source text."""
from __future__ import annotations

import re
from typing import Iterable, Mapping, Sequence

from .discovery import DiscoveredResource, strip_extension
from .errors import TaskNameError, TemplateParseError
from .filesystem import FileSystem
from .handlers import HandlerRegistry
from .templates import BindingKey, ParsedTemplate, TemplateParser


# ============================================================
# Ruby literals
# ============================================================

_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\f": "\\f",
    "\v": "\\v",
    "\b": "\\b",
    "\a": "\\a",
    "\x1b": "\\e",
}


def ruby_string_literal(text: str) -> str:
    """
    Double-quoted Ruby literal for ``text`` (same shape as String#inspect).

    Interpolation starts (#{, #$, #@) are escaped so markup never evaluates.
    """
    out: list[str] = ['"']
    length = len(text)
    for index, char in enumerate(text):
        if char in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[char])
        elif char == "#" and index + 1 < length and text[index + 1] in "{$@":
            out.append("\\#")
        elif char == "\x7f":
            out.append("\\x7F")
        elif not char.isprintable():
            code_point = ord(char)
            out.append(f"\\u{code_point:04X}" if code_point <= 0xFFFF else f"\\u{{{code_point:X}}}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)


def ruby_single_quoted(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def ruby_binding_key(key: BindingKey) -> str:
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    return ruby_string_literal(str(key))


def render_binding_table(bindings: Mapping[BindingKey, Sequence[str]] | None) -> str:
    """{"click" => [onClick], ...} with parser order kept and expressions verbatim."""
    if not bindings:
        return "{}"
    pairs = [f"{ruby_binding_key(key)} => [{', '.join(expressions)}]" for key, expressions in bindings.items()]
    return "{" + ", ".join(pairs) + "}"


def render_template_registration(page_reference: str, name: str, template: ParsedTemplate) -> str:
    return (
        f"{page_reference}.add_template("
        f"{ruby_string_literal(name)}, "
        f"{ruby_string_literal(template.markup)}, "
        f"{render_binding_table(template.bindings)})\n"
    )


# ============================================================
# Routes
# ============================================================

def emit_routes(routes: DiscoveredResource | None, *, file_system: FileSystem, page_reference: str) -> str:
    if routes is None:
        return ""
    content = file_system.read_file(routes.absolute_path)
    return f"{page_reference}.add_routes do\n" + "\n" + content + "\n" + "end\n\n"


# ============================================================
# Views
# ============================================================

def template_path_key(component_name: str, view: DiscoveredResource) -> str:
    """<component>/<path under views/ without extension>, e.g. blog/widgets/show/index."""
    return f"{component_name}/{view.logical_name}"


def emit_view(
    view: DiscoveredResource,
    *,
    component_name: str,
    registry: HandlerRegistry,
    parser: TemplateParser,
    file_system: FileSystem,
    page_reference: str,
) -> str:
    """Template registrations for one view file; empty when no handler claims its extension."""
    handler = registry.handler_for(view.extension)
    if handler is None:
        return ""

    key = template_path_key(component_name, view)
    markup = handler.transform(file_system.read_file(view.absolute_path))
    try:
        templates = parser.parse(markup, key)
    except Exception as parse_error:
        raise TemplateParseError(key, parse_error) from parse_error

    return "".join(
        render_template_registration(page_reference, name, template)
        for name, template in templates.items()
    )


def emit_views(
    views: Iterable[DiscoveredResource],
    *,
    component_name: str,
    registry: HandlerRegistry,
    parser: TemplateParser,
    file_system: FileSystem,
    page_reference: str,
) -> str:
    return "".join(
        emit_view(
            view,
            component_name=component_name,
            registry=registry,
            parser=parser,
            file_system=file_system,
            page_reference=page_reference,
        )
        for view in views
    )


# ============================================================
# Controllers / models
# ============================================================

def emit_passthrough(resources: Iterable[DiscoveredResource], *, file_system: FileSystem) -> str:
    """Raw file contents, each followed by a blank line."""
    return "".join(file_system.read_file(resource.absolute_path) + "\n\n" for resource in resources)


def emit_controllers(controllers: Iterable[DiscoveredResource], *, file_system: FileSystem) -> str:
    return emit_passthrough(controllers, file_system=file_system)


def emit_models(models: Iterable[DiscoveredResource], *, file_system: FileSystem) -> str:
    return emit_passthrough(models, file_system=file_system)


# ============================================================
# Tasks
# ============================================================

_TASK_NAME_SEPARATOR = re.compile(r"::|\.")


def split_task_name(qualified_name: str) -> list[str]:
    """Split "A::B::Job" into ["A", "B", "Job"]; "." also separates."""
    segments = [segment.strip() for segment in _TASK_NAME_SEPARATOR.split(qualified_name.strip())]
    if not segments or any(not segment for segment in segments):
        raise TaskNameError(f"Malformed task name: {qualified_name!r}")
    return segments


def emit_task(qualified_name: str, *, base_class: str) -> str:
    """Nest a task class declaration inside one module per namespace segment."""
    *namespaces, class_name = split_task_name(qualified_name)

    parts = [f"class {class_name} < {base_class}; end"]
    for namespace in reversed(namespaces):
        parts.insert(0, f"module {namespace}")
        parts.append("end")
    return "\n".join(parts)


def emit_tasks(task_names: Iterable[str], *, base_class: str) -> str:
    return "\n".join(emit_task(name, base_class=base_class) for name in task_names)


# ============================================================
# Initializers
# ============================================================

def initializer_require_path(component_name: str, root_path: str, initializer: DiscoveredResource) -> str:
    """<root>/config/initializers/setup.rb -> <component>/config/initializers/setup."""
    relative = initializer.absolute_path[len(root_path):].lstrip("/")
    return f"{component_name}/{strip_extension(relative)}"


def emit_initializers(
    initializers: Sequence[DiscoveredResource],
    *,
    component_name: str,
    root_path: str,
) -> str:
    if not initializers:
        return ""
    requires = [
        f"require {ruby_single_quoted(initializer_require_path(component_name, root_path, initializer))}"
        for initializer in initializers
    ]
    return "\n" + "\n".join(requires)
