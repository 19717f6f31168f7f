"""Assemble one component into a single generated source unit.

Fragment order is fixed: routes, views, then for the server variant
controllers, models, tasks and initializers.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum

from .config import Settings
from .discovery import ResourceDiscoverer
from .emitters import (
    emit_controllers,
    emit_initializers,
    emit_models,
    emit_routes,
    emit_tasks,
    emit_views,
)
from .filesystem import FileSystem, LocalFileSystem
from .handlers import HandlerRegistry, create_default_registry
from .tasks import TaskHandlerRegistry, TaskRegistry
from .templates import PlainTemplateParser, TemplateParser


class Variant(str, Enum):
    CLIENT = "client"
    SERVER = "server"


@dataclass(frozen=True)
class ComponentDescriptor:
    """Input to one assembly run."""
    root_path: str
    name: str
    variant: Variant = Variant.SERVER

    @classmethod
    def for_path(cls, root_path: str, *, name: str | None = None, variant: Variant = Variant.SERVER) -> "ComponentDescriptor":
        """Default the component name to the root folder name."""
        resolved_name = name or os.path.basename(os.path.abspath(root_path).rstrip(os.sep))
        return cls(root_path=root_path, name=resolved_name, variant=variant)


@dataclass
class ComponentAssembler:
    """Runs discovery and every emitter for a component."""
    registry: HandlerRegistry = field(default_factory=create_default_registry)
    parser: TemplateParser = field(default_factory=PlainTemplateParser)
    tasks: TaskRegistry = field(default_factory=TaskHandlerRegistry)
    file_system: FileSystem = field(default_factory=LocalFileSystem)
    settings: Settings = field(default_factory=Settings)

    def page_reference(self, variant: Variant) -> str:
        if variant is Variant.CLIENT:
            return self.settings.client_page_reference
        return self.settings.server_page_reference

    def discoverer(self, descriptor: ComponentDescriptor) -> ResourceDiscoverer:
        return ResourceDiscoverer(
            descriptor.root_path,
            registry=self.registry,
            file_system=self.file_system,
            source_extension=self.settings.normalized_source_ext,
            controller_suffix=self.settings.controller_suffix,
        )

    def assemble(self, descriptor: ComponentDescriptor) -> str:
        """
        Return the generated source for one component. Every file access goes
        through the file system, so a missing root simply yields nothing.
        """
        discoverer = self.discoverer(descriptor)
        page_reference = self.page_reference(descriptor.variant)

        code = emit_routes(discoverer.routes(), file_system=self.file_system, page_reference=page_reference)
        code += emit_views(
            discoverer.views(),
            component_name=descriptor.name,
            registry=self.registry,
            parser=self.parser,
            file_system=self.file_system,
            page_reference=page_reference,
        )

        if descriptor.variant is Variant.SERVER:
            code += emit_controllers(discoverer.controllers(), file_system=self.file_system)
            code += emit_models(discoverer.models(), file_system=self.file_system)
            code += emit_tasks(self.tasks.known_task_handlers(), base_class=self.settings.task_base_class)
            code += emit_initializers(
                discoverer.initializers(),
                component_name=descriptor.name,
                root_path=discoverer.root_path,
            )

        return code


def assemble(
    descriptor: ComponentDescriptor,
    *,
    registry: HandlerRegistry | None = None,
    parser: TemplateParser | None = None,
    tasks: TaskRegistry | None = None,
    settings: Settings | None = None,
) -> str:
    """One-off assembly with default collaborators for anything not given."""
    assembler = ComponentAssembler(
        registry=registry or create_default_registry(),
        parser=parser or PlainTemplateParser(),
        tasks=tasks or TaskHandlerRegistry(),
        settings=settings or Settings(),
    )
    return assembler.assemble(descriptor)
