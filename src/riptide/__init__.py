"""Build-time component assembler."""
from .assembler import ComponentAssembler, ComponentDescriptor, Variant, assemble
from .discovery import DiscoveredResource, ResourceDiscoverer, ResourceKind
from .errors import AssemblyError, TemplateParseError
from .handlers import Handler, HandlerRegistry, IdentityHandler, create_default_registry
from .tasks import TaskHandlerRegistry
from .templates import ParsedTemplate, PlainTemplateParser, TemplateParser

__all__ = [
    "AssemblyError",
    "ComponentAssembler",
    "ComponentDescriptor",
    "DiscoveredResource",
    "Handler",
    "HandlerRegistry",
    "IdentityHandler",
    "ParsedTemplate",
    "PlainTemplateParser",
    "ResourceDiscoverer",
    "ResourceKind",
    "TaskHandlerRegistry",
    "TemplateParseError",
    "TemplateParser",
    "Variant",
    "assemble",
    "create_default_registry",
]
