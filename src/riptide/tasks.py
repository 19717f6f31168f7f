"""Task handler names consumed by the task emitter."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence


class TaskRegistry(Protocol):
    def known_task_handlers(self) -> Sequence[str]: ...


@dataclass
class TaskHandlerRegistry:
    """In-process list of qualified task class names, kept in registration order."""
    handler_names: list[str] = field(default_factory=list)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "TaskHandlerRegistry":
        registry = cls()
        for name in names:
            registry.register(name)
        return registry

    def register(self, qualified_name: str) -> None:
        """Add a task name; registering the same name twice is a no-op."""
        qualified_name = qualified_name.strip()
        if qualified_name and qualified_name not in self.handler_names:
            self.handler_names.append(qualified_name)

    def known_task_handlers(self) -> Sequence[str]:
        return tuple(self.handler_names)
