"""Plugin contract: descriptor model, adapted lifecycle surface, loaded record.

A plugin module exports (top-level or through a ``plugin`` wrapper):

    info = {"id": "my-plugin", "name": "My Plugin", "description": "..."}

    async def init(registrar): ...   # or a plain function
    async def exit(): ...            # optional

Loader adapts whatever shape the module has into ExtensionModule.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from plughost.extensions.registrar import RouteRegistrar

ID_PATTERN = r"^[a-z0-9_-]+$"
_ID_RE = re.compile(ID_PATTERN)

DESCRIPTOR_FIELDS = ("id", "name", "description")

# init(registrar) and exit() may return None or an awaitable.
InitHook = Callable[["RouteRegistrar"], Any]
ExitHook = Callable[[], Any]
Teardown = Callable[[], Awaitable[None]]


def is_valid_id(extension_id: Any) -> bool:
    """Lowercase alphanumerics, '-' and '_' only."""
    return isinstance(extension_id, str) and _ID_RE.fullmatch(extension_id) is not None


class ExtensionDescriptor(BaseModel):
    """Identity an extension declares about itself."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(pattern=ID_PATTERN)
    name: str
    description: str


@dataclass(frozen=True)
class ModuleExports:
    """Raw info/init/exit as found on a module, before validation."""

    info: Any = None
    init: Any = None
    exit: Any = None


@runtime_checkable
class Extension(Protocol):
    """Lifecycle surface the registry works with."""

    @property
    def descriptor(self) -> ExtensionDescriptor: ...

    @property
    def has_shutdown(self) -> bool: ...

    def init(self, registrar: "RouteRegistrar") -> Any: ...

    def shutdown(self) -> Any: ...


@dataclass(frozen=True)
class ExtensionModule:
    """Adapted view of an imported plugin module."""

    descriptor: ExtensionDescriptor
    init_hook: InitHook
    exit_hook: ExitHook | None = None
    entry_point: Path | None = None

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def has_shutdown(self) -> bool:
        return self.exit_hook is not None

    def init(self, registrar: "RouteRegistrar") -> Any:
        return self.init_hook(registrar)

    def shutdown(self) -> Any:
        if self.exit_hook is None:
            return None
        return self.exit_hook()


@dataclass(frozen=True)
class LoadedExtensionRecord:
    """One successfully initialized extension. Lives until process teardown."""

    id: str
    descriptor: ExtensionDescriptor
    shutdown_hook: ExitHook | None = None
    entry_point: Path | None = None
    route_count: int = 0
