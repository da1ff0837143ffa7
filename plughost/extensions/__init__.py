"""Plugin system: contract, resolver, loader, registry, updater, host."""

from plughost.extensions.contract import (
    Extension,
    ExtensionDescriptor,
    ExtensionModule,
    LoadedExtensionRecord,
    ModuleExports,
    Teardown,
    is_valid_id,
)
from plughost.extensions.errors import (
    ExtensionError,
    ExtensionLoadError,
    ExtensionRejected,
    RejectionReason,
    ShutdownError,
    UpdateError,
)
from plughost.extensions.host import HostState, PluginHost, load_plugins, make_teardown
from plughost.extensions.loader import ModuleLoader, module_exports
from plughost.extensions.manifest import PluginManifest, load_manifest
from plughost.extensions.registrar import RouteRegistrar
from plughost.extensions.registry import PluginRegistry
from plughost.extensions.resolver import resolve
from plughost.extensions.updater import GitCheckout, PluginUpdater
from plughost.extensions.validator import validate

__all__ = [
    "Extension",
    "ExtensionDescriptor",
    "ExtensionError",
    "ExtensionLoadError",
    "ExtensionModule",
    "ExtensionRejected",
    "GitCheckout",
    "HostState",
    "LoadedExtensionRecord",
    "ModuleExports",
    "ModuleLoader",
    "PluginHost",
    "PluginManifest",
    "PluginRegistry",
    "PluginUpdater",
    "RejectionReason",
    "RouteRegistrar",
    "ShutdownError",
    "Teardown",
    "UpdateError",
    "is_valid_id",
    "load_manifest",
    "load_plugins",
    "make_teardown",
    "module_exports",
    "resolve",
    "validate",
]
