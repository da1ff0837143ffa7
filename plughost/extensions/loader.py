"""Extension loading: import a resolved entry file and adapt its exports."""

import hashlib
import importlib.util
import logging
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

from plughost.extensions.contract import ExtensionModule, ModuleExports
from plughost.extensions.errors import ExtensionLoadError
from plughost.extensions.validator import validate

logger = logging.getLogger(__name__)

# Name of the optional wrapper object holding info/init/exit.
WRAPPER_NAME = "plugin"
_PACKAGE_ENTRY = "__init__.py"
_UNSAFE_CHARS = re.compile(r"[^0-9a-zA-Z_]")


def _module_name(entry_point: Path) -> str:
    """Synthetic, collision-free sys.modules key for an entry file."""
    resolved = entry_point.resolve()
    label = resolved.parent.name if resolved.name == _PACKAGE_ENTRY else resolved.stem
    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()[:10]
    return f"plughost_plugin_{_UNSAFE_CHARS.sub('_', label)}_{digest}"


def import_entry_point(entry_point: Path) -> ModuleType:
    """Execute the entry file as a fresh module. Raises ExtensionLoadError on any failure."""
    name = _module_name(entry_point)
    search_locations = (
        [str(entry_point.parent)] if entry_point.name == _PACKAGE_ENTRY else None
    )
    try:
        spec = importlib.util.spec_from_file_location(
            name, entry_point, submodule_search_locations=search_locations
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load {entry_point}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(name, None)
        raise ExtensionLoadError(entry_point, e) from e
    return module


def _export(module: ModuleType, wrapper: Any, attr: str) -> Any:
    value = getattr(module, attr, None)
    if value is not None or wrapper is None:
        return value
    if isinstance(wrapper, Mapping):
        return wrapper.get(attr)
    return getattr(wrapper, attr, None)


def module_exports(module: ModuleType) -> ModuleExports:
    """Read info/init/exit from module top level, falling back to the ``plugin`` wrapper."""
    wrapper = getattr(module, WRAPPER_NAME, None)
    return ModuleExports(
        info=_export(module, wrapper, "info"),
        init=_export(module, wrapper, "init"),
        exit=_export(module, wrapper, "exit"),
    )


class ModuleLoader:
    """Loads plugins from Python source or bytecode files via importlib."""

    def load(self, entry_point: Path) -> ExtensionModule:
        """Import, adapt, validate. Raises ExtensionLoadError or ExtensionRejected."""
        module = import_entry_point(entry_point)
        logger.info("Initializing plugin from %s", entry_point)
        exports = module_exports(module)
        descriptor = validate(exports)
        exit_hook = exports.exit if callable(exports.exit) else None
        return ExtensionModule(
            descriptor=descriptor,
            init_hook=exports.init,
            exit_hook=exit_hook,
            entry_point=entry_point,
        )
