"""PluginHost: scan -> update -> resolve -> load -> register, then one aggregate teardown."""

import asyncio
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

from plughost.extensions.contract import ExitHook, Teardown
from plughost.extensions.errors import (
    ExtensionLoadError,
    ExtensionRejected,
    ShutdownError,
)
from plughost.extensions.loader import ModuleLoader
from plughost.extensions.registry import DEFAULT_ROUTE_PREFIX, PluginRegistry, call_hook
from plughost.extensions.resolver import is_module_file, resolve_directory
from plughost.extensions.updater import PluginUpdater
from plughost.settings import get_setting

logger = logging.getLogger(__name__)


class HostState(Enum):
    DISABLED = "disabled"
    IDLE = "idle"
    SCANNING = "scanning"
    UPDATING = "updating"
    LOADING = "loading"
    READY = "ready"


async def _noop_teardown() -> None:
    return None


def make_teardown(hooks: dict[str, ExitHook]) -> Teardown:
    """Teardown that runs every exit hook concurrently and reports all failures at once."""
    if not hooks:
        return _noop_teardown

    async def teardown() -> None:
        ids = list(hooks)
        results = await asyncio.gather(
            *(call_hook(hooks[ext_id]) for ext_id in ids),
            return_exceptions=True,
        )
        failures = {
            ext_id: result
            for ext_id, result in zip(ids, results)
            if isinstance(result, BaseException)
        }
        if failures:
            raise ShutdownError(failures)

    return teardown


class PluginHost:
    """Boots server plugins from one directory into a host app."""

    def __init__(
        self,
        app: Any,
        plugins_dir: Path,
        enabled: bool = False,
        auto_update: bool = True,
        route_prefix: str = DEFAULT_ROUTE_PREFIX,
        loader: ModuleLoader | None = None,
        updater: PluginUpdater | None = None,
    ) -> None:
        self._plugins_dir = plugins_dir
        self._enabled = enabled
        self._auto_update = auto_update
        self._loader = loader or ModuleLoader()
        self._updater = updater or PluginUpdater()
        self.registry = PluginRegistry(app, route_prefix)
        self.state = HostState.IDLE if enabled else HostState.DISABLED

    async def load_all(self) -> Teardown:
        """One boot pass. Always returns a usable teardown; only root enumeration errors raise."""
        if not self._enabled:
            self.state = HostState.DISABLED
            return _noop_teardown
        if not self._plugins_dir.exists():
            self.state = HostState.IDLE
            return _noop_teardown

        self.state = HostState.SCANNING
        with os.scandir(self._plugins_dir) as it:
            entries = [Path(entry.path) for entry in it]
        if not entries:
            self.state = HostState.IDLE
            return _noop_teardown

        if self._auto_update:
            self.state = HostState.UPDATING
            # fetch/pull shell out to git; keep the loop responsive.
            await asyncio.to_thread(self._updater.update_all, entries)

        self.state = HostState.LOADING
        for entry in entries:
            entry_point = self._entry_point(entry)
            if entry_point is not None:
                await self._load_one(entry_point)

        if len(self.registry) > 0:
            logger.warning(
                "%d server plugin(s) are currently loaded. Make sure you know exactly what "
                "they do, and only install plugins from trusted sources!",
                len(self.registry),
            )

        self.state = HostState.READY
        return make_teardown(self.registry.shutdown_hooks())

    def _entry_point(self, entry: Path) -> Path | None:
        """Directory -> resolved entry file; module file -> itself; anything else -> None."""
        if entry.is_dir():
            try:
                entry_point = resolve_directory(entry)
            except OSError as e:
                logger.error("Failed to read plugin directory %s: %s", entry, e)
                return None
            if entry_point is None:
                logger.debug("No entry point in plugin directory %s, skipping", entry)
            return entry_point
        if is_module_file(entry):
            return entry
        return None

    async def _load_one(self, entry_point: Path) -> bool:
        """Load and register one entry point. Every failure is logged, never raised."""
        try:
            extension = self._loader.load(entry_point)
            await self.registry.register(extension)
        except ExtensionLoadError as e:
            logger.error(
                "Failed to load plugin from %s: %s", entry_point, e.cause, exc_info=e.cause
            )
            return False
        except ExtensionRejected as e:
            # INIT_ERROR chains the plugin's own exception; show its traceback.
            logger.error(
                "Failed to load plugin module %s: %s",
                entry_point,
                e,
                exc_info=e.__cause__,
            )
            return False
        except Exception as e:
            logger.exception("Failed to load plugin from %s: %s", entry_point, e)
            return False
        return True


async def load_plugins(
    app: Any, plugins_dir: Path, settings: dict[str, Any]
) -> tuple[PluginHost, Teardown]:
    """Build a PluginHost from the plugins.* settings block and run its boot pass."""
    host = PluginHost(
        app,
        plugins_dir,
        enabled=bool(get_setting(settings, "plugins.enabled", False)),
        auto_update=bool(get_setting(settings, "plugins.auto_update", True)),
        route_prefix=get_setting(settings, "plugins.route_prefix", DEFAULT_ROUTE_PREFIX),
    )
    teardown = await host.load_all()
    return host, teardown
