"""PluginRegistry: loaded plugins by id, route mounting, exit hook bookkeeping."""

import inspect
import logging
from typing import Any, Iterator

from plughost.extensions.contract import (
    Extension,
    ExitHook,
    LoadedExtensionRecord,
    is_valid_id,
)
from plughost.extensions.errors import ExtensionRejected, RejectionReason
from plughost.extensions.registrar import RouteRegistrar

logger = logging.getLogger(__name__)

DEFAULT_ROUTE_PREFIX = "/api/plugins"


async def call_hook(hook: Any, *args: Any) -> None:
    """Call a plugin hook that may be sync or async."""
    result = hook(*args)
    if inspect.isawaitable(result):
        await result


class PluginRegistry:
    """Process-wide table of initialized plugins. Built at boot, owned by PluginHost."""

    def __init__(self, host: Any, route_prefix: str = DEFAULT_ROUTE_PREFIX) -> None:
        self._host = host
        self._route_prefix = route_prefix.rstrip("/")
        self._records: dict[str, LoadedExtensionRecord] = {}

    def namespace(self, extension_id: str) -> str:
        return f"{self._route_prefix}/{extension_id}"

    async def register(self, extension: Extension) -> LoadedExtensionRecord:
        """Init the plugin with its own registrar and record it. Raises ExtensionRejected."""
        descriptor = extension.descriptor
        ext_id = descriptor.id
        if not is_valid_id(ext_id):
            raise ExtensionRejected(
                RejectionReason.INVALID_IDENTIFIER,
                f"invalid plugin ID '{ext_id}'",
                field="id",
                extension_id=ext_id,
            )
        if ext_id in self._records:
            raise ExtensionRejected(
                RejectionReason.DUPLICATE_ID,
                f"plugin ID '{ext_id}' is already in use",
                extension_id=ext_id,
            )

        registrar = RouteRegistrar(ext_id, self.namespace(ext_id))
        try:
            await call_hook(extension.init, registrar)
        except Exception as e:
            raise ExtensionRejected(
                RejectionReason.INIT_ERROR,
                f"init failed for plugin '{ext_id}': {e}",
                extension_id=ext_id,
            ) from e

        if registrar.route_count > 0:
            registrar.mount_on(self._host)
            logger.debug(
                "Mounted %d route(s) for %s at %s",
                registrar.route_count,
                ext_id,
                registrar.prefix,
            )

        record = LoadedExtensionRecord(
            id=ext_id,
            descriptor=descriptor,
            shutdown_hook=extension.shutdown if extension.has_shutdown else None,
            entry_point=getattr(extension, "entry_point", None),
            route_count=registrar.route_count,
        )
        self._records[ext_id] = record
        return record

    def get(self, extension_id: str) -> LoadedExtensionRecord | None:
        return self._records.get(extension_id)

    def __contains__(self, extension_id: object) -> bool:
        return extension_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LoadedExtensionRecord]:
        return iter(list(self._records.values()))

    def shutdown_hooks(self) -> dict[str, ExitHook]:
        """{id: hook} for plugins that exported exit(), in registration order."""
        return {
            ext_id: record.shutdown_hook
            for ext_id, record in self._records.items()
            if record.shutdown_hook is not None
        }
