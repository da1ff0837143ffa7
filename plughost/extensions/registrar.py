"""RouteRegistrar: the only handle a plugin gets on the HTTP server."""

from typing import Any, Callable

from fastapi import APIRouter


class RouteRegistrar:
    """Append-only route capability scoped to one plugin id.

    Routes are declared relative to the plugin namespace; the registry mounts
    them under ``prefix`` after init() returns. Nothing here exposes the host app
    or other plugins' routes.
    """

    def __init__(self, extension_id: str, prefix: str) -> None:
        self._extension_id = extension_id
        self._prefix = prefix
        self._router = APIRouter(tags=[f"plugin:{extension_id}"])

    @property
    def extension_id(self) -> str:
        return self._extension_id

    @property
    def prefix(self) -> str:
        """Mount path, e.g. /api/plugins/<id>."""
        return self._prefix

    @property
    def route_count(self) -> int:
        return len(self._router.routes)

    def get(self, path: str, **kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self._router.get(path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self._router.post(path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self._router.put(path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self._router.patch(path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self._router.delete(path, **kwargs)

    def api_route(self, path: str, **kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self._router.api_route(path, **kwargs)

    def add_api_route(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        self._router.add_api_route(path, endpoint, **kwargs)

    def include_router(self, router: APIRouter, **kwargs: Any) -> None:
        """Attach a ready-made APIRouter inside the plugin namespace."""
        self._router.include_router(router, **kwargs)

    def mount_on(self, host: Any) -> None:
        """Called by the registry, not by plugins."""
        host.include_router(self._router, prefix=self._prefix)
