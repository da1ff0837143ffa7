"""Entry point for the host process: FastAPI app whose lifespan boots and tears down plugins."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request

from plughost.extensions import ShutdownError, load_plugins
from plughost.logging_config import setup_logging
from plughost.settings import get_setting, load_settings

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

logger = logging.getLogger(__name__)


def _plugins_dir(settings: dict[str, Any], project_root: Path) -> Path:
    return project_root / get_setting(settings, "plugins.dir", "plugins")


def create_app(settings: dict[str, Any], project_root: Path = _PROJECT_ROOT) -> FastAPI:
    """Build the app. Plugins are loaded on startup and their exit hooks awaited on shutdown."""
    plugins_dir = _plugins_dir(settings, project_root)
    route_prefix = get_setting(settings, "plugins.route_prefix", "/api/plugins")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        host, teardown = await load_plugins(app, plugins_dir, settings)
        app.state.plugin_host = host
        try:
            yield
        finally:
            try:
                await teardown()
            except ShutdownError as e:
                for ext_id, error in e.failures.items():
                    logger.error(
                        "Plugin %s exit hook failed: %s", ext_id, error, exc_info=error
                    )

    app = FastAPI(title="plughost", lifespan=lifespan)

    @app.get(route_prefix)
    async def list_plugins(request: Request) -> dict[str, Any]:
        host = getattr(request.app.state, "plugin_host", None)
        if host is None:
            return {"plugins": []}
        return {
            "plugins": [
                {
                    "id": record.id,
                    "name": record.descriptor.name,
                    "description": record.descriptor.description,
                    "routes": record.route_count,
                }
                for record in host.registry
            ]
        }

    return app


def main() -> None:
    """Synchronous entry: .env, settings, logging, then serve until interrupted."""
    load_dotenv(_PROJECT_ROOT / ".env")
    settings = load_settings()
    setup_logging(_PROJECT_ROOT, settings)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=get_setting(settings, "server.host", "127.0.0.1"),
        port=int(get_setting(settings, "server.port", 8000)),
        log_config=None,
    )


__all__ = ["create_app", "main"]
