"""Plugin manifest: Pydantic model and YAML loader for plugins/<dir>/plugin.yaml.

Only ``main`` is interpreted by the host. Other keys (version, author, ...) are kept
on the model for anyone who wants to read them.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

MANIFEST_FILENAME = "plugin.yaml"


class PluginManifest(BaseModel):
    """Manifest schema. ``main`` is a path relative to the plugin directory."""

    model_config = ConfigDict(extra="allow")

    main: str | None = None


def load_manifest(path: Path) -> PluginManifest:
    """Read and validate plugin.yaml. Raises on invalid YAML or validation error."""
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a YAML object: {path}")
    return PluginManifest.model_validate(data)
