"""Descriptor validation: decide whether imported exports form an acceptable plugin."""

from collections.abc import Mapping
from typing import Any

from plughost.extensions.contract import (
    DESCRIPTOR_FIELDS,
    ExtensionDescriptor,
    ModuleExports,
    is_valid_id,
)
from plughost.extensions.errors import ExtensionRejected, RejectionReason

_SCALARS = (str, bytes, int, float, bool)
_MISSING = object()


def _read_field(info: Any, field: str) -> Any:
    if isinstance(info, Mapping):
        return info.get(field, _MISSING)
    return getattr(info, field, _MISSING)


def validate(exports: ModuleExports) -> ExtensionDescriptor:
    """Return the descriptor or raise ExtensionRejected. Pure; never calls into the plugin."""
    info = exports.info
    if info is None or isinstance(info, _SCALARS):
        raise ExtensionRejected(
            RejectionReason.MISSING_DESCRIPTOR, "plugin info not found"
        )

    values: dict[str, str] = {}
    for field in DESCRIPTOR_FIELDS:
        value = _read_field(info, field)
        if not isinstance(value, str):
            raise ExtensionRejected(
                RejectionReason.MISSING_FIELD,
                f"plugin info missing field '{field}'",
                field=field,
            )
        values[field] = value

    if not callable(exports.init):
        raise ExtensionRejected(
            RejectionReason.MISSING_INIT_HOOK,
            "no init function",
            extension_id=values["id"],
        )

    if not is_valid_id(values["id"]):
        raise ExtensionRejected(
            RejectionReason.INVALID_IDENTIFIER,
            f"invalid plugin ID '{values['id']}'",
            field="id",
            extension_id=values["id"],
        )

    return ExtensionDescriptor.model_validate(values)
