"""Plugin errors: load failures, rejections, update failures, aggregate shutdown failure."""

from enum import Enum


class RejectionReason(Enum):
    MISSING_DESCRIPTOR = "missing_descriptor"
    MISSING_FIELD = "missing_field"
    INVALID_IDENTIFIER = "invalid_identifier"
    MISSING_INIT_HOOK = "missing_init_hook"
    DUPLICATE_ID = "duplicate_id"
    INIT_ERROR = "init_error"


class ExtensionError(Exception):
    """Base class for everything the plugin host raises about one extension."""


class ExtensionLoadError(ExtensionError):
    """Importing the entry point raised. The original exception is kept as __cause__."""

    def __init__(self, entry_point: object, cause: BaseException) -> None:
        super().__init__(f"Failed to import {entry_point}: {cause!r}")
        self.entry_point = entry_point
        self.cause = cause


class ExtensionRejected(ExtensionError):
    """Extension was imported but refused by the validator or the registry."""

    def __init__(
        self,
        reason: RejectionReason,
        message: str,
        field: str | None = None,
        extension_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.field = field
        self.extension_id = extension_id


class UpdateError(ExtensionError):
    """A git operation failed for one plugin directory."""

    def __init__(self, directory: object, cause: BaseException) -> None:
        super().__init__(f"Failed to update plugin {directory}: {cause}")
        self.directory = directory
        self.cause = cause


class ShutdownError(ExtensionError):
    """One or more exit hooks raised. failures maps extension id -> exception."""

    def __init__(self, failures: dict[str, BaseException]) -> None:
        ids = ", ".join(failures)
        super().__init__(f"{len(failures)} plugin exit hook(s) failed: {ids}")
        self.failures = failures
