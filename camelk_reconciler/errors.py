"""Error definitions for camelk_reconciler.

Every error carries a stable ``code`` so that the owning reconciler can
decide on retry policy without string matching. The core never retries.
"""


class ReconcileError(Exception):
    """Base error for reconciliation operations."""

    def __init__(self, message: str, code: str = "reconcile_error") -> None:
        super().__init__(message)
        self.code = code


class NotFoundError(ReconcileError):
    """Raised when an object does not exist in the object store."""

    def __init__(self, kind: str, namespace: str | None, name: str) -> None:
        location = f"{namespace}/{name}" if namespace else name
        super().__init__(f"{kind} not found: {location}", code="not_found")
        self.kind = kind
        self.namespace = namespace
        self.name = name


class TraitConfigurationError(ReconcileError):
    """Raised when a trait fails to configure; no resource has been staged."""

    def __init__(self, trait_id: str, message: str) -> None:
        super().__init__(
            f"failed to configure trait {trait_id}: {message}",
            code="trait_configuration",
        )
        self.trait_id = trait_id


class TraitApplyError(ReconcileError):
    """Raised when a trait fails to apply; earlier staged resources are kept."""

    def __init__(self, trait_id: str, message: str) -> None:
        super().__init__(
            f"failed to apply trait {trait_id}: {message}", code="trait_apply"
        )
        self.trait_id = trait_id


class PostProcessorError(ReconcileError):
    """Raised when a post processor fails after all traits were applied."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(
            f"post processor #{index} failed: {message}", code="post_processor"
        )
        self.index = index


class ConfigurationConsistencyError(ReconcileError):
    """Raised when the trait pipeline is wired inconsistently."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="configuration_consistency")


class SourceResolutionError(ReconcileError):
    """Raised when an integration source cannot be resolved."""

    def __init__(self, source_name: str, message: str) -> None:
        super().__init__(
            f"cannot resolve source {source_name}: {message}",
            code="source_resolution",
        )
        self.source_name = source_name


class BuildCancelledError(ReconcileError):
    """Delivered inside a Result when a build never got to run."""

    def __init__(self, message: str = "build cancelled") -> None:
        super().__init__(message, code="build_cancelled")


class CatalogError(ReconcileError):
    """Raised when a catalog cannot be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="catalog_error")


__all__ = [
    "BuildCancelledError",
    "CatalogError",
    "ConfigurationConsistencyError",
    "NotFoundError",
    "PostProcessorError",
    "ReconcileError",
    "SourceResolutionError",
    "TraitApplyError",
    "TraitConfigurationError",
]
