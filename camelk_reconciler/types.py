"""Shared type definitions for camelk_reconciler.

This module contains enums and constants shared across subpackages to
avoid circular imports.
"""

from enum import Enum


class IntegrationPhase(str, Enum):
    """Lifecycle phase of an Integration resource."""

    NONE = ""
    INITIALIZATION = "Initialization"
    BUILDING_CONTEXT = "Building Context"
    BUILDING_IMAGE = "Building Image"
    DEPLOYING = "Deploying"
    RUNNING = "Running"
    ERROR = "Error"


class BuildPhase(str, Enum):
    """Phase of a Build resource, as observed by the action subsystem."""

    NONE = ""
    PENDING = "Pending"
    SCHEDULING = "Scheduling"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"

    def is_terminal(self) -> bool:
        """Check if no further transitions are expected from this phase."""
        return self in (BuildPhase.SUCCEEDED, BuildPhase.FAILED)


class BuildStatus(str, Enum):
    """Status of a build Result.

    Status only moves forward: NOT_REQUESTED -> STARTED -> COMPLETED | ERROR.
    """

    NOT_REQUESTED = "not-requested"
    STARTED = "started"
    COMPLETED = "completed"
    ERROR = "error"

    def is_terminal(self) -> bool:
        """Check if this status is final."""
        return self in (BuildStatus.COMPLETED, BuildStatus.ERROR)

    def can_transition_to(self, other: "BuildStatus") -> bool:
        """Check if moving from this status to ``other`` is a forward step."""
        if self.is_terminal():
            return False
        return _STATUS_ORDER[other] > _STATUS_ORDER[self]


_STATUS_ORDER = {
    BuildStatus.NOT_REQUESTED: 0,
    BuildStatus.STARTED: 1,
    BuildStatus.COMPLETED: 2,
    BuildStatus.ERROR: 2,
}


class PodPhase(str, Enum):
    """Phase of a Kubernetes pod."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class BuildStrategy(str, Enum):
    """Strategy used to execute builds."""

    POD = "pod"
    ROUTINE = "routine"


class ConditionStatus(str, Enum):
    """Tri-state status of a resource condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class Language(str, Enum):
    """Language of an integration source."""

    JAVA = "java"
    GROOVY = "groovy"
    JAVASCRIPT = "js"
    XML = "xml"
    KOTLIN = "kts"
    YAML = "yaml"

    @classmethod
    def infer(cls, name: str) -> "Language | None":
        """Infer the language of a source from its file name.

        Args:
            name: Source file name, e.g. ``Routes.java``.

        Returns:
            The matching Language or None if the extension is unknown.
        """
        for language in cls:
            if name.endswith(f".{language.value}"):
                return language
        return None


# Integration condition types and reasons
CONDITION_SERVICE_AVAILABLE = "ServiceAvailable"
REASON_SERVICE_AVAILABLE = "ServiceAvailable"
REASON_SERVICE_NOT_AVAILABLE = "ServiceNotAvailable"

# Labels applied to staged resources
LABEL_INTEGRATION = "camel.apache.org/integration"
LABEL_SERVICE_TYPE = "camel.apache.org/service.type"
SERVICE_TYPE_USER = "user"


__all__ = [
    "CONDITION_SERVICE_AVAILABLE",
    "LABEL_INTEGRATION",
    "LABEL_SERVICE_TYPE",
    "REASON_SERVICE_AVAILABLE",
    "REASON_SERVICE_NOT_AVAILABLE",
    "SERVICE_TYPE_USER",
    "BuildPhase",
    "BuildStatus",
    "BuildStrategy",
    "ConditionStatus",
    "IntegrationPhase",
    "Language",
    "PodPhase",
]
