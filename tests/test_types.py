"""Tests for shared types module."""

from camelk_reconciler.types import (
    BuildPhase,
    BuildStatus,
    BuildStrategy,
    ConditionStatus,
    IntegrationPhase,
    Language,
    PodPhase,
)


class TestEnums:
    """Test enum definitions."""

    def test_integration_phase_values(self) -> None:
        """IntegrationPhase should have expected values."""
        assert IntegrationPhase.NONE.value == ""
        assert IntegrationPhase.INITIALIZATION.value == "Initialization"
        assert IntegrationPhase.DEPLOYING.value == "Deploying"

    def test_build_phase_values(self) -> None:
        """BuildPhase should have expected values."""
        assert BuildPhase.NONE.value == ""
        assert BuildPhase.PENDING.value == "Pending"
        assert BuildPhase.SCHEDULING.value == "Scheduling"
        assert BuildPhase.RUNNING.value == "Running"
        assert BuildPhase.SUCCEEDED.value == "Succeeded"
        assert BuildPhase.FAILED.value == "Failed"

    def test_pod_phase_values(self) -> None:
        """PodPhase should match Kubernetes pod phases."""
        assert PodPhase.SUCCEEDED.value == "Succeeded"
        assert PodPhase.FAILED.value == "Failed"

    def test_other_enum_values(self) -> None:
        """Strategy and condition enums should have expected values."""
        assert BuildStrategy.POD.value == "pod"
        assert BuildStrategy.ROUTINE.value == "routine"
        assert ConditionStatus.TRUE.value == "True"
        assert ConditionStatus.FALSE.value == "False"


class TestBuildPhase:
    """Test BuildPhase helpers."""

    def test_terminal_phases(self) -> None:
        """Only succeeded and failed should be terminal."""
        assert BuildPhase.SUCCEEDED.is_terminal()
        assert BuildPhase.FAILED.is_terminal()
        assert not BuildPhase.PENDING.is_terminal()
        assert not BuildPhase.SCHEDULING.is_terminal()
        assert not BuildPhase.RUNNING.is_terminal()


class TestBuildStatus:
    """Test BuildStatus transitions."""

    def test_forward_transitions(self) -> None:
        """Status should move forward only."""
        assert BuildStatus.NOT_REQUESTED.can_transition_to(BuildStatus.STARTED)
        assert BuildStatus.NOT_REQUESTED.can_transition_to(BuildStatus.COMPLETED)
        assert BuildStatus.STARTED.can_transition_to(BuildStatus.COMPLETED)
        assert BuildStatus.STARTED.can_transition_to(BuildStatus.ERROR)

    def test_backward_transitions_rejected(self) -> None:
        """Status should never move backwards."""
        assert not BuildStatus.STARTED.can_transition_to(BuildStatus.NOT_REQUESTED)
        assert not BuildStatus.STARTED.can_transition_to(BuildStatus.STARTED)

    def test_terminal_statuses_are_final(self) -> None:
        """Completed and error should not transition anywhere."""
        for terminal in (BuildStatus.COMPLETED, BuildStatus.ERROR):
            assert terminal.is_terminal()
            for other in BuildStatus:
                assert not terminal.can_transition_to(other)


class TestLanguage:
    """Test language inference."""

    def test_infer_from_extension(self) -> None:
        """Language should be inferred from the file extension."""
        assert Language.infer("Routes.java") == Language.JAVA
        assert Language.infer("routes.groovy") == Language.GROOVY
        assert Language.infer("routes.js") == Language.JAVASCRIPT
        assert Language.infer("routes.kts") == Language.KOTLIN
        assert Language.infer("routes.xml") == Language.XML
        assert Language.infer("routes.yaml") == Language.YAML

    def test_infer_unknown(self) -> None:
        """Unknown extensions should yield None."""
        assert Language.infer("routes.txt") is None
        assert Language.infer("routes.json") is None
