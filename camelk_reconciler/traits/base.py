"""Trait base classes.

A trait customizes how an Integration is turned into cluster objects. It
has two phases:

- ``configure``: decide whether the trait runs for this pass. It must not
  stage resources; it may do read-only lookups and set conditions.
- ``apply``: stage resources, update the integration status and register
  post processors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from camelk_reconciler.integrations.models import TraitSpec
    from camelk_reconciler.traits.environment import Environment


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class TraitOptions(BaseModel):
    """User options of a trait, parsed from the ``configuration`` string map.

    Keys are kebab-case (``container-port``). Values are strings coerced to
    the declared field types.
    """

    model_config = ConfigDict(
        alias_generator=_kebab, populate_by_name=True, extra="forbid"
    )

    enabled: bool | None = None


class Trait(ABC):
    """Base class for all traits."""

    id: ClassVar[str]
    options_model: ClassVar[type[TraitOptions]] = TraitOptions

    def __init__(self) -> None:
        self.options = self.options_model()

    @property
    def enabled(self) -> bool | None:
        """Explicit user switch; None when the user did not decide."""
        return self.options.enabled

    def load_options(self, spec: TraitSpec | None) -> None:
        """Replace the options with the user configuration of this trait.

        Raises:
            pydantic.ValidationError: If the configuration is invalid.
        """
        data = spec.configuration if spec is not None else {}
        self.options = self.options_model.model_validate(data)

    @abstractmethod
    def configure(self, env: Environment) -> bool:
        """Return True if the trait should be applied in this pass."""

    @abstractmethod
    def apply(self, env: Environment) -> None:
        """Stage resources and update the integration status."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id='{self.id}')>"


__all__ = ["Trait", "TraitOptions"]
