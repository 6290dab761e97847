"""Build value types.

A Request describes one build attempt and is never mutated. A Result is
the outcome of exactly one Request and keeps a reference back to it.
"""

from dataclasses import dataclass, field

from camelk_reconciler.types import BuildStatus, Language


@dataclass(frozen=True)
class Identifier:
    """Uniquely names a build."""

    name: str
    qualifier: str = ""

    def __str__(self) -> str:
        return f"{self.name}:{self.qualifier}" if self.qualifier else self.name


@dataclass(frozen=True)
class Source:
    """Integration code to build."""

    name: str
    content: str
    language: Language | None = None


@dataclass(frozen=True)
class Request:
    """A request to build a specific piece of code.

    Attributes:
        identifier: Identifier of the build.
        code: Source to build.
        dependencies: Dependency coordinates to include.
    """

    identifier: Identifier
    code: Source
    dependencies: tuple[str, ...] = ()


@dataclass
class Result:
    """Outcome of a build Request.

    Attributes:
        request: The request this result answers (not owned).
        status: Build status.
        image: Image reference, when the build completed.
        error: Failure cause, when the build errored.
    """

    request: Request
    status: BuildStatus = BuildStatus.NOT_REQUESTED
    image: str | None = None
    error: BaseException | None = field(default=None, compare=False)

    @property
    def identifier(self) -> Identifier:
        return self.request.identifier

    def error_message(self) -> str | None:
        """Return the error as a string, if any."""
        return str(self.error) if self.error is not None else None


__all__ = ["Identifier", "Request", "Result", "Source"]
