"""Build record ORM model and persistence helpers.

A BuildRecord row is written for every status a build goes through, which
gives an append-only history of build attempts per identifier.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, func, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from camelk_reconciler.builds.models import Identifier, Result
from camelk_reconciler.db import Base
from camelk_reconciler.types import BuildStatus


class BuildRecord(Base):
    """ORM model for build status transitions.

    Attributes:
        id: Primary key.
        name: Build identifier name.
        qualifier: Build identifier qualifier.
        status: Result status (not-requested, started, completed, error).
        image: Produced image, if completed.
        dependencies: Comma-separated dependencies of the request.
        error_message: Error message, if errored.
        recorded_at: Timestamp of the transition.
    """

    __tablename__ = "build_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(253), nullable=False)
    qualifier: Mapped[str] = mapped_column(String(253), nullable=False, default="")

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BuildStatus.NOT_REQUESTED.value
    )
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    dependencies: Mapped[str | None] = mapped_column(Text, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    recorded_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("ix_build_records_identifier", "name", "qualifier"),)

    def __repr__(self) -> str:
        """Return string representation of BuildRecord."""
        return (
            f"<BuildRecord(id={self.id}, name='{self.name}', "
            f"qualifier='{self.qualifier}', status='{self.status}')>"
        )

    @property
    def identifier(self) -> Identifier:
        return Identifier(name=self.name, qualifier=self.qualifier)


def save_result(session: Session, result: Result) -> BuildRecord:
    """Append a record for a Result.

    Args:
        session: Database session.
        result: Result to record.

    Returns:
        Created BuildRecord.
    """
    identifier = result.identifier
    record = BuildRecord(
        name=identifier.name,
        qualifier=identifier.qualifier,
        status=result.status.value,
        image=result.image,
        dependencies=",".join(result.request.dependencies) or None,
        error_message=result.error_message(),
    )
    session.add(record)
    session.flush()
    return record


def get_latest_record(session: Session, identifier: Identifier) -> BuildRecord | None:
    """Return the most recent record of a build, if any."""
    stmt = (
        select(BuildRecord)
        .where(
            BuildRecord.name == identifier.name,
            BuildRecord.qualifier == identifier.qualifier,
        )
        .order_by(BuildRecord.id.desc())
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none()


def list_records(
    session: Session,
    identifier: Identifier | None = None,
    status: BuildStatus | None = None,
    limit: int = 100,
) -> list[BuildRecord]:
    """List build records, newest first.

    Args:
        session: Database session.
        identifier: Filter by build identifier.
        status: Filter by status.
        limit: Maximum results to return.

    Returns:
        List of BuildRecord instances.
    """
    stmt = select(BuildRecord)

    if identifier is not None:
        stmt = stmt.where(
            BuildRecord.name == identifier.name,
            BuildRecord.qualifier == identifier.qualifier,
        )
    if status is not None:
        stmt = stmt.where(BuildRecord.status == status.value)

    stmt = stmt.order_by(BuildRecord.id.desc()).limit(limit)

    return list(session.execute(stmt).scalars().all())


__all__ = ["BuildRecord", "get_latest_record", "list_records", "save_result"]
