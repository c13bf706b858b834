"""Principal and GroupMembership models — the identities files are served to.

Provides ``PrincipalRecordBase`` / ``GroupMembershipBase`` (non-table) and
``PrincipalRecord`` / ``GroupMembership`` (concrete tables).  Subclass a
base with ``table=True`` and a custom ``__tablename__`` to use a
different table name.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


class PrincipalRecordBase(SQLModel):
    """Base fields for a principal. Subclass with ``table=True`` for a concrete table."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(index=True, unique=True)
    primary_group: str = Field(default="")
    enabled: bool = Field(default=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),  # type: ignore[invalid-argument-type]
    )


class PrincipalRecord(PrincipalRecordBase, table=True):
    """Default principal table — ``ftpdfs_principals``."""

    __tablename__ = "ftpdfs_principals"


class GroupMembershipBase(SQLModel):
    """Base fields for a supplementary group membership."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    principal_name: str = Field(index=True)
    group_name: str = Field(index=True)


class GroupMembership(GroupMembershipBase, table=True):
    """Default membership table — ``ftpdfs_group_memberships``."""

    __tablename__ = "ftpdfs_group_memberships"
    __table_args__ = (UniqueConstraint("principal_name", "group_name"),)
