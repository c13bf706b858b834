"""PrincipalService — principal and group membership lookup.

Stateless service that receives the concrete models at construction
and a session at call time.  Credentials are not stored here; the
file-transfer server authenticates, this service only answers "which
groups does this name belong to".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import select

from .types import Principal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlmodel import Session

    from ftpdfs.models.principals import GroupMembershipBase, PrincipalRecordBase


def _validate_name(kind: str, name: str) -> None:
    if not name or not name.strip():
        raise ValueError(f"Invalid {kind} name: {name!r}")
    if "/" in name or "\0" in name:
        raise ValueError(f"Invalid {kind} name: {name!r}")


class PrincipalService:
    """Manages principals and their supplementary groups.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(
        self,
        principal_model: type[PrincipalRecordBase],
        membership_model: type[GroupMembershipBase],
    ) -> None:
        self._principal_model = principal_model
        self._membership_model = membership_model

    # ------------------------------------------------------------------
    # Principals
    # ------------------------------------------------------------------

    def get_record(self, session: Session, name: str) -> PrincipalRecordBase | None:
        model = self._principal_model
        return session.exec(select(model).where(model.name == name)).first()

    def create_principal(
        self,
        session: Session,
        name: str,
        primary_group: str,
        groups: Iterable[str] = (),
    ) -> PrincipalRecordBase:
        """Create a principal with a primary group and supplementary groups."""
        _validate_name("principal", name)
        _validate_name("group", primary_group)
        groups = [groups] if isinstance(groups, str) else list(dict.fromkeys(groups))
        for group in groups:
            _validate_name("group", group)
        if self.get_record(session, name) is not None:
            raise ValueError(f"Principal already exists: {name!r}")

        record = self._principal_model(name=name, primary_group=primary_group)
        session.add(record)
        for group in groups:
            session.add(self._membership_model(principal_name=name, group_name=group))
        session.flush()
        return record

    def set_enabled(self, session: Session, name: str, enabled: bool) -> bool:
        """Enable or disable a principal. Returns False if it does not exist."""
        record = self.get_record(session, name)
        if record is None:
            return False
        record.enabled = enabled
        session.add(record)
        session.flush()
        return True

    def delete_principal(self, session: Session, name: str) -> bool:
        """Delete a principal and its memberships. Returns True if found."""
        record = self.get_record(session, name)
        if record is None:
            return False
        for membership in self._memberships(session, name):
            session.delete(membership)
        session.delete(record)
        session.flush()
        return True

    def get_principal(self, session: Session, name: str) -> Principal | None:
        """Build the ``Principal`` for *name*, or ``None`` if unknown or disabled."""
        record = self.get_record(session, name)
        if record is None or not record.enabled:
            return None
        return self._to_principal(session, record)

    def list_principals(self, session: Session) -> list[Principal]:
        """All enabled principals, ordered by name."""
        model = self._principal_model
        records = session.exec(
            select(model).where(model.enabled == True).order_by(model.name)  # noqa: E712
        ).all()
        return [self._to_principal(session, r) for r in records]

    # ------------------------------------------------------------------
    # Memberships
    # ------------------------------------------------------------------

    def add_membership(self, session: Session, name: str, group: str) -> bool:
        """Add *name* to *group*. Returns False if already a member."""
        _validate_name("group", group)
        if self.get_record(session, name) is None:
            raise ValueError(f"Unknown principal: {name!r}")
        model = self._membership_model
        existing = session.exec(
            select(model).where(model.principal_name == name, model.group_name == group)
        ).first()
        if existing is not None:
            return False
        session.add(model(principal_name=name, group_name=group))
        session.flush()
        return True

    def remove_membership(self, session: Session, name: str, group: str) -> bool:
        """Remove an exact membership. Returns True if found."""
        model = self._membership_model
        membership = session.exec(
            select(model).where(model.principal_name == name, model.group_name == group)
        ).first()
        if membership is None:
            return False
        session.delete(membership)
        session.flush()
        return True

    def _memberships(self, session: Session, name: str) -> list[GroupMembershipBase]:
        model = self._membership_model
        return list(session.exec(select(model).where(model.principal_name == name)).all())

    def _to_principal(self, session: Session, record: PrincipalRecordBase) -> Principal:
        groups = frozenset(m.group_name for m in self._memberships(session, record.name))
        return Principal(name=record.name, primary_group=record.primary_group, groups=groups)
