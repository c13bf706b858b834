"""SQLModel database models for ftpdfs."""

from ftpdfs.models.principals import (
    GroupMembership,
    GroupMembershipBase,
    PrincipalRecord,
    PrincipalRecordBase,
)

__all__ = [
    "GroupMembership",
    "GroupMembershipBase",
    "PrincipalRecord",
    "PrincipalRecordBase",
]
