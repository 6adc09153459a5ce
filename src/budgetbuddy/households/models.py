#!/usr/bin/env python3
"""
Household Domain Model

The household is the tenancy boundary: every category, expense and budget
lives under ``households/{id}``. Members are kept in a ``members``
sub-collection keyed by user id.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


def _new_id() -> str:
    return str(uuid.uuid4())


class MemberRole(Enum):
    """Role of a user inside a household."""

    OWNER = "owner"
    MEMBER = "member"


@dataclass
class Household:
    """
    Shared household.

    Record fields: name, createdBy, createdAt, updatedAt.
    """

    name: str
    created_by: str
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def invite_code(self) -> str:
        """Code another user enters to join; the household id."""
        return self.id

    def to_record(self) -> dict[str, Any]:
        """Convert to a store record (the id is the document id)."""
        return {
            "name": self.name,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_record(cls, doc_id: str, data: dict[str, Any]) -> "Household":
        """
        Create Household from a store record.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            id=doc_id,
            name=data["name"],
            created_by=data["createdBy"],
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


@dataclass
class HouseholdMember:
    """Membership record; the document id is the user id."""

    user_id: str
    role: MemberRole = MemberRole.MEMBER
    joined_at: datetime = field(default_factory=datetime.now)

    @property
    def is_owner(self) -> bool:
        return self.role == MemberRole.OWNER

    def to_record(self) -> dict[str, Any]:
        """Convert to a store record."""
        return {
            "userId": self.user_id,
            "role": self.role.value,
            "joinedAt": self.joined_at,
        }

    @classmethod
    def from_record(cls, doc_id: str, data: dict[str, Any]) -> "HouseholdMember":
        """Create HouseholdMember from a store record."""
        return cls(
            user_id=data.get("userId", doc_id),
            role=MemberRole(data.get("role", MemberRole.MEMBER.value)),
            joined_at=data["joinedAt"],
        )
