#!/usr/bin/env python3
"""
Household Service

Creates households, manages membership and moves the signed-in identity in
and out of a household. Creating a household seeds the default categories.

Invite codes are household ids; there is no separate invitation record.
"""

import logging

from ..categories.service import CategoryService
from ..core.auth import AuthProvider, Identity, require_household
from ..core.errors import InvalidInputError, InvalidStateError, NotFoundError
from ..core.steps import StepRunner
from ..core.store import DocumentStore, household_collection
from .models import Household, HouseholdMember, MemberRole

logger = logging.getLogger(__name__)

HOUSEHOLDS_COLLECTION = "households"
MEMBERS_COLLECTION = "members"


class HouseholdService:
    """Household records and membership."""

    def __init__(self, store: DocumentStore, auth: AuthProvider):
        """
        Initialize with explicit collaborators.

        Args:
            store: Document store
            auth: Identity provider; its household changes on create, join and leave
        """
        self.store = store
        self.auth = auth

    def _signed_in(self) -> Identity:
        identity = self.auth.current_identity()
        if identity is None:
            raise InvalidStateError("User not authenticated")
        return identity

    @staticmethod
    def _members(household_id: str) -> str:
        return household_collection(household_id, MEMBERS_COLLECTION)

    def create_household(self, name: str, household_id: str | None = None) -> Household:
        """
        Create a household owned by the signed-in user and move them into it.

        Writes the household record, the owner's membership, switches the
        identity to the new household and seeds the default categories.

        Args:
            name: Display name
            household_id: Use this id instead of a generated one

        Raises:
            InvalidStateError: If nobody is signed in or the id is taken
            InvalidInputError: If the name is empty
            PartialFailureError: If a later step fails after the household
                record was written
        """
        identity = self._signed_in()
        if not name.strip():
            raise InvalidInputError("Household name must not be empty")

        household = Household(name=name.strip(), created_by=identity.user_id)
        if household_id:
            if self.store.get(HOUSEHOLDS_COLLECTION, household_id) is not None:
                raise InvalidStateError(f"Household {household_id} already exists")
            household.id = household_id

        owner = HouseholdMember(user_id=identity.user_id, role=MemberRole.OWNER)
        runner = StepRunner(f"create household {household.id}")

        runner.run(
            "write household",
            lambda: self.store.create(HOUSEHOLDS_COLLECTION, household.id, household.to_record()),
        )
        runner.run(
            "add owner",
            lambda: self.store.create(self._members(household.id), owner.user_id, owner.to_record()),
        )
        runner.run("join household", lambda: self.auth.join_household(household.id))
        seeded = runner.run(
            "seed default categories", lambda: CategoryService(self.store, self.auth).setup_defaults()
        )

        logger.info(
            "Created household %s (%s) for %s with %d categories",
            household.name,
            household.id,
            identity.user_id,
            len(seeded),
        )
        return household

    def get_household(self, household_id: str) -> Household:
        """
        Fetch a household record.

        Raises:
            NotFoundError: If no such household exists
        """
        doc = self.store.get(HOUSEHOLDS_COLLECTION, household_id)
        if doc is None:
            raise NotFoundError("Household", household_id)
        return Household.from_record(doc.id, doc.data)

    def current_household(self) -> Household:
        """
        The signed-in user's household.

        Raises:
            InvalidStateError: If the user is not in a household
            NotFoundError: If the household record does not exist
        """
        return self.get_household(require_household(self.auth).household_id)

    def join_household(self, invite_code: str) -> Household:
        """
        Join an existing household as a member.

        Joining the household the user is already in is a no-op and keeps
        their role.

        Raises:
            InvalidStateError: If nobody is signed in or the user is in
                another household
            NotFoundError: If the invite code matches no household
        """
        identity = self._signed_in()
        household = self.get_household(invite_code.strip())

        if identity.household_id == household.id:
            if self.store.get(self._members(household.id), identity.user_id) is not None:
                return household
        elif identity.household_id:
            raise InvalidStateError(f"Already in household {identity.household_id}; leave it first")

        member = HouseholdMember(user_id=identity.user_id, role=MemberRole.MEMBER)
        runner = StepRunner(f"join household {household.id}")
        runner.run(
            "add member",
            lambda: self.store.create(self._members(household.id), member.user_id, member.to_record()),
        )
        runner.run("join household", lambda: self.auth.join_household(household.id))

        logger.info("User %s joined household %s", identity.user_id, household.id)
        return household

    def leave_household(self) -> None:
        """
        Remove the signed-in user from their household.

        Raises:
            InvalidStateError: If the user is not in a household
            PartialFailureError: If the identity cannot be updated after the
                membership was removed
        """
        identity = require_household(self.auth)
        runner = StepRunner(f"leave household {identity.household_id}")
        runner.run(
            "remove member",
            lambda: self.store.delete(self._members(identity.household_id), identity.user_id),
        )
        runner.run("leave household", self.auth.leave_household)
        logger.info("User %s left household %s", identity.user_id, identity.household_id)

    def list_members(self, household_id: str | None = None) -> list[HouseholdMember]:
        """
        Members of a household (default: the current one), earliest first.

        Raises:
            InvalidStateError: If no household is given and the user has none
        """
        household_id = household_id or require_household(self.auth).household_id
        documents = self.store.query(self._members(household_id), order_by="joinedAt")
        return [HouseholdMember.from_record(doc.id, doc.data) for doc in documents]
