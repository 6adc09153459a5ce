#!/usr/bin/env python3
"""Tests for household creation and membership."""

import pytest

from budgetbuddy.core.auth import Identity, LocalAuthProvider
from budgetbuddy.core.errors import (
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    PartialFailureError,
    StoreError,
)
from budgetbuddy.core.memory_store import InMemoryDocumentStore
from budgetbuddy.households.models import MemberRole
from budgetbuddy.households.service import HouseholdService
from tests.fixtures.failing_store import FailingStore


def _service(store, user_id: str, household_id: str | None = None) -> HouseholdService:
    auth = LocalAuthProvider.signed_in_as(Identity(user_id=user_id, household_id=household_id))
    return HouseholdService(store, auth)


@pytest.mark.households
class TestCreateHousehold:
    """Test creating a household."""

    def test_create_writes_household_owner_and_defaults(self, store):
        """Test the record, the owner membership, the identity and the seeded categories."""
        service = _service(store, "alice")
        household = service.create_household("  Smith Family ")

        assert household.name == "Smith Family"
        assert household.created_by == "alice"
        assert store.get("households", household.id).data["name"] == "Smith Family"

        owner = store.get(f"households/{household.id}/members", "alice")
        assert owner.data["role"] == "owner"

        assert service.auth.current_identity().household_id == household.id
        assert store.count(f"households/{household.id}/categories") == 10

    def test_create_with_given_id(self, store):
        """Test a caller-chosen id is used."""
        household = _service(store, "alice").create_household("Smiths", household_id="house-1")

        assert household.id == "house-1"
        assert _service(store, "bob").get_household("house-1").name == "Smiths"

    def test_taken_id_is_rejected(self, store):
        """Test an existing household is never overwritten."""
        _service(store, "alice").create_household("Smiths", household_id="house-1")

        with pytest.raises(InvalidStateError, match="already exists"):
            _service(store, "bob").create_household("Joneses", household_id="house-1")
        assert store.get("households", "house-1").data["createdBy"] == "alice"

    def test_blank_name(self, store):
        """Test an empty name writes nothing."""
        with pytest.raises(InvalidInputError):
            _service(store, "alice").create_household("   ")
        assert store.collection_names() == []

    def test_signed_out(self, store):
        """Test nobody signed in cannot create a household."""
        service = HouseholdService(store, LocalAuthProvider())
        with pytest.raises(InvalidStateError, match="not authenticated"):
            service.create_household("Smiths")

    def test_current_household(self, store):
        """Test the creator's current household is the new one."""
        service = _service(store, "alice")
        household = service.create_household("Smiths")

        assert service.current_household() == household


@pytest.mark.households
class TestCreateHouseholdFailures:
    """Test step failures while creating a household."""

    def test_failure_on_first_write_raises_original_error(self):
        """Test nothing committed means the store error surfaces as-is."""
        store = FailingStore(fail_on=1)
        service = _service(store, "alice")

        with pytest.raises(StoreError):
            service.create_household("Smiths")
        assert service.auth.current_identity().household_id is None

    def test_failure_after_household_record(self):
        """Test a failed owner write reports the committed household step."""
        store = FailingStore(fail_on=2)
        service = _service(store, "alice")

        with pytest.raises(PartialFailureError) as excinfo:
            service.create_household("Smiths", household_id="house-1")

        assert excinfo.value.completed_steps == ["write household"]
        assert excinfo.value.failed_step == "add owner"
        assert store.get("households", "house-1") is not None
        assert service.auth.current_identity().household_id is None


@pytest.mark.households
class TestMembership:
    """Test joining, leaving and listing members."""

    def setup_method(self):
        self.store = InMemoryDocumentStore()
        self.alice = _service(self.store, "alice")
        self.household = self.alice.create_household("Smiths", household_id="house-1")

    def test_join_adds_member(self):
        """Test a second user joins as a member."""
        bob = _service(self.store, "bob")
        joined = bob.join_household(" house-1 ")

        assert joined.id == "house-1"
        assert bob.auth.current_identity().household_id == "house-1"
        members = bob.list_members()
        assert [(m.user_id, m.role) for m in members] == [
            ("alice", MemberRole.OWNER),
            ("bob", MemberRole.MEMBER),
        ]

    def test_join_unknown_household(self):
        """Test an invite code that matches nothing."""
        with pytest.raises(NotFoundError):
            _service(self.store, "bob").join_household("nope")

    def test_join_while_in_another_household(self):
        """Test a user must leave before joining elsewhere."""
        carol = _service(self.store, "carol", household_id="house-2")

        with pytest.raises(InvalidStateError, match="leave it first"):
            carol.join_household("house-1")
        assert self.store.get("households/house-1/members", "carol") is None

    def test_rejoining_keeps_role(self):
        """Test joining the current household again changes nothing."""
        self.alice.join_household("house-1")

        members = self.alice.list_members()
        assert len(members) == 1
        assert members[0].is_owner

    def test_leave_removes_member(self):
        """Test leaving deletes the membership and clears the identity."""
        bob = _service(self.store, "bob")
        bob.join_household("house-1")
        bob.leave_household()

        assert bob.auth.current_identity().household_id is None
        assert [m.user_id for m in self.alice.list_members()] == ["alice"]

    def test_leave_without_household(self):
        """Test leaving requires a household."""
        with pytest.raises(InvalidStateError, match="not in a household"):
            _service(self.store, "bob").leave_household()

    def test_list_members_of_named_household(self):
        """Test listing members of a household other than the current one."""
        outsider = _service(self.store, "dave")
        assert [m.user_id for m in outsider.list_members("house-1")] == ["alice"]
