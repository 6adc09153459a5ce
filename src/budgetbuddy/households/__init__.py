"""
Households Package

The household record, its members and the create/join/leave operations.
"""

from .models import Household, HouseholdMember, MemberRole
from .service import HouseholdService

__all__ = [
    "Household",
    "HouseholdMember",
    "HouseholdService",
    "MemberRole",
]
