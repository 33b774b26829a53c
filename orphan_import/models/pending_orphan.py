from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

"""PendingOrphan candidate record.

A PendingOrphan is built from one extracted FieldMap and is not yet
validated against business rules. Attributes missing from the FieldMap
keep their default of None.
"""

__all__ = [
    "PendingOrphan",
]


@dataclass
class PendingOrphan:
    """Orphan registration awaiting review and persistence."""
    name: str | None = None
    father_name: str | None = None
    father_is_martyr: bool | None = None
    father_occupation: str | None = None
    father_place_of_death: str | None = None
    father_cause_of_death: str | None = None
    father_date_of_death: date | None = None
    mother_name: str | None = None
    mother_alive: bool | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    health_status: str | None = None
    schooling_status: str | None = None
    goes_to_school: bool | None = None
    guardian_name: str | None = None
    guardian_relationship: str | None = None
    guardian_id_num: int | None = None
    original_address_province: Any = None  # province code
    original_address_city: str | None = None
    original_address_neighborhood: str | None = None
    original_address_street: str | None = None
    original_address_details: str | None = None
    current_address_province: Any = None
    current_address_city: str | None = None
    current_address_neighborhood: str | None = None
    current_address_street: str | None = None
    current_address_details: str | None = None
    contact_number: str | None = None
    alt_contact_number: str | None = None
    sponsored_by_another_org: bool | None = None
    another_org_sponsorship_details: str | None = None
    minor_siblings_count: int | None = None
    sponsored_minor_siblings_count: int | None = None
    comments: str | None = None
