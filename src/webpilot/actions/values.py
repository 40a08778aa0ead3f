"""Fixed test values per field role."""

from __future__ import annotations

from typing import Mapping, Optional

from ..core.models import FieldDescriptor, Role

VALUES: Mapping[Role, str] = {
    Role.EMAIL: "testuser@example.com",
    Role.PASSWORD: "TestPassword123!",
    Role.USERNAME: "testuser",
    Role.FULL_NAME: "Test User",
    Role.FIRST_NAME: "Test",
    Role.LAST_NAME: "User",
    Role.PHONE: "+1-555-123-4567",
    Role.MESSAGE: "Hello, this is a test message from the automation agent.",
    Role.SUBJECT: "Test inquiry",
    Role.COMPANY: "Test Company",
    Role.ADDRESS: "123 Test Street",
    Role.URL: "https://example.com",
    Role.DATE: "2024-01-01",
    Role.NUMBER: "42",
    Role.GENERIC: "Test",
}


def provide_value(role: Role, overrides: Optional[Mapping[Role, str]] = None) -> str:
    if overrides and role in overrides:
        return overrides[role]
    return VALUES.get(role, VALUES[Role.GENERIC])


def value_for_field(
    field: FieldDescriptor,
    overrides: Optional[Mapping[Role, str]] = None,
) -> str:
    return provide_value(field.role, overrides)
