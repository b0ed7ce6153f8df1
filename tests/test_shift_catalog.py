"""
Tests for shift creation and the per-employee / per-day shift queries.
"""

import pytest
from datetime import date, datetime
import sys
from pathlib import Path

# Setup import path for src
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shift_board.catalog import ShiftCatalog
from shift_board.entity_store import EntityStore, AuthorizationError
from shift_board.models import Role


@pytest.fixture
def catalog():
    """Clean catalog over an empty store for each test."""
    return ShiftCatalog(EntityStore())


def test_create_shift_assigns_unique_ids(catalog):
    first = catalog.create_shift("alice", date(2024, 1, 1), "9-5", "Cashier", "Front")
    second = catalog.create_shift("alice", date(2024, 1, 1), "9-5", "Cashier", "Front")
    assert first.id and second.id
    assert first.id != second.id
    assert catalog.all_shifts() == [first, second]


def test_create_shift_keeps_free_text_as_given(catalog):
    """Time, position and section are labels and are not validated."""
    shift = catalog.create_shift("bob", date(2024, 1, 2), "whenever :)", "", "back ??")
    assert shift.time == "whenever :)"
    assert shift.position == ""
    assert shift.section == "back ??"


def test_create_shift_requires_manager_when_role_given(catalog):
    with pytest.raises(AuthorizationError):
        catalog.create_shift("bob", date(2024, 1, 2), actor_role=Role.EMPLOYEE)
    assert catalog.all_shifts() == []

    shift = catalog.create_shift("bob", date(2024, 1, 2), actor_role=Role.MANAGER)
    assert catalog.get_shift(shift.id) is shift


def test_shifts_for_employee_is_case_insensitive(catalog):
    stored = catalog.create_shift("alice", date(2024, 1, 1))
    catalog.create_shift("bob", date(2024, 1, 1))
    later = catalog.create_shift("ALICE", date(2024, 1, 5))

    assert catalog.shifts_for_employee("Alice") == [stored, later]
    assert catalog.shifts_for_employee("carol") == []


def test_shifts_for_day_ignores_time_of_day(catalog):
    morning = catalog.create_shift("alice", datetime(2024, 1, 1, 8, 30))
    evening = catalog.create_shift("bob", datetime(2024, 1, 1, 22, 0))
    catalog.create_shift("carol", date(2024, 1, 2))

    assert catalog.shifts_for_day(date(2024, 1, 1)) == [morning, evening]
    assert catalog.shifts_for_day(datetime(2024, 1, 1, 12, 0)) == [morning, evening]
    assert catalog.shifts_for_day(date(2024, 1, 3)) == []
