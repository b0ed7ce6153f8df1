"""
Shift Catalog

Creation and read-side queries over the shifts held in the entity store.
"""

import logging
from datetime import date
from typing import List, Optional

from .entity_store import EntityStore, AuthorizationError
from .models import Shift, Role, DateLike, new_id, same_employee, calendar_day


logger = logging.getLogger(__name__)


class ShiftCatalog:
    """Shift creation plus per-employee and per-day lookups"""

    def __init__(self, store: EntityStore):
        self.store = store

    def create_shift(self, name: str, date: DateLike, time: str = "", position: str = "",
                     section: str = "", actor_role: Optional[Role] = None) -> Shift:
        """
        Add a new shift and return it.

        The free-text fields are stored as given. When `actor_role` is passed
        it must be the manager role.
        """
        if actor_role is not None and actor_role is not Role.MANAGER:
            raise AuthorizationError("Only managers can create shifts")

        shift = Shift(
            id=new_id(),
            employee_name=name,
            date=date,
            time=time,
            position=position,
            section=section,
        )
        with self.store.lock:
            self.store.shifts[shift.id] = shift
        logger.info(f"Created shift {shift.id} for '{name}' on {calendar_day(date)}")
        return shift

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        with self.store.lock:
            return self.store.shifts.get(shift_id)

    def all_shifts(self) -> List[Shift]:
        return self.store.snapshot("shifts")

    def shifts_for_employee(self, name: str) -> List[Shift]:
        """Shifts owned by `name` (case-insensitive), insertion order"""
        return [s for s in self.all_shifts() if same_employee(s.employee_name, name)]

    def shifts_for_day(self, day: DateLike) -> List[Shift]:
        """Shifts on the same calendar day as `day`"""
        target: date = calendar_day(day)
        return [s for s in self.all_shifts() if s.day == target]
