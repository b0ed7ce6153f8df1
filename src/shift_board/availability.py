"""
Availability Registry

Per-employee weekly availability. A submission replaces the employee's
previous record entirely.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from .entity_store import EntityStore, ValidationError
from .models import Availability, WEEKDAYS, normalize_name


logger = logging.getLogger(__name__)


class AvailabilityRegistry:
    """Upsert and listing of weekly availability"""

    def __init__(self, store: EntityStore):
        self.store = store

    def submit(self, employee_name: str, days: Union[Availability, Dict[str, str]]) -> Availability:
        """Store `days` as the employee's availability, replacing any earlier record"""
        key = normalize_name(employee_name)
        if not key:
            raise ValidationError("Employee name is required")

        if isinstance(days, Availability):
            days = days.days
        labels: Dict[str, str] = {}
        for d, label in days.items():
            weekday = d.lower()
            if weekday not in WEEKDAYS:
                raise ValidationError(f"Unknown weekday: {d}")
            if weekday in labels:
                raise ValidationError(f"Weekday given more than once: {d}")
            labels[weekday] = label

        record = Availability(
            employee_name.strip(),
            **{day: labels.get(day) or "" for day in WEEKDAYS}
        )
        with self.store.lock:
            replaced = key in self.store.availability
            self.store.availability[key] = record
        logger.info(f"{'Replaced' if replaced else 'Stored'} availability for '{record.employee_name}'")
        return record

    def get(self, employee_name: str) -> Optional[Availability]:
        with self.store.lock:
            return self.store.availability.get(normalize_name(employee_name))

    def list(self) -> List[Tuple[str, Availability]]:
        """All records as (employee name, availability), sorted by name"""
        records = sorted(self.store.snapshot("availability"), key=lambda a: normalize_name(a.employee_name))
        return [(record.employee_name, record) for record in records]
