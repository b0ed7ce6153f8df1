"""
Calendar Aggregator

Builds the Sunday-to-Saturday week shown in the calendar and buckets
shifts into its days.
"""

from datetime import date, timedelta
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .catalog import ShiftCatalog
from .models import Shift, DateLike, calendar_day, same_employee


DAYS_IN_WINDOW = 7


@dataclass
class CalendarDay:
    """One day of the weekly calendar with its shifts"""
    day: date
    shifts: List[Shift] = field(default_factory=list)
    own_shifts: List[Shift] = field(default_factory=list)  # highlighted for the current user

    @property
    def label(self) -> str:
        return f"{self.day.strftime('%a')} {self.day.day}"

    @property
    def summary(self) -> str:
        count = len(self.shifts)
        if count == 0:
            return "No Shifts"
        return f"{count} Shift{'s' if count > 1 else ''}"


class CalendarAggregator:
    """Read-side weekly view over the shift catalog"""

    def __init__(self, catalog: ShiftCatalog):
        self.catalog = catalog

    @staticmethod
    def window(reference: DateLike) -> List[date]:
        """The 7 days from the most recent Sunday on or before `reference`"""
        day = calendar_day(reference)
        # date.weekday(): Monday is 0, Sunday is 6
        start = day - timedelta(days=(day.weekday() + 1) % 7)
        return [start + timedelta(days=offset) for offset in range(DAYS_IN_WINDOW)]

    @staticmethod
    def bucket(shifts: Iterable[Shift], day: DateLike) -> List[Shift]:
        target = calendar_day(day)
        return [s for s in shifts if s.day == target]

    def week(self, reference: DateLike, current_user: Optional[str] = None) -> List[CalendarDay]:
        shifts = self.catalog.all_shifts()
        days = []
        for day in self.window(reference):
            bucketed = self.bucket(shifts, day)
            own = [s for s in bucketed if current_user and same_employee(s.employee_name, current_user)]
            days.append(CalendarDay(day=day, shifts=bucketed, own_shifts=own))
        return days
