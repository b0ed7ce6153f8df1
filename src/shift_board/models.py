"""
Entity Model for Shift Board

Dataclasses for shifts, weekly availability, time-off requests and
shift-trade offers, plus the role and status enums the workflows use.
"""

from datetime import date, datetime
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional, Tuple, Union
import uuid


DateLike = Union[date, datetime]

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class Role(Enum):
    MANAGER = "manager"
    EMPLOYEE = "employee"


class TimeOffStatus(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"

    @property
    def is_terminal(self) -> bool:
        return self is not TimeOffStatus.PENDING


class TradeStatus(Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_name(name: Optional[str]) -> str:
    """Lookup key for an employee name: trimmed and case-folded"""
    return (name or "").strip().casefold()


def same_employee(a: Optional[str], b: Optional[str]) -> bool:
    return normalize_name(a) == normalize_name(b)


def calendar_day(value: DateLike) -> date:
    """Drop any time-of-day component"""
    if isinstance(value, datetime):
        return value.date()
    return value


def _parse_date(value: Any) -> DateLike:
    if isinstance(value, (date, datetime)):
        return value
    text = str(value)
    if "T" in text:
        return datetime.fromisoformat(text)
    return date.fromisoformat(text)


@dataclass(frozen=True)
class Actor:
    """Identity supplied per call by the identity provider"""
    name: str
    role: Role

    @property
    def is_manager(self) -> bool:
        return self.role is Role.MANAGER


@dataclass
class Shift:
    """A scheduled work assignment owned by one employee"""
    id: str
    employee_name: str
    date: DateLike
    time: str = ""  # display label, never parsed
    position: str = ""
    section: str = ""

    @property
    def day(self) -> date:
        return calendar_day(self.date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employeeName": self.employee_name,
            "date": self.date.isoformat(),
            "time": self.time,
            "position": self.position,
            "section": self.section,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Shift':
        return cls(
            id=data["id"],
            employee_name=data["employeeName"],
            date=_parse_date(data["date"]),
            time=data.get("time", ""),
            position=data.get("position", ""),
            section=data.get("section", ""),
        )

    def to_row(self) -> Tuple:
        return (self.id, self.employee_name, self.date, self.time, self.position, self.section)

    @classmethod
    def from_row(cls, row: Tuple) -> 'Shift':
        shift_id, employee_name, shift_date, time, position, section = row
        return cls(shift_id, employee_name, _parse_date(shift_date), time, position, section)


@dataclass
class Availability:
    """Self-reported free-text availability for each weekday"""
    employee_name: str
    monday: str = ""
    tuesday: str = ""
    wednesday: str = ""
    thursday: str = ""
    friday: str = ""
    saturday: str = ""
    sunday: str = ""

    @property
    def days(self) -> Dict[str, str]:
        return {day: getattr(self, day) for day in WEEKDAYS}

    def to_dict(self) -> Dict[str, Any]:
        data = {"employeeName": self.employee_name}
        data.update(self.days)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Availability':
        return cls(data["employeeName"], **{day: data.get(day) or "" for day in WEEKDAYS})

    def to_row(self) -> Tuple:
        return (self.employee_name,) + tuple(getattr(self, day) for day in WEEKDAYS)

    @classmethod
    def from_row(cls, row: Tuple) -> 'Availability':
        return cls(row[0], *row[1:])


@dataclass
class TimeOffRequest:
    """A request to be excused from scheduling over a date range"""
    id: str
    employee_name: str
    start_date: date
    end_date: date
    status: TimeOffStatus = TimeOffStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employeeName": self.employee_name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TimeOffRequest':
        return cls(
            id=data["id"],
            employee_name=data["employeeName"],
            start_date=_parse_date(data["startDate"]),
            end_date=_parse_date(data["endDate"]),
            status=TimeOffStatus(data.get("status", TimeOffStatus.PENDING.value)),
        )

    def to_row(self) -> Tuple:
        return (self.id, self.employee_name, self.start_date, self.end_date, self.status.value)

    @classmethod
    def from_row(cls, row: Tuple) -> 'TimeOffRequest':
        request_id, employee_name, start, end, status = row
        return cls(request_id, employee_name, _parse_date(start), _parse_date(end), TimeOffStatus(status))


@dataclass
class ShiftTradeRequest:
    """An offer to hand off a shift; `shift` is a copy taken at offer time"""
    id: str
    employee_name: str
    shift: Shift
    status: TradeStatus = TradeStatus.PENDING
    cover_employee: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status is TradeStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employeeName": self.employee_name,
            "shift": self.shift.to_dict(),
            "status": self.status.value,
            "coverEmployee": self.cover_employee,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShiftTradeRequest':
        return cls(
            id=data["id"],
            employee_name=data["employeeName"],
            shift=Shift.from_dict(data["shift"]),
            status=TradeStatus(data.get("status", TradeStatus.PENDING.value)),
            cover_employee=data.get("coverEmployee"),
        )

    def to_row(self) -> Tuple:
        # shift fields are flattened in after the offering employee
        return (self.id, self.employee_name) + self.shift.to_row() + (self.status.value, self.cover_employee)

    @classmethod
    def from_row(cls, row: Tuple) -> 'ShiftTradeRequest':
        return cls(
            id=row[0],
            employee_name=row[1],
            shift=Shift.from_row(row[2:8]),
            status=TradeStatus(row[8]),
            cover_employee=row[9],
        )
