"""
Entity Store for Shift Board

Holds the four session mappings (shifts, availability, time-off requests,
trade requests) shared by every workflow, the lock that serializes
mutations, and the row export/import used by external persistence.
"""

import logging
import threading
from typing import Dict, List, Tuple, Iterable, Any

from .models import (
    Shift,
    Availability,
    TimeOffRequest,
    ShiftTradeRequest,
    normalize_name,
)


logger = logging.getLogger(__name__)


class ShiftBoardError(Exception):
    """Base exception for Shift Board operations"""
    pass


class ValidationError(ShiftBoardError):
    """Raised when required input is missing or malformed"""
    pass


class NotFoundError(ShiftBoardError):
    """Raised when an id does not reference a known record"""
    pass


class AuthorizationError(ShiftBoardError):
    """Raised when the actor's role does not allow the operation"""
    pass


class InvalidTransitionError(ShiftBoardError):
    """Raised when a record is already in a terminal state"""
    pass


class SelfCoverError(ShiftBoardError):
    """Raised when an employee tries to cover their own trade offer"""
    pass


class AlreadyCoveredError(ShiftBoardError):
    """Raised when a trade offer already has a cover employee"""
    pass


SECTIONS = ("shifts", "availability", "time_off", "trades")


class EntityStore:
    """Session-lifetime container for all scheduling entities"""

    def __init__(self):
        self.shifts: Dict[str, Shift] = {}
        self.availability: Dict[str, Availability] = {}  # keyed by normalized name
        self.time_off: Dict[str, TimeOffRequest] = {}
        self.trades: Dict[str, ShiftTradeRequest] = {}
        self.lock = threading.RLock()

    def snapshot(self, section: str) -> List[Any]:
        """Records of one section, copied under the lock"""
        with self.lock:
            return list(getattr(self, section).values())

    def counts(self) -> Dict[str, int]:
        with self.lock:
            return {section: len(getattr(self, section)) for section in SECTIONS}

    def export_rows(self) -> Dict[str, List[Tuple]]:
        """Export every entity as an ordered tuple of its fields, in insertion order"""
        with self.lock:
            return {
                "shifts": [s.to_row() for s in self.shifts.values()],
                "availability": [a.to_row() for a in self.availability.values()],
                "time_off": [r.to_row() for r in self.time_off.values()],
                "trades": [t.to_row() for t in self.trades.values()],
            }

    def import_rows(self, rows: Dict[str, Iterable[Tuple]]):
        """
        Re-create records from `export_rows` output.

        Each section present in `rows` replaces the current contents of that
        section; absent sections are left untouched.
        """
        loaders: Dict[str, Any] = {
            "shifts": (Shift.from_row, lambda s: s.id),
            "availability": (Availability.from_row, lambda a: normalize_name(a.employee_name)),
            "time_off": (TimeOffRequest.from_row, lambda r: r.id),
            "trades": (ShiftTradeRequest.from_row, lambda t: t.id),
        }
        unknown = set(rows) - set(loaders)
        if unknown:
            raise ValidationError(f"Unknown sections in import: {sorted(unknown)}")

        # every section is parsed before any is assigned; a bad row changes nothing
        staged: Dict[str, Dict[str, Any]] = {}
        for section, section_rows in rows.items():
            from_row, key = loaders[section]
            try:
                records = [from_row(tuple(row)) for row in section_rows]
            except (ValueError, TypeError, IndexError) as e:
                raise ValidationError(f"Malformed {section} row: {e}") from e
            staged[section] = {key(record): record for record in records}

        with self.lock:
            for section, records in staged.items():
                setattr(self, section, records)
                logger.info(f"Imported {len(records)} {section} records")
