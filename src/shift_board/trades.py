"""
Shift Trade Workflow

Employees offer one of their own shifts for coverage; another employee
accepts it, which hands the shift over to them.

Trade records are append-only. An accepted trade is never removed: the
open pool is whatever is still Pending, and `history()` keeps the
resolved offers for audit.
"""

import logging
from dataclasses import replace
from typing import List

from .entity_store import (
    EntityStore,
    ValidationError,
    NotFoundError,
    SelfCoverError,
    AlreadyCoveredError,
)
from .models import Shift, ShiftTradeRequest, TradeStatus, new_id, normalize_name, same_employee


logger = logging.getLogger(__name__)


class ShiftTradeWorkflow:
    """State machine for shift-trade offers"""

    def __init__(self, store: EntityStore):
        self.store = store

    def offer_trade(self, employee_name: str, shift: Shift) -> ShiftTradeRequest:
        """
        Offer `shift` for coverage.

        The offering employee must own the shift, the shift must exist in
        the catalog, and it must not already be on offer.
        """
        if not normalize_name(employee_name):
            raise ValidationError("Employee name is required")

        with self.store.lock:
            live = self.store.shifts.get(shift.id)
            if live is None:
                raise NotFoundError(f"Unknown shift: {shift.id}")
            if not same_employee(live.employee_name, employee_name) or \
                    not same_employee(shift.employee_name, employee_name):
                raise ValidationError(
                    f"'{employee_name}' can only offer their own shifts "
                    f"(shift {shift.id} belongs to '{live.employee_name}')"
                )
            if any(t.is_open and t.shift.id == shift.id for t in self.store.trades.values()):
                raise ValidationError(f"Shift {shift.id} is already offered for trade")

            trade = ShiftTradeRequest(
                id=new_id(),
                employee_name=employee_name.strip(),
                shift=replace(live),
            )
            self.store.trades[trade.id] = trade

        logger.info(f"Trade {trade.id} offered by '{trade.employee_name}' for shift {shift.id}")
        return trade

    def accept_trade(self, trade_id: str, covering_employee: str) -> ShiftTradeRequest:
        """Cover an open trade and transfer the underlying shift"""
        with self.store.lock:
            trade = self.store.trades.get(trade_id)
            if trade is None:
                raise NotFoundError(f"Unknown trade: {trade_id}")
            if not normalize_name(covering_employee):
                raise ValidationError("Covering employee name is required")
            if same_employee(covering_employee, trade.employee_name):
                raise SelfCoverError(f"'{covering_employee}' cannot cover their own shift")
            if trade.cover_employee is not None:
                raise AlreadyCoveredError(
                    f"Trade {trade_id} is already covered by '{trade.cover_employee}'"
                )

            trade.cover_employee = covering_employee.strip()
            trade.status = TradeStatus.ACCEPTED

            shift = self.store.shifts.get(trade.shift.id)
            if shift is not None:
                shift.employee_name = trade.cover_employee
            else:
                logger.warning(f"Shift {trade.shift.id} for trade {trade_id} is no longer in the catalog")

        logger.info(f"Trade {trade_id} accepted by '{trade.cover_employee}'")
        return trade

    def get_trade(self, trade_id: str):
        with self.store.lock:
            return self.store.trades.get(trade_id)

    def list_open_for_coverage(self, excluding_employee: str) -> List[ShiftTradeRequest]:
        """Pending trades offered by anyone other than `excluding_employee`"""
        return [t for t in self.store.snapshot("trades")
                if t.is_open and not same_employee(t.employee_name, excluding_employee)]

    def list_mine(self, employee_name: str) -> List[ShiftTradeRequest]:
        return [t for t in self.store.snapshot("trades")
                if t.is_open and same_employee(t.employee_name, employee_name)]

    def history(self) -> List[ShiftTradeRequest]:
        return self.store.snapshot("trades")
