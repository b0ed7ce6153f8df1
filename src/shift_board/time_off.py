"""
Time-Off Workflow

Lifecycle of time-off requests: employees file them as Pending, a manager
decides each one exactly once (Approved or Denied). Decided requests are
kept for audit.
"""

import logging
from typing import List

from .entity_store import (
    EntityStore,
    ValidationError,
    NotFoundError,
    AuthorizationError,
    InvalidTransitionError,
)
from .models import (
    TimeOffRequest,
    TimeOffStatus,
    Role,
    DateLike,
    new_id,
    normalize_name,
    same_employee,
    calendar_day,
)


logger = logging.getLogger(__name__)


DECISIONS = (TimeOffStatus.APPROVED, TimeOffStatus.DENIED)


class TimeOffWorkflow:
    """State machine for time-off requests"""

    def __init__(self, store: EntityStore):
        self.store = store

    def request(self, employee_name: str, start_date: DateLike, end_date: DateLike) -> TimeOffRequest:
        if not normalize_name(employee_name):
            raise ValidationError("Employee name is required")
        if calendar_day(end_date) < calendar_day(start_date):
            raise ValidationError(f"End date {end_date} is before start date {start_date}")

        request = TimeOffRequest(
            id=new_id(),
            employee_name=employee_name.strip(),
            start_date=start_date,
            end_date=end_date,
        )
        with self.store.lock:
            self.store.time_off[request.id] = request
        logger.info(f"Time-off request {request.id} filed by '{request.employee_name}' "
                    f"for {start_date} to {end_date}")
        return request

    def decide(self, request_id: str, decision: TimeOffStatus, actor_role: Role) -> TimeOffRequest:
        """Approve or deny a pending request. Only managers may decide."""
        if actor_role is not Role.MANAGER:
            raise AuthorizationError("Only managers can decide time-off requests")

        with self.store.lock:
            request = self.store.time_off.get(request_id)
            if request is None:
                raise NotFoundError(f"Unknown time-off request: {request_id}")
            if decision not in DECISIONS:
                raise ValidationError(f"Decision must be Approved or Denied, not {decision}")
            if request.status.is_terminal:
                raise InvalidTransitionError(
                    f"Time-off request {request_id} was already {request.status.value}"
                )
            request.status = decision

        logger.info(f"Time-off request {request_id} {decision.value.lower()}")
        return request

    def list(self, actor_role: Role, actor_name: str) -> List[TimeOffRequest]:
        """Managers see every request, employees only their own"""
        requests = self.store.snapshot("time_off")
        if actor_role is Role.MANAGER:
            return requests
        return [r for r in requests if same_employee(r.employee_name, actor_name)]
