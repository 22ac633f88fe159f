from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.datetime_utils import inclusive_days
from ..common.ids import new_id
from ..common.tenancy import TenantScopedService
from ..common.validators import optional_text, parse_date, require_non_empty
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError
from ..query import ListQuery, Page, QueryProfile
from .model import LeaveRequest

logger = logging.getLogger(__name__)

LEAVE_PROFILE = QueryProfile(
    search_fields=("employee_name", "department", "leave_type", "employee_code"),
    default_sort_by="applied_at",
    filterable=("status", "leave_type", "department", "employee_code"),
    param_aliases={"leaveType": "leave_type", "employeeId": "employee_code"},
)


class LeaveService(TenantScopedService[LeaveRequest]):
    entity_name = "Leave request"
    profile = LEAVE_PROFILE

    def apply_leave(self, tenant_id: str, data: Mapping[str, Any]) -> LeaveRequest:
        start_date = parse_date(data.get("start_date"), "Start date")
        end_date = parse_date(data.get("end_date"), "End date")
        if start_date is None or end_date is None:
            raise ValidationError("Start date and end date are required")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        now = self._clock()
        request = LeaveRequest(
            id=new_id(),
            tenant_id=tenant_id,
            employee_code=require_non_empty(data.get("employee_code"), "Employee ID").upper(),
            employee_name=require_non_empty(data.get("employee_name"), "Employee name"),
            department=require_non_empty(data.get("department"), "Department"),
            leave_type=require_non_empty(data.get("leave_type"), "Leave type"),
            start_date=start_date,
            end_date=end_date,
            days=inclusive_days(start_date, end_date),
            reason=require_non_empty(data.get("reason"), "Reason"),
            status=LeaveStatus.PENDING,
            applied_at=now,
            updated_at=now,
            manager=optional_text(data.get("manager")),
        )
        self._store.insert(request)
        logger.info("Leave request %s (%d days) filed for %s", request.id, request.days, request.employee_code)
        return request

    def list_leave_requests(self, tenant_id: str, query: Optional[ListQuery] = None) -> Page[LeaveRequest]:
        return self._list(tenant_id, query)

    def get_leave_request_by_id(self, request_id: str, tenant_id: str) -> Optional[LeaveRequest]:
        return self._find(request_id, tenant_id)

    def _decide(self, request_id: str, tenant_id: str, status: LeaveStatus, decided_by: str, note: Optional[str]) -> LeaveRequest:
        request = self._require(request_id, tenant_id)
        if request.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been processed")

        decided = self._save(
            request,
            status=status,
            decided_by=decided_by,
            decided_at=self._clock(),
            decision_note=optional_text(note),
        )
        logger.info("Leave request %s %s by %s", request_id, status.value, decided_by)
        return decided

    def approve_leave(self, request_id: str, tenant_id: str, decided_by: str, note: Optional[str] = None) -> LeaveRequest:
        return self._decide(request_id, tenant_id, LeaveStatus.APPROVED, decided_by, note)

    def reject_leave(self, request_id: str, tenant_id: str, decided_by: str, note: Optional[str] = None) -> LeaveRequest:
        return self._decide(request_id, tenant_id, LeaveStatus.REJECTED, decided_by, note)

    def leave_summary(self, tenant_id: str) -> dict:
        owned = self._owned(tenant_id)
        summary = {status.value: 0 for status in LeaveStatus}
        for request in owned:
            summary[request.status.value] += 1
        summary["total"] = len(owned)
        return summary
