from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    tenant_id: str
    employee_code: str
    employee_name: str
    department: str
    leave_type: str
    start_date: date
    end_date: date
    days: int
    reason: str
    status: LeaveStatus
    applied_at: datetime
    updated_at: datetime
    manager: Optional[str] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    decision_note: Optional[str] = None
