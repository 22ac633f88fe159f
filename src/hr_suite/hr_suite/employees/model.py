from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ContractType, EmployeeStatus


@dataclass(frozen=True)
class Employee:
    id: str
    tenant_id: str
    employee_code: str
    full_name: str
    email: str
    department: str
    position: str
    employment_type: ContractType
    join_date: date
    basic_salary: Decimal
    status: EmployeeStatus
    created_at: datetime
    updated_at: datetime
    phone: Optional[str] = None
    reporting_manager: Optional[str] = None
