from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.tenancy import TenantScopedService
from ..common.validators import (
    optional_text,
    parse_amount,
    parse_date,
    parse_enum,
    require_email,
    require_max_length,
    require_non_empty,
)
from ..core.constants import EMPLOYEE_MAX_SALARY, EMPLOYEE_NAME_MAX_LENGTH
from ..core.enums import ContractType, EmployeeStatus
from ..core.exceptions import ValidationError
from ..query import ListQuery, Page, QueryProfile
from ..store import CollectionStore
from .model import Employee

logger = logging.getLogger(__name__)

EMPLOYEE_PROFILE = QueryProfile(
    search_fields=("full_name", "email", "employee_code", "position"),
    default_sort_by="created_at",
    filterable=("status", "department", "employment_type"),
    sortable=("created_at", "full_name", "join_date", "department"),
    param_aliases={"employmentType": "employment_type"},
)

EDITABLE_EMPLOYEE_FIELDS = (
    "full_name",
    "email",
    "phone",
    "department",
    "position",
    "employment_type",
    "join_date",
    "basic_salary",
    "reporting_manager",
)


def clean_employee_fields(data: Mapping[str, Any]) -> dict:
    full_name = require_max_length(require_non_empty(data.get("full_name"), "Full name"), "Full name", EMPLOYEE_NAME_MAX_LENGTH)

    join_date = parse_date(data.get("join_date"), "Join date")
    if join_date is None:
        raise ValidationError("Join date is required")

    salary = parse_amount(data.get("basic_salary"), "Basic salary")
    if salary is None or salary <= 0 or salary > EMPLOYEE_MAX_SALARY:
        raise ValidationError(f"Basic salary must be between 0 and {EMPLOYEE_MAX_SALARY}")

    return {
        "full_name": full_name,
        "email": require_email(data.get("email")),
        "phone": optional_text(data.get("phone")),
        "department": require_non_empty(data.get("department"), "Department"),
        "position": require_non_empty(data.get("position"), "Position"),
        "employment_type": parse_enum(ContractType, data.get("employment_type") or ContractType.FULLTIME, "Employment type"),
        "join_date": join_date,
        "basic_salary": salary,
        "reporting_manager": optional_text(data.get("reporting_manager")),
    }


class EmployeeService(TenantScopedService[Employee]):
    """Use case: manage the employee directory of a tenant."""

    entity_name = "Employee"
    profile = EMPLOYEE_PROFILE

    def __init__(self, store: CollectionStore[Employee], *, clock: Callable[[], datetime] = now_local):
        super().__init__(store, clock=clock)
        self._code_lock = threading.Lock()

    def create_employee(self, tenant_id: str, data: Mapping[str, Any]) -> Employee:
        code = require_non_empty(data.get("employee_code"), "Employee ID").upper()
        fields = clean_employee_fields(data)

        with self._code_lock:
            if any(e.employee_code == code for e in self._owned(tenant_id)):
                raise ValidationError(f"Employee ID {code} already exists")
            now = self._clock()
            employee = Employee(
                id=new_id(),
                tenant_id=tenant_id,
                employee_code=code,
                status=EmployeeStatus.ACTIVE,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self._store.insert(employee)
        logger.info("Employee %s created for tenant %s", code, tenant_id)
        return employee

    def list_employees(self, tenant_id: str, query: Optional[ListQuery] = None) -> Page[Employee]:
        return self._list(tenant_id, query)

    def get_employee_by_id(self, employee_id: str, tenant_id: str) -> Optional[Employee]:
        return self._find(employee_id, tenant_id)

    def update_employee(self, employee_id: str, tenant_id: str, data: Mapping[str, Any]) -> Employee:
        existing = self._require(employee_id, tenant_id)

        locked = sorted(set(data) - set(EDITABLE_EMPLOYEE_FIELDS))
        if locked:
            raise ValidationError(f"Fields cannot be updated: {', '.join(locked)}")

        merged = {name: getattr(existing, name) for name in EDITABLE_EMPLOYEE_FIELDS}
        merged.update(data)
        return self._save(existing, **clean_employee_fields(merged))

    def terminate_employee(self, employee_id: str, tenant_id: str) -> Employee:
        employee = self._require(employee_id, tenant_id)
        if employee.status == EmployeeStatus.TERMINATED:
            raise ValidationError("Employee is already terminated")

        logger.info("Employee %s terminated", employee.employee_code)
        return self._save(employee, status=EmployeeStatus.TERMINATED)
