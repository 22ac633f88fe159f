from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .common.datetime_utils import now_local
from .core.constants import DEFAULT_CURRENCY
from .employees.model import Employee
from .employees.service import EmployeeService
from .finance.model import Customer, Vendor
from .finance.service import CustomerService, VendorService
from .leave.model import LeaveRequest
from .leave.service import LeaveService
from .recruitment.model import Application, JobPosting
from .recruitment.service import RecruitmentService
from .store import InMemoryCollectionStore


@dataclass(frozen=True)
class Container:
    job_postings_store: InMemoryCollectionStore[JobPosting]
    applications_store: InMemoryCollectionStore[Application]
    employees_store: InMemoryCollectionStore[Employee]
    leave_store: InMemoryCollectionStore[LeaveRequest]
    customers_store: InMemoryCollectionStore[Customer]
    vendors_store: InMemoryCollectionStore[Vendor]

    recruitment_service: RecruitmentService
    employee_service: EmployeeService
    leave_service: LeaveService
    customer_service: CustomerService
    vendor_service: VendorService


def build_container(
    *, clock: Callable[[], datetime] = now_local, default_currency: str = DEFAULT_CURRENCY
) -> Container:
    job_postings_store = InMemoryCollectionStore[JobPosting]("job_postings")
    applications_store = InMemoryCollectionStore[Application]("applications")
    employees_store = InMemoryCollectionStore[Employee]("employees")
    leave_store = InMemoryCollectionStore[LeaveRequest]("leave_requests")
    customers_store = InMemoryCollectionStore[Customer]("customers")
    vendors_store = InMemoryCollectionStore[Vendor]("vendors")

    return Container(
        job_postings_store=job_postings_store,
        applications_store=applications_store,
        employees_store=employees_store,
        leave_store=leave_store,
        customers_store=customers_store,
        vendors_store=vendors_store,
        recruitment_service=RecruitmentService(
            job_postings_store, applications_store, clock=clock, default_currency=default_currency
        ),
        employee_service=EmployeeService(employees_store, clock=clock),
        leave_service=LeaveService(leave_store, clock=clock),
        customer_service=CustomerService(customers_store, clock=clock),
        vendor_service=VendorService(vendors_store, clock=clock),
    )
