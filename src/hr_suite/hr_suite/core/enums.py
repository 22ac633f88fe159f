from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller roles used by the route allow-lists."""

    ADMIN = "admin"
    HR_MANAGER = "hr_manager"
    FINANCE_MANAGER = "finance_manager"
    SUPERVISOR = "supervisor"
    EMPLOYEE = "employee"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class JobStatus(str, Enum):
    """Job posting lifecycle: DRAFT -> PUBLISHED -> CLOSED."""

    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"


class EmploymentType(str, Enum):
    PERMANENT = "permanent"
    CONTRACT = "contract"
    TEMPORARY = "temporary"
    INTERNSHIP = "internship"


class WorkArrangement(str, Enum):
    OFFICE = "office"
    REMOTE = "remote"
    HYBRID = "hybrid"


class ApplicationStatus(str, Enum):
    RECEIVED = "received"
    SCREENING = "screening"
    SHORTLISTED = "shortlisted"
    INTERVIEWED = "interviewed"
    REJECTED = "rejected"
    OFFER_EXTENDED = "offer_extended"
    HIRED = "hired"
    WITHDRAWN = "withdrawn"


class BulkAction(str, Enum):
    SHORTLIST = "shortlist"
    REJECT = "reject"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"


class ContractType(str, Enum):
    """Employment contract of a staff member (not of a job posting)."""

    FULLTIME = "fulltime"
    PARTTIME = "parttime"
    CONTRACT = "contract"
    INTERN = "intern"


class LeaveStatus(str, Enum):
    """Approval flow for leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VendorStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
