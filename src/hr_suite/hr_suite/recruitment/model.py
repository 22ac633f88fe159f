from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from ..core.enums import ApplicationStatus, EmploymentType, JobStatus, WorkArrangement


@dataclass(frozen=True)
class JobPosting:
    """Domain entity: a job opening owned by one tenant."""

    id: str
    tenant_id: str
    job_code: str
    title: str
    description: str
    employment_type: EmploymentType
    work_arrangement: WorkArrangement
    vacancies: int
    currency: str
    status: JobStatus
    created_by: str
    created_at: datetime
    updated_at: datetime
    department_id: Optional[str] = None
    key_responsibilities: Tuple[str, ...] = ()
    required_skills: Tuple[str, ...] = ()
    preferred_skills: Tuple[str, ...] = ()
    qualifications: Tuple[str, ...] = ()
    min_salary: Optional[Decimal] = None
    max_salary: Optional[Decimal] = None
    application_deadline: Optional[date] = None
    allow_cover_letter: bool = False
    require_cover_letter: bool = False


@dataclass(frozen=True)
class Application:
    """Domain entity: a candidate's application to a job posting.

    Note: no tenant field; ownership follows the parent posting.
    """

    id: str
    job_posting_id: str
    application_code: str
    first_name: str
    last_name: str
    email: str
    status: ApplicationStatus
    applied_at: datetime
    updated_at: datetime
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    notes: Optional[str] = None
    rejection_reason: Optional[str] = None


@dataclass(frozen=True)
class BulkItemResult:
    id: str
    status: str
    error: Optional[str] = None


@dataclass(frozen=True)
class BulkActionResult:
    action: str
    total: int
    successful: int
    failed: int
    results: List[BulkItemResult] = field(default_factory=list)


@dataclass(frozen=True)
class StatusCount:
    status: str
    count: int
    percentage: int


@dataclass(frozen=True)
class RecruitmentAnalytics:
    active_job_postings: int
    total_applications: int
    offers_extended: int
    new_applications_today: int
    applications_by_status: List[StatusCount]


@dataclass(frozen=True)
class PublicJobPosting:
    """What the public careers page may see of a published posting."""

    id: str
    job_code: str
    title: str
    description: str
    employment_type: EmploymentType
    work_arrangement: WorkArrangement
    vacancies: int
    currency: str
    published_date: datetime
    min_salary: Optional[Decimal] = None
    max_salary: Optional[Decimal] = None
    application_deadline: Optional[date] = None
    key_responsibilities: Tuple[str, ...] = ()
    required_skills: Tuple[str, ...] = ()
    preferred_skills: Tuple[str, ...] = ()
    qualifications: Tuple[str, ...] = ()
    allow_cover_letter: bool = False
    require_cover_letter: bool = False
