from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Iterable, List, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.ids import new_id, sequence_code
from ..common.tenancy import TenantScopedService
from ..common.validators import (
    optional_text,
    parse_amount,
    parse_date,
    parse_enum,
    parse_positive_int,
    require_email,
    require_min_length,
    require_non_empty,
    require_text,
    string_list,
)
from ..core.constants import DEFAULT_CURRENCY, JOB_DESCRIPTION_MIN_LENGTH, JOB_TITLE_MIN_LENGTH
from ..core.enums import ApplicationStatus, BulkAction, EmploymentType, JobStatus, WorkArrangement
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..query import ListQuery, Page, QueryProfile, run_query
from ..store import CollectionStore
from .model import (
    Application,
    BulkActionResult,
    BulkItemResult,
    JobPosting,
    PublicJobPosting,
    RecruitmentAnalytics,
    StatusCount,
)

logger = logging.getLogger(__name__)

JOB_POSTING_PROFILE = QueryProfile(
    search_fields=("title", "job_code", "description"),
    default_sort_by="created_at",
    filterable=("status", "department_id", "employment_type", "work_arrangement"),
    param_aliases={
        "department": "department_id",
        "employmentType": "employment_type",
        "workArrangement": "work_arrangement",
    },
)

APPLICATION_PROFILE = QueryProfile(
    search_fields=("first_name", "last_name", "email", "application_code"),
    default_sort_by="applied_at",
    filterable=("status", "job_posting_id"),
    param_aliases={"jobPostingId": "job_posting_id"},
)

CAREERS_PROFILE = QueryProfile(
    search_fields=("title", "description"),
    default_sort_by="created_at",
    filterable=("employment_type", "work_arrangement"),
    param_aliases={"employmentType": "employment_type", "workArrangement": "work_arrangement"},
)

CLOSED_APPLICATION_STATUSES = (
    ApplicationStatus.REJECTED,
    ApplicationStatus.HIRED,
    ApplicationStatus.WITHDRAWN,
)

EDITABLE_JOB_FIELDS = (
    "title",
    "description",
    "department_id",
    "key_responsibilities",
    "required_skills",
    "preferred_skills",
    "qualifications",
    "employment_type",
    "work_arrangement",
    "vacancies",
    "min_salary",
    "max_salary",
    "currency",
    "application_deadline",
    "allow_cover_letter",
    "require_cover_letter",
)


def clean_job_fields(data: Mapping[str, Any], *, default_currency: str = DEFAULT_CURRENCY) -> dict:
    """Validate job posting input and return normalised field values."""
    title = require_min_length(require_text(data.get("title"), "Job title"), "Job title", JOB_TITLE_MIN_LENGTH)
    description = require_min_length(
        require_text(data.get("description"), "Job description"), "Job description", JOB_DESCRIPTION_MIN_LENGTH
    )

    min_salary = parse_amount(data.get("min_salary"), "Minimum salary")
    max_salary = parse_amount(data.get("max_salary"), "Maximum salary")
    for amount, label in ((min_salary, "Minimum salary"), (max_salary, "Maximum salary")):
        if amount is not None and amount <= 0:
            raise ValidationError(f"{label} must be positive")
    if min_salary is not None and max_salary is not None and min_salary > max_salary:
        raise ValidationError("Maximum salary must not be lower than minimum salary")

    currency = str(data.get("currency") or default_currency).strip().upper()
    if len(currency) != 3 or not currency.isalpha():
        raise ValidationError("Currency must be a 3-letter code")

    require_cover_letter = bool(data.get("require_cover_letter", False))
    allow_cover_letter = bool(data.get("allow_cover_letter", False)) or require_cover_letter

    return {
        "title": title,
        "description": description,
        "department_id": optional_text(data.get("department_id")),
        "key_responsibilities": string_list(data.get("key_responsibilities"), "Key responsibilities"),
        "required_skills": string_list(data.get("required_skills"), "Required skills"),
        "preferred_skills": string_list(data.get("preferred_skills"), "Preferred skills"),
        "qualifications": string_list(data.get("qualifications"), "Qualifications"),
        "employment_type": parse_enum(
            EmploymentType, data.get("employment_type") or EmploymentType.PERMANENT, "Employment type"
        ),
        "work_arrangement": parse_enum(
            WorkArrangement, data.get("work_arrangement") or WorkArrangement.OFFICE, "Work arrangement"
        ),
        "vacancies": parse_positive_int(data.get("vacancies", 1), "Number of vacancies"),
        "min_salary": min_salary,
        "max_salary": max_salary,
        "currency": currency,
        "application_deadline": parse_date(data.get("application_deadline"), "Application deadline"),
        "allow_cover_letter": allow_cover_letter,
        "require_cover_letter": require_cover_letter,
    }


def _to_public(job: JobPosting) -> PublicJobPosting:
    return PublicJobPosting(
        id=job.id,
        job_code=job.job_code,
        title=job.title,
        description=job.description,
        employment_type=job.employment_type,
        work_arrangement=job.work_arrangement,
        vacancies=job.vacancies,
        currency=job.currency,
        published_date=job.created_at,
        min_salary=job.min_salary,
        max_salary=job.max_salary,
        application_deadline=job.application_deadline,
        key_responsibilities=job.key_responsibilities,
        required_skills=job.required_skills,
        preferred_skills=job.preferred_skills,
        qualifications=job.qualifications,
        allow_cover_letter=job.allow_cover_letter,
        require_cover_letter=job.require_cover_letter,
    )


class RecruitmentService(TenantScopedService[JobPosting]):
    """Use cases: job postings, applications and the public careers view."""

    entity_name = "Job posting"
    profile = JOB_POSTING_PROFILE

    def __init__(
        self,
        job_postings: CollectionStore[JobPosting],
        applications: CollectionStore[Application],
        *,
        clock: Callable[[], datetime] = now_local,
        default_currency: str = DEFAULT_CURRENCY,
    ):
        super().__init__(job_postings, clock=clock)
        self._default_currency = default_currency
        self._applications = applications
        self._code_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Job postings
    # ------------------------------------------------------------------
    def _next_job_code(self, tenant_id: str, year: int) -> str:
        existing = sum(1 for jp in self._owned(tenant_id) if str(year) in jp.job_code)
        return sequence_code("JOB", year, existing)

    def create_job_posting(self, tenant_id: str, data: Mapping[str, Any], created_by: str) -> JobPosting:
        fields = clean_job_fields(data, default_currency=self._default_currency)
        status = JobStatus.PUBLISHED if data.get("is_published") else JobStatus.DRAFT

        with self._code_lock:
            now = self._clock()
            job = JobPosting(
                id=new_id(),
                tenant_id=tenant_id,
                job_code=self._next_job_code(tenant_id, now.year),
                status=status,
                created_by=created_by,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self._store.insert(job)

        logger.info("Job posting %s created for tenant %s (%s)", job.job_code, tenant_id, status.value)
        return job

    def list_job_postings(self, tenant_id: str, query: Optional[ListQuery] = None) -> Page[JobPosting]:
        return self._list(tenant_id, query)

    def get_job_posting_by_id(self, job_posting_id: str, tenant_id: str) -> Optional[JobPosting]:
        return self._find(job_posting_id, tenant_id)

    def update_job_posting(
        self, job_posting_id: str, tenant_id: str, data: Mapping[str, Any], updated_by: str
    ) -> JobPosting:
        existing = self._require(job_posting_id, tenant_id)

        locked = sorted(set(data) - set(EDITABLE_JOB_FIELDS))
        if locked:
            raise ValidationError(f"Fields cannot be updated: {', '.join(locked)}")

        merged = {name: getattr(existing, name) for name in EDITABLE_JOB_FIELDS}
        merged.update(data)
        updated = self._save(existing, **clean_job_fields(merged, default_currency=self._default_currency))
        logger.info("Job posting %s updated by %s", updated.job_code, updated_by)
        return updated

    def publish_job_posting(self, job_posting_id: str, tenant_id: str, published_by: str) -> JobPosting:
        job = self._require(job_posting_id, tenant_id)
        if job.status == JobStatus.CLOSED:
            raise ValidationError("A closed job posting cannot be published again")

        published = self._save(job, status=JobStatus.PUBLISHED)
        logger.info("Job posting %s published by %s", job.job_code, published_by)
        return published

    def close_job_posting(self, job_posting_id: str, tenant_id: str, closed_by: str) -> JobPosting:
        job = self._require(job_posting_id, tenant_id)
        closed = self._save(job, status=JobStatus.CLOSED)
        logger.info("Job posting %s closed by %s", job.job_code, closed_by)
        return closed

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------
    def _owned_applications(self, tenant_id: str) -> List[Application]:
        posting_ids = {jp.id for jp in self._owned(tenant_id)}
        return [app for app in self._applications.enumerate() if app.job_posting_id in posting_ids]

    def list_applications(self, tenant_id: str, query: Optional[ListQuery] = None) -> Page[Application]:
        return run_query(self._owned_applications(tenant_id), query or ListQuery(), profile=APPLICATION_PROFILE)

    def get_application_by_id(self, application_id: str, tenant_id: str) -> Optional[Application]:
        application = self._applications.get_by_id(application_id)
        if application is None:
            return None
        if self._find(application.job_posting_id, tenant_id) is None:
            return None
        return application

    def _require_application(self, application_id: str, tenant_id: str) -> Application:
        application = self.get_application_by_id(application_id, tenant_id)
        if application is None:
            raise NotFoundError("Application not found")
        return application

    def _require_open_application(self, application_id: str, tenant_id: str) -> Application:
        application = self._require_application(application_id, tenant_id)
        if application.status in CLOSED_APPLICATION_STATUSES:
            raise ValidationError(f"Application is already {application.status.value}")
        return application

    def submit_application(self, job_posting_id: str, data: Mapping[str, Any]) -> Application:
        """Public careers flow: apply to a published posting."""
        job = self._store.get_by_id(job_posting_id)
        if job is None or job.status != JobStatus.PUBLISHED:
            raise NotFoundError("Job posting not found or no longer accepting applications")

        now = self._clock()
        if job.application_deadline and now.date() > job.application_deadline:
            raise ValidationError("Application deadline has passed")

        first_name = require_non_empty(data.get("first_name"), "First name")
        last_name = require_non_empty(data.get("last_name"), "Last name")
        email = require_email(data.get("email"))

        cover_letter = optional_text(data.get("cover_letter"))
        if job.require_cover_letter and not cover_letter:
            raise ValidationError("A cover letter is required for this position")
        if not job.allow_cover_letter:
            cover_letter = None

        with self._code_lock:
            existing = sum(1 for a in self._owned_applications(job.tenant_id) if str(now.year) in a.application_code)
            application = Application(
                id=new_id(),
                job_posting_id=job.id,
                application_code=sequence_code("APP", now.year, existing),
                first_name=first_name,
                last_name=last_name,
                email=email,
                status=ApplicationStatus.RECEIVED,
                applied_at=now,
                updated_at=now,
                phone=optional_text(data.get("phone")),
                resume_url=optional_text(data.get("resume_url")),
                cover_letter=cover_letter,
            )
            self._applications.insert(application)

        logger.info("Application %s received for %s", application.application_code, job.job_code)
        return application

    def _stamp_application(self, application: Application, **changes) -> Application:
        updated = replace(application, updated_at=self._clock(), **changes)
        return self._applications.update(updated.id, updated)

    def shortlist_application(
        self, application_id: str, tenant_id: str, shortlisted_by: str, notes: Optional[str] = None
    ) -> Application:
        application = self._require_open_application(application_id, tenant_id)
        updated = self._stamp_application(
            application,
            status=ApplicationStatus.SHORTLISTED,
            notes=optional_text(notes) or application.notes,
        )
        logger.info("Application %s shortlisted by %s", application.application_code, shortlisted_by)
        return updated

    def reject_application(
        self,
        application_id: str,
        tenant_id: str,
        rejected_by: str,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Application:
        application = self._require_open_application(application_id, tenant_id)
        updated = self._stamp_application(
            application,
            status=ApplicationStatus.REJECTED,
            rejection_reason=optional_text(reason),
            notes=optional_text(notes) or application.notes,
        )
        logger.info("Application %s rejected by %s", application.application_code, rejected_by)
        return updated

    def perform_bulk_action(
        self,
        tenant_id: str,
        action: str,
        application_ids: Iterable[str],
        data: Optional[Mapping[str, Any]],
        performed_by: str,
    ) -> BulkActionResult:
        """Apply ``action`` to each id; one failure never aborts the batch."""
        if data is None:
            data = {}
        elif not isinstance(data, Mapping):
            raise ValidationError("Bulk action data must be an object")
        handlers = {
            BulkAction.SHORTLIST.value: lambda app_id: self.shortlist_application(
                app_id, tenant_id, performed_by, data.get("notes")
            ),
            BulkAction.REJECT.value: lambda app_id: self.reject_application(
                app_id, tenant_id, performed_by, data.get("reason"), data.get("notes")
            ),
        }
        handler = handlers.get(str(getattr(action, "value", action)))

        ids = list(application_ids)
        results: List[BulkItemResult] = []
        for app_id in ids:
            try:
                if handler is None:
                    raise ValidationError(f"Unsupported action: {action}")
                handler(app_id)
                results.append(BulkItemResult(id=app_id, status="success"))
            except DomainError as e:
                logger.warning("Bulk %s failed for %s: %s", action, app_id, e)
                results.append(BulkItemResult(id=app_id, status="error", error=str(e)))

        successful = sum(1 for r in results if r.status == "success")
        return BulkActionResult(
            action=str(getattr(action, "value", action)),
            total=len(ids),
            successful=successful,
            failed=len(ids) - successful,
            results=results,
        )

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def get_recruitment_analytics(
        self, tenant_id: str, start: Optional[date] = None, end: Optional[date] = None
    ) -> RecruitmentAnalytics:
        postings = self._owned(tenant_id)
        applications = self._owned_applications(tenant_id)
        if start:
            applications = [a for a in applications if a.applied_at.date() >= start]
        if end:
            applications = [a for a in applications if a.applied_at.date() <= end]

        today = self._clock().date()
        counts = Counter(a.status.value for a in applications)
        denominator = len(applications) or 1

        return RecruitmentAnalytics(
            active_job_postings=sum(1 for jp in postings if jp.status == JobStatus.PUBLISHED),
            total_applications=len(applications),
            offers_extended=counts.get(ApplicationStatus.OFFER_EXTENDED.value, 0),
            new_applications_today=sum(1 for a in applications if a.applied_at.date() == today),
            applications_by_status=[
                StatusCount(status=status, count=count, percentage=int(count * 100 / denominator + 0.5))
                for status, count in counts.items()
            ],
        )

    # ------------------------------------------------------------------
    # Public careers view
    # ------------------------------------------------------------------
    def _published(self, tenant_id: Optional[str]) -> List[JobPosting]:
        return [
            jp
            for jp in self._store.enumerate()
            if jp.status == JobStatus.PUBLISHED and (tenant_id is None or jp.tenant_id == tenant_id)
        ]

    def get_published_job_postings(
        self, tenant_id: Optional[str] = None, query: Optional[ListQuery] = None
    ) -> Page[PublicJobPosting]:
        page = run_query(self._published(tenant_id), query or ListQuery(), profile=CAREERS_PROFILE)
        return replace(page, items=[_to_public(jp) for jp in page.items])

    def get_published_job_posting_by_id(self, job_posting_id: str) -> Optional[PublicJobPosting]:
        job = self._store.get_by_id(job_posting_id)
        if job is None or job.status != JobStatus.PUBLISHED:
            return None
        return _to_public(job)

    def get_careers_stats(self, tenant_id: Optional[str] = None) -> dict:
        published = self._published(tenant_id)
        return {
            "total_jobs": len(published),
            "by_employment_type": dict(Counter(jp.employment_type.value for jp in published)),
            "by_work_arrangement": dict(Counter(jp.work_arrangement.value for jp in published)),
        }
