from __future__ import annotations

from flask import Flask, g, request

from ..common.http import json_body, list_query, login_required, ok, page_response, roles_required
from ..common.validators import parse_date
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .service import APPLICATION_PROFILE, CAREERS_PROFILE, JOB_POSTING_PROFILE

RECRUITERS = (Role.HR_MANAGER, Role.ADMIN)


def register(app: Flask, container: Container) -> None:
    service = container.recruitment_service

    # ------------------------------------------------------------------
    # Job postings (tenant scoped)
    # ------------------------------------------------------------------
    @app.route("/api/recruitment/jobs", methods=["GET"], endpoint="list_jobs")
    @login_required
    def list_jobs():
        page = service.list_job_postings(g.identity.tenant_id, list_query(JOB_POSTING_PROFILE))
        return page_response(page)

    @app.route("/api/recruitment/jobs", methods=["POST"], endpoint="create_job")
    @roles_required(*RECRUITERS)
    def create_job():
        job = service.create_job_posting(g.identity.tenant_id, json_body(), g.identity.user_id)
        return ok(job, 201, message="Job posting created successfully")

    @app.route("/api/recruitment/jobs/<job_id>", methods=["GET"], endpoint="get_job")
    @login_required
    def get_job(job_id: str):
        job = service.get_job_posting_by_id(job_id, g.identity.tenant_id)
        if job is None:
            raise NotFoundError("Job posting not found")
        return ok(job)

    @app.route("/api/recruitment/jobs/<job_id>", methods=["PUT"], endpoint="update_job")
    @roles_required(*RECRUITERS)
    def update_job(job_id: str):
        job = service.update_job_posting(job_id, g.identity.tenant_id, json_body(), g.identity.user_id)
        return ok(job, message="Job posting updated successfully")

    @app.route("/api/recruitment/jobs/<job_id>/publish", methods=["POST"], endpoint="publish_job")
    @roles_required(*RECRUITERS)
    def publish_job(job_id: str):
        job = service.publish_job_posting(job_id, g.identity.tenant_id, g.identity.user_id)
        return ok(job, message="Job posting published successfully")

    @app.route("/api/recruitment/jobs/<job_id>/close", methods=["POST"], endpoint="close_job")
    @roles_required(*RECRUITERS)
    def close_job(job_id: str):
        job = service.close_job_posting(job_id, g.identity.tenant_id, g.identity.user_id)
        return ok(job, message="Job posting closed successfully")

    # ------------------------------------------------------------------
    # Applications (tenant scoped through the parent posting)
    # ------------------------------------------------------------------
    @app.route("/api/recruitment/applications", methods=["GET"], endpoint="list_applications")
    @roles_required(*RECRUITERS)
    def list_applications():
        page = service.list_applications(g.identity.tenant_id, list_query(APPLICATION_PROFILE))
        return page_response(page)

    @app.route("/api/recruitment/applications/<application_id>", methods=["GET"], endpoint="get_application")
    @roles_required(*RECRUITERS)
    def get_application(application_id: str):
        application = service.get_application_by_id(application_id, g.identity.tenant_id)
        if application is None:
            raise NotFoundError("Application not found")
        return ok(application)

    @app.route(
        "/api/recruitment/applications/<application_id>/shortlist",
        methods=["POST"],
        endpoint="shortlist_application",
    )
    @roles_required(*RECRUITERS)
    def shortlist_application(application_id: str):
        data = json_body()
        application = service.shortlist_application(
            application_id, g.identity.tenant_id, g.identity.user_id, data.get("notes")
        )
        return ok(application, message="Application shortlisted")

    @app.route(
        "/api/recruitment/applications/<application_id>/reject",
        methods=["POST"],
        endpoint="reject_application",
    )
    @roles_required(*RECRUITERS)
    def reject_application(application_id: str):
        data = json_body()
        application = service.reject_application(
            application_id, g.identity.tenant_id, g.identity.user_id, data.get("reason"), data.get("notes")
        )
        return ok(application, message="Application rejected")

    @app.route("/api/recruitment/applications/bulk", methods=["POST"], endpoint="bulk_applications")
    @roles_required(*RECRUITERS)
    def bulk_applications():
        data = json_body()
        ids = data.get("application_ids")
        if not isinstance(ids, list) or not ids:
            raise ValidationError("application_ids must be a non-empty list")
        result = service.perform_bulk_action(
            g.identity.tenant_id,
            str(data.get("action") or ""),
            [str(i) for i in ids],
            data.get("data") or {},
            g.identity.user_id,
        )
        return ok(result)

    @app.route("/api/recruitment/dashboard", methods=["GET"], endpoint="recruitment_dashboard")
    @roles_required(*RECRUITERS)
    def recruitment_dashboard():
        analytics = service.get_recruitment_analytics(
            g.identity.tenant_id,
            start=parse_date(request.args.get("startDate"), "startDate"),
            end=parse_date(request.args.get("endDate"), "endDate"),
        )
        return ok(analytics)

    # ------------------------------------------------------------------
    # Public careers page (no identity required)
    # ------------------------------------------------------------------
    @app.route("/api/careers/jobs", methods=["GET"], endpoint="careers_jobs")
    def careers_jobs():
        page = service.get_published_job_postings(request.args.get("tenantId"), list_query(CAREERS_PROFILE))
        return page_response(page)

    @app.route("/api/careers/jobs/<job_id>", methods=["GET"], endpoint="careers_job")
    def careers_job(job_id: str):
        job = service.get_published_job_posting_by_id(job_id)
        if job is None:
            raise NotFoundError("Job posting not found or no longer available")
        return ok(job)

    @app.route("/api/careers/jobs/<job_id>/apply", methods=["POST"], endpoint="careers_apply")
    def careers_apply(job_id: str):
        application = service.submit_application(job_id, json_body())
        return ok(
            {"id": application.id, "application_code": application.application_code},
            201,
            message="Application submitted successfully",
        )

    @app.route("/api/careers/stats", methods=["GET"], endpoint="careers_stats")
    def careers_stats():
        return ok(service.get_careers_stats(request.args.get("tenantId")))
