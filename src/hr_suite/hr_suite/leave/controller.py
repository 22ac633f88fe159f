from __future__ import annotations

from flask import Flask, g

from ..common.http import json_body, list_query, login_required, ok, page_response, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .service import LEAVE_PROFILE

APPROVERS = (Role.ADMIN, Role.HR_MANAGER, Role.SUPERVISOR)


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leave", methods=["GET"], endpoint="list_leave")
    @roles_required(*APPROVERS)
    def list_leave():
        return page_response(service.list_leave_requests(g.identity.tenant_id, list_query(LEAVE_PROFILE)))

    @app.route("/api/leave", methods=["POST"], endpoint="apply_leave")
    @login_required
    def apply_leave():
        request = service.apply_leave(g.identity.tenant_id, json_body())
        return ok(request, 201, message="Leave request submitted")

    @app.route("/api/leave/summary", methods=["GET"], endpoint="leave_summary")
    @roles_required(*APPROVERS)
    def leave_summary():
        return ok(service.leave_summary(g.identity.tenant_id))

    @app.route("/api/leave/<request_id>", methods=["GET"], endpoint="get_leave")
    @roles_required(*APPROVERS)
    def get_leave(request_id: str):
        request = service.get_leave_request_by_id(request_id, g.identity.tenant_id)
        if request is None:
            raise NotFoundError("Leave request not found")
        return ok(request)

    @app.route("/api/leave/<request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @roles_required(*APPROVERS)
    def approve_leave(request_id: str):
        note = json_body().get("note")
        return ok(service.approve_leave(request_id, g.identity.tenant_id, g.identity.user_id, note))

    @app.route("/api/leave/<request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @roles_required(*APPROVERS)
    def reject_leave(request_id: str):
        note = json_body().get("note")
        return ok(service.reject_leave(request_id, g.identity.tenant_id, g.identity.user_id, note))
