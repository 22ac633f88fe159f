from __future__ import annotations

from flask import Flask, g

from ..common.http import json_body, list_query, login_required, ok, page_response, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .service import EMPLOYEE_PROFILE

HR_STAFF = (Role.HR_MANAGER, Role.ADMIN)


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        return page_response(service.list_employees(g.identity.tenant_id, list_query(EMPLOYEE_PROFILE)))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @roles_required(*HR_STAFF)
    def create_employee():
        employee = service.create_employee(g.identity.tenant_id, json_body())
        return ok(employee, 201, message="Employee created successfully")

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: str):
        employee = service.get_employee_by_id(employee_id, g.identity.tenant_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        return ok(employee)

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @roles_required(*HR_STAFF)
    def update_employee(employee_id: str):
        return ok(service.update_employee(employee_id, g.identity.tenant_id, json_body()))

    @app.route("/api/employees/<employee_id>/terminate", methods=["POST"], endpoint="terminate_employee")
    @roles_required(*HR_STAFF)
    def terminate_employee(employee_id: str):
        return ok(service.terminate_employee(employee_id, g.identity.tenant_id))
