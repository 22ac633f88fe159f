from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import current_app, g, jsonify, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..query import ListQuery, Page, QueryProfile
from .serialization import to_jsonable


@dataclass(frozen=True)
class Identity:
    """Caller identity resolved upstream and forwarded in request headers."""

    user_id: str
    tenant_id: str
    organization_id: str
    role: Role


def current_identity() -> Identity:
    user_id = request.headers.get("X-User-Id")
    tenant_id = request.headers.get("X-Tenant-Id")
    if not user_id or not tenant_id:
        raise AuthenticationError("Authentication required")

    role_s = request.headers.get("X-User-Role") or Role.EMPLOYEE.value
    try:
        role = Role(role_s)
    except ValueError:
        raise AuthorizationError("Unknown role")

    return Identity(
        user_id=user_id,
        tenant_id=tenant_id,
        organization_id=request.headers.get("X-Organization-Id") or tenant_id,
        role=role,
    )


def roles_required(*roles: Role):
    """Route guard: resolve the caller and check the role allow-list.

    With no roles given any authenticated caller passes. The identity is left
    on ``flask.g.identity``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if roles and identity.role not in roles:
                raise AuthorizationError("Insufficient permissions")
            g.identity = identity
            return view(*args, **kwargs)

        return wrapper

    return decorator


login_required = roles_required()


def list_query(profile: QueryProfile) -> ListQuery:
    return ListQuery.from_args(
        request.args,
        profile,
        default_limit=int(current_app.config["DEFAULT_PAGE_LIMIT"]),
        max_limit=int(current_app.config["MAX_PAGE_LIMIT"]),
    )


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(data: Any = None, status: int = 200, **extra: Any):
    payload = {"success": True, "data": to_jsonable(data)}
    payload.update({k: to_jsonable(v) for k, v in extra.items()})
    return jsonify(payload), status


def page_response(page: Page):
    return ok(page.items, pagination=page.pagination())
