from __future__ import annotations

from flask import Flask, g

from ..common.http import json_body, list_query, ok, page_response, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .service import CUSTOMER_PROFILE, VENDOR_PROFILE

FINANCE = (Role.FINANCE_MANAGER, Role.ADMIN)


def register(app: Flask, container: Container) -> None:
    customers = container.customer_service
    vendors = container.vendor_service

    # Accounts receivable
    @app.route("/api/finance/customers", methods=["GET"], endpoint="list_customers")
    @roles_required(*FINANCE)
    def list_customers():
        return page_response(customers.list_customers(g.identity.tenant_id, list_query(CUSTOMER_PROFILE)))

    @app.route("/api/finance/customers", methods=["POST"], endpoint="create_customer")
    @roles_required(*FINANCE)
    def create_customer():
        return ok(customers.create_customer(g.identity.tenant_id, json_body()), 201)

    @app.route("/api/finance/customers/summary", methods=["GET"], endpoint="customers_summary")
    @roles_required(*FINANCE)
    def customers_summary():
        return ok(customers.accounts_summary(g.identity.tenant_id))

    @app.route("/api/finance/customers/<customer_id>", methods=["GET"], endpoint="get_customer")
    @roles_required(*FINANCE)
    def get_customer(customer_id: str):
        customer = customers.get_customer_by_id(customer_id, g.identity.tenant_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return ok(customer)

    @app.route("/api/finance/customers/<customer_id>", methods=["PUT"], endpoint="update_customer")
    @roles_required(*FINANCE)
    def update_customer(customer_id: str):
        return ok(customers.update_customer(customer_id, g.identity.tenant_id, json_body()))

    @app.route("/api/finance/customers/<customer_id>/deactivate", methods=["POST"], endpoint="deactivate_customer")
    @roles_required(*FINANCE)
    def deactivate_customer(customer_id: str):
        return ok(customers.deactivate_customer(customer_id, g.identity.tenant_id))

    # Accounts payable
    @app.route("/api/finance/vendors", methods=["GET"], endpoint="list_vendors")
    @roles_required(*FINANCE)
    def list_vendors():
        return page_response(vendors.list_vendors(g.identity.tenant_id, list_query(VENDOR_PROFILE)))

    @app.route("/api/finance/vendors", methods=["POST"], endpoint="create_vendor")
    @roles_required(*FINANCE)
    def create_vendor():
        return ok(vendors.create_vendor(g.identity.tenant_id, json_body()), 201)

    @app.route("/api/finance/vendors/summary", methods=["GET"], endpoint="vendors_summary")
    @roles_required(*FINANCE)
    def vendors_summary():
        return ok(vendors.accounts_summary(g.identity.tenant_id))

    @app.route("/api/finance/vendors/<vendor_id>", methods=["GET"], endpoint="get_vendor")
    @roles_required(*FINANCE)
    def get_vendor(vendor_id: str):
        vendor = vendors.get_vendor_by_id(vendor_id, g.identity.tenant_id)
        if vendor is None:
            raise NotFoundError("Vendor not found")
        return ok(vendor)

    @app.route("/api/finance/vendors/<vendor_id>", methods=["PUT"], endpoint="update_vendor")
    @roles_required(*FINANCE)
    def update_vendor(vendor_id: str):
        return ok(vendors.update_vendor(vendor_id, g.identity.tenant_id, json_body()))

    @app.route("/api/finance/vendors/<vendor_id>/status", methods=["POST"], endpoint="set_vendor_status")
    @roles_required(*FINANCE)
    def set_vendor_status(vendor_id: str):
        return ok(vendors.set_vendor_status(vendor_id, g.identity.tenant_id, json_body().get("status")))
