from __future__ import annotations

import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.tenancy import TenantScopedService
from ..common.validators import optional_text, parse_amount, parse_enum, require_email, require_non_empty
from ..core.enums import VendorStatus
from ..core.exceptions import ValidationError
from ..query import ListQuery, Page, QueryProfile
from ..store import CollectionStore
from .model import Customer, Vendor

logger = logging.getLogger(__name__)

CUSTOMER_PROFILE = QueryProfile(
    search_fields=("display_name", "company", "email", "first_name", "last_name"),
    default_sort_by="created_at",
    filterable=("is_active",),
    param_aliases={"isActive": "is_active"},
)

VENDOR_PROFILE = QueryProfile(
    search_fields=("name", "company", "email", "category"),
    default_sort_by="created_at",
    filterable=("status", "category"),
)


def _balance(value: Any, field_name: str) -> Decimal:
    amount = parse_amount(value, field_name)
    if amount is None:
        return Decimal("0.00")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount.quantize(Decimal("0.01"))


def _summary(records, *, is_active) -> dict:
    active = [r for r in records if is_active(r)]
    return {
        "total": len(records),
        "active": len(active),
        "inactive": len(records) - len(active),
        "open_balance": sum((r.open_balance for r in records), Decimal("0.00")),
    }


def _locked_fields(data: Mapping[str, Any], editable) -> None:
    locked = sorted(set(data) - set(editable))
    if locked:
        raise ValidationError(f"Fields cannot be updated: {', '.join(locked)}")


CUSTOMER_EDITABLE = (
    "first_name",
    "last_name",
    "company",
    "display_name",
    "email",
    "phone",
    "billing_address",
    "billing_city",
    "billing_state",
    "billing_zip_code",
    "billing_terms",
    "open_balance",
)


class CustomerService(TenantScopedService[Customer]):
    entity_name = "Customer"
    profile = CUSTOMER_PROFILE

    def __init__(self, store: CollectionStore[Customer], *, clock: Callable[[], datetime] = now_local):
        super().__init__(store, clock=clock)
        self._email_lock = threading.Lock()

    def _clean(self, tenant_id: str, data: Mapping[str, Any], *, current_id: Optional[str] = None) -> dict:
        company = require_non_empty(data.get("company"), "Company")
        email = require_email(data.get("email"))
        if any(c.email == email and c.id != current_id for c in self._owned(tenant_id)):
            raise ValidationError(f"A customer with email {email} already exists")

        return {
            "first_name": require_non_empty(data.get("first_name"), "First name"),
            "last_name": require_non_empty(data.get("last_name"), "Last name"),
            "company": company,
            "display_name": optional_text(data.get("display_name")) or company,
            "email": email,
            "phone": require_non_empty(data.get("phone"), "Phone"),
            "billing_address": require_non_empty(data.get("billing_address"), "Billing address"),
            "billing_city": optional_text(data.get("billing_city")),
            "billing_state": optional_text(data.get("billing_state")),
            "billing_zip_code": optional_text(data.get("billing_zip_code")),
            "billing_terms": optional_text(data.get("billing_terms")),
            "open_balance": _balance(data.get("open_balance"), "Open balance"),
        }

    def create_customer(self, tenant_id: str, data: Mapping[str, Any]) -> Customer:
        with self._email_lock:
            now = self._clock()
            customer = Customer(
                id=new_id(), tenant_id=tenant_id, created_at=now, updated_at=now, **self._clean(tenant_id, data)
            )
            self._store.insert(customer)
        logger.info("Customer %s created for tenant %s", customer.display_name, tenant_id)
        return customer

    def list_customers(self, tenant_id: str, query: Optional[ListQuery] = None) -> Page[Customer]:
        return self._list(tenant_id, query)

    def get_customer_by_id(self, customer_id: str, tenant_id: str) -> Optional[Customer]:
        return self._find(customer_id, tenant_id)

    def update_customer(self, customer_id: str, tenant_id: str, data: Mapping[str, Any]) -> Customer:
        existing = self._require(customer_id, tenant_id)
        _locked_fields(data, CUSTOMER_EDITABLE)

        merged = {name: getattr(existing, name) for name in CUSTOMER_EDITABLE}
        merged.update(data)
        with self._email_lock:
            return self._save(existing, **self._clean(tenant_id, merged, current_id=existing.id))

    def deactivate_customer(self, customer_id: str, tenant_id: str) -> Customer:
        customer = self._require(customer_id, tenant_id)
        return self._save(customer, is_active=False)

    def accounts_summary(self, tenant_id: str) -> dict:
        return _summary(self._owned(tenant_id), is_active=lambda c: c.is_active)


VENDOR_EDITABLE = (
    "name",
    "company",
    "email",
    "phone",
    "category",
    "address",
    "tax_id",
    "payment_terms",
    "credit_limit",
    "open_balance",
)


class VendorService(TenantScopedService[Vendor]):
    entity_name = "Vendor"
    profile = VENDOR_PROFILE

    @staticmethod
    def _clean(data: Mapping[str, Any]) -> dict:
        credit_limit = parse_amount(data.get("credit_limit"), "Credit limit")
        if credit_limit is not None and credit_limit < 0:
            raise ValidationError("Credit limit cannot be negative")

        return {
            "name": require_non_empty(data.get("name"), "Name"),
            "company": require_non_empty(data.get("company"), "Company"),
            "email": require_email(data.get("email")),
            "phone": require_non_empty(data.get("phone"), "Phone"),
            "category": require_non_empty(data.get("category"), "Category"),
            "address": optional_text(data.get("address")),
            "tax_id": optional_text(data.get("tax_id")),
            "payment_terms": optional_text(data.get("payment_terms")),
            "credit_limit": credit_limit,
            "open_balance": _balance(data.get("open_balance"), "Open balance"),
        }

    def create_vendor(self, tenant_id: str, data: Mapping[str, Any]) -> Vendor:
        now = self._clock()
        vendor = Vendor(
            id=new_id(),
            tenant_id=tenant_id,
            status=VendorStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            **self._clean(data),
        )
        self._store.insert(vendor)
        logger.info("Vendor %s created for tenant %s", vendor.name, tenant_id)
        return vendor

    def list_vendors(self, tenant_id: str, query: Optional[ListQuery] = None) -> Page[Vendor]:
        return self._list(tenant_id, query)

    def get_vendor_by_id(self, vendor_id: str, tenant_id: str) -> Optional[Vendor]:
        return self._find(vendor_id, tenant_id)

    def update_vendor(self, vendor_id: str, tenant_id: str, data: Mapping[str, Any]) -> Vendor:
        existing = self._require(vendor_id, tenant_id)
        _locked_fields(data, VENDOR_EDITABLE)

        merged = {name: getattr(existing, name) for name in VENDOR_EDITABLE}
        merged.update(data)
        return self._save(existing, **self._clean(merged))

    def set_vendor_status(self, vendor_id: str, tenant_id: str, status: Any) -> Vendor:
        vendor = self._require(vendor_id, tenant_id)
        return self._save(vendor, status=parse_enum(VendorStatus, status, "Status"))

    def accounts_summary(self, tenant_id: str) -> dict:
        return _summary(self._owned(tenant_id), is_active=lambda v: v.status == VendorStatus.ACTIVE)
