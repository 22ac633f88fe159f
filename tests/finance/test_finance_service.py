from __future__ import annotations

from decimal import Decimal

import pytest

from src.hr_suite.hr_suite.core.enums import VendorStatus
from src.hr_suite.hr_suite.core.exceptions import NotFoundError, ValidationError
from src.hr_suite.hr_suite.query import ListQuery

TENANT = "tenant-1"
OTHER_TENANT = "tenant-2"


def customer_data(**overrides):
    data = {
        "first_name": "Mary",
        "last_name": "Tan",
        "company": "Tan Trading Pte Ltd",
        "email": "mary@tantrading.example",
        "phone": "+65 6123 4567",
        "billing_address": "10 Anson Road",
        "open_balance": "1250",
    }
    data.update(overrides)
    return data


def vendor_data(**overrides):
    data = {
        "name": "John Doe",
        "company": "Doe Enterprises",
        "email": "johndoe@doeenterprises.com",
        "phone": "927-130-7110",
        "category": "Office Supplies",
        "credit_limit": 10000,
        "open_balance": "1883.55",
    }
    data.update(overrides)
    return data


@pytest.fixture
def customers(container):
    return container.customer_service


@pytest.fixture
def vendors(container):
    return container.vendor_service


# ----------------------------------------------------------------------
# Customers
# ----------------------------------------------------------------------
def test_create_customer(customers):
    customer = customers.create_customer(TENANT, customer_data())

    assert customer.display_name == "Tan Trading Pte Ltd"
    assert customer.open_balance == Decimal("1250.00")
    assert customer.is_active is True


def test_customer_email_is_unique_per_tenant(customers):
    customers.create_customer(TENANT, customer_data())

    with pytest.raises(ValidationError):
        customers.create_customer(TENANT, customer_data(email="MARY@tantrading.example"))
    assert customers.create_customer(OTHER_TENANT, customer_data()).tenant_id == OTHER_TENANT


@pytest.mark.parametrize(
    "overrides",
    [{"company": ""}, {"email": "mary"}, {"phone": None}, {"open_balance": "-5"}, {"open_balance": "lots"}],
)
def test_invalid_customer_is_rejected(customers, overrides):
    with pytest.raises(ValidationError):
        customers.create_customer(TENANT, customer_data(**overrides))


def test_update_customer_keeps_own_email(customers):
    customer = customers.create_customer(TENANT, customer_data())
    other = customers.create_customer(TENANT, customer_data(email="bob@example.com", company="Bob Co"))

    updated = customers.update_customer(customer.id, TENANT, {"billing_terms": "Net 30"})

    assert updated.billing_terms == "Net 30"
    assert updated.email == customer.email
    with pytest.raises(ValidationError):
        customers.update_customer(other.id, TENANT, {"email": customer.email})
    with pytest.raises(ValidationError):
        customers.update_customer(customer.id, TENANT, {"is_active": False})


def test_deactivate_customer_and_summary(customers):
    first = customers.create_customer(TENANT, customer_data())
    customers.create_customer(TENANT, customer_data(email="bob@example.com", open_balance="100.5"))

    customers.deactivate_customer(first.id, TENANT)

    assert customers.list_customers(TENANT, ListQuery(filters={"is_active": "true"})).total == 1
    assert customers.accounts_summary(TENANT) == {
        "total": 2,
        "active": 1,
        "inactive": 1,
        "open_balance": Decimal("1350.50"),
    }


def test_customer_of_other_tenant_is_hidden(customers):
    customer = customers.create_customer(TENANT, customer_data())

    assert customers.get_customer_by_id(customer.id, OTHER_TENANT) is None
    with pytest.raises(NotFoundError):
        customers.deactivate_customer(customer.id, OTHER_TENANT)


# ----------------------------------------------------------------------
# Vendors
# ----------------------------------------------------------------------
def test_create_vendor(vendors):
    vendor = vendors.create_vendor(TENANT, vendor_data())

    assert vendor.status == VendorStatus.ACTIVE
    assert vendor.credit_limit == Decimal("10000")
    assert vendor.open_balance == Decimal("1883.55")


@pytest.mark.parametrize("overrides", [{"name": ""}, {"category": None}, {"credit_limit": -1}, {"email": "x@"}])
def test_invalid_vendor_is_rejected(vendors, overrides):
    with pytest.raises(ValidationError):
        vendors.create_vendor(TENANT, vendor_data(**overrides))


def test_vendor_status_and_filters(vendors):
    supplies = vendors.create_vendor(TENANT, vendor_data())
    vendors.create_vendor(TENANT, vendor_data(name="Acme", category="Logistics", open_balance=None))

    vendors.set_vendor_status(supplies.id, TENANT, "inactive")

    assert vendors.list_vendors(TENANT, ListQuery(filters={"status": "active"})).items[0].name == "Acme"
    assert vendors.list_vendors(TENANT, ListQuery(search="logistics")).total == 1
    assert vendors.accounts_summary(TENANT)["inactive"] == 1
    with pytest.raises(ValidationError):
        vendors.set_vendor_status(supplies.id, TENANT, "archived")


def test_update_vendor(vendors, clock):
    vendor = vendors.create_vendor(TENANT, vendor_data())
    later = clock.advance(days=2)

    updated = vendors.update_vendor(vendor.id, TENANT, {"payment_terms": "Net 45"})

    assert updated.payment_terms == "Net 45"
    assert updated.updated_at == later
    with pytest.raises(NotFoundError):
        vendors.update_vendor(vendor.id, OTHER_TENANT, {"payment_terms": "Net 60"})
