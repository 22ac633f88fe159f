from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import VendorStatus


@dataclass(frozen=True)
class Customer:
    """Accounts receivable party."""

    id: str
    tenant_id: str
    first_name: str
    last_name: str
    company: str
    display_name: str
    email: str
    phone: str
    billing_address: str
    created_at: datetime
    updated_at: datetime
    billing_city: Optional[str] = None
    billing_state: Optional[str] = None
    billing_zip_code: Optional[str] = None
    billing_terms: Optional[str] = None
    open_balance: Decimal = Decimal("0.00")
    is_active: bool = True


@dataclass(frozen=True)
class Vendor:
    """Accounts payable party."""

    id: str
    tenant_id: str
    name: str
    company: str
    email: str
    phone: str
    category: str
    status: VendorStatus
    created_at: datetime
    updated_at: datetime
    address: Optional[str] = None
    tax_id: Optional[str] = None
    payment_terms: Optional[str] = None
    credit_limit: Optional[Decimal] = None
    open_balance: Decimal = Decimal("0.00")
