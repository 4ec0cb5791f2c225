"""Query-string encoding for Griffin list endpoints.

Output is deterministic: required ``include[]`` parameters first, then
``sort`` (for collections that support it), then filters in the order their
fields are declared. Filters that were not supplied are omitted. Values that
can contain reserved characters (resource URLs, timestamps) are
percent-encoded; the bracketed keys are sent literally, as the API expects.
"""
from __future__ import annotations

from typing import List, Optional, Tuple
from urllib.parse import quote

from treasury_domain.griffin_models import (
    BankAccountListFilters,
    LegalPersonListFilters,
    PaymentListFilters,
)

from .errors import GriffinValidationError

__all__ = [
    "DEFAULT_SORT",
    "TRANSACTIONS_DEFAULT_LIMIT",
    "bank_accounts_query",
    "legal_persons_query",
    "payments_query",
    "payees_query",
    "transactions_query",
]

DEFAULT_SORT = "-created-at"
TRANSACTIONS_DEFAULT_LIMIT = 10
TRANSACTIONS_MAX_LIMIT = 100

_Params = List[Tuple[str, str]]


def _encoded(value: str) -> str:
    return quote(value, safe="")


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _render(params: _Params) -> str:
    return "&".join(f"{key}={value}" for key, value in params)


def _includes(*names: str) -> _Params:
    return [("include[]", name) for name in names]


def bank_accounts_query(filters: Optional[BankAccountListFilters] = None) -> str:
    f = filters or BankAccountListFilters()
    params = _includes("beneficiary", "owner")
    if f.filter_status is not None:
        params.append(("filter[account-status][in][]", f.filter_status))
    if f.filter_bank_product_type is not None:
        params.append(("filter[bank-product-type][in][]", f.filter_bank_product_type))
    if f.filter_pooled_funds is not None:
        params.append(("filter[pooled-funds][eq]", _flag(f.filter_pooled_funds)))
    if f.beneficiary_url is not None:
        params.append(("filter[beneficiary-url][eq]", _encoded(f.beneficiary_url)))
    if f.owner_url is not None:
        params.append(("filter[owner-url][eq]", _encoded(f.owner_url)))
    return _render(params)


def legal_persons_query(filters: Optional[LegalPersonListFilters] = None) -> str:
    f = filters or LegalPersonListFilters()
    params = _includes("latest-verification", "latest-risk-rating")
    params.append(("sort", f.sort or DEFAULT_SORT))
    if f.filter_application_status is not None:
        params.append(("filter[application-status][eq]", f.filter_application_status))
    return _render(params)


def payments_query(filters: Optional[PaymentListFilters] = None) -> str:
    f = filters or PaymentListFilters()
    params = _includes("bank-account", "latest-submission", "rejected-by", "created-by")
    params.append(("sort", f.sort or DEFAULT_SORT))
    if f.filter_payment_direction is not None:
        params.append(("filter[payment-direction][eq]", f.filter_payment_direction))
    if f.filter_rejected is not None:
        params.append(("filter[rejected][eq]", _flag(f.filter_rejected)))
    if f.filter_created_after is not None:
        params.append(("filter[created-at][gt]", _encoded(f.filter_created_after)))
    if f.filter_created_before is not None:
        params.append(("filter[created-at][lt]", _encoded(f.filter_created_before)))
    return _render(params)


def payees_query() -> str:
    return _render(_includes("cop-requests"))


def transactions_query(limit: int = TRANSACTIONS_DEFAULT_LIMIT) -> str:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise GriffinValidationError(f"limit must be an integer, got {limit!r}")
    if not 1 <= limit <= TRANSACTIONS_MAX_LIMIT:
        raise GriffinValidationError(
            f"limit must be between 1 and {TRANSACTIONS_MAX_LIMIT}, got {limit}"
        )
    return _render([("page[size]", str(limit))])
