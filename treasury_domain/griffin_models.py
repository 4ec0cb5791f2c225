"""Pydantic DTOs for Griffin API resources, request bodies and list filters.

Wire names are kebab-case and exposed as aliases; Python code uses the
snake_case field names. Response models allow extra fields so anything the
API returns that is not modelled here is passed through untouched.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common.datetime import require_iso8601

__all__ = [
    "AccountStatus",
    "BankProductType",
    "PaymentScheme",
    "MonetaryAmount",
    "BankAccount",
    "LegalPerson",
    "Payment",
    "Payee",
    "Submission",
    "Transaction",
    "GriffinIndex",
    "PayeeCreditor",
    "GriffinAccountCreditor",
    "UkDomesticCreditor",
    "Creditor",
    "CreatePaymentRequest",
    "SubmitPaymentRequest",
    "OpenAccountRequest",
    "BankAccountPage",
    "LegalPersonPage",
    "PaymentPage",
    "PayeePage",
    "TransactionPage",
    "BankAccountListFilters",
    "LegalPersonListFilters",
    "PaymentListFilters",
]

AccountStatus = Literal["opening", "open", "closing", "closed"]
BankProductType = Literal[
    "savings-account",
    "client-money-account",
    "safeguarding-account",
    "embedded-account",
    "operational-account",
]
ApplicationStatus = Literal["referred", "errored", "declined", "submitted", "accepted"]
PaymentDirection = Literal["inbound-payment", "outbound-payment"]
PaymentScheme = Literal["fps", "book-transfer"]


class _Resource(BaseModel):
    """Snapshot of a remote resource; unknown fields are kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class _Body(BaseModel):
    """Request body sent to the API; unknown fields are a programming error."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class MonetaryAmount(_Body):
    # also parsed out of responses, which may carry more keys
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    currency: str = Field(min_length=3, max_length=3)
    # decimal string passed through verbatim; the API validates it
    value: str


class Links(_Resource):
    prev: Optional[str] = None
    next: Optional[str] = None


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class GriffinIndex(_Resource):
    organization_url: str = Field(alias="organization-url")
    api_key_url: Optional[str] = Field(default=None, alias="api-key-url")


class BankAccount(_Resource):
    account_url: str = Field(alias="account-url")
    # plain str: a status this code does not know about must still parse
    account_status: str = Field(alias="account-status")
    display_name: Optional[str] = Field(default=None, alias="display-name")
    bank_product_type: Optional[str] = Field(default=None, alias="bank-product-type")


class LegalPerson(_Resource):
    legal_person_url: str = Field(alias="legal-person-url")
    display_name: Optional[str] = Field(default=None, alias="display-name")
    application_status: Optional[str] = Field(default=None, alias="application-status")


class Payment(_Resource):
    payment_url: str = Field(alias="payment-url")
    payment_direction: Optional[str] = Field(default=None, alias="payment-direction")
    payment_amount: Optional[MonetaryAmount] = Field(default=None, alias="payment-amount")
    payment_reference: Optional[str] = Field(default=None, alias="payment-reference")


class Payee(_Resource):
    payee_url: str = Field(alias="payee-url")
    account_holder: Optional[str] = Field(default=None, alias="account-holder")
    account_number: Optional[str] = Field(default=None, alias="account-number")
    bank_id: Optional[str] = Field(default=None, alias="bank-id")
    payee_status: Optional[str] = Field(default=None, alias="payee-status")


class Submission(_Resource):
    submission_url: str = Field(alias="submission-url")
    submission_status: Optional[str] = Field(default=None, alias="submission-status")
    payment_url: Optional[str] = Field(default=None, alias="payment-url")
    submission_scheme_information: Optional[Dict[str, Any]] = Field(
        default=None, alias="submission-scheme-information"
    )


class Transaction(_Resource):
    account_transaction_url: str = Field(alias="account-transaction-url")
    balance_change_direction: Optional[str] = Field(default=None, alias="balance-change-direction")
    balance_change: Optional[MonetaryAmount] = Field(default=None, alias="balance-change")


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


class _Page(_Resource):
    links: Links = Field(default_factory=Links)
    included: Optional[Dict[str, Any]] = None


class BankAccountPage(_Page):
    accounts: List[BankAccount] = Field(default_factory=list)


class LegalPersonPage(_Page):
    legal_persons: List[LegalPerson] = Field(default_factory=list, alias="legal-persons")


class PaymentPage(_Page):
    payments: List[Payment] = Field(default_factory=list)


class PayeePage(_Page):
    payees: List[Payee] = Field(default_factory=list)


class TransactionPage(_Page):
    account_transactions: List[Transaction] = Field(
        default_factory=list, alias="account-transactions"
    )


# ---------------------------------------------------------------------------
# Creditor: exactly one variant per payment, tagged by ``creditor-type``
# ---------------------------------------------------------------------------


class PayeeCreditor(_Body):
    creditor_type: Literal["payee"] = Field(default="payee", alias="creditor-type")
    payee_url: str = Field(alias="payee-url")


class GriffinAccountCreditor(_Body):
    creditor_type: Literal["griffin-bank-account"] = Field(
        default="griffin-bank-account", alias="creditor-type"
    )
    account_url: str = Field(alias="account-url")


class UkDomesticCreditor(_Body):
    creditor_type: Literal["uk-domestic"] = Field(default="uk-domestic", alias="creditor-type")
    account_holder: str = Field(alias="account-holder")
    account_number: str = Field(alias="account-number")
    account_number_code: Literal["bban"] = Field(default="bban", alias="account-number-code")
    bank_id: str = Field(alias="bank-id")
    bank_id_code: Literal["gbdsc"] = Field(default="gbdsc", alias="bank-id-code")


Creditor = Annotated[
    Union[PayeeCreditor, GriffinAccountCreditor, UkDomesticCreditor],
    Field(discriminator="creditor_type"),
]


class CreatePaymentRequest(_Body):
    creditor: Creditor
    payment_amount: MonetaryAmount = Field(alias="payment-amount")
    payment_reference: Optional[str] = Field(default=None, alias="payment-reference")


class SubmitPaymentRequest(_Body):
    payment_scheme: PaymentScheme = Field(alias="payment-scheme")


class OpenAccountRequest(_Body):
    display_name: str = Field(alias="display-name")
    bank_product_type: BankProductType = Field(alias="bank-product-type")


# ---------------------------------------------------------------------------
# List filters (None = not sent)
# ---------------------------------------------------------------------------


class _Filters(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class BankAccountListFilters(_Filters):
    filter_status: Optional[AccountStatus] = None
    filter_bank_product_type: Optional[BankProductType] = None
    filter_pooled_funds: Optional[bool] = None
    beneficiary_url: Optional[str] = None
    owner_url: Optional[str] = None


class LegalPersonListFilters(_Filters):
    filter_application_status: Optional[ApplicationStatus] = None
    sort: Optional[
        Literal["-status-changed-at", "status-changed-at", "-created-at", "created-at"]
    ] = None


class PaymentListFilters(_Filters):
    filter_payment_direction: Optional[PaymentDirection] = None
    filter_rejected: Optional[bool] = None
    filter_created_after: Optional[str] = None
    filter_created_before: Optional[str] = None
    sort: Optional[Literal["-created-at", "created-at"]] = None

    @field_validator("filter_created_after", "filter_created_before")
    @classmethod
    def _iso_timestamp(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return require_iso8601(value)
