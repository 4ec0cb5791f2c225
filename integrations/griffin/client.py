"""Async resource client for the Griffin API.

Resources are addressed by the URLs the API hands back (``account-url``,
``payment-url`` ...), never by client-built IDs. Organization-scoped
collections hang off the organization URL, which is looked up from the API
index once per client instance and then reused.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from treasury_domain.griffin_models import (
    BankAccount,
    BankAccountListFilters,
    BankAccountPage,
    CreatePaymentRequest,
    GriffinIndex,
    LegalPerson,
    LegalPersonListFilters,
    LegalPersonPage,
    OpenAccountRequest,
    Payee,
    PayeePage,
    Payment,
    PaymentListFilters,
    PaymentPage,
    PaymentScheme,
    Submission,
    SubmitPaymentRequest,
    TransactionPage,
)

from . import BASE_URL, INDEX_PATH
from . import query
from .errors import GriffinResponseError
from .http import GriffinHTTP

__all__ = ["GriffinClient"]

_LOG = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], data: object) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise GriffinResponseError(
            f"Unexpected {model.__name__} response from Griffin: {exc}"
        ) from exc


class _OnceCell(Generic[T]):
    """Async compute-once value.

    Concurrent first callers wait on the same computation; a failed
    computation leaves the cell empty so the next caller tries again.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        self._factory = factory
        self._lock = asyncio.Lock()
        self._value: Optional[T] = None
        self._ready = False

    async def get(self) -> T:
        if self._ready:
            return self._value  # type: ignore[return-value]
        async with self._lock:
            if not self._ready:
                self._value = await self._factory()
                self._ready = True
        return self._value  # type: ignore[return-value]


class GriffinClient:
    def __init__(
        self,
        http: Optional[GriffinHTTP] = None,
        *,
        api_key: Optional[str] = None,
        base_url: str = BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        # allow external http (for mocking)
        self._own_http = http is None
        self.http = http or GriffinHTTP(api_key=api_key, base_url=base_url, transport=transport)
        self._organization_url: _OnceCell[str] = _OnceCell(self._lookup_organization_url)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self) -> None:
        # an injected GriffinHTTP belongs to the caller
        if self._own_http:
            await self.http.aclose()

    # ---------------------------------------------------------------------
    # Organization context
    # ---------------------------------------------------------------------

    async def _lookup_organization_url(self) -> str:
        index = await self.get_index()
        _LOG.info("Resolved organization url %s", index.organization_url)
        return index.organization_url

    async def _get(self, model: type[M], url: str) -> M:
        return _parse(model, await self.http.fetch(url))

    async def organization_url(self) -> str:
        """Return the organization URL, hitting the index only the first time."""
        return await self._organization_url.get()

    # ---------------------------------------------------------------------
    # Single resources
    # ---------------------------------------------------------------------

    async def get_index(self) -> GriffinIndex:
        return await self._get(GriffinIndex, INDEX_PATH)

    async def get_bank_account(self, account_url: str) -> BankAccount:
        return await self._get(BankAccount, account_url)

    async def get_legal_person(self, legal_person_url: str) -> LegalPerson:
        return await self._get(LegalPerson, legal_person_url)

    async def get_payment(self, payment_url: str) -> Payment:
        return await self._get(Payment, payment_url)

    async def get_payee(self, payee_url: str) -> Payee:
        return await self._get(Payee, payee_url)

    # ---------------------------------------------------------------------
    # Collections
    # ---------------------------------------------------------------------

    async def list_transactions(
        self, account_url: str, limit: int = query.TRANSACTIONS_DEFAULT_LIMIT
    ) -> TransactionPage:
        endpoint = f"{account_url}/transactions?{query.transactions_query(limit)}"
        return await self._get(TransactionPage, endpoint)

    async def list_bank_accounts(
        self, filters: Optional[BankAccountListFilters] = None
    ) -> BankAccountPage:
        org = await self.organization_url()
        endpoint = f"{org}/bank/accounts?{query.bank_accounts_query(filters)}"
        return await self._get(BankAccountPage, endpoint)

    async def list_legal_persons(
        self, filters: Optional[LegalPersonListFilters] = None
    ) -> LegalPersonPage:
        org = await self.organization_url()
        endpoint = f"{org}/legal-persons?{query.legal_persons_query(filters)}"
        return await self._get(LegalPersonPage, endpoint)

    async def list_payments(self, filters: Optional[PaymentListFilters] = None) -> PaymentPage:
        org = await self.organization_url()
        endpoint = f"{org}/payments?{query.payments_query(filters)}"
        return await self._get(PaymentPage, endpoint)

    async def list_payees(self, legal_person_url: str) -> PayeePage:
        endpoint = f"{legal_person_url}/bank/payees?{query.payees_query()}"
        return await self._get(PayeePage, endpoint)

    # ---------------------------------------------------------------------
    # Writes (never retried)
    # ---------------------------------------------------------------------

    async def create_payment(self, source_account_url: str, request: CreatePaymentRequest) -> Payment:
        data = await self.http.fetch(f"{source_account_url}/payments", "POST", request.to_wire())
        return _parse(Payment, data)

    async def submit_payment(self, payment_url: str, payment_scheme: PaymentScheme) -> Submission:
        body = SubmitPaymentRequest(payment_scheme=payment_scheme).to_wire()
        data = await self.http.fetch(f"{payment_url}/submissions", "POST", body)
        return _parse(Submission, data)

    async def open_account(self, display_name: str, bank_product_type: str) -> BankAccount:
        org = await self.organization_url()
        body = OpenAccountRequest(
            display_name=display_name, bank_product_type=bank_product_type
        ).to_wire()
        data = await self.http.fetch(f"{org}/bank/accounts", "POST", body)
        return _parse(BankAccount, data)
