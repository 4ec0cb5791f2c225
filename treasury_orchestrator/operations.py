"""Boundary operations: one coroutine per externally invocable operation.

Each returns an :class:`OperationResult`; Griffin and input-validation
failures never escape as exceptions. This is the surface a tool-calling
layer or the CLI binds to.
"""
from __future__ import annotations

from typing import Any, Optional

from integrations.griffin import DEFAULT_CURRENCY
from integrations.griffin.client import GriffinClient
from integrations.griffin.query import TRANSACTIONS_DEFAULT_LIMIT
from treasury_domain.griffin_models import (
    BankAccountListFilters,
    LegalPersonListFilters,
    MonetaryAmount,
    PaymentListFilters,
)

from .models import PaymentInstruction
from .payments import PaymentOrchestrator
from .provisioning import AccountProvisioner
from .results import OperationResult, run_operation

__all__ = ["GriffinOperations", "DEFAULT_ACCOUNT_NAME"]

DEFAULT_ACCOUNT_NAME = "Operational Account"


class GriffinOperations:
    def __init__(
        self,
        client: GriffinClient,
        *,
        payments: Optional[PaymentOrchestrator] = None,
        provisioner: Optional[AccountProvisioner] = None,
    ) -> None:
        self.client = client
        self.payments = payments or PaymentOrchestrator(client)
        self.provisioner = provisioner or AccountProvisioner(client)

    # --- single resources ---------------------------------------------------

    async def get_bank_account(self, account_url: str) -> OperationResult:
        return await run_operation("get-bank-account", lambda: self.client.get_bank_account(account_url))

    async def get_legal_person(self, legal_person_url: str) -> OperationResult:
        return await run_operation("get-legal-person", lambda: self.client.get_legal_person(legal_person_url))

    async def get_payment(self, payment_url: str) -> OperationResult:
        return await run_operation("get-payment", lambda: self.client.get_payment(payment_url))

    async def get_payee(self, payee_url: str) -> OperationResult:
        return await run_operation("get-payee", lambda: self.client.get_payee(payee_url))

    # --- collections --------------------------------------------------------

    async def list_transactions(
        self, account_url: str, limit: int = TRANSACTIONS_DEFAULT_LIMIT
    ) -> OperationResult:
        return await run_operation(
            "list-transactions", lambda: self.client.list_transactions(account_url, limit)
        )

    async def list_bank_accounts(self, **filters: Any) -> OperationResult:
        return await run_operation(
            "list-bank-accounts",
            lambda: self.client.list_bank_accounts(BankAccountListFilters(**filters)),
        )

    async def list_legal_persons(self, **filters: Any) -> OperationResult:
        return await run_operation(
            "list-legal-persons",
            lambda: self.client.list_legal_persons(LegalPersonListFilters(**filters)),
        )

    async def list_payments(self, **filters: Any) -> OperationResult:
        return await run_operation(
            "list-payments",
            lambda: self.client.list_payments(PaymentListFilters(**filters)),
        )

    async def list_payees(self, legal_person_url: str) -> OperationResult:
        return await run_operation("list-payees", lambda: self.client.list_payees(legal_person_url))

    # --- workflows ----------------------------------------------------------

    async def create_and_submit_payment(
        self,
        source_account_url: str,
        amount: str,
        payment_scheme: str,
        *,
        currency: str = DEFAULT_CURRENCY,
        reference: Optional[str] = None,
        payee_url: Optional[str] = None,
        target_account_url: Optional[str] = None,
        account_holder: Optional[str] = None,
        account_number: Optional[str] = None,
        bank_id: Optional[str] = None,
    ) -> OperationResult:
        def _call():
            instruction = PaymentInstruction(
                source_account_url=source_account_url,
                amount=MonetaryAmount(currency=currency, value=amount),
                payment_scheme=payment_scheme,
                reference=reference,
                payee_url=payee_url,
                target_account_url=target_account_url,
                account_holder=account_holder,
                account_number=account_number,
                bank_id=bank_id,
            )
            return self.payments.create_and_submit(instruction)

        return await run_operation("create-and-submit-payment", _call)

    async def open_operational_account(self, display_name: str = DEFAULT_ACCOUNT_NAME) -> OperationResult:
        return await run_operation(
            "open-operational-account",
            lambda: self.provisioner.open_operational_account(display_name or DEFAULT_ACCOUNT_NAME),
        )
