"""Create-and-submit payment workflow.

Validating -> Creating -> Submitting -> Done. Any step can fail; later steps
then never run. The two POSTs are not atomic: if submission fails, the payment
already exists upstream without a submission. It is logged and left as is
(no retry, no delete) and the submission error goes back to the caller.
"""
from __future__ import annotations

import logging
from typing import Callable, List

from integrations.griffin.client import GriffinClient
from integrations.griffin.errors import GriffinError, GriffinValidationError
from treasury_domain.griffin_models import (
    CreatePaymentRequest,
    Creditor,
    GriffinAccountCreditor,
    PayeeCreditor,
    UkDomesticCreditor,
)
from treasury_observability.metrics import griffin_payments_total

from .models import PaymentInstruction, PaymentOutcome

__all__ = ["PaymentOrchestrator", "resolve_creditor", "TARGET_ERROR"]

_LOG = logging.getLogger(__name__)

TARGET_ERROR = (
    "You must specify exactly one payment target: payee_url, target_account_url, "
    "or complete external account details (account_holder, account_number and bank_id)"
)


def _given(*values) -> bool:
    return all(v is not None and v != "" for v in values)


def resolve_creditor(instruction: PaymentInstruction) -> Creditor:
    """Pick the creditor variant from the one complete target group.

    Raises :class:`GriffinValidationError` when no group, or more than one,
    is complete.
    """
    i = instruction
    candidates: List[Callable[[], Creditor]] = []
    if _given(i.payee_url):
        candidates.append(lambda: PayeeCreditor(payee_url=i.payee_url))
    if _given(i.target_account_url):
        candidates.append(lambda: GriffinAccountCreditor(account_url=i.target_account_url))
    if _given(i.account_holder, i.account_number, i.bank_id):
        candidates.append(
            lambda: UkDomesticCreditor(
                account_holder=i.account_holder,
                account_number=i.account_number,
                bank_id=i.bank_id,
            )
        )
    if len(candidates) != 1:
        raise GriffinValidationError(TARGET_ERROR)
    return candidates[0]()


class PaymentOrchestrator:
    def __init__(self, client: GriffinClient) -> None:
        self.client = client

    async def create_and_submit(self, instruction: PaymentInstruction) -> PaymentOutcome:
        try:
            creditor = resolve_creditor(instruction)
        except GriffinValidationError:
            griffin_payments_total.labels("validate", "error").inc()
            raise

        request = CreatePaymentRequest(
            creditor=creditor,
            payment_amount=instruction.amount,
            payment_reference=instruction.reference or None,
        )

        try:
            payment = await self.client.create_payment(instruction.source_account_url, request)
        except GriffinError:
            griffin_payments_total.labels("create", "error").inc()
            raise
        griffin_payments_total.labels("create", "ok").inc()
        _LOG.info(
            "Created %s payment %s",
            creditor.creditor_type,
            payment.payment_url,
            extra={"account_url": instruction.source_account_url, "payment_url": payment.payment_url},
        )

        try:
            submission = await self.client.submit_payment(payment.payment_url, instruction.payment_scheme)
        except GriffinError as exc:
            griffin_payments_total.labels("submit", "error").inc()
            _LOG.warning(
                "Payment %s created but not submitted: %s",
                payment.payment_url,
                exc,
                extra={"payment_url": payment.payment_url},
            )
            raise
        griffin_payments_total.labels("submit", "ok").inc()

        return PaymentOutcome(payment=payment, submission=submission)
