"""Data models for the treasury orchestrator workflows."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from treasury_domain.griffin_models import MonetaryAmount, Payment, PaymentScheme, Submission


class PaymentInstruction(BaseModel):
    """Caller input for create-and-submit.

    Exactly one payment target must be complete: ``payee_url``,
    ``target_account_url``, or all of ``account_holder`` / ``account_number`` /
    ``bank_id``. That rule is checked by the orchestrator, not here, so the
    caller gets a single clear message.
    """
    model_config = ConfigDict(extra="forbid")

    source_account_url: str
    amount: MonetaryAmount
    payment_scheme: PaymentScheme
    reference: Optional[str] = None

    payee_url: Optional[str] = None
    target_account_url: Optional[str] = None

    account_holder: Optional[str] = None
    account_number: Optional[str] = None
    bank_id: Optional[str] = None


class PaymentOutcome(BaseModel):
    """Both artifacts of a completed create-and-submit."""
    payment: Payment
    submission: Submission
