"""Command-line entry point for the Griffin boundary operations.

    python -m treasury_orchestrator.cli list-bank-accounts --status open
    python -m treasury_orchestrator.cli create-and-submit-payment \\
        /v0/bank/accounts/ba.1 10.00 --scheme book-transfer --target-account-url /v0/bank/accounts/ba.2

Prints the operation result as JSON on stdout; logs go to stderr. Exits 1
when the operation failed.
"""
import argparse
import asyncio
import sys

from common.logging import configure_logging
from integrations.griffin.client import GriffinClient
from integrations.griffin.errors import GriffinError
from treasury_observability.metrics import maybe_start_http_server

from .operations import DEFAULT_ACCOUNT_NAME, GriffinOperations
from .results import OperationResult


def _drop_none(**kwargs):
    return {k: v for k, v in kwargs.items() if v is not None}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="griffin-orchestrator", description=__doc__.splitlines()[0])
    parser.add_argument("--log-format", choices=["text", "json"], default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    for name, arg in (
        ("get-bank-account", "account_url"),
        ("get-legal-person", "legal_person_url"),
        ("get-payment", "payment_url"),
        ("get-payee", "payee_url"),
        ("list-payees", "legal_person_url"),
    ):
        sub.add_parser(name).add_argument(arg)

    p = sub.add_parser("list-transactions")
    p.add_argument("account_url")
    p.add_argument("--limit", type=int, default=10)

    p = sub.add_parser("list-bank-accounts")
    p.add_argument("--status", choices=["open", "closed", "opening", "closing"])
    p.add_argument("--product-type")
    p.add_argument("--pooled-funds", action=argparse.BooleanOptionalAction, default=None)
    p.add_argument("--beneficiary-url")
    p.add_argument("--owner-url")

    p = sub.add_parser("list-legal-persons")
    p.add_argument("--application-status")
    p.add_argument("--sort")

    p = sub.add_parser("list-payments")
    p.add_argument("--direction", choices=["inbound-payment", "outbound-payment"])
    p.add_argument("--rejected", action=argparse.BooleanOptionalAction, default=None)
    p.add_argument("--created-after")
    p.add_argument("--created-before")
    p.add_argument("--sort")

    p = sub.add_parser("create-and-submit-payment")
    p.add_argument("source_account_url")
    p.add_argument("amount")
    p.add_argument("--scheme", required=True, choices=["fps", "book-transfer"])
    p.add_argument("--currency", default="GBP")
    p.add_argument("--reference")
    p.add_argument("--payee-url")
    p.add_argument("--target-account-url")
    p.add_argument("--account-holder")
    p.add_argument("--account-number")
    p.add_argument("--bank-id")

    p = sub.add_parser("open-operational-account")
    p.add_argument("--display-name", default=DEFAULT_ACCOUNT_NAME)

    return parser


async def dispatch(ops: GriffinOperations, args: argparse.Namespace) -> OperationResult:
    cmd = args.command
    if cmd == "get-bank-account":
        return await ops.get_bank_account(args.account_url)
    if cmd == "get-legal-person":
        return await ops.get_legal_person(args.legal_person_url)
    if cmd == "get-payment":
        return await ops.get_payment(args.payment_url)
    if cmd == "get-payee":
        return await ops.get_payee(args.payee_url)
    if cmd == "list-payees":
        return await ops.list_payees(args.legal_person_url)
    if cmd == "list-transactions":
        return await ops.list_transactions(args.account_url, args.limit)
    if cmd == "list-bank-accounts":
        return await ops.list_bank_accounts(**_drop_none(
            filter_status=args.status,
            filter_bank_product_type=args.product_type,
            filter_pooled_funds=args.pooled_funds,
            beneficiary_url=args.beneficiary_url,
            owner_url=args.owner_url,
        ))
    if cmd == "list-legal-persons":
        return await ops.list_legal_persons(**_drop_none(
            filter_application_status=args.application_status,
            sort=args.sort,
        ))
    if cmd == "list-payments":
        return await ops.list_payments(**_drop_none(
            filter_payment_direction=args.direction,
            filter_rejected=args.rejected,
            filter_created_after=args.created_after,
            filter_created_before=args.created_before,
            sort=args.sort,
        ))
    if cmd == "create-and-submit-payment":
        return await ops.create_and_submit_payment(
            args.source_account_url,
            args.amount,
            args.scheme,
            currency=args.currency,
            reference=args.reference,
            payee_url=args.payee_url,
            target_account_url=args.target_account_url,
            account_holder=args.account_holder,
            account_number=args.account_number,
            bank_id=args.bank_id,
        )
    if cmd == "open-operational-account":
        return await ops.open_operational_account(args.display_name)
    raise ValueError(f"unknown command {cmd}")


async def _run(args: argparse.Namespace) -> OperationResult:
    async with GriffinClient() as client:
        return await dispatch(GriffinOperations(client), args)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_format, service_name="griffin-orchestrator")
    maybe_start_http_server()
    try:
        result = asyncio.run(_run(args))
    except GriffinError as exc:
        # client construction (missing API key)
        result = OperationResult.failure(exc)
    print(result.to_json())
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
