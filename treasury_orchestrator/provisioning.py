"""Operational account provisioning.

Opening an account returns immediately with ``account-status: opening``; the
account becomes usable a moment later. The provisioner polls at a fixed
interval until the status changes or the deadline passes. A deadline expiry
or a failed poll returns the latest known snapshot, since the account itself
was created.

Any status other than ``opening`` ends the poll, ``closing``/``closed``
included.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

from integrations.griffin import OPERATIONAL_ACCOUNT, POLL_INTERVAL, POLL_TIMEOUT
from integrations.griffin.client import GriffinClient
from integrations.griffin.errors import GriffinError
from treasury_domain.griffin_models import BankAccount
from treasury_observability.metrics import griffin_account_polls_total

__all__ = ["AccountProvisioner", "OPENING"]

_LOG = logging.getLogger(__name__)

OPENING = "opening"


class AccountProvisioner:
    def __init__(
        self,
        client: GriffinClient,
        *,
        poll_interval: float = POLL_INTERVAL,
        timeout: float = POLL_TIMEOUT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock

    async def open_operational_account(self, display_name: str) -> BankAccount:
        """Open an operational account and wait (bounded) for it to leave ``opening``.

        Errors from the create request propagate; errors while polling do not.
        """
        account = await self.client.open_account(display_name, OPERATIONAL_ACCOUNT)
        _LOG.info(
            "Opened operational account %s (%s)",
            account.account_url,
            account.account_status,
            extra={"account_url": account.account_url},
        )
        return await self._wait_while_opening(account)

    async def _wait_while_opening(self, account: BankAccount) -> BankAccount:
        started = self._clock()
        polls = 0
        while account.account_status == OPENING:
            if self._clock() - started >= self.timeout:
                _LOG.warning(
                    "Account %s still opening after %d polls; returning last snapshot",
                    account.account_url,
                    polls,
                    extra={"account_url": account.account_url},
                )
                griffin_account_polls_total.labels("timeout").inc()
                return account
            await self._sleep(self.poll_interval)
            try:
                account = await self.client.get_bank_account(account.account_url)
            except GriffinError as exc:
                _LOG.error(
                    "Error polling account %s: %s",
                    account.account_url,
                    exc,
                    extra={"account_url": account.account_url},
                )
                griffin_account_polls_total.labels("poll_error").inc()
                return account
            polls += 1

        griffin_account_polls_total.labels("settled").inc()
        _LOG.info(
            "Account %s is %s after %d polls",
            account.account_url,
            account.account_status,
            polls,
            extra={"account_url": account.account_url},
        )
        return account
