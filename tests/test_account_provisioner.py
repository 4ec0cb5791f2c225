import httpx
import pytest

from conftest import ORG_URL
from integrations.griffin.errors import GriffinAPIError
from treasury_orchestrator.provisioning import AccountProvisioner

ACCOUNTS_PATH = f"{ORG_URL}/bank/accounts"
ACCOUNT_URL = "/v0/bank/accounts/ba.new"


def _account(status):
    return {
        "account-url": ACCOUNT_URL,
        "account-status": status,
        "display-name": "Ops",
        "bank-product-type": "operational-account",
    }


class FakeClock:
    """Monotonic clock that only moves when the provisioner sleeps."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def _provisioner(client, clock):
    return AccountProvisioner(client, poll_interval=1, timeout=10, sleep=clock.sleep, clock=clock)


@pytest.mark.anyio
async def test_already_open_account_is_not_polled(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (200, _account("open")))
    clock = FakeClock()

    account = await _provisioner(client, clock).open_operational_account("Ops")

    assert account.account_status == "open"
    assert fake_api.calls("GET", ACCOUNT_URL) == []
    assert clock.sleeps == []


@pytest.mark.anyio
async def test_polls_until_open(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (200, _account("opening")))
    fake_api.add("GET", ACCOUNT_URL, (200, _account("opening")), (200, _account("opening")), (200, _account("open")))
    clock = FakeClock()

    account = await _provisioner(client, clock).open_operational_account("Ops")

    assert account.account_status == "open"
    assert len(fake_api.calls("GET", ACCOUNT_URL)) == 3
    assert clock.sleeps == [1, 1, 1]
    # create strictly before every poll
    assert fake_api.requests[1].method == "POST"


@pytest.mark.anyio
async def test_create_request_body(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (200, _account("open")))

    await _provisioner(client, FakeClock()).open_operational_account("Ops")

    body = fake_api.calls("POST", ACCOUNTS_PATH)[0].read()
    assert b'"bank-product-type"' in body and b'"operational-account"' in body


@pytest.mark.anyio
async def test_deadline_returns_still_opening_snapshot(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (200, _account("opening")))
    fake_api.add("GET", ACCOUNT_URL, (200, _account("opening")))
    clock = FakeClock()

    account = await _provisioner(client, clock).open_operational_account("Ops")

    assert account.account_status == "opening"
    assert len(fake_api.calls("GET", ACCOUNT_URL)) == 10
    assert clock.now == 10


@pytest.mark.anyio
async def test_poll_error_returns_last_good_snapshot(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (200, _account("opening")))
    opening_again = _account("opening")
    opening_again["display-name"] = "Ops (polled)"
    fake_api.add("GET", ACCOUNT_URL, (200, opening_again), (500, "ledger unavailable"))
    clock = FakeClock()

    account = await _provisioner(client, clock).open_operational_account("Ops")

    assert account.account_status == "opening"
    assert account.display_name == "Ops (polled)"
    assert len(fake_api.calls("GET", ACCOUNT_URL)) == 2
    assert clock.sleeps == [1, 1]


@pytest.mark.anyio
async def test_poll_transport_error_returns_last_snapshot(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (200, _account("opening")))
    fake_api.add("GET", ACCOUNT_URL, httpx.ConnectError("gone"))

    account = await _provisioner(client, FakeClock()).open_operational_account("Ops")

    assert account.account_status == "opening"
    assert account.account_url == ACCOUNT_URL


@pytest.mark.anyio
async def test_any_non_opening_status_ends_poll(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (200, _account("opening")))
    fake_api.add("GET", ACCOUNT_URL, (200, _account("closed")))

    account = await _provisioner(client, FakeClock()).open_operational_account("Ops")

    assert account.account_status == "closed"
    assert len(fake_api.calls("GET", ACCOUNT_URL)) == 1


@pytest.mark.anyio
async def test_create_failure_propagates(client, fake_api):
    fake_api.add("POST", ACCOUNTS_PATH, (403, "forbidden"))

    with pytest.raises(GriffinAPIError) as info:
        await _provisioner(client, FakeClock()).open_operational_account("Ops")

    assert info.value.status_code == 403
    assert fake_api.calls("GET", ACCOUNT_URL) == []
