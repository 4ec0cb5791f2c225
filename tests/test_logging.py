import json
import logging

import pytest

from common.logging import JsonFormatter, configure_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra):
    record = logging.LogRecord("griffin", logging.WARNING, __file__, 1, "poll %s", ("ba.1",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    line = JsonFormatter().format(_record(account_url="/v0/bank/accounts/ba.1", unrelated="x"))
    payload = json.loads(line)

    assert payload["message"] == "poll ba.1"
    assert payload["level"] == "WARNING"
    assert payload["account_url"] == "/v0/bank/accounts/ba.1"
    assert "unrelated" not in payload


def test_configure_logging_json_to_stderr(restore_root, capsys, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "info")
    configure_logging("json", service_name="griffin-orchestrator")

    logging.getLogger("treasury_orchestrator.test").info("hello", extra={"payment_url": "/v0/payments/p.1"})

    captured = capsys.readouterr()
    assert captured.out == ""
    payload = json.loads(captured.err.strip().splitlines()[-1])
    assert payload["service"] == "griffin-orchestrator"
    assert payload["payment_url"] == "/v0/payments/p.1"


def test_configure_logging_replaces_handlers(restore_root):
    configure_logging("text")
    configure_logging("text")
    assert len(logging.getLogger().handlers) == 1
