import json

from common.secrets import SecretsManager


def test_reads_json_file(tmp_path):
    path = tmp_path / "secrets.json"
    path.write_text(json.dumps({"GRIFFIN_API_KEY": "from-file"}), encoding="utf-8")

    assert SecretsManager(path).get("GRIFFIN_API_KEY") == "from-file"


def test_falls_back_to_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("GRIFFIN_API_KEY", "from-env")
    mgr = SecretsManager(tmp_path / "missing.json")

    assert mgr.get("GRIFFIN_API_KEY") == "from-env"
    assert mgr.get("OTHER", "dflt") == "dflt"


def test_file_wins_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("GRIFFIN_API_KEY", "from-env")
    path = tmp_path / "secrets.json"
    path.write_text(json.dumps({"GRIFFIN_API_KEY": "from-file"}), encoding="utf-8")

    assert SecretsManager(path).get("GRIFFIN_API_KEY") == "from-file"


def test_file_is_cached_until_cleared(tmp_path):
    path = tmp_path / "secrets.json"
    path.write_text(json.dumps({"K": "one"}), encoding="utf-8")
    mgr = SecretsManager(path)
    assert mgr.get("K") == "one"

    path.write_text(json.dumps({"K": "two"}), encoding="utf-8")
    assert mgr.get("K") == "one"
    mgr.clear()
    assert mgr.get("K") == "two"
