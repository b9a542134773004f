"""Tests for the bridge startup step."""

import tempfile

import pytest

from docbridge.bridge.config import load_bridge_config
from docbridge.core.contract import Contract
from docbridge.core.errors import (
    ContractStoreNotFoundError,
    NoDefaultContractError,
    SecretNotFoundError,
    StartupError,
)
from docbridge.core.settings import BridgeSettings
from docbridge.core.store import write_contract_store


class TestLoadBridgeConfig:
    def test_loads_default_contract_and_secret(self, worker_project, settings, shared_secret, worker_url):
        config = load_bridge_config("calc", worker_url, worker_project, settings)

        assert config.name == "calc"
        assert config.url == worker_url
        assert config.contract.exported_as == "default"
        assert [m.name for m in config.contract.methods] == ["add", "greet", "fail", "image"]
        assert config.secret.get_secret() == shared_secret
        assert config.scratch_dir.is_dir()
        assert config.settings is settings

    def test_temp_scratch_dir(self, worker_project, tmp_path, monkeypatch, worker_url):
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
        config = load_bridge_config("my worker", worker_url, worker_project, BridgeSettings(_env_file=None))
        assert config.scratch_dir.parent == tmp_path
        assert config.scratch_dir.name.startswith("docbridge-my_worker-")

    def test_missing_store(self, tmp_path, settings, worker_url):
        with pytest.raises(ContractStoreNotFoundError) as exc_info:
            load_bridge_config("calc", worker_url, tmp_path, settings)
        assert "docs.json" in exc_info.value.message

    def test_missing_secret_file(self, worker_project, settings, worker_url):
        (worker_project / ".dev.vars").unlink()
        with pytest.raises(SecretNotFoundError):
            load_bridge_config("calc", worker_url, worker_project, settings)

    def test_missing_secret_key(self, worker_project, settings, worker_url):
        (worker_project / ".dev.vars").write_text("OTHER=1\n", encoding="utf-8")
        with pytest.raises(SecretNotFoundError) as exc_info:
            load_bridge_config("calc", worker_url, worker_project, settings)
        assert "SHARED_SECRET" in exc_info.value.message

    def test_no_default_contract(self, worker_project, settings, worker_url):
        write_contract_store(
            {"Calc": Contract(exported_as="Calc")}, worker_project / "dist" / "docs.json"
        )
        with pytest.raises(NoDefaultContractError):
            load_bridge_config("calc", worker_url, worker_project, settings)

    def test_errors_are_startup_errors(self, tmp_path, settings, worker_url):
        with pytest.raises(StartupError):
            load_bridge_config("calc", worker_url, tmp_path, settings)

    def test_custom_secret_key(self, worker_project, tmp_path, worker_url):
        (worker_project / ".dev.vars").write_text("RPC_TOKEN=abc\n", encoding="utf-8")
        settings = BridgeSettings(_env_file=None, secret_key="RPC_TOKEN", scratch_dir=tmp_path / "s")
        config = load_bridge_config("calc", worker_url, worker_project, settings)
        assert config.secret.get_secret() == "abc"
