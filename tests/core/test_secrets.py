"""Tests for shared-secret resolution."""

import pytest

from docbridge.core.errors import SecretNotFoundError
from docbridge.core.secrets import DevVarsSecretBackend, SecretValue, parse_dev_vars


class TestSecretValue:
    """Tests for SecretValue wrapper."""

    def test_redacted(self):
        sv = SecretValue("my_secret_value")
        assert str(sv) == "[REDACTED]"
        assert "my_secret_value" not in repr(sv)
        assert sv.get_secret() == "my_secret_value"

    def test_equality_and_length(self):
        assert SecretValue("a") == SecretValue("a")
        assert SecretValue("a") != "a"
        assert len(SecretValue("abcd")) == 4


class TestParseDevVars:
    def test_parses_lines(self):
        text = "# comment\n\nSHARED_SECRET=abc\nOTHER = 'quoted'\nexport EXPORTED=\"x\"\nnoequals\n"
        assert parse_dev_vars(text) == {"SHARED_SECRET": "abc", "OTHER": "quoted", "EXPORTED": "x"}

    def test_first_occurrence_wins(self):
        assert parse_dev_vars("A=1\nA=2\n") == {"A": "1"}

    def test_value_may_contain_equals(self):
        assert parse_dev_vars("A=b=c")["A"] == "b=c"


class TestDevVarsSecretBackend:
    def test_reads_key(self, tmp_path):
        path = tmp_path / ".dev.vars"
        path.write_text("SHARED_SECRET=s3cr3t\n", encoding="utf-8")
        assert DevVarsSecretBackend(path).get("SHARED_SECRET").get_secret() == "s3cr3t"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SecretNotFoundError) as exc_info:
            DevVarsSecretBackend(tmp_path / ".dev.vars").get("SHARED_SECRET")
        assert exc_info.value.key is None

    def test_missing_key(self, tmp_path):
        path = tmp_path / ".dev.vars"
        path.write_text("OTHER=1\n", encoding="utf-8")
        with pytest.raises(SecretNotFoundError) as exc_info:
            DevVarsSecretBackend(path).get("SHARED_SECRET")
        assert "SHARED_SECRET" in exc_info.value.message

    def test_empty_value(self, tmp_path):
        path = tmp_path / ".dev.vars"
        path.write_text("SHARED_SECRET=\n", encoding="utf-8")
        with pytest.raises(SecretNotFoundError):
            DevVarsSecretBackend(path).get("SHARED_SECRET")
