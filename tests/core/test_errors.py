"""Tests for docbridge.core.errors module."""

import pytest

from docbridge.core.errors import (
    BridgeError,
    CallError,
    CompilationError,
    ContractStoreNotFoundError,
    DanglingReferenceError,
    EmptyResponseError,
    ErrorCategory,
    ErrorContext,
    NoDefaultContractError,
    RemoteStatusError,
    RpcTransportError,
    SecretNotFoundError,
    StartupError,
    UnknownToolError,
    UnsupportedContentTypeError,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_to_dict_skips_unset_fields(self):
        ctx = ErrorContext(tool="add", http_status=500, metadata={"attempt": 1})
        assert ctx.to_dict() == {"tool": "add", "http_status": 500, "attempt": 1}

    def test_empty_context(self):
        assert ErrorContext().to_dict() == {}


class TestBridgeError:
    """Test the base error type."""

    def test_default_category(self):
        assert BridgeError("x").category == ErrorCategory.INTERNAL

    def test_with_context_sets_known_and_extra_fields(self):
        error = BridgeError("boom").with_context(tool="add", attempt=2)
        assert error.context.tool == "add"
        assert error.context.metadata == {"attempt": 2}

    def test_cause_is_chained(self):
        cause = ValueError("inner")
        error = BridgeError("outer", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == "inner"

    def test_to_dict(self):
        error = RemoteStatusError(500, "boom")
        d = error.to_dict()
        assert d["error_type"] == "RemoteStatusError"
        assert d["category"] == "REMOTE"
        assert d["context"] == {"http_status": 500}


class TestHierarchy:
    """Fatal and per-call errors are distinct branches."""

    @pytest.mark.parametrize(
        "error",
        [
            ContractStoreNotFoundError("dist/docs.json"),
            SecretNotFoundError(".dev.vars"),
            NoDefaultContractError("dist/docs.json", ["A"]),
        ],
    )
    def test_startup_errors(self, error):
        assert isinstance(error, StartupError)
        assert not isinstance(error, CallError)

    def test_dangling_reference_is_compilation_error(self):
        error = DanglingReferenceError("Foo", "method Foo.run at offset 10", ["Bar"])
        assert isinstance(error, CompilationError)
        assert "Foo" in error.message
        assert "Bar" in error.message
        assert error.category == ErrorCategory.COMPILATION

    def test_transport_error_category(self):
        assert RpcTransportError("down").category == ErrorCategory.NETWORK


class TestCallErrorMessages:
    """Per-call errors render as isError tool results."""

    def test_unknown_tool(self):
        result = UnknownToolError("nope").to_result()
        assert result == {
            "content": [{"type": "text", "text": "Couldn't find method 'nope' in entrypoint"}],
            "isError": True,
        }

    def test_empty_response(self):
        assert EmptyResponseError(204).message == "Fetch failed. Got (204) Empty response"

    def test_remote_status(self):
        error = RemoteStatusError(401, "Unauthorized")
        assert error.message == "Fetch failed. Got (401) Unauthorized"
        assert error.status == 401

    def test_unsupported_content_type(self):
        error = UnsupportedContentTypeError("text/html", "<html>")
        assert error.message == "Unknown contentType text/html <html>"
        assert error.context.content_type == "text/html"


class TestSecretNotFound:
    def test_missing_file_message(self):
        assert SecretNotFoundError(".dev.vars").message == "Could not find .dev.vars"

    def test_missing_key_message(self):
        error = SecretNotFoundError(".dev.vars", key="SHARED_SECRET")
        assert error.message == "Could not find SHARED_SECRET in .dev.vars"
        assert error.key == "SHARED_SECRET"
