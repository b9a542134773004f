"""
Structured error types for docbridge.

Provides the typed error hierarchy shared by the schema extractor and the
protocol bridge. Every error carries a category, a structured context and an
optional chained cause so it can be logged as one structured event.

Manifesto:
    - **Typed Error Hierarchy:** Build-time, startup and per-call failures
      are different types with different propagation rules
    - **Rich Context:** Errors carry source file, tool and HTTP metadata
    - **Error Chaining:** Preserve original exceptions while adding context
    - **Failure Isolation:** Per-call errors render as tool results instead
      of escaping into the transport

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                        BridgeError                               │
        │              (category, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  CompilationError        StartupError          CallError         │
        │  (fatal, build-time)     (fatal, startup)      (per-invocation)  │
        │       │                      │                     │             │
        │  DanglingReference     ContractStoreNotFound   UnknownTool       │
        │                        ContractStoreFormat     RemoteStatus      │
        │                        SecretNotFound          EmptyResponse     │
        │                        NoDefaultContract       UnsupportedContent│
        │                        ToolRegistration        ResponseParse     │
        │                                                RpcTransport      │
        └─────────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Let a CallError escape a call-tool handler
    ✅ DO: Render it with ``to_result()``

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, docbridge

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and logging."""

    COMPILATION = "COMPILATION"
    CONFIG = "CONFIG"
    NETWORK = "NETWORK"
    REMOTE = "REMOTE"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    INTERNAL = "INTERNAL"

    def __str__(self) -> str:
        return self.value


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        source_file: Annotated source file being compiled
        path: Filesystem path involved (contract store, secret file)
        tool: Tool name of the failed invocation
        url: URL that was being accessed
        http_status: HTTP status code if applicable
        content_type: Response content type if applicable
        metadata: Additional key-value pairs
    """

    source_file: str | None = None
    path: str | None = None
    tool: str | None = None
    url: str | None = None
    http_status: int | None = None
    content_type: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["source_file", "path", "tool", "url", "http_status", "content_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class BridgeError(Exception):
    """
    Base class for all docbridge errors.

    Examples:
        >>> error = BridgeError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = BridgeError("Fetch failed").with_context(tool="add", http_status=500)
        >>> error.context.http_status
        500
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> BridgeError:
        """
        Add context to this error (fluent API).

        Usage:
            raise RemoteStatusError(...).with_context(tool="add", url=url)
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# COMPILATION ERRORS (fatal, build-time)
# =============================================================================


class CompilationError(BridgeError):
    """Contract extraction cannot complete."""

    default_category = ErrorCategory.COMPILATION


class DanglingReferenceError(CompilationError):
    """A documented method or static resolves to a class outside the extracted set."""

    def __init__(self, owner: str, point: str, known: list[str]):
        super().__init__(
            f"Missing owner {owner!r} for {point}. Known classes: {sorted(known)}",
        )
        self.owner = owner
        self.known = list(known)
        self.context.metadata.update({"owner": owner, "point": point})


# =============================================================================
# STARTUP ERRORS (fatal, process-time)
# =============================================================================


class StartupError(BridgeError):
    """The bridge cannot start serving requests."""

    default_category = ErrorCategory.CONFIG


class ContractStoreNotFoundError(StartupError):
    """The contract store file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Could not find {path}", context=ErrorContext(path=path))


class ContractStoreFormatError(StartupError):
    """The contract store exists but cannot be decoded."""

    default_category = ErrorCategory.PARSE


class SecretNotFoundError(StartupError):
    """The secret file, or the shared secret key inside it, is missing."""

    def __init__(self, path: str, key: str | None = None):
        message = f"Could not find {key} in {path}" if key else f"Could not find {path}"
        super().__init__(message, context=ErrorContext(path=path))
        self.key = key


class NoDefaultContractError(StartupError):
    """No contract in the store is the default export."""

    def __init__(self, path: str, classes: list[str]):
        super().__init__(
            f"No default exported entrypoint found in {path} (classes: {sorted(classes)})",
            context=ErrorContext(path=path),
        )


class ToolRegistrationError(StartupError):
    """A tool name is empty or registered twice."""

    default_category = ErrorCategory.VALIDATION


# =============================================================================
# CALL ERRORS (recoverable, per-invocation)
# =============================================================================


class CallError(BridgeError):
    """
    A single tool invocation failed.

    Never propagates out of the bridge: ``to_result()`` renders it as a tool
    result flagged ``isError`` so the session survives.
    """

    default_category = ErrorCategory.REMOTE

    def to_result(self) -> dict[str, Any]:
        """Render as a tool-call result payload."""
        return {
            "content": [{"type": "text", "text": self.message}],
            "isError": True,
        }


class UnknownToolError(CallError):
    """The requested tool is not in the registered-operation table."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, name: str):
        super().__init__(
            f"Couldn't find method '{name}' in entrypoint",
            context=ErrorContext(tool=name),
        )


class EmptyResponseError(CallError):
    """The endpoint answered with a zero-length body."""

    def __init__(self, status: int):
        super().__init__(
            f"Fetch failed. Got ({status}) Empty response",
            context=ErrorContext(http_status=status),
        )


class RemoteStatusError(CallError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status: int, text: str):
        super().__init__(
            f"Fetch failed. Got ({status}) {text}",
            context=ErrorContext(http_status=status),
        )
        self.status = status


class UnsupportedContentTypeError(CallError):
    """The endpoint answered with a content type the bridge cannot shape."""

    def __init__(self, content_type: str | None, preview: str):
        super().__init__(
            f"Unknown contentType {content_type} {preview}",
            context=ErrorContext(content_type=content_type),
        )


class ResponseParseError(CallError):
    """A JSON response body could not be decoded."""

    default_category = ErrorCategory.PARSE


class RpcTransportError(CallError):
    """The HTTP request itself failed (connection, DNS, protocol)."""

    default_category = ErrorCategory.NETWORK


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "BridgeError",
    "CompilationError",
    "DanglingReferenceError",
    "StartupError",
    "ContractStoreNotFoundError",
    "ContractStoreFormatError",
    "SecretNotFoundError",
    "NoDefaultContractError",
    "ToolRegistrationError",
    "CallError",
    "UnknownToolError",
    "EmptyResponseError",
    "RemoteStatusError",
    "UnsupportedContentTypeError",
    "ResponseParseError",
    "RpcTransportError",
]
