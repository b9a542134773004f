"""docbridge core -- shared primitives for the extractor and the bridge.

Manifesto:
    The extractor runs at build time and the bridge at process time, but
    they agree on one artifact (the contract store) and one way of failing,
    logging and being configured. That agreement lives here.

Architecture::

    errors.py     Typed error hierarchy (BridgeError, CompilationError,
                  StartupError, CallError)
    logging.py    Structured logging (structlog, stderr only)
    settings.py   BridgeSettings (pydantic-settings, DOCBRIDGE_ prefix)
    secrets.py    SecretValue + .dev.vars backend
    contract.py   Frozen contract dataclasses
    store.py      Contract store read/write

Tags:
    docbridge, core, errors, logging, settings
"""

from docbridge.core.contract import Contract, MethodDoc, ParamDoc, ReturnDoc, StaticMember
from docbridge.core.errors import BridgeError, CallError, CompilationError, StartupError
from docbridge.core.settings import BridgeSettings, get_settings

__all__ = [
    "Contract",
    "MethodDoc",
    "ParamDoc",
    "ReturnDoc",
    "StaticMember",
    "BridgeError",
    "CallError",
    "CompilationError",
    "StartupError",
    "BridgeSettings",
    "get_settings",
]
