"""Contract store: the persisted snapshot shared by the extractor and the bridge.

UTF-8 JSON, two-space indentation, sorted keys and a trailing newline, so
regenerating from unchanged source produces a byte-identical file.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from docbridge.core.contract import Contract
from docbridge.core.errors import (
    ContractStoreFormatError,
    ContractStoreNotFoundError,
    ErrorContext,
    NoDefaultContractError,
)
from docbridge.core.logging import get_logger

logger = get_logger(__name__)


def dumps_contracts(contracts: Mapping[str, Contract]) -> str:
    """Serialize contracts in the deterministic store format."""
    payload = {name: contract.to_dict() for name, contract in contracts.items()}
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def loads_contracts(text: str, *, source: str = "<string>") -> dict[str, Contract]:
    """Decode the store format.

    Raises:
        ContractStoreFormatError: If the text is not a JSON object of contracts
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ContractStoreFormatError(
            f"Invalid JSON in {source}: {e}", context=ErrorContext(path=source), cause=e
        ) from e

    if not isinstance(data, dict):
        raise ContractStoreFormatError(
            f"Expected an object of contracts in {source}, got {type(data).__name__}",
            context=ErrorContext(path=source),
        )

    try:
        return {name: Contract.from_dict(entry) for name, entry in data.items()}
    except (KeyError, TypeError, AttributeError) as e:
        raise ContractStoreFormatError(
            f"Malformed contract in {source}: {e!r}", context=ErrorContext(path=source), cause=e
        ) from e


def write_contract_store(contracts: Mapping[str, Contract], path: str | Path) -> Path:
    """Write the store, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_contracts(contracts), encoding="utf-8")
    logger.info("contract_store_written", path=str(path), classes=len(contracts))
    return path


def load_contract_store(path: str | Path) -> dict[str, Contract]:
    """Read the store.

    Raises:
        ContractStoreNotFoundError: If the file does not exist
        ContractStoreFormatError: If the file cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise ContractStoreNotFoundError(str(path))
    return loads_contracts(path.read_text(encoding="utf-8"), source=str(path))


def find_default_contract(contracts: Mapping[str, Contract], source: str = "<store>") -> Contract:
    """Return the contract exported as ``default``.

    Raises:
        NoDefaultContractError: If no contract is the default export
    """
    for contract in contracts.values():
        if contract.is_default:
            return contract
    raise NoDefaultContractError(source, list(contracts))


__all__ = [
    "dumps_contracts",
    "loads_contracts",
    "write_contract_store",
    "load_contract_store",
    "find_default_contract",
]
