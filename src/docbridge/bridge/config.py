"""
Bridge startup: resolve everything the bridge needs before it serves a request.

One explicit initialization step reads the contract store and the shared
secret from a worker project directory, picks the default-exported
contract and creates the image scratch directory. Any failure here is a
StartupError and the process exits before the transport is opened.

Example:
    >>> config = load_bridge_config("my-worker", "https://my-worker.example.dev", ".")
    >>> config.contract.exported_as
    'default'
"""

from __future__ import annotations

import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from docbridge.core.contract import Contract
from docbridge.core.logging import get_logger
from docbridge.core.secrets import DevVarsSecretBackend, SecretValue
from docbridge.core.settings import BridgeSettings, get_settings
from docbridge.core.store import find_default_contract, load_contract_store

logger = get_logger(__name__)


@dataclass(frozen=True)
class BridgeConfig:
    """Immutable, fully resolved bridge configuration.

    Attributes:
        name: Registration name announced to the MCP client
        url: Base URL of the remote RPC endpoint
        workdir: Worker project directory
        contract: The default-exported contract (read-only for the process)
        secret: Shared bearer secret
        scratch_dir: Directory for intermediate image artifacts
        settings: Tunables (timeouts, image policy, previews)
    """

    name: str
    url: str
    workdir: Path
    contract: Contract
    secret: SecretValue
    scratch_dir: Path
    settings: BridgeSettings


def _scratch_prefix(name: str) -> str:
    return "docbridge-" + re.sub(r"[^\w.-]", "_", name) + "-"


def load_bridge_config(
    name: str,
    url: str,
    workdir: str | Path = ".",
    settings: BridgeSettings | None = None,
) -> BridgeConfig:
    """Load the contract store and secret for ``workdir``.

    Raises:
        ContractStoreNotFoundError: If ``<workdir>/dist/docs.json`` is missing
        ContractStoreFormatError: If the store cannot be decoded
        NoDefaultContractError: If no contract is exported as ``default``
        SecretNotFoundError: If ``.dev.vars`` or its ``SHARED_SECRET`` is missing
    """
    settings = settings or get_settings()
    workdir = Path(workdir)

    store_path = workdir / settings.contract_relpath
    contracts = load_contract_store(store_path)
    contract = find_default_contract(contracts, str(store_path))

    secret = DevVarsSecretBackend(workdir / settings.secret_file).get(settings.secret_key)

    if settings.scratch_dir is not None:
        scratch_dir = Path(settings.scratch_dir)
        scratch_dir.mkdir(parents=True, exist_ok=True)
    else:
        scratch_dir = Path(tempfile.mkdtemp(prefix=_scratch_prefix(name)))

    logger.info(
        "bridge_config_loaded",
        name=name,
        url=url,
        store=str(store_path),
        tools=len(contract.methods),
        scratch_dir=str(scratch_dir),
    )
    return BridgeConfig(
        name=name,
        url=url,
        workdir=workdir,
        contract=contract,
        secret=secret,
        scratch_dir=scratch_dir,
        settings=settings,
    )


__all__ = ["BridgeConfig", "load_bridge_config"]
