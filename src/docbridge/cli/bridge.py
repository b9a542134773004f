"""
CLI: ``docbridge run`` and ``docbridge tools`` -- serve or inspect the bridge.
"""

from __future__ import annotations

from pathlib import Path

import typer

from docbridge.bridge import ToolRegistry, load_bridge_config, run_bridge
from docbridge.cli.utils import fail, print_json, print_table
from docbridge.core.errors import StartupError
from docbridge.core.settings import get_settings
from docbridge.core.store import find_default_contract, load_contract_store


def run(
    name: str = typer.Argument(..., help="Name announced to the MCP client"),
    url: str = typer.Argument(..., help="Base URL of the remote RPC endpoint"),
    workdir: Path = typer.Argument(Path("."), help="Project directory holding dist/ and .dev.vars"),
) -> None:
    """Serve the default-exported contract as MCP tools over stdio."""
    try:
        config = load_bridge_config(name, url, workdir, get_settings())
        run_bridge(config)
    except StartupError as e:
        raise fail(e) from e


def tools(
    workdir: Path = typer.Argument(Path("."), help="Project directory holding dist/"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the tool descriptors the bridge would serve."""
    settings = get_settings()
    store_path = workdir / settings.contract_relpath
    try:
        contract = find_default_contract(load_contract_store(store_path), str(store_path))
        registry = ToolRegistry.from_contract(contract)
    except StartupError as e:
        raise fail(e) from e

    descriptors = registry.descriptors()
    if as_json:
        print_json([d.to_dict() for d in descriptors])
        return

    print_table(
        [
            {
                "tool": d.name,
                "params": ", ".join(
                    f"{p}: {s['type']}" for p, s in d.input_schema["properties"].items()
                ),
                "required": ", ".join(d.input_schema["required"]),
                "description": d.description,
            }
            for d in descriptors
        ],
        title=f"Tools ({len(descriptors)})",
    )
