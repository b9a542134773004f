"""
CLI: ``docbridge docgen`` -- compile a source file into the contract store.
"""

from __future__ import annotations

from pathlib import Path

import typer

from docbridge.cli.utils import console, fail, print_contracts, print_warnings
from docbridge.core.errors import CompilationError
from docbridge.core.settings import get_settings
from docbridge.core.store import write_contract_store
from docbridge.extractor import extract_file


def docgen(
    source: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Annotated JS/TS source file"
    ),
    out_dir: Path = typer.Option(Path("."), "--out-dir", "-o", help="Project directory to write dist/ into"),
    include_private: bool = typer.Option(
        False, "--include-private", help="Also emit classes that are not exported"
    ),
) -> None:
    """Extract JSDoc contracts from SOURCE and write the contract store."""
    settings = get_settings()
    try:
        result = extract_file(source, include_private=include_private)
    except CompilationError as e:
        raise fail(e) from e

    print_warnings(result.warnings)
    path = write_contract_store(result.contracts, out_dir / settings.contract_relpath)
    print_contracts(result.contracts)
    console.print(f"[green]Wrote[/green] {path}")
