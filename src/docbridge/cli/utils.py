"""
CLI utility helpers: consoles and output formatting.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docbridge.core.contract import Contract
from docbridge.core.errors import BridgeError

console = Console()
err_console = Console(stderr=True)


def fail(error: BridgeError) -> typer.Exit:
    """Print one diagnostic for a fatal error; returns the Exit to raise."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category}): {escape(error.message)}")
    return typer.Exit(code=1)


def print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        err_console.print(f"[yellow]WARN[/yellow] {escape(warning)}")


def print_contracts(contracts: dict[str, Contract]) -> None:
    """Summary of classes and method signatures."""
    if not contracts:
        console.print("[dim]No exported classes.[/dim]")
        return
    for name, contract in contracts.items():
        exported = contract.exported_as or "not exported"
        console.print(f"[bold]{escape(name)}[/bold] [dim]({escape(exported)})[/dim]")
        for method in contract.methods:
            console.print(f"  [cyan]{escape(method.signature())}[/cyan]")
        for static, members in contract.statics.items():
            console.print(f"  [magenta]static {escape(static)}[/magenta]: {len(members)} member(s)")


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(escape(str(v)) if v is not None else "" for v in row.values()))
    console.print(table)
