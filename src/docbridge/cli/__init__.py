"""
CLI layer for docbridge.

Provides a Typer application; business logic lives in ``docbridge.extractor``
and ``docbridge.bridge``, this package only handles argument parsing and
terminal output.

Entry point::

    docbridge --help
"""

from docbridge.cli.app import app

__all__ = ["app"]
