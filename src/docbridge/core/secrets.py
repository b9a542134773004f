"""Shared-secret resolution for the bridge.

The bridge consumes exactly one bearer credential. It lives in a
line-oriented ``KEY=value`` file (``.dev.vars`` by default) next to the
worker project, and is wrapped in :class:`SecretValue` as soon as it is read
so it never ends up in a log line by accident.

Example:
    >>> backend = DevVarsSecretBackend(Path(".dev.vars"))
    >>> secret = backend.get("SHARED_SECRET")
    >>> print(secret)
    [REDACTED]
"""

from __future__ import annotations

from pathlib import Path

from docbridge.core.errors import SecretNotFoundError


class SecretValue:
    """Wrapper for secret values that prevents accidental logging.

    The string representation shows ``[REDACTED]`` instead of the value.
    Use ``.get_secret()`` to access the actual value.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str):
        self._value = value

    def get_secret(self) -> str:
        """Get the actual secret value."""
        return self._value

    def __str__(self) -> str:
        return "[REDACTED]"

    def __repr__(self) -> str:
        return "SecretValue('[REDACTED]')"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SecretValue):
            return self._value == other._value
        return False

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __len__(self) -> int:
        return len(self._value)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_dev_vars(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines.

    Blank lines, ``#`` comments and lines without ``=`` are skipped. The
    first occurrence of a key wins.
    """
    values: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        if key and key not in values:
            values[key] = _unquote(value.strip())
    return values


class DevVarsSecretBackend:
    """Resolve secrets from a ``.dev.vars`` style file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self, name: str) -> SecretValue:
        """Read ``name`` from the file.

        Raises:
            SecretNotFoundError: If the file or the key (or its value) is missing
        """
        if not self.path.is_file():
            raise SecretNotFoundError(str(self.path))

        value = parse_dev_vars(self.path.read_text(encoding="utf-8")).get(name)
        if not value:
            raise SecretNotFoundError(str(self.path), key=name)
        return SecretValue(value)


__all__ = ["SecretValue", "parse_dev_vars", "DevVarsSecretBackend"]
