"""Tool registry: the bridge's table of invocable operations.

Built once from the default contract. Names are validated when registered,
so an unknown name at call time is rejected before any argument is
marshaled or any request is sent.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from docbridge.core.contract import Contract, MethodDoc
from docbridge.core.errors import ToolRegistrationError, UnknownToolError


@dataclass(frozen=True)
class ToolDescriptor:
    """What list-tools reports for one method."""

    name: str
    description: str | None
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def build_input_schema(method: MethodDoc) -> dict[str, Any]:
    """Object schema with one property per parameter.

    ``required`` lists exactly the non-optional parameters, in declaration
    order.
    """
    properties: dict[str, Any] = {}
    for param in method.params:
        prop: dict[str, Any] = {"type": param.type}
        if param.description is not None:
            prop["description"] = param.description
        properties[param.name] = prop
    return {
        "type": "object",
        "properties": properties,
        "required": method.required_params,
    }


class ToolRegistry:
    """Name → MethodDoc table with registration-time validation."""

    def __init__(self) -> None:
        self._methods: dict[str, MethodDoc] = {}

    @classmethod
    def from_contract(cls, contract: Contract) -> ToolRegistry:
        registry = cls()
        for method in contract.methods:
            registry.register(method)
        return registry

    def register(self, method: MethodDoc) -> None:
        """Add a method.

        Raises:
            ToolRegistrationError: If the name is empty or already registered
        """
        if not method.name or not method.name.strip():
            raise ToolRegistrationError("Tool name must not be empty")
        if method.name in self._methods:
            raise ToolRegistrationError(f"Tool {method.name!r} is registered twice")
        self._methods[method.name] = method

    def __len__(self) -> int:
        return len(self._methods)

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[MethodDoc]:
        return iter(self._methods.values())

    @property
    def names(self) -> list[str]:
        return list(self._methods)

    def resolve(self, name: str) -> MethodDoc:
        """Look up a tool by name.

        Raises:
            UnknownToolError: If no such tool is registered
        """
        try:
            return self._methods[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def descriptors(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor(name=m.name, description=m.description, input_schema=build_input_schema(m))
            for m in self._methods.values()
        ]

    @staticmethod
    def positional_args(method: MethodDoc, arguments: Mapping[str, Any] | None) -> list[Any]:
        """Order a keyed argument bag by declaration order.

        Missing arguments become ``None`` (JSON ``null``); unknown keys are
        dropped.
        """
        arguments = arguments or {}
        return [arguments.get(param.name) for param in method.params]


__all__ = ["ToolDescriptor", "ToolRegistry", "build_input_schema"]
