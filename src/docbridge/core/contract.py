"""
Contract types: the compiled description of a module's callable surface.

A :class:`Contract` is produced once per exported class by the extractor,
persisted in the contract store, and loaded read-only by the bridge. All
types are frozen; sequences are tuples so a loaded contract cannot be
mutated for the lifetime of the process.

Wire format (one store entry)::

    {
      "description": "...",
      "exported_as": "default",
      "methods": [
        {
          "description": "...",
          "examples": ["..."],          # only when present
          "name": "add",
          "params": [{"description": "...", "name": "a", "optional": false, "type": "number"}],
          "returns": {"description": "...", "type": "number"}
        }
      ],
      "statics": {"Resources": [{"description": "...", "name": "README", "type": "string"}]}
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_TYPE = "unknown"
DEFAULT_EXPORT = "default"


@dataclass(frozen=True)
class ParamDoc:
    """One documented parameter, in declaration order."""

    name: str
    type: str = UNKNOWN_TYPE
    description: str | None = None
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "optional": self.optional,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParamDoc:
        return cls(
            name=data["name"],
            type=data.get("type") or UNKNOWN_TYPE,
            description=data.get("description"),
            optional=bool(data.get("optional", False)),
        )


@dataclass(frozen=True)
class ReturnDoc:
    """Documented return value of a method."""

    type: str = UNKNOWN_TYPE
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReturnDoc:
        return cls(type=data.get("type") or UNKNOWN_TYPE, description=data.get("description"))


@dataclass(frozen=True)
class StaticMember:
    """Named, non-invocable metadata nested under a static class property."""

    name: str
    type: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StaticMember:
        return cls(name=data["name"], type=data.get("type"), description=data.get("description"))


@dataclass(frozen=True)
class MethodDoc:
    """A documented, invocable method. Becomes one tool in the bridge."""

    name: str
    description: str | None = None
    params: tuple[ParamDoc, ...] = ()
    returns: ReturnDoc | None = None
    examples: tuple[str, ...] | None = None

    @property
    def required_params(self) -> list[str]:
        """Names of non-optional parameters, in declaration order."""
        return [p.name for p in self.params if not p.optional]

    def signature(self) -> str:
        """Human-readable signature, e.g. ``add(a: number, b: number): number``."""
        params = ", ".join(f"{p.name}: {p.type or '?'}" for p in self.params)
        returns = self.returns.type if self.returns else "?"
        return f"{self.name}({params}): {returns}"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "params": [p.to_dict() for p in self.params],
            "returns": self.returns.to_dict() if self.returns else None,
        }
        if self.examples is not None:
            result["examples"] = list(self.examples)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MethodDoc:
        returns = data.get("returns")
        examples = data.get("examples")
        return cls(
            name=data["name"],
            description=data.get("description"),
            params=tuple(ParamDoc.from_dict(p) for p in data.get("params") or []),
            returns=ReturnDoc.from_dict(returns) if returns else None,
            examples=tuple(examples) if examples is not None else None,
        )


@dataclass(frozen=True)
class Contract:
    """Interface contract of one exported class."""

    exported_as: str | None = None
    description: str | None = None
    methods: tuple[MethodDoc, ...] = ()
    statics: dict[str, tuple[StaticMember, ...]] = field(default_factory=dict)

    @property
    def is_default(self) -> bool:
        return self.exported_as == DEFAULT_EXPORT

    def method(self, name: str) -> MethodDoc | None:
        return next((m for m in self.methods if m.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "exported_as": self.exported_as,
            "description": self.description,
            "methods": [m.to_dict() for m in self.methods],
            "statics": {
                name: [member.to_dict() for member in members]
                for name, members in self.statics.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Contract:
        return cls(
            exported_as=data.get("exported_as"),
            description=data.get("description"),
            methods=tuple(MethodDoc.from_dict(m) for m in data.get("methods") or []),
            statics={
                name: tuple(StaticMember.from_dict(m) for m in members)
                for name, members in (data.get("statics") or {}).items()
            },
        )


__all__ = [
    "UNKNOWN_TYPE",
    "DEFAULT_EXPORT",
    "ParamDoc",
    "ReturnDoc",
    "StaticMember",
    "MethodDoc",
    "Contract",
]
