"""Tests for ToolRegistry and input schema generation."""

import pytest

from docbridge.bridge.tools import ToolRegistry, build_input_schema
from docbridge.core.contract import MethodDoc, ParamDoc
from docbridge.core.errors import ToolRegistrationError, UnknownToolError


@pytest.fixture
def registry(calculator_contract):
    return ToolRegistry.from_contract(calculator_contract)


class TestInputSchema:
    def test_properties_and_required(self, calculator_contract):
        schema = build_input_schema(calculator_contract.method("greet"))
        assert schema == {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "who"},
                "punctuation": {"type": "string"},
            },
            "required": ["name"],
        }

    def test_required_follows_declaration_order(self):
        method = MethodDoc(
            name="m",
            params=(ParamDoc(name="z"), ParamDoc(name="a", optional=True), ParamDoc(name="b")),
        )
        assert build_input_schema(method)["required"] == ["z", "b"]

    def test_no_params(self, calculator_contract):
        schema = build_input_schema(calculator_contract.method("fail"))
        assert schema == {"type": "object", "properties": {}, "required": []}


class TestToolRegistry:
    def test_from_contract(self, registry):
        assert len(registry) == 4
        assert registry.names == ["add", "greet", "fail", "image"]
        assert "add" in registry
        assert "nope" not in registry
        assert [m.name for m in registry] == registry.names

    def test_descriptors(self, registry):
        descriptor = registry.descriptors()[0]
        assert descriptor.to_dict() == {
            "name": "add",
            "description": "Add two numbers.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "a": {"type": "number", "description": "first operand"},
                    "b": {"type": "number", "description": "second operand"},
                },
                "required": ["a", "b"],
            },
        }

    def test_resolve_unknown(self, registry):
        with pytest.raises(UnknownToolError) as exc_info:
            registry.resolve("nope")
        assert exc_info.value.message == "Couldn't find method 'nope' in entrypoint"

    def test_duplicate_registration(self, registry):
        with pytest.raises(ToolRegistrationError):
            registry.register(MethodDoc(name="add"))

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name(self, name):
        with pytest.raises(ToolRegistrationError):
            ToolRegistry().register(MethodDoc(name=name))


class TestPositionalArgs:
    def test_declaration_order(self, registry):
        method = registry.resolve("add")
        assert ToolRegistry.positional_args(method, {"b": 2, "a": 1}) == [1, 2]

    def test_missing_become_none_and_extras_dropped(self, registry):
        method = registry.resolve("greet")
        assert ToolRegistry.positional_args(method, {"name": "Ada", "extra": True}) == ["Ada", None]

    def test_no_arguments(self, registry):
        assert ToolRegistry.positional_args(registry.resolve("add"), None) == [None, None]
