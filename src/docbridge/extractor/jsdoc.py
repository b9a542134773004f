"""
JSDoc block parser.

Parses one ``/** ... */`` block comment into its free-text description and
the block tags the contract needs (``@param``, ``@returns``, ``@example``,
``@type``, ``@ignore``, ``@description``, ``@classdesc``).

Example:
    >>> parser = JSDocParser()
    >>> doc = parser.parse('''/**
    ...  * Add two numbers.
    ...  * @param {number} a - first operand
    ...  * @param {number} [b] - second operand
    ...  * @returns {number} the sum
    ...  */''')
    >>> [(p.name, p.optional) for p in doc.params]
    [('a', False), ('b', True)]
    >>> doc.returns[0].type_names
    ['number']
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass, field

_TAG_LINE = re.compile(r"^@(\w+)\b\s?(.*)$", re.DOTALL)
_LINE_PREFIX = re.compile(r"^\s*\*(?!/) ?")
_PARAM_NAME = re.compile(r"^(\[[^\]]*\]|[\w$.\[\]]+)\s*(?:-\s*)?(.*)$", re.DOTALL)

PARAM_TAGS = {"param", "arg", "argument"}
RETURN_TAGS = {"returns", "return"}


@dataclass
class JSDocParam:
    """A parsed ``@param`` tag."""

    name: str
    type_names: list[str] = field(default_factory=list)
    description: str | None = None
    optional: bool = False
    default: str | None = None


@dataclass
class JSDocReturn:
    """A parsed ``@returns`` tag."""

    type_names: list[str] = field(default_factory=list)
    description: str | None = None


@dataclass
class JSDocComment:
    """Structured content of one doc comment.

    Attributes:
        description: Free text before the first tag, or ``@description``
        classdesc: ``@classdesc`` text, if present
        params: ``@param`` tags in declaration order
        returns: ``@returns`` tags (more than one is a data-quality problem)
        examples: ``@example`` blocks
        type_names: Names from a ``@type`` tag
        ignore: True when tagged ``@ignore``
    """

    description: str | None = None
    classdesc: str | None = None
    params: list[JSDocParam] = field(default_factory=list)
    returns: list[JSDocReturn] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    type_names: list[str] | None = None
    ignore: bool = False


def parse_type_expression(raw: str) -> tuple[list[str], bool]:
    """Split a JSDoc type expression into its alternative type names.

    Returns:
        ``(names, optional)`` where ``optional`` is set by a trailing ``=``.
        ``{string|number}`` yields two names, ``{}`` yields none.
    """
    expr = raw.strip()
    optional = expr.endswith("=")
    if optional:
        expr = expr[:-1].strip()
    expr = expr.lstrip("?!").strip()
    if expr.startswith("..."):
        expr = expr[3:].strip()

    while expr.startswith("(") and expr.endswith(")") and _balanced(expr[1:-1]):
        expr = expr[1:-1].strip()

    names: list[str] = []
    depth = 0
    current = []
    for ch in expr:
        if ch in "<({[":
            depth += 1
        elif ch in ">)}]":
            depth -= 1
        if ch == "|" and depth == 0:
            names.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    names.append("".join(current).strip())
    return [name for name in names if name], optional


def _balanced(text: str) -> bool:
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _take_braced(text: str) -> tuple[str | None, str]:
    """Split a leading ``{...}`` group (nesting aware) from the rest of a tag body."""
    text = text.lstrip()
    if not text.startswith("{"):
        return None, text
    depth = 0
    for i, ch in enumerate(text):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[1:i], text[i + 1:]
    return text[1:], ""


def _clean(text: str) -> str | None:
    text = text.strip()
    return text or None


class JSDocParser:
    """Parse JSDoc block comments into :class:`JSDocComment` objects.

    Guardrails:
        - Do NOT fail on malformed tags
          ✅ A tag that cannot be read is skipped, never raised
        - Do NOT guess types
          ✅ Report every alternative name; callers decide what is ambiguous
    """

    def parse(self, comment: str) -> JSDocComment:
        """Parse a raw comment, delimiters included."""
        lines = self._strip_delimiters(comment)
        description_lines, blocks = self._split_blocks(lines)

        doc = JSDocComment(description=_clean(textwrap.dedent("\n".join(description_lines))))
        for tag, body in blocks:
            self._apply_tag(doc, tag, body)
        return doc

    def _strip_delimiters(self, comment: str) -> list[str]:
        text = comment.strip()
        if text.startswith("/**"):
            text = text[3:]
        if text.endswith("*/"):
            text = text[:-2]
        return [_LINE_PREFIX.sub("", line) for line in text.splitlines()]

    def _split_blocks(self, lines: list[str]) -> tuple[list[str], list[tuple[str, str]]]:
        description: list[str] = []
        blocks: list[tuple[str, list[str]]] = []
        for line in lines:
            match = _TAG_LINE.match(line.strip())
            if match:
                blocks.append((match.group(1), [match.group(2)]))
            elif blocks:
                blocks[-1][1].append(line)
            else:
                description.append(line.rstrip())
        return description, [(tag, "\n".join(body)) for tag, body in blocks]

    def _apply_tag(self, doc: JSDocComment, tag: str, body: str) -> None:
        if tag in PARAM_TAGS:
            param = self._parse_param(body)
            if param is not None:
                doc.params.append(param)
        elif tag in RETURN_TAGS:
            raw_type, rest = _take_braced(body)
            names = parse_type_expression(raw_type)[0] if raw_type is not None else []
            doc.returns.append(JSDocReturn(type_names=names, description=_clean(rest)))
        elif tag == "example":
            example = textwrap.dedent(body).strip("\n")
            if example.strip():
                doc.examples.append(example.rstrip())
        elif tag == "type":
            raw_type, _ = _take_braced(body)
            doc.type_names = parse_type_expression(raw_type)[0] if raw_type is not None else []
        elif tag == "ignore":
            doc.ignore = True
        elif tag in ("description", "desc"):
            doc.description = _clean(body)
        elif tag == "classdesc":
            doc.classdesc = _clean(body)

    def _parse_param(self, body: str) -> JSDocParam | None:
        raw_type, rest = _take_braced(body)
        names, optional = parse_type_expression(raw_type) if raw_type is not None else ([], False)

        match = _PARAM_NAME.match(rest.strip())
        if not match:
            return None
        name, description = match.group(1), match.group(2)

        default = None
        if name.startswith("[") and name.endswith("]"):
            optional = True
            name, _, default_text = name[1:-1].partition("=")
            name = name.strip()
            default = default_text.strip() or None

        return JSDocParam(
            name=name,
            type_names=names,
            description=_clean(description),
            optional=optional,
            default=default,
        )


__all__ = [
    "JSDocParam",
    "JSDocReturn",
    "JSDocComment",
    "JSDocParser",
    "parse_type_expression",
]
