"""
Lexical scanner for JSDoc-annotated JavaScript/TypeScript modules.

Turns raw source text into *doc points* (documented declarations with their
kind, enclosing class, character range and header text) and *export points*
(``export { A as B }`` specifiers and ``export default X`` forwards). It is
not a full parser: it tokenizes just enough (strings, template literals,
regular expressions, comments, brackets) to find class bodies, members and
object literals without being fooled by braces inside literals or types.

Architecture:
    ```
    source text
         │
         ▼
    _Tokenizer ──► [Token(kind, value, start, end, newline_before)]
         │              (comments dropped, /** */ kept as DOC)
         ▼
    SourceScanner.scan()
         │
         ├──► export ...            ──► ExportPoint / class binding
         ├──► class X { ... }       ──► DocPoint(CLASS)
         │        ├──► method()     ──► DocPoint(METHOD)
         │        └──► field = ...  ──► DocPoint(FIELD)
         │                 └──► { key: ... }  ──► DocPoint(PROPERTY | LITERAL)
         └──► ScanResult(points, exports)
    ```

Example:
    >>> result = SourceScanner("export class A { /** hi */ run() {} }").scan()
    >>> [(p.kind.value, p.name) for p in result.points]
    [('class', 'A'), ('method', 'run')]
"""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field
from enum import Enum

from docbridge.extractor.ranges import SourceRange


class TokenKind(str, Enum):
    DOC = "doc"
    IDENT = "ident"
    STRING = "string"
    TEMPLATE = "template"
    NUMBER = "number"
    REGEX = "regex"
    PUNCT = "punct"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    start: int
    end: int
    newline_before: bool = False

    def is_punct(self, *values: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.value in values

    def is_word(self, *values: str) -> bool:
        return self.kind is TokenKind.IDENT and self.value in values


class DocKind(str, Enum):
    """What a doc point documents."""

    CLASS = "class"
    METHOD = "method"
    FIELD = "field"
    PROPERTY = "property"
    LITERAL = "literal"


class ExportBinding(str, Enum):
    NAMED = "named"
    DEFAULT = "default"


@dataclass(frozen=True)
class DocPoint:
    """One declaration found in the source.

    Attributes:
        id: Unique, in scan order
        kind: Declaration kind
        name: Declared name (None for anonymous classes)
        range: Character range of the declaration
        comment: Raw ``/** */`` text attached to it, if any
        scope: ``id`` of the enclosing named class (None inside anonymous ones)
        scope_name: Name of the enclosing class, for diagnostics
        binding: Export binding of a class declaration
        header: Class declaration text up to the body brace
        expression: True for class expressions and classes nested in code
        modifiers: Member modifiers (``static``, ``async``, ``get`` ...)
    """

    id: int
    kind: DocKind
    name: str | None
    range: SourceRange
    comment: str | None = None
    scope: int | None = None
    scope_name: str | None = None
    binding: ExportBinding | None = None
    header: str = ""
    expression: bool = False
    modifiers: frozenset[str] = field(default_factory=frozenset)

    def describe(self) -> str:
        """Short description for diagnostics."""
        owner = f"{self.scope_name}." if self.scope_name else ""
        return f"{self.kind.value} {owner}{self.name or '<anonymous>'} at offset {self.range.start}"


@dataclass(frozen=True)
class ExportPoint:
    """An export statement that names an existing binding.

    ``text`` is the raw specifier (``Foo``, ``Foo as Bar``); ``default`` marks
    ``export default Foo`` forwards.
    """

    text: str
    range: SourceRange
    default: bool = False
    from_module: str | None = None


@dataclass
class ScanResult:
    points: list[DocPoint] = field(default_factory=list)
    exports: list[ExportPoint] = field(default_factory=list)


# =============================================================================
# Tokenizer
# =============================================================================

_IDENT_START = re.compile(r"[A-Za-z_$\u0080-\uffff]")
_IDENT_REST = re.compile(r"[\w$\u0080-\uffff]*")
_NUMBER = re.compile(r"\d[\w.]*|\.\d[\w]*")
_REGEX_FLAGS = re.compile(r"[a-z]*")

_REGEX_AFTER_PUNCT = set("(,=:[!&|?{};+-*%<>~^") | {"=>", "..."}
_REGEX_AFTER_WORD = {
    "return", "typeof", "instanceof", "in", "of", "new", "delete", "void",
    "throw", "case", "do", "else", "yield", "await",
}


class _Tokenizer:
    def __init__(self, source: str):
        self.source = source
        self.n = len(source)
        self.tokens: list[Token] = []
        self._prev: Token | None = None

    def run(self) -> list[Token]:
        src = self.source
        i = 0
        newline = False
        if src.startswith("#!"):
            i = src.find("\n")
            i = self.n if i == -1 else i

        while i < self.n:
            ch = src[i]

            if ch.isspace():
                newline = newline or ch in "\n\r\u2028\u2029"
                i += 1
                continue

            if src.startswith("//", i):
                end = src.find("\n", i)
                i = self.n if end == -1 else end
                continue

            if src.startswith("/*", i):
                end = src.find("*/", i + 2)
                end = self.n if end == -1 else end + 2
                text = src[i:end]
                if text.startswith("/**") and not text.startswith("/***") and text != "/**/":
                    self._emit(TokenKind.DOC, text, i, end, newline)
                    newline = False
                else:
                    newline = newline or "\n" in text
                i = end
                continue

            if ch in "'\"":
                end = self._skip_string(i)
                self._emit(TokenKind.STRING, src[i:end], i, end, newline)
            elif ch == "`":
                end = self._skip_template(i)
                self._emit(TokenKind.TEMPLATE, src[i:end], i, end, newline)
            elif ch.isdigit() or (ch == "." and i + 1 < self.n and src[i + 1].isdigit()):
                end = _NUMBER.match(src, i).end()
                self._emit(TokenKind.NUMBER, src[i:end], i, end, newline)
            elif _IDENT_START.match(ch):
                end = _IDENT_REST.match(src, i + 1).end()
                self._emit(TokenKind.IDENT, src[i:end], i, end, newline)
            elif ch == "/" and self._regex_allowed():
                end = self._skip_regex(i)
                if end is None:
                    end = i + 1
                    self._emit(TokenKind.PUNCT, "/", i, end, newline)
                else:
                    self._emit(TokenKind.REGEX, src[i:end], i, end, newline)
            elif src.startswith("...", i):
                end = i + 3
                self._emit(TokenKind.PUNCT, "...", i, end, newline)
            elif src.startswith("=>", i):
                end = i + 2
                self._emit(TokenKind.PUNCT, "=>", i, end, newline)
            else:
                end = i + 1
                self._emit(TokenKind.PUNCT, ch, i, end, newline)

            newline = False
            i = end

        return self.tokens

    def _emit(self, kind: TokenKind, value: str, start: int, end: int, newline: bool) -> None:
        token = Token(kind, value, start, end, newline)
        self.tokens.append(token)
        if kind is not TokenKind.DOC:
            self._prev = token

    def _regex_allowed(self) -> bool:
        prev = self._prev
        if prev is None:
            return True
        if prev.kind is TokenKind.PUNCT:
            return prev.value in _REGEX_AFTER_PUNCT
        return prev.kind is TokenKind.IDENT and prev.value in _REGEX_AFTER_WORD

    def _skip_string(self, i: int) -> int:
        quote = self.source[i]
        j = i + 1
        while j < self.n:
            ch = self.source[j]
            if ch == "\\":
                j += 2
                continue
            if ch == quote:
                return j + 1
            if ch == "\n":
                return j
            j += 1
        return self.n

    def _skip_template(self, i: int) -> int:
        j = i + 1
        while j < self.n:
            ch = self.source[j]
            if ch == "\\":
                j += 2
                continue
            if ch == "`":
                return j + 1
            if self.source.startswith("${", j):
                j = self._skip_substitution(j + 2)
                continue
            j += 1
        return self.n

    def _skip_substitution(self, j: int) -> int:
        """Skip a ``${ ... }`` body; returns the offset after its closing brace."""
        depth = 0
        while j < self.n:
            ch = self.source[j]
            if ch in "'\"":
                j = self._skip_string(j)
                continue
            if ch == "`":
                j = self._skip_template(j)
                continue
            if self.source.startswith("/*", j):
                end = self.source.find("*/", j + 2)
                j = self.n if end == -1 else end + 2
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0:
                    return j + 1
                depth -= 1
            j += 1
        return self.n

    def _skip_regex(self, i: int) -> int | None:
        j = i + 1
        in_class = False
        while j < self.n:
            ch = self.source[j]
            if ch == "\n":
                return None
            if ch == "\\":
                j += 2
                continue
            if in_class:
                in_class = ch != "]"
            elif ch == "[":
                in_class = True
            elif ch == "/":
                return _REGEX_FLAGS.match(self.source, j + 1).end()
            j += 1
        return None


def tokenize(source: str) -> list[Token]:
    """Tokenize JS/TS source, dropping ordinary comments and keeping doc blocks."""
    return _Tokenizer(source).run()


# =============================================================================
# Structural scan
# =============================================================================

_MEMBER_MODIFIERS = {
    "static", "async", "get", "set", "public", "private", "protected",
    "readonly", "declare", "override", "abstract", "accessor",
}
_PROPERTY_MODIFIERS = {"async", "get", "set"}
_CLASS_PREFIXES = {"abstract", "declare"}
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_EXPRESSION_CONTEXT_PUNCT = {"=", "(", ",", ":", "?", "[", "=>", "!", "&", "|", "{"}
_EXPRESSION_CONTEXT_WORDS = {"return", "new", "extends", "yield", "await", "typeof", "default"}
_CONTINUATION_PUNCT = set(".?:=+-*/%&|^,<>!([") | {"=>"}
_CONTINUATION_WORDS = {"as", "satisfies", "instanceof", "in"}
_TYPE_POSITION_PUNCT = {":", "|", "&", ",", "=>", "<", "(", "["}


class SourceScanner:
    """Scan one module's source into doc points and export points.

    Manifesto:
        The contract is only as good as the association between a doc
        comment and the declaration it documents. The scanner keeps exact
        character ranges and the identity of the enclosing class for every
        declaration, so the extractor can associate by lexical scope first
        and by range containment where scope is not available.

    Guardrails:
        - Do NOT treat braces inside strings, templates, regexes or comments
          as structure
          ✅ They are single tokens
        - Do NOT give up on unbalanced input
          ✅ Unmatched brackets extend to the end of the source
    """

    def __init__(self, source: str):
        self.source = source
        self.tokens = tokenize(source)
        self._ids = itertools.count()
        self._matches: dict[int, int] = self._match_brackets()
        self.result = ScanResult()

    def scan(self) -> ScanResult:
        self._scan_toplevel()
        return self.result

    # ── bracket bookkeeping ──────────────────────────────────────

    def _match_brackets(self) -> dict[int, int]:
        matches: dict[int, int] = {}
        stack: list[int] = []
        for idx, token in enumerate(self.tokens):
            if token.kind is not TokenKind.PUNCT:
                continue
            if token.value in _OPENERS:
                stack.append(idx)
            elif token.value in (")", "]", "}"):
                while stack:
                    opener = stack.pop()
                    if _OPENERS[self.tokens[opener].value] == token.value:
                        matches[opener] = idx
                        break
        last = len(self.tokens) - 1
        for opener in stack:
            matches[opener] = last
        return matches

    def _close(self, idx: int) -> int:
        return self._matches.get(idx, len(self.tokens) - 1)

    def _tok(self, idx: int) -> Token | None:
        return self.tokens[idx] if 0 <= idx < len(self.tokens) else None

    def _prev_significant(self, idx: int) -> Token | None:
        idx -= 1
        while idx >= 0 and self.tokens[idx].kind is TokenKind.DOC:
            idx -= 1
        return self.tokens[idx] if idx >= 0 else None

    def _skip_angle(self, idx: int) -> int:
        """Index of the ``>`` closing the ``<`` at ``idx``."""
        depth = 0
        while idx < len(self.tokens):
            token = self.tokens[idx]
            if token.is_punct("<"):
                depth += 1
            elif token.is_punct(">"):
                depth -= 1
                if depth == 0:
                    return idx
            elif token.is_punct("(", "[", "{"):
                idx = self._close(idx)
            elif token.is_punct(";"):
                return idx - 1
            idx += 1
        return len(self.tokens) - 1

    def _skip_decorator(self, idx: int) -> int:
        idx += 1
        while (token := self._tok(idx)) is not None:
            if token.kind is TokenKind.IDENT:
                idx += 1
                nxt = self._tok(idx)
                if nxt is not None and nxt.is_punct(".") and not nxt.newline_before:
                    idx += 1
                    continue
                if nxt is not None and nxt.is_punct("("):
                    idx = self._close(idx) + 1
                return idx
            return idx
        return idx

    def _new_point(self, **kwargs) -> DocPoint:
        point = DocPoint(id=next(self._ids), **kwargs)
        self.result.points.append(point)
        return point

    # ── top level ────────────────────────────────────────────────

    def _scan_toplevel(self) -> None:
        tokens = self.tokens
        depth = 0
        pending_doc: Token | None = None
        i = 0
        while i < len(tokens):
            token = tokens[i]

            if token.kind is TokenKind.DOC:
                pending_doc = token
                i += 1
                continue

            if token.is_punct("{", "(", "["):
                depth += 1
            elif token.is_punct("}", ")", "]"):
                depth = max(depth - 1, 0)

            if depth == 0 and token.is_word("export"):
                i = self._scan_export(i, pending_doc)
                pending_doc = None
                continue

            if token.is_punct("@"):
                i = self._skip_decorator(i)
                continue

            if token.is_word(*_CLASS_PREFIXES) and (nxt := self._tok(i + 1)) and nxt.is_word("class"):
                i += 1
                continue

            if token.is_word("class") and self._starts_class(i):
                expression = depth > 0 or self._in_expression_context(i)
                start = self._declaration_start(i)
                i = self._scan_class(
                    i,
                    start=start,
                    doc=pending_doc if not expression else None,
                    binding=None,
                    expression=expression,
                )
                pending_doc = None
                continue

            pending_doc = None
            i += 1

    def _starts_class(self, idx: int) -> bool:
        """``class`` used as a keyword, not as a property name (``x.class``, ``{class: 1}``)."""
        prev = self._prev_significant(idx)
        nxt = self._tok(idx + 1)
        if prev is not None and prev.is_punct("."):
            return False
        return nxt is not None and not nxt.is_punct(":", "=", "(", ",", ")")

    def _in_expression_context(self, idx: int) -> bool:
        prev = self._prev_significant(idx)
        while prev is not None and prev.is_word(*_CLASS_PREFIXES):
            idx -= 1
            prev = self._prev_significant(idx)
        if prev is None:
            return False
        if prev.kind is TokenKind.PUNCT:
            return prev.value in _EXPRESSION_CONTEXT_PUNCT
        return prev.kind is TokenKind.IDENT and prev.value in _EXPRESSION_CONTEXT_WORDS

    def _declaration_start(self, idx: int) -> int:
        prev = self._tok(idx - 1)
        if prev is not None and prev.is_word(*_CLASS_PREFIXES):
            return prev.start
        return self.tokens[idx].start

    def _scan_export(self, idx: int, doc: Token | None) -> int:
        export = self.tokens[idx]
        j = idx + 1
        token = self._tok(j)
        if token is None:
            return j

        if token.is_word("default"):
            j += 1
            while (token := self._tok(j)) is not None and token.is_punct("@"):
                j = self._skip_decorator(j)
            if token is not None and token.is_word(*_CLASS_PREFIXES):
                j += 1
                token = self._tok(j)
            if token is not None and token.is_word("class"):
                return self._scan_class(j, start=export.start, doc=doc, binding=ExportBinding.DEFAULT)
            nxt = self._tok(j + 1)
            if (
                token is not None
                and token.kind is TokenKind.IDENT
                and (nxt is None or nxt.is_punct(";") or nxt.newline_before)
            ):
                self.result.exports.append(
                    ExportPoint(
                        text=token.value,
                        range=SourceRange(export.start, token.end),
                        default=True,
                    )
                )
                return j + 2 if nxt is not None and nxt.is_punct(";") else j + 1
            return j

        while (token := self._tok(j)) is not None and token.is_punct("@"):
            j = self._skip_decorator(j)
        if token is not None and token.is_word(*_CLASS_PREFIXES):
            j += 1
            token = self._tok(j)
        if token is not None and token.is_word("class"):
            return self._scan_class(j, start=export.start, doc=doc, binding=ExportBinding.NAMED)

        if token is not None and token.is_punct("{"):
            return self._scan_export_clause(idx, j)

        return j

    def _scan_export_clause(self, export_idx: int, open_idx: int) -> int:
        close = self._close(open_idx)
        after = close + 1
        from_module = None
        token = self._tok(after)
        if token is not None and token.is_word("from"):
            source_token = self._tok(after + 1)
            if source_token is not None and source_token.kind is TokenKind.STRING:
                from_module = source_token.value[1:-1]
            after += 2

        specifier: list[Token] = []
        for k in range(open_idx + 1, close + 1):
            token = self.tokens[k]
            if token.kind is TokenKind.DOC:
                continue
            if token.is_punct(",") or k == close:
                if specifier:
                    text = self.source[specifier[0].start:specifier[-1].end]
                    if text.startswith("type "):
                        text = text[len("type "):].strip()
                    self.result.exports.append(
                        ExportPoint(
                            text=text,
                            range=SourceRange(self.tokens[export_idx].start, self.tokens[close].end),
                            default=bool(re.search(r"\bas\s+default$", text)),
                            from_module=from_module,
                        )
                    )
                specifier = []
            else:
                specifier.append(token)

        token = self._tok(after)
        if token is not None and token.is_punct(";"):
            after += 1
        return after

    # ── classes ──────────────────────────────────────────────────

    def _scan_class(
        self,
        idx: int,
        *,
        start: int,
        doc: Token | None,
        binding: ExportBinding | None,
        expression: bool = False,
    ) -> int:
        j = idx + 1
        name = None
        token = self._tok(j)
        if token is not None and token.kind is TokenKind.IDENT and not token.is_word("extends", "implements"):
            name = token.value
            j += 1

        while (token := self._tok(j)) is not None:
            if token.is_punct("<"):
                j = self._skip_angle(j) + 1
                continue
            if token.is_punct("(", "["):
                j = self._close(j) + 1
                continue
            if token.is_punct("{"):
                break
            j += 1

        if token is None:
            return j

        body_open, body_close = j, self._close(j)
        if expression and name is None:
            name = self._assignment_target(idx)

        point = self._new_point(
            kind=DocKind.CLASS,
            name=name,
            range=SourceRange(start, self.tokens[body_close].end),
            comment=doc.value if doc is not None else None,
            binding=binding,
            header=self.source[start:self.tokens[body_open].start],
            expression=expression,
        )
        self._scan_class_body(body_open + 1, body_close, point)
        return body_close + 1

    def _assignment_target(self, idx: int) -> str | None:
        j = idx - 1
        while j >= 0 and self.tokens[j].kind is TokenKind.DOC:
            j -= 1
        if j > 0 and self.tokens[j].is_punct("="):
            target = self.tokens[j - 1]
            if target is not None and target.kind is TokenKind.IDENT:
                return target.value
        return None

    def _is_modifier(self, idx: int, modifiers: set[str]) -> bool:
        token = self.tokens[idx]
        nxt = self._tok(idx + 1)
        if not token.is_word(*modifiers) or nxt is None:
            return False
        if nxt.kind in (TokenKind.IDENT, TokenKind.STRING, TokenKind.NUMBER):
            return True
        return nxt.is_punct("[", "#", "*", "{")

    def _scan_class_body(self, start: int, end: int, owner: DocPoint) -> None:
        pending_doc: Token | None = None
        i = start
        while i < end:
            token = self.tokens[i]

            if token.kind is TokenKind.DOC:
                pending_doc = token
                i += 1
                continue
            if token.is_punct(";"):
                i += 1
                continue
            if token.is_punct("@"):
                i = self._skip_decorator(i)
                continue

            first = i
            modifiers: set[str] = set()
            while i < end and self._is_modifier(i, _MEMBER_MODIFIERS):
                modifiers.add(self.tokens[i].value)
                i += 1
            if i < end and self.tokens[i].is_punct("*"):
                modifiers.add("*")
                i += 1

            token = self.tokens[i] if i < end else None
            if token is None:
                break

            if "static" in modifiers and token.is_punct("{"):
                i = self._close(i) + 1
                pending_doc = None
                continue

            private = False
            if token.is_punct("#"):
                private = True
                i += 1
                token = self.tokens[i] if i < end else None
                if token is None:
                    break

            if token.kind in (TokenKind.IDENT, TokenKind.NUMBER):
                name = token.value
                i += 1
            elif token.kind is TokenKind.STRING:
                name = token.value[1:-1]
                i += 1
            elif token.is_punct("["):
                close = self._close(i)
                name = self.source[token.start:self.tokens[close].end]
                i = close + 1
            else:
                i += 1
                pending_doc = None
                continue

            if i < end and self.tokens[i].is_punct("?", "!"):
                i += 1
            if i < end and self.tokens[i].is_punct("<"):
                i = self._skip_angle(i) + 1

            if private:
                modifiers.add("#")

            if i < end and self.tokens[i].is_punct("("):
                last, i = self._scan_method_tail(i, end)
                kind = DocKind.METHOD
                value_start = None
            else:
                value_start, last, i = self._scan_field_tail(i, end)
                kind = DocKind.FIELD

            if pending_doc is not None or (kind is DocKind.FIELD and "static" in modifiers):
                self._new_point(
                    kind=kind,
                    name=name,
                    range=SourceRange(self.tokens[first].start, self.tokens[last].end),
                    comment=pending_doc.value if pending_doc is not None else None,
                    scope=owner.id if owner.name else None,
                    scope_name=owner.name,
                    modifiers=frozenset(modifiers),
                )
            if value_start is not None:
                self._scan_initializer(value_start, last, owner, keep_all="static" in modifiers)
            pending_doc = None

    def _scan_method_tail(self, open_paren: int, end: int) -> tuple[int, int]:
        """Skip parameters, return type and body; returns ``(last_index, next_index)``."""
        j = self._close(open_paren) + 1
        last = j - 1
        if j < end and self.tokens[j].is_punct(":"):
            j = self._skip_return_type(j + 1, end)
        if j < end and self.tokens[j].is_punct("{"):
            close = self._close(j)
            return close, close + 1
        if j < end and self.tokens[j].is_punct(";"):
            return j - 1, j + 1
        return max(last, j - 1), j

    def _skip_return_type(self, j: int, end: int) -> int:
        while j < end:
            token = self.tokens[j]
            if token.is_punct("<"):
                j = self._skip_angle(j) + 1
                continue
            if token.is_punct("(", "["):
                j = self._close(j) + 1
                continue
            if token.is_punct("{"):
                prev = self._prev_significant(j)
                if prev is not None and (
                    (prev.kind is TokenKind.PUNCT and prev.value in _TYPE_POSITION_PUNCT)
                    or prev.is_word("keyof", "typeof", "readonly")
                ):
                    j = self._close(j) + 1
                    continue
                return j
            if token.is_punct(";"):
                return j
            if token.newline_before and self._ends_expression(j - 1) and not self._continues(token):
                return j
            j += 1
        return j

    def _scan_field_tail(self, j: int, end: int) -> tuple[int | None, int, int]:
        """Skip a field's type and initializer.

        Returns ``(initializer_start, last_index, next_index)``; the
        initializer start is None for fields without ``=``.
        """
        value_start = None
        last = j - 1
        while j < end:
            token = self.tokens[j]
            if token.kind is TokenKind.DOC:
                break
            if token.is_punct(";"):
                return value_start, last, j + 1
            if token.newline_before and self._ends_expression(j - 1) and not self._continues(token):
                break
            if token.is_punct("=") and value_start is None:
                value_start = j + 1
            if token.is_punct("(", "[", "{"):
                j = self._close(j)
            last = j
            j += 1
        return value_start, last, j

    def _ends_expression(self, idx: int) -> bool:
        token = self._tok(idx)
        if token is None:
            return False
        if token.kind is TokenKind.PUNCT:
            return token.value in (")", "]", "}", ">")
        return token.kind is not TokenKind.DOC

    def _continues(self, token: Token) -> bool:
        if token.kind is TokenKind.PUNCT:
            return token.value in _CONTINUATION_PUNCT
        return token.is_word(*_CONTINUATION_WORDS)

    # ── object literals ──────────────────────────────────────────

    def _scan_initializer(self, start: int, last: int, owner: DocPoint, keep_all: bool = False) -> None:
        """Find object literals (and class expressions) inside a field initializer.

        With ``keep_all`` (static fields) undocumented properties become points too.
        """
        i = start
        while i <= last:
            token = self.tokens[i]
            if token.is_punct("{"):
                prev = self._prev_significant(i)
                if prev is None or not prev.is_punct("=>"):
                    self._scan_object(i, owner, keep_all)
                i = self._close(i) + 1
                continue
            if token.is_word("class") and self._starts_class(i):
                i = self._scan_class(i, start=token.start, doc=None, binding=None, expression=True)
                continue
            i += 1

    def _scan_object(self, open_idx: int, owner: DocPoint, keep_all: bool) -> None:
        close = self._close(open_idx)
        pending_doc: Token | None = None
        i = open_idx + 1
        while i < close:
            token = self.tokens[i]

            if token.kind is TokenKind.DOC:
                pending_doc = token
                i += 1
                continue
            if token.is_punct(","):
                i += 1
                continue
            if token.is_punct("..."):
                i = self._skip_property_value(i + 1, close)
                pending_doc = None
                continue

            first = i
            while i < close and self._is_modifier(i, _PROPERTY_MODIFIERS):
                i += 1
            if i < close and self.tokens[i].is_punct("*"):
                i += 1

            token = self.tokens[i]
            if token.kind in (TokenKind.IDENT, TokenKind.NUMBER):
                name = token.value
            elif token.kind is TokenKind.STRING:
                name = token.value[1:-1]
            elif token.is_punct("["):
                name = self.source[token.start:self.tokens[self._close(i)].end]
                i = self._close(i)
            else:
                i += 1
                pending_doc = None
                continue
            i += 1

            kind = DocKind.PROPERTY
            value_start = None
            if i < close and self.tokens[i].is_punct("("):
                last, i = self._scan_method_tail(i, close)
            elif i < close and self.tokens[i].is_punct(":"):
                value_start = i + 1
                i = self._skip_property_value(value_start, close)
                last = i - 1
                if last == value_start and self.tokens[value_start].kind in (TokenKind.STRING, TokenKind.TEMPLATE):
                    kind = DocKind.LITERAL
            else:
                last = i - 1

            if pending_doc is not None or keep_all:
                self._new_point(
                    kind=kind,
                    name=name,
                    range=SourceRange(self.tokens[first].start, self.tokens[last].end),
                    comment=pending_doc.value if pending_doc is not None else None,
                    scope=owner.id if owner.name else None,
                    scope_name=owner.name,
                )
            if value_start is not None:
                self._scan_initializer(value_start, last, owner, keep_all)
            pending_doc = None

    def _skip_property_value(self, j: int, close: int) -> int:
        """Index of the ``,`` (or closing brace) ending a property value."""
        while j < close:
            token = self.tokens[j]
            if token.is_punct(","):
                return j
            if token.is_punct("(", "[", "{"):
                j = self._close(j)
            j += 1
        return close


__all__ = [
    "TokenKind",
    "Token",
    "DocKind",
    "ExportBinding",
    "DocPoint",
    "ExportPoint",
    "ScanResult",
    "SourceScanner",
    "tokenize",
]
