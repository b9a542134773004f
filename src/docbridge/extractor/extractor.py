"""
Contract extractor: annotated source text → mapping of class name → Contract.

Manifesto:
    The bridge never sees source code. Everything it exposes is decided here,
    once, at build time: which classes are exported, which methods are
    documented, what each parameter is called and in what order. Ambiguous
    annotations degrade to ``unknown`` with a warning so one sloppy doc
    comment does not block a build; a doc that cannot be attached to any
    class is a hard error because it means the contract is wrong.

Architecture:
    ::

        source ──► SourceScanner ──► DocPoints + ExportPoints
                                          │
                        JSDocParser ◄─────┤  (drop @ignore)
                                          ▼
                              class set (named, default, forwarded)
                                          │
                   owner resolution (scope id, else default-class range)
                                          │
                 ┌────────────────────────┴───────────────────────┐
                 ▼                                                ▼
            MethodDoc per documented method             static buckets
            (types normalized to one tag)               (RangeIndex containment)
                 └────────────────────────┬───────────────────────┘
                                          ▼
                                ExtractionResult(contracts, warnings)

Guardrails:
    ❌ DON'T: Fail the build on a union type or a missing type
    ✅ DO: Degrade to ``unknown`` and record a warning

    ❌ DON'T: Silently drop a documented member whose class is unknown
    ✅ DO: Raise DanglingReferenceError naming the member

Tags:
    extractor, jsdoc, contract, docbridge
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from docbridge.core.contract import (
    DEFAULT_EXPORT,
    UNKNOWN_TYPE,
    Contract,
    MethodDoc,
    ParamDoc,
    ReturnDoc,
    StaticMember,
)
from docbridge.core.errors import DanglingReferenceError
from docbridge.core.logging import get_logger
from docbridge.extractor.jsdoc import JSDocComment, JSDocParser
from docbridge.extractor.ranges import RangeIndex
from docbridge.extractor.scanner import DocKind, DocPoint, ExportBinding, ExportPoint, SourceScanner

logger = get_logger(__name__)

_DEFAULT_CLASS_NAME = re.compile(r"\bclass\s+(?!extends\b|implements\b)([A-Za-z_$][\w$]*)")
_EXPORT_ALIAS = re.compile(r"^([\w$]+)\s+as\s+([\w$]+)$")
_STATIC_MARKER = re.compile(r"^\s*static\s")
_NON_METHOD_MODIFIERS = {"get", "set", "#"}


@dataclass
class ExtractionResult:
    """Contracts keyed by class name, plus non-fatal data-quality warnings."""

    contracts: dict[str, Contract] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def default(self) -> Contract | None:
        return next((c for c in self.contracts.values() if c.is_default), None)


@dataclass
class _ClassInfo:
    point: DocPoint
    name: str
    doc: JSDocComment | None
    exported_as: str | None = None
    methods: list[MethodDoc] = field(default_factory=list)
    statics: dict[str, list[StaticMember]] = field(default_factory=dict)


class ContractExtractor:
    """
    Compile one module's JSDoc annotations into Contracts.

    Args:
        include_private: Also emit classes that are never exported, with a
            null ``exported_as``

    Example:
        >>> result = ContractExtractor().extract(source)
        >>> result.contracts["Calculator"].methods[0].name
        'add'
    """

    def __init__(self, *, include_private: bool = False):
        self.include_private = include_private
        self._parser = JSDocParser()

    def extract(self, source: str, *, source_file: str | None = None) -> ExtractionResult:
        """Extract contracts from source text.

        Raises:
            DanglingReferenceError: If a documented member belongs to a class
                outside the extracted class set
        """
        run = _ExtractionRun(self._parser, source, source_file or "<string>")
        try:
            result = run.execute(include_private=self.include_private)
        except DanglingReferenceError as e:
            if source_file:
                e.with_context(source_file=source_file)
            raise

        logger.info(
            "contracts_extracted",
            source_file=source_file,
            classes=len(result.contracts),
            methods=sum(len(c.methods) for c in result.contracts.values()),
            warnings=len(result.warnings),
        )
        return result


class _ExtractionRun:
    """State for a single compilation pass over one source module."""

    def __init__(self, parser: JSDocParser, source: str, source_file: str):
        self.parser = parser
        self.source = source
        self.source_file = source_file
        self.warnings: list[str] = []

    def warn(self, event: str, message: str, **fields) -> None:
        self.warnings.append(message)
        logger.warning(event, message=message, source_file=self.source_file, **fields)

    def execute(self, *, include_private: bool) -> ExtractionResult:
        scan = SourceScanner(self.source).scan()

        docs: dict[int, JSDocComment] = {}
        ignored: set[int] = set()
        for point in scan.points:
            if point.comment is None:
                continue
            doc = self.parser.parse(point.comment)
            if doc.ignore:
                ignored.add(point.id)
            else:
                docs[point.id] = doc

        classes = self._collect_classes(scan.points, ignored, docs)
        self._apply_exports(classes, scan.exports)
        default_class = next(
            (info for info in classes.values() if info.exported_as == DEFAULT_EXPORT), None
        )
        known = [info.name for info in classes.values()]

        members = [
            p for p in scan.points
            if p.kind is not DocKind.CLASS and p.id not in ignored and p.scope not in ignored
        ]
        owners: dict[int, _ClassInfo] = {}
        for point in members:
            strict = point.id in docs and (
                point.kind is DocKind.METHOD or self._is_static_field(point)
            )
            owner = self._resolve_owner(point, classes, default_class, known, strict=strict)
            if owner is not None:
                owners[point.id] = owner

        buckets = [
            p for p in members
            if p.id in owners and self._is_static_field(p)
        ]
        bucketed = self._collect_statics(buckets, members, owners, docs)

        for point in members:
            if point.kind is not DocKind.METHOD or point.id in bucketed or point.id not in owners:
                continue
            if point.id not in docs:
                continue
            self._add_method(owners[point.id], point, docs[point.id])

        result = ExtractionResult(warnings=self.warnings)
        for info in classes.values():
            if info.exported_as is None and not include_private:
                continue
            if info.name in result.contracts:
                self.warn(
                    "duplicate_class",
                    f"Class {info.name} is declared more than once; keeping the first",
                    class_name=info.name,
                )
                continue
            result.contracts[info.name] = Contract(
                exported_as=info.exported_as,
                description=_class_description(info.doc),
                methods=tuple(info.methods),
                statics={name: tuple(entries) for name, entries in info.statics.items()},
            )
        return result

    # ── classes and exports ──────────────────────────────────────

    def _collect_classes(
        self,
        points: list[DocPoint],
        ignored: set[int],
        docs: dict[int, JSDocComment],
    ) -> dict[int, _ClassInfo]:
        classes: dict[int, _ClassInfo] = {}
        for point in points:
            if point.kind is not DocKind.CLASS or point.expression or point.id in ignored:
                continue
            if point.binding is ExportBinding.DEFAULT:
                match = _DEFAULT_CLASS_NAME.search(point.header)
                name = match.group(1) if match else DEFAULT_EXPORT
                exported_as: str | None = DEFAULT_EXPORT
            else:
                name = point.name or DEFAULT_EXPORT
                exported_as = name if point.binding is ExportBinding.NAMED else None
            classes[point.id] = _ClassInfo(
                point=point, name=name, doc=docs.get(point.id), exported_as=exported_as
            )
        return classes

    def _apply_exports(self, classes: dict[int, _ClassInfo], exports: list[ExportPoint]) -> None:
        by_name: dict[str, _ClassInfo] = {}
        for info in classes.values():
            by_name.setdefault(info.name, info)

        for export in exports:
            if export.from_module is not None:
                continue
            match = _EXPORT_ALIAS.match(export.text)
            local, alias = (match.group(1), match.group(2)) if match else (export.text, export.text)
            if export.default:
                alias = DEFAULT_EXPORT
            info = by_name.get(local)
            if info is None:
                continue
            if info.exported_as == DEFAULT_EXPORT and alias != DEFAULT_EXPORT:
                continue
            info.exported_as = alias

    def _resolve_owner(
        self,
        point: DocPoint,
        classes: dict[int, _ClassInfo],
        default_class: _ClassInfo | None,
        known: list[str],
        *,
        strict: bool,
    ) -> _ClassInfo | None:
        if point.scope is not None:
            owner = classes.get(point.scope)
            if owner is None and strict:
                raise DanglingReferenceError(
                    point.scope_name or "<anonymous>",
                    point.describe(),
                    known,
                ).with_context(source_file=self.source_file)
            return owner
        if default_class is not None and default_class.point.range.strictly_contains(point.range):
            return default_class
        return None

    # ── members ──────────────────────────────────────────────────

    def _is_static_field(self, point: DocPoint) -> bool:
        return point.kind is DocKind.FIELD and bool(_STATIC_MARKER.match(point.range.slice(self.source)))

    def _collect_statics(
        self,
        buckets: list[DocPoint],
        members: list[DocPoint],
        owners: dict[int, _ClassInfo],
        docs: dict[int, JSDocComment],
    ) -> set[int]:
        """Fill static buckets; returns ids of points consumed as static members."""
        index = RangeIndex((p.range, p) for p in members)
        consumed: set[int] = set()
        for bucket in buckets:
            entries = []
            for point in index.within(bucket.range):
                consumed.add(point.id)
                doc = docs.get(point.id)
                entries.append(
                    StaticMember(
                        name=point.name,
                        type=self._static_type(point, doc, bucket),
                        description=doc.description if doc is not None else None,
                    )
                )
            if entries or bucket.id in docs:
                owners[bucket.id].statics[bucket.name] = entries
        return consumed

    def _static_type(self, point: DocPoint, doc: JSDocComment | None, bucket: DocPoint) -> str | None:
        if point.kind is DocKind.LITERAL:
            return "string"
        if doc is None:
            return None
        where = f"static {bucket.scope_name}.{bucket.name}.{point.name}"
        if doc.returns:
            return self._single_type(doc.returns[0].type_names, where)
        if doc.type_names is not None:
            return self._single_type(doc.type_names, where)
        return None

    def _add_method(self, owner: _ClassInfo, point: DocPoint, doc: JSDocComment) -> None:
        if point.name == "constructor" or point.modifiers & _NON_METHOD_MODIFIERS:
            return
        where = f"{owner.name}.{point.name}"
        if any(m.name == point.name for m in owner.methods):
            self.warn(
                "duplicate_method",
                f"{where} is documented more than once; keeping the first",
                class_name=owner.name,
                method=point.name,
            )
            return

        params = []
        seen_optional = None
        for tag in doc.params:
            if "." in tag.name:
                continue
            if tag.optional:
                seen_optional = seen_optional or tag.name
            elif seen_optional is not None:
                self.warn(
                    "optional_before_required",
                    f"{where}: optional parameter {seen_optional} precedes required parameter {tag.name}",
                    class_name=owner.name,
                    method=point.name,
                )
                seen_optional = None
            params.append(
                ParamDoc(
                    name=tag.name,
                    type=self._single_type(tag.type_names, f"param {tag.name} of {where}"),
                    description=tag.description,
                    optional=tag.optional,
                )
            )

        returns = None
        if doc.returns:
            if len(doc.returns) > 1:
                self.warn(
                    "multiple_returns",
                    f"{where} documents {len(doc.returns)} return values; using the first",
                    class_name=owner.name,
                    method=point.name,
                )
            tag = doc.returns[0]
            returns = ReturnDoc(
                type=self._single_type(tag.type_names, f"return of {where}"),
                description=tag.description,
            )

        owner.methods.append(
            MethodDoc(
                name=point.name,
                description=doc.description,
                params=tuple(params),
                returns=returns,
                examples=tuple(doc.examples) if doc.examples else None,
            )
        )

    def _single_type(self, names: list[str], where: str) -> str:
        if len(names) == 1:
            return names[0]
        self.warn(
            "ambiguous_type",
            f"{where}: expected exactly one type, got {' | '.join(names) if names else 'none'}",
            location=where,
        )
        return UNKNOWN_TYPE


def _class_description(doc: JSDocComment | None) -> str | None:
    if doc is None:
        return None
    return doc.classdesc or doc.description


def extract_file(path: str | Path, *, include_private: bool = False) -> ExtractionResult:
    """Read one source file and extract its contracts."""
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    return ContractExtractor(include_private=include_private).extract(source, source_file=str(path))


__all__ = [
    "ContractExtractor",
    "ExtractionResult",
    "extract_file",
]
