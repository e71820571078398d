"""Declaration building: parse tree plus doc blocks to a SourceFile."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from pcoslint.doctags import extract_docblock
from pcoslint.model.declaration import (
    Declaration,
    DeclarationKind,
    DocBlock,
    ImportRef,
    SourceFile,
)
from pcoslint.model.diagnostic import Diagnostic, Severity
from pcoslint.parser.structure import AtRuleNode, Comment, ImportNode, Node, RuleNode, parse_tree

__all__ = ["ParsedFile", "parse_source", "infer_kind", "split_signature"]

DEFINITION_KEYWORDS = frozenset({"mixin", "function"})

# Block at-rules whose contents still count as the enclosing level.
TRANSPARENT_KEYWORDS = frozenset({"media", "supports", "layer", "container", "at-root", "include"})

_LEADING_NAME_RE = re.compile(r"^(?P<sigil>[.%])(?P<name>(?:#\{[^}]*\}|\\.|[\w-])+)")
_ELEMENT_NAME_RE = re.compile(r"^(?P<name>[A-Za-z][\w-]*)")
_BARE_CLASS_RE = re.compile(r"^[.%](?:#\{[^}]*\}|\\.|[\w-])+$")
_SUFFIX_RE = re.compile(r"^&(?P<suffix>(?:__|--|-|_)[\w-]+)")

_PREFIX_KINDS = {
    "c-": DeclarationKind.COMPONENT,
    "u-": DeclarationKind.UTILITY,
}


@dataclass
class ParsedFile:
    """Result of parsing one file: the immutable SourceFile and local findings."""

    source: SourceFile
    diagnostics: list[Diagnostic] = field(default_factory=list)


def infer_kind(name: str) -> DeclarationKind:
    """Kind implied by a name's type prefix, ``unknown`` if none."""
    for prefix, kind in _PREFIX_KINDS.items():
        if name.startswith(prefix):
            return kind
    return DeclarationKind.UNKNOWN


def split_signature(params: str | None) -> tuple[str, ...]:
    """Return parameter names from an at-rule signature like ``($a, $b: 1)``."""
    if not params:
        return ()
    inner = params.strip()
    if inner.startswith("(") and inner.endswith(")"):
        inner = inner[1:-1]
    names: list[str] = []
    depth = 0
    current = ""
    for ch in inner + ",":
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        if ch == "," and depth == 0:
            name = current.split(":", 1)[0].strip().lstrip("$").rstrip(".")
            if name:
                names.append(name)
            current = ""
        else:
            current += ch
    return tuple(names)


class _DeclarationBuilder:
    def __init__(self, file_id: str, report_orphans: bool = True) -> None:
        self.file_id = file_id
        self.report_orphans = report_orphans
        self.diagnostics: list[Diagnostic] = []

    def doc(self, comment: Comment | None) -> DocBlock | None:
        if comment is None:
            return None
        block, diagnostics = extract_docblock(comment.text, comment.span)
        self.diagnostics.extend(diagnostics)
        return block

    def top_level(self, nodes: list[Node]) -> tuple[list[Declaration], list[ImportRef]]:
        declarations: list[Declaration] = []
        imports: list[ImportRef] = []
        for node in nodes:
            if isinstance(node, ImportNode):
                imports.extend(ImportRef(t, node.keyword, node.span) for t in node.targets)
                self.unattached(node)
            elif isinstance(node, RuleNode):
                decl = self.rule(node)
                if decl is not None:
                    declarations.append(decl)
            elif node.keyword in DEFINITION_KEYWORDS and node.has_block:
                declarations.append(self.definition(node))
            else:
                self.unattached(node)
                if node.keyword in TRANSPARENT_KEYWORDS:
                    inner_decls, inner_imports = self.top_level(node.children)
                    declarations.extend(inner_decls)
                    imports.extend(inner_imports)
        return declarations, imports

    def rule(self, node: RuleNode) -> Declaration | None:
        doc = self.doc(node.doc)
        selector = node.selector
        match = _LEADING_NAME_RE.match(selector)
        origin = "rule"
        if match:
            name = match.group("name")
            if match.group("sigil") == "%":
                origin = "placeholder"
        elif doc is not None:
            element = _ELEMENT_NAME_RE.match(selector)
            name = element.group("name") if element else selector
        else:
            # Element, attribute or universal selector without documentation.
            return None
        if doc is not None and doc.name:
            name = doc.name
        defines_name = doc is not None or origin == "placeholder" or bool(_BARE_CLASS_RE.match(selector))
        return Declaration(
            kind=self.kind(doc, name),
            name=name,
            selector_or_signature=selector,
            span=node.span,
            doc=doc,
            children=tuple(self.children(node.children, name)),
            origin=origin,
            defines_name=defines_name,
        )

    def definition(self, node: AtRuleNode) -> Declaration:
        doc = self.doc(node.doc)
        name = doc.name if doc is not None and doc.name else node.name
        return Declaration(
            kind=self.kind(doc, name),
            name=name,
            selector_or_signature=f"{node.name}{node.params or ''}",
            span=node.span,
            doc=doc,
            children=tuple(self.children(node.children, name)),
            origin=node.keyword,
            parameters=split_signature(node.params),
        )

    def children(self, nodes: list[Node], parent: str) -> list[Declaration]:
        result: list[Declaration] = []
        for node in nodes:
            if isinstance(node, RuleNode):
                match = _SUFFIX_RE.match(node.selector)
                if match:
                    name = parent + match.group("suffix")
                else:
                    name = node.selector.replace("&", parent, 1)
                result.append(
                    Declaration(
                        kind=DeclarationKind.UNKNOWN,
                        name=name,
                        selector_or_signature=node.selector,
                        span=node.span,
                        doc=self.doc(node.doc),
                        children=tuple(self.children(node.children, name)),
                        origin="nested",
                        defines_name=False,
                    )
                )
            else:
                self.unattached(node)
                if isinstance(node, AtRuleNode) and node.keyword in TRANSPARENT_KEYWORDS:
                    result.extend(self.children(node.children, parent))
        return result

    @staticmethod
    def kind(doc: DocBlock | None, name: str) -> DeclarationKind:
        if doc is not None and doc.type is not None:
            return doc.type
        return infer_kind(name.lstrip("%"))

    def unattached(self, node: AtRuleNode | ImportNode) -> None:
        """Report a doc comment sitting on an at-rule that declares nothing."""
        if node.doc is None or not self.report_orphans:
            return
        self.diagnostics.append(
            Diagnostic(
                code="orphan-comment",
                severity=Severity.INFO,
                message=(
                    f"Doc comment on @{node.keyword} does not document a declaration "
                    "and was discarded."
                ),
                span=node.doc.span,
            )
        )

    def orphans(self, comments: list[Comment]) -> None:
        for comment in comments:
            self.diagnostics.append(
                Diagnostic(
                    code="orphan-comment",
                    severity=Severity.INFO,
                    message="Doc comment is not attached to any declaration and was discarded.",
                    span=comment.span,
                )
            )


def parse_source(file_id: str, text: str, report_orphans: bool = True) -> ParsedFile:
    """Parse one file into a SourceFile.

    Raises :class:`~pcoslint.parser.errors.ParseError` when the file cannot
    be parsed; nothing partial is returned.
    """
    tree = parse_tree(text, file_id)
    builder = _DeclarationBuilder(file_id, report_orphans)
    declarations, imports = builder.top_level(tree.nodes)
    if report_orphans:
        builder.orphans(tree.orphans)
    source = SourceFile(
        file_id=file_id,
        text=text,
        declarations=tuple(declarations),
        imports=tuple(imports),
    )
    return ParsedFile(source=source, diagnostics=builder.diagnostics)
