"""Structural parser: builds a tree of rule blocks, at-rules and imports.

Comments are attached in a single forward pass. A "pending" slot holds the
most recent doc (``/**``) comment; it is attached to the next node that starts
before any other token appears, and discarded otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pcoslint.model.diagnostic import SourceSpan
from pcoslint.parser.errors import ParseError
from pcoslint.parser.lexer import Token, TokenKind, tokenize

__all__ = ["Comment", "RuleNode", "AtRuleNode", "ImportNode", "ParseTree", "parse_tree"]

IMPORT_KEYWORDS = frozenset({"import", "use", "forward"})

# Targets that are never project files.
_EXTERNAL_PREFIXES = ("url(", "http://", "https://", "//", "sass:")


@dataclass
class Comment:
    text: str
    span: SourceSpan

    @property
    def is_doc(self) -> bool:
        return self.text.startswith("/**")


@dataclass
class RuleNode:
    selector: str
    span: SourceSpan
    doc: Comment | None = None
    children: list[Node] = field(default_factory=list)


@dataclass
class AtRuleNode:
    """An at-rule such as ``@mixin name($a) { ... }`` or ``@include x;``."""

    keyword: str
    name: str
    params: str | None
    prelude: str
    span: SourceSpan
    doc: Comment | None = None
    children: list[Node] = field(default_factory=list)
    has_block: bool = False


@dataclass
class ImportNode:
    keyword: str
    targets: list[str]
    span: SourceSpan
    doc: Comment | None = None


Node = RuleNode | AtRuleNode | ImportNode


@dataclass
class ParseTree:
    file_id: str
    nodes: list[Node] = field(default_factory=list)
    orphans: list[Comment] = field(default_factory=list)


@dataclass
class _Frame:
    node: RuleNode | AtRuleNode | None
    children: list[Node]
    open_token: Token | None


class _TreeBuilder:
    def __init__(self, text: str, file_id: str) -> None:
        self.text = text
        self.file_id = file_id
        self.tree = ParseTree(file_id=file_id)
        self.stack: list[_Frame] = [_Frame(None, self.tree.nodes, None)]
        self.prelude: list[Token] = []
        self.prelude_doc: Comment | None = None
        self.pending: Comment | None = None

    # ---- helpers ----

    def _span(self, first: Token, last: Token | None = None) -> SourceSpan:
        last = last or first
        return SourceSpan(self.file_id, first.line, first.column, last.end_line, last.end_column)

    def _prelude_text(self) -> str:
        raw = self.text[self.prelude[0].offset:self.prelude[-1].end]
        return " ".join(raw.split())

    def _discard(self, comment: Comment | None) -> None:
        if comment is not None and comment.is_doc:
            self.tree.orphans.append(comment)

    def _reset_prelude(self) -> None:
        self.prelude = []
        self.prelude_doc = None

    # ---- token handlers ----

    def comment(self, tok: Token) -> None:
        comment = Comment(tok.value, self._span(tok))
        if self.prelude or not comment.is_doc:
            # Inside a selector or value, or a plain /* */ note: never a doc.
            return
        self._discard(self.pending)
        self.pending = comment

    def word(self, tok: Token) -> None:
        if not self.prelude:
            self.prelude_doc = self.pending
            self.pending = None
        self.prelude.append(tok)

    def open_block(self, tok: Token) -> None:
        if not self.prelude:
            # Anonymous block; keep structure, nothing to attach to.
            self.prelude_doc, self.pending = self.pending, None
            node: RuleNode | AtRuleNode = RuleNode("", self._span(tok), doc=self.prelude_doc)
        elif self.prelude[0].kind is TokenKind.AT_KEYWORD:
            node = self._at_rule(has_block=True)
        else:
            node = RuleNode(self._prelude_text(), self._span(self.prelude[0]), doc=self.prelude_doc)
        self.stack[-1].children.append(node)
        self.stack.append(_Frame(node, node.children, tok))
        self._reset_prelude()

    def close_block(self, tok: Token) -> None:
        if self.prelude:
            self.statement()
        self._discard(self.pending)
        self.pending = None
        if len(self.stack) == 1:
            raise ParseError("Unmatched closing brace", line=tok.line, column=tok.column)
        frame = self.stack.pop()
        node = frame.node
        assert node is not None
        node.span = SourceSpan(
            self.file_id, node.span.line, node.span.column, tok.end_line, tok.end_column
        )

    def semicolon(self) -> None:
        if self.prelude:
            self.statement()
        else:
            self._discard(self.pending)
            self.pending = None

    def statement(self) -> None:
        """Finish a ``;``-terminated prelude (import, include, or declaration)."""
        if self.prelude[0].kind is TokenKind.AT_KEYWORD:
            keyword = self.prelude[0].value[1:].lower()
            if keyword in IMPORT_KEYWORDS:
                node: Node = self._import(keyword)
            else:
                node = self._at_rule(has_block=False)
            self.stack[-1].children.append(node)
        else:
            # Property or variable declaration: a comment before it documents nothing.
            self._discard(self.prelude_doc)
        self._reset_prelude()

    def finish(self) -> ParseTree:
        if len(self.stack) > 1:
            open_tok = self.stack[1].open_token
            assert open_tok is not None
            raise ParseError("Unterminated block", line=open_tok.line, column=open_tok.column)
        if self.prelude:
            self.statement()
        self._discard(self.pending)
        self.pending = None
        return self.tree

    # ---- node construction ----

    def _at_rule(self, has_block: bool) -> AtRuleNode:
        keyword_tok = self.prelude[0]
        rest = self.prelude[1:]
        name = ""
        params: str | None = None
        if rest and rest[0].kind in (TokenKind.IDENTIFIER, TokenKind.SELECTOR_FRAGMENT):
            name = rest[0].value
            if len(rest) > 1 and rest[1].kind is TokenKind.PARAMETER_LIST:
                params = rest[1].value
        elif rest and rest[0].kind is TokenKind.PARAMETER_LIST:
            params = rest[0].value
        return AtRuleNode(
            keyword=keyword_tok.value[1:].lower(),
            name=name,
            params=params,
            prelude=self._prelude_text(),
            span=self._span(keyword_tok, self.prelude[-1]),
            doc=self.prelude_doc,
            has_block=has_block,
        )

    def _import(self, keyword: str) -> ImportNode:
        targets: list[str] = []
        for tok in self.prelude[1:]:
            # Only quoted targets name files; url(...) lands in a parameter list.
            if tok.kind is not TokenKind.STRING:
                continue
            target = tok.value[1:-1].strip()
            if target and not target.startswith(_EXTERNAL_PREFIXES):
                targets.append(target)
        return ImportNode(
            keyword=keyword,
            targets=targets,
            span=self._span(self.prelude[0], self.prelude[-1]),
            doc=self.prelude_doc,
        )


def parse_tree(text: str, file_id: str = "<string>") -> ParseTree:
    """Parse stylesheet *text* into a :class:`ParseTree`.

    Raises :class:`ParseError` for unterminated constructs or a stray
    closing brace; no partial tree is returned in that case.
    """
    builder = _TreeBuilder(text, file_id)
    for tok in tokenize(text):
        if tok.kind is TokenKind.COMMENT:
            builder.comment(tok)
        elif tok.kind is TokenKind.BRACE_OPEN:
            builder.open_block(tok)
        elif tok.kind is TokenKind.BRACE_CLOSE:
            builder.close_block(tok)
        elif tok.kind is TokenKind.SEMICOLON:
            builder.semicolon()
        else:
            builder.word(tok)
    return builder.finish()
