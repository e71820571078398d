"""Doc-tag extraction: turns a raw doc comment into a DocBlock."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from pcoslint.model.declaration import (
    DeclarationKind,
    DocBlock,
    DocModifier,
    DocParam,
    DocProp,
)
from pcoslint.model.diagnostic import Diagnostic, Severity, SourceSpan

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

KNOWN_TAGS = frozenset({"type", "name", "param", "prop", "modifier", "implements", "returns"})

_TAG_RE = re.compile(r"^@(?P<tag>[A-Za-z][\w-]*)(?:\s+(?P<value>.*))?$")
_MODIFIER_RE = re.compile(r"^(?:--)?(?P<name>[A-Za-z0-9_-]+?)(?:\s+(?:-\s+)?(?P<desc>.*))?$")
_WORD_RE = re.compile(r"^(?P<word>\S+)$")


@lru_cache(maxsize=1)
def _member_parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


@dataclass
class _Member:
    name: str
    type: str | None = None
    optional: bool = False
    default: str | None = None
    description: str = ""


class MemberTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a member_line parse tree into a :class:`_Member`."""

    def type_tag(self, items: list[Token]) -> tuple[str, str]:
        return ("type", str(items[0]).strip())

    def default(self, items: list[Token]) -> tuple[str, str]:
        return ("default", str(items[0]))

    def description(self, items: list[Token]) -> tuple[str, str]:
        return ("description", str(items[0])[1:].strip())

    def _member(self, items: list[object], optional: bool) -> _Member:
        name = str(items[0]).lstrip("$")
        default = None
        for item in items[1:]:
            if isinstance(item, tuple) and item[0] == "default":
                default = item[1]
        return _Member(name=name, optional=optional, default=default)

    def required_member(self, items: list[object]) -> _Member:
        return self._member(items, optional=False)

    def optional_member(self, items: list[object]) -> _Member:
        return self._member(items, optional=True)

    def member_line(self, items: list[object]) -> _Member:
        member = next(i for i in items if isinstance(i, _Member))
        for item in items:
            if isinstance(item, tuple):
                key, value = item
                if key == "type":
                    member.type = value
                elif key == "description":
                    member.description = value
        return member


def parse_member(text: str) -> _Member:
    """Parse the body of a ``@param``/``@prop`` tag. Raises LarkError."""
    tree = _member_parser().parse(text)
    return MemberTransformer().transform(tree)


@dataclass
class _Tag:
    name: str
    value: str
    line: int  # line offset inside the comment


@dataclass
class _Builder:
    span: SourceSpan | None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    type: DeclarationKind | None = None
    name: str | None = None
    params: list[DocParam] = field(default_factory=list)
    props: list[DocProp] = field(default_factory=list)
    modifiers: list[DocModifier] = field(default_factory=list)
    implements: str | None = None
    returns: str | None = None
    extensions: dict[str, list[str]] = field(default_factory=dict)

    def malformed(self, tag: _Tag, reason: str) -> None:
        span = None
        if self.span is not None:
            span = SourceSpan(self.span.file_id, self.span.line + tag.line, self.span.column)
        self.diagnostics.append(
            Diagnostic(
                code="malformed-tag",
                severity=Severity.WARNING,
                message=f"Malformed @{tag.name} tag '{tag.value}': {reason}.",
                span=span,
                fix=_TAG_HINTS.get(tag.name),
            )
        )


_TAG_HINTS = {
    "param": "@param {type} name [=default] - description",
    "prop": "@prop {type} name [=default] - description",
    "modifier": "@modifier name - description",
    "type": "@type component|utility|object|interface",
    "name": "@name declared-name",
    "implements": "@implements interface-name",
    "returns": "@returns {type}",
}


def _comment_lines(raw: str) -> list[str]:
    """Strip comment delimiters and the leading ``*`` gutter from each line."""
    text = re.sub(r"^\s*/\*+", "", raw)
    text = re.sub(r"\*+/\s*$", "", text)
    lines: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:]
            if stripped.startswith(" "):
                stripped = stripped[1:]
        lines.append(stripped.rstrip())
    return lines


def _split(lines: list[str]) -> tuple[str, list[_Tag]]:
    """Separate the free-text description from tag entries."""
    description: list[str] = []
    tags: list[_Tag] = []
    for offset, line in enumerate(lines):
        match = _TAG_RE.match(line)
        if match:
            tags.append(_Tag(match.group("tag"), (match.group("value") or "").strip(), offset))
        elif tags:
            if line:
                current = tags[-1]
                current.value = f"{current.value} {line.strip()}".strip()
        else:
            description.append(line)
    return "\n".join(description).strip("\n"), tags


def _apply(builder: _Builder, tag: _Tag) -> None:
    value = tag.value
    if tag.name == "type":
        try:
            builder.type = DeclarationKind(value)
        except ValueError:
            builder.type = DeclarationKind.UNKNOWN
            builder.malformed(tag, "unknown declaration type")
    elif tag.name in ("name", "implements"):
        match = _WORD_RE.match(value)
        if not match:
            builder.malformed(tag, "expected a single name")
        elif tag.name == "name":
            builder.name = match.group("word")
        else:
            builder.implements = match.group("word")
    elif tag.name == "returns":
        returns = value.strip()
        if returns.startswith("{") and returns.endswith("}"):
            returns = returns[1:-1].strip()
        if not returns:
            builder.malformed(tag, "expected a type")
        else:
            builder.returns = returns
    elif tag.name in ("param", "prop"):
        try:
            member = parse_member(value)
        except LarkError:
            builder.malformed(tag, "expected '{type} name [=default] - description'")
            return
        if tag.name == "param":
            builder.params.append(
                DocParam(
                    name=member.name,
                    type=member.type,
                    optional=member.optional,
                    default=member.default,
                    description=member.description,
                )
            )
        else:
            builder.props.append(
                DocProp(
                    name=member.name,
                    type=member.type,
                    description=member.description,
                    optional=member.optional,
                    default=member.default,
                )
            )
    elif tag.name == "modifier":
        match = _MODIFIER_RE.match(value)
        if not match:
            builder.malformed(tag, "expected 'name - description'")
        else:
            builder.modifiers.append(
                DocModifier(name=match.group("name"), description=(match.group("desc") or "").strip())
            )
    else:
        builder.extensions.setdefault(tag.name, []).append(value)


def extract_docblock(
    raw: str, span: SourceSpan | None = None
) -> tuple[DocBlock, list[Diagnostic]]:
    """Parse one raw doc comment into a DocBlock.

    Malformed tags produce ``malformed-tag`` diagnostics and are skipped;
    the rest of the block still parses. Unknown tags are kept verbatim in
    ``extensions``.
    """
    description, tags = _split(_comment_lines(raw))
    builder = _Builder(span=span)
    for tag in tags:
        _apply(builder, tag)
    block = DocBlock(
        type=builder.type,
        name=builder.name,
        description=description,
        params=tuple(builder.params),
        props=tuple(builder.props),
        modifiers=tuple(builder.modifiers),
        implements=builder.implements,
        returns=builder.returns,
        extensions={k: tuple(v) for k, v in builder.extensions.items()},
    )
    return block, builder.diagnostics
