"""Declaration model: source files, doc blocks, and the declarations they hold."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pcoslint.model.diagnostic import SourceSpan


class DeclarationKind(Enum):
    """What a declaration represents in the PCOS methodology."""

    COMPONENT = "component"
    UTILITY = "utility"
    OBJECT = "object"
    INTERFACE = "interface"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DocParam:
    """A ``@param`` entry."""

    name: str
    type: str | None = None
    optional: bool = False
    default: str | None = None
    description: str = ""

    @property
    def required(self) -> bool:
        return not self.optional and self.default is None


@dataclass(frozen=True)
class DocProp:
    """A ``@prop`` entry, used by objects and data-shaped interfaces."""

    name: str
    type: str | None = None
    description: str = ""
    optional: bool = False
    default: str | None = None

    @property
    def required(self) -> bool:
        return not self.optional and self.default is None


@dataclass(frozen=True)
class DocModifier:
    """A ``@modifier`` entry."""

    name: str
    description: str = ""


@dataclass(frozen=True)
class DocBlock:
    """Structured metadata parsed from one doc comment."""

    type: DeclarationKind | None = None
    name: str | None = None
    description: str = ""
    params: tuple[DocParam, ...] = ()
    props: tuple[DocProp, ...] = ()
    modifiers: tuple[DocModifier, ...] = ()
    implements: str | None = None
    returns: str | None = None
    extensions: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def members(self) -> dict[str, DocParam | DocProp]:
        """Contract members by name: params first, then props."""
        result: dict[str, DocParam | DocProp] = {}
        for param in self.params:
            result.setdefault(param.name, param)
        for prop in self.props:
            result.setdefault(prop.name, prop)
        return result


@dataclass(frozen=True)
class Declaration:
    """A named unit extracted from a parse tree node plus its doc metadata.

    ``origin`` records what produced the declaration: ``rule``, ``mixin``,
    ``function``, ``placeholder``, or ``nested`` (a rule inside another
    declaration). ``parameters`` are the names from an at-rule signature.
    """

    kind: DeclarationKind
    name: str
    selector_or_signature: str
    span: SourceSpan
    doc: DocBlock | None = None
    children: tuple[Declaration, ...] = ()
    origin: str = "rule"
    parameters: tuple[str, ...] = ()
    defines_name: bool = True

    @property
    def file_id(self) -> str:
        return self.span.file_id

    @property
    def implements(self) -> str | None:
        return self.doc.implements if self.doc else None

    @property
    def element_depth(self) -> int:
        return self.name.count("__")

    def members(self) -> dict[str, DocParam | DocProp]:
        """Accepted members: documented params/props plus signature parameters."""
        result = self.doc.members() if self.doc else {}
        for name in self.parameters:
            result.setdefault(name, DocParam(name=name))
        return result

    def modifier_names(self) -> set[str]:
        """Modifiers from ``@modifier`` tags plus nested ``&--name`` children."""
        names = {m.name for m in self.doc.modifiers} if self.doc else set()
        prefix = f"{self.name}--"
        for child in self.children:
            if child.name.startswith(prefix):
                names.add(child.name[len(prefix):])
        return names

    def describe(self) -> str:
        return f"{self.kind.value} '{self.name}' ({self.span})"


@dataclass(frozen=True)
class ImportRef:
    """An ``@import`` / ``@use`` / ``@forward`` target."""

    target: str
    keyword: str
    span: SourceSpan


@dataclass(frozen=True)
class SourceFile:
    """A parsed stylesheet: its text and the declarations found in it."""

    file_id: str
    text: str
    declarations: tuple[Declaration, ...] = ()
    imports: tuple[ImportRef, ...] = ()
