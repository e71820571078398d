"""ProjectRegistry: the resolved, project-wide symbol table for one run."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from pcoslint.model.declaration import Declaration, DeclarationKind, SourceFile


@dataclass
class ProjectRegistry:
    """Maps declared names to declarations across every reachable file.

    ``files`` preserves traversal order. ``declarations`` holds the first
    declaration seen for each name; later duplicates stay reachable through
    ``all_declarations()`` so other checks still run against them.
    """

    files: dict[str, SourceFile] = field(default_factory=dict)
    declarations: dict[str, Declaration] = field(default_factory=dict)

    def get(self, name: str) -> Declaration | None:
        return self.declarations.get(name)

    def interfaces(self) -> list[Declaration]:
        return [d for d in self.declarations.values() if d.kind is DeclarationKind.INTERFACE]

    def all_declarations(self) -> Iterator[Declaration]:
        for source in self.files.values():
            yield from source.declarations

    def __contains__(self, name: object) -> bool:
        return name in self.declarations

    def __len__(self) -> int:
        return len(self.declarations)
