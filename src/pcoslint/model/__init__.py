"""pcoslint model layer -- public type re-exports."""

from pcoslint.model.declaration import (
    Declaration,
    DeclarationKind,
    DocBlock,
    DocModifier,
    DocParam,
    DocProp,
    ImportRef,
    SourceFile,
)
from pcoslint.model.diagnostic import Diagnostic, Severity, SourceSpan
from pcoslint.model.registry import ProjectRegistry

__all__ = [
    # diagnostic
    "Severity",
    "SourceSpan",
    "Diagnostic",
    # declaration
    "DeclarationKind",
    "DocParam",
    "DocProp",
    "DocModifier",
    "DocBlock",
    "Declaration",
    "ImportRef",
    "SourceFile",
    # registry
    "ProjectRegistry",
]
