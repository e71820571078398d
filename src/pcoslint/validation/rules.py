"""Validation rules over a ProjectRegistry.

Each rule is a function taking the registry and the active LintConfig and
returning a list of Diagnostic objects describing any issues found. Rules
only read the registry.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from pcoslint.config import LintConfig
from pcoslint.model.declaration import Declaration, DeclarationKind
from pcoslint.model.diagnostic import Diagnostic, Severity
from pcoslint.model.registry import ProjectRegistry
from pcoslint.validation.conformance import check_conformance
from pcoslint.validation.selector import check_selector

# Strings and attribute selectors may contain dots that are not classes.
_NOISE_RE = re.compile(r"\"[^\"]*\"|'[^']*'|\[[^\]]*\]")
_CLASS_RE = re.compile(r"\.(-?[A-Za-z_](?:#\{[^}]*\}|\\.|[\w-])*)")


def _class_names(selector: str) -> list[str]:
    names: list[str] = []
    for match in _CLASS_RE.finditer(_NOISE_RE.sub("", selector)):
        if match.group(1) not in names:
            names.append(match.group(1))
    return names


def _ignored(name: str, config: LintConfig) -> bool:
    return any(re.search(pattern, name) for pattern in config.ignore_selectors)


def _walk(declaration: Declaration) -> Iterator[tuple[Declaration, Declaration]]:
    """Yield (parent, child) pairs below *declaration*, depth first."""
    for child in declaration.children:
        yield declaration, child
        yield from _walk(child)


# ---------------------------------------------------------------------------
# Naming rules
# ---------------------------------------------------------------------------


def check_selector_grammar(registry: ProjectRegistry, config: LintConfig) -> list[Diagnostic]:
    """Top-level rule selectors must follow the PCOS naming grammar."""
    diagnostics: list[Diagnostic] = []
    for decl in registry.all_declarations():
        if decl.origin != "rule":
            continue
        names = _class_names(decl.selector_or_signature)
        if not names and decl.doc is not None and decl.kind in (
            DeclarationKind.COMPONENT,
            DeclarationKind.UTILITY,
        ):
            names = [decl.name]
        for index, name in enumerate(names):
            if _ignored(name, config):
                continue
            kind = decl.kind if index == 0 else DeclarationKind.UNKNOWN
            for violation in check_selector(name, kind, config):
                diagnostics.append(
                    Diagnostic(
                        code=violation.code,
                        severity=Severity.ERROR,
                        message=f"Selector '{name}': {violation.message}.",
                        span=decl.span,
                        fix=violation.fix,
                    )
                )
    return diagnostics


def check_element_nesting(registry: ProjectRegistry, config: LintConfig) -> list[Diagnostic]:
    """A nested element rule must not create an element inside another element."""
    diagnostics: list[Diagnostic] = []
    limit = config.max_element_nesting_depth
    for decl in registry.all_declarations():
        for parent, child in _walk(decl):
            if "#{" in child.name or _ignored(child.name, config):
                continue
            if child.element_depth > limit >= parent.element_depth:
                diagnostics.append(
                    Diagnostic(
                        code="element-depth-exceeded",
                        severity=Severity.ERROR,
                        message=(
                            f"Nested rule '{child.selector_or_signature}' produces "
                            f"'{child.name}': an element must not contain another element."
                        ),
                        span=child.span,
                        related=(decl.span,),
                        fix="Move the rule to the block level as a sibling element.",
                    )
                )
    return diagnostics


# ---------------------------------------------------------------------------
# Resolution and conformance rules
# ---------------------------------------------------------------------------


def _resolve_interface(
    decl: Declaration, registry: ProjectRegistry
) -> Declaration | None:
    target = registry.get(decl.implements or "")
    if target is None or target.kind is not DeclarationKind.INTERFACE:
        return None
    return target


def check_implements_resolved(registry: ProjectRegistry, config: LintConfig) -> list[Diagnostic]:
    """``@implements`` must name an interface declared in the registry."""
    diagnostics: list[Diagnostic] = []
    for decl in registry.all_declarations():
        ref = decl.implements
        if not ref:
            continue
        target = registry.get(ref)
        if target is None:
            message = f"{decl.describe()} implements '{ref}', which is not declared."
            related: tuple = ()
        elif target.kind is not DeclarationKind.INTERFACE:
            message = (
                f"{decl.describe()} implements '{ref}', which is a "
                f"{target.kind.value}, not an interface."
            )
            related = (target.span,)
        else:
            continue
        diagnostics.append(
            Diagnostic(
                code="unresolved-reference",
                severity=config.unresolved_implements_severity,
                message=message,
                span=decl.span,
                related=related,
                fix=f"Declare '{ref}' with '@type interface' or fix the reference.",
            )
        )
    return diagnostics


def check_interface_conformance(registry: ProjectRegistry, config: LintConfig) -> list[Diagnostic]:
    """Declarations must provide every member and modifier of their interface."""
    diagnostics: list[Diagnostic] = []
    for decl in registry.all_declarations():
        interface = _resolve_interface(decl, registry)
        if interface is None or interface is decl:
            continue
        diagnostics.extend(check_conformance(decl, interface, config))
    return diagnostics


# ---------------------------------------------------------------------------
# Documentation rules
# ---------------------------------------------------------------------------


def check_signature_docs(registry: ProjectRegistry, config: LintConfig) -> list[Diagnostic]:
    """Documented ``@param`` names should match a mixin/function signature."""
    diagnostics: list[Diagnostic] = []
    for decl in registry.all_declarations():
        if decl.origin not in ("mixin", "function") or decl.doc is None:
            continue
        if decl.kind is DeclarationKind.INTERFACE:
            continue
        documented = [p.name for p in decl.doc.params]
        for name in documented:
            if name not in decl.parameters:
                diagnostics.append(
                    Diagnostic(
                        code="unknown-param",
                        severity=Severity.WARNING,
                        message=f"@param '{name}' of {decl.describe()} is not in its signature.",
                        span=decl.span,
                        fix=f"Remove '@param {name}' or add '${name}' to the signature.",
                    )
                )
        for name in decl.parameters:
            if name not in documented:
                diagnostics.append(
                    Diagnostic(
                        code="undocumented-param",
                        severity=Severity.INFO,
                        message=f"Parameter '${name}' of {decl.describe()} has no @param tag.",
                        span=decl.span,
                    )
                )
    return diagnostics


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

ALL_RULES = [
    check_selector_grammar,
    check_element_nesting,
    check_implements_resolved,
    check_interface_conformance,
    check_signature_docs,
]
