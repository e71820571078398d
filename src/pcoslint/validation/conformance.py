"""Structural interface conformance.

Interfaces are documentation contracts, so conformance is a set comparison
over named members rather than a type check: the implementer must accept at
least every member the interface names. Extra members are allowed.
"""

from __future__ import annotations

from pcoslint.config import LintConfig
from pcoslint.model.declaration import Declaration
from pcoslint.model.diagnostic import Diagnostic, Severity


def check_conformance(
    implementer: Declaration,
    interface: Declaration,
    config: LintConfig | None = None,
) -> list[Diagnostic]:
    """Compare *implementer* against *interface*; one diagnostic per gap."""
    config = config or LintConfig()
    diagnostics: list[Diagnostic] = []
    accepted = implementer.members()

    for name, member in interface.members().items():
        own = accepted.get(name)
        if own is None:
            severity = Severity.ERROR if member.required else config.missing_optional_member_severity
            qualifier = "" if member.required else "optional "
            diagnostics.append(
                Diagnostic(
                    code="missing-member",
                    severity=severity,
                    message=(
                        f"Missing member: {name}. {implementer.describe()} implements "
                        f"interface '{interface.name}' ({interface.span}) but does not "
                        f"declare its {qualifier}member '{name}'."
                    ),
                    span=implementer.span,
                    related=(interface.span,),
                    fix=f"Add '@param {name}' to the documentation of '{implementer.name}'.",
                )
            )
        elif member.type and own.type and member.type != own.type:
            diagnostics.append(
                Diagnostic(
                    code="type-mismatch",
                    severity=config.type_mismatch_severity,
                    message=(
                        f"Member '{name}' of {implementer.describe()} has type "
                        f"{{{own.type}}} but interface '{interface.name}' declares "
                        f"{{{member.type}}}."
                    ),
                    span=implementer.span,
                    related=(interface.span,),
                    fix=f"Use {{{member.type}}} for '{name}'.",
                )
            )

    own_modifiers = implementer.modifier_names()
    required_modifiers = [m.name for m in interface.doc.modifiers] if interface.doc else []
    for modifier in required_modifiers:
        if modifier not in own_modifiers:
            diagnostics.append(
                Diagnostic(
                    code="missing-modifier",
                    severity=Severity.ERROR,
                    message=(
                        f"Missing modifier: {modifier}. {implementer.describe()} implements "
                        f"interface '{interface.name}' ({interface.span}) but does not "
                        f"provide modifier '{modifier}'."
                    ),
                    span=implementer.span,
                    related=(interface.span,),
                    fix=f"Add '@modifier {modifier}' or a '&--{modifier}' rule.",
                )
            )
    return diagnostics
