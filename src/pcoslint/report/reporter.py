"""Diagnostic reporter: ordering, summaries and output formats."""

from __future__ import annotations

import json
from collections.abc import Iterable

from pcoslint.model.diagnostic import Diagnostic, Severity
from pcoslint.model.registry import ProjectRegistry


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Order by (file, line, column); diagnostics without a location come first."""
    return sorted(diagnostics, key=lambda d: d.sort_key)


def summarize(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    counts = {s.value: 0 for s in Severity}
    for diag in diagnostics:
        counts[diag.severity.value] += 1
    return counts


def exit_code(diagnostics: Iterable[Diagnostic], fail_on: Severity = Severity.ERROR) -> int:
    """1 if any diagnostic is at least as severe as *fail_on*, else 0."""
    return int(any(d.severity.rank >= fail_on.rank for d in diagnostics))


def format_text(diagnostics: Iterable[Diagnostic]) -> str:
    ordered = sort_diagnostics(diagnostics)
    lines = [str(d) for d in ordered]
    counts = summarize(ordered)
    if lines:
        lines.append("")
    lines.append(
        f"Summary: {counts['error']} error(s), {counts['warning']} warning(s), {counts['info']} info"
    )
    return "\n".join(lines)


def registry_to_dict(registry: ProjectRegistry) -> dict[str, object]:
    return {
        "files": list(registry.files),
        "declarations": [
            {
                "name": decl.name,
                "kind": decl.kind.value,
                "origin": decl.origin,
                "selector": decl.selector_or_signature,
                "span": decl.span.to_dict(),
                "implements": decl.implements,
                "members": sorted(decl.members()),
                "modifiers": sorted(decl.modifier_names()),
            }
            for decl in registry.declarations.values()
        ],
    }


def format_json(
    diagnostics: Iterable[Diagnostic], registry: ProjectRegistry | None = None
) -> str:
    ordered = sort_diagnostics(diagnostics)
    payload: dict[str, object] = {
        "diagnostics": [d.to_dict() for d in ordered],
        "summary": summarize(ordered),
    }
    if registry is not None:
        payload["registry"] = registry_to_dict(registry)
    return json.dumps(payload, indent=2)
