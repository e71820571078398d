"""Selector grammar validation for PCOS class names.

Grammar::

    selector  := prefix "-" [namespace "-"] block modifier? element?
    prefix    := "c" | "u"            (configurable)
    modifier  := "--" identifier
    element   := "__" identifier modifier?

Identifiers are lowercase and hyphen-separated. Each broken rule produces
exactly one violation, with a corrected form when one can be derived.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pcoslint.config import LintConfig
from pcoslint.model.declaration import DeclarationKind

KIND_PREFIXES = {
    DeclarationKind.COMPONENT: "c",
    DeclarationKind.UTILITY: "u",
}

_SEGMENT_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class SelectorViolation:
    code: str
    message: str
    fix: str | None = None


def _split_prefix(name: str, config: LintConfig) -> tuple[str | None, str]:
    head, sep, rest = name.partition("-")
    if sep and head.lower() in config.allowed_prefixes:
        return head, rest
    return None, name


def _rebuild(prefix: str, block: str, elements: list[str]) -> str:
    return "__".join([f"{prefix}-{block}", *elements])


def check_selector(
    selector: str,
    kind: DeclarationKind = DeclarationKind.UNKNOWN,
    config: LintConfig | None = None,
) -> list[SelectorViolation]:
    """Validate one class name (a leading ``.`` is ignored)."""
    config = config or LintConfig()
    name = selector.strip().lstrip(".")
    if not name or "#{" in name:
        # Interpolated names are only known after compilation.
        return []

    violations: list[SelectorViolation] = []
    expected = KIND_PREFIXES.get(kind)
    prefix, body = _split_prefix(name, config)

    if prefix is None:
        fix_prefix = expected or sorted(config.allowed_prefixes)[0]
        violations.append(
            SelectorViolation(
                code="missing-prefix",
                message=f"missing type prefix (expected one of: {', '.join(sorted(config.allowed_prefixes))})",
                fix=f"{fix_prefix}-{name}",
            )
        )
        prefix_text = fix_prefix
    else:
        prefix_text = prefix
        if expected is not None and prefix.lower() != expected:
            violations.append(
                SelectorViolation(
                    code="prefix-kind-mismatch",
                    message=f"a {kind.value} must use the '{expected}-' prefix, not '{prefix}-'",
                    fix=f"{expected}-{body}",
                )
            )

    parts = body.split("__")
    block, elements = parts[0], parts[1:]

    segments: list[str] = []
    modifier_overflow = False
    for part in parts:
        base, *mods = part.split("--")
        segments.append(base)
        segments.extend(mods)
        if len(mods) > 1:
            modifier_overflow = True

    if any(not s or s.startswith("-") or s.endswith("-") for s in segments):
        violations.append(
            SelectorViolation(
                code="empty-segment",
                message="block, element and modifier names must not be empty",
            )
        )

    if name != name.lower():
        violations.append(
            SelectorViolation(
                code="uppercase-segment",
                message="identifier segments must be lowercase",
                fix=name.lower(),
            )
        )

    if any("_" in s for s in segments):
        fixed_parts = ["--".join(p.replace("_", "-") for p in part.split("--")) for part in parts]
        violations.append(
            SelectorViolation(
                code="underscore-in-segment",
                message="use hyphens inside a segment; '_' is reserved for the '__' element separator",
                fix=_rebuild(prefix_text, fixed_parts[0], fixed_parts[1:]),
            )
        )

    if len(elements) > config.max_element_nesting_depth:
        kept = elements[-config.max_element_nesting_depth:] if config.max_element_nesting_depth else []
        violations.append(
            SelectorViolation(
                code="element-depth-exceeded",
                message=(
                    f"element nesting depth exceeded ({len(elements)} > "
                    f"{config.max_element_nesting_depth}); an element must not contain another element"
                ),
                fix=_rebuild(prefix_text, block, kept),
            )
        )

    if modifier_overflow:
        violations.append(
            SelectorViolation(
                code="misplaced-modifier",
                message="a block or element may carry at most one '--' modifier",
            )
        )

    if not violations and not all(_SEGMENT_RE.match(s) for s in segments):
        violations.append(
            SelectorViolation(
                code="invalid-character",
                message="identifier segments may only contain a-z, 0-9 and '-'",
            )
        )
    return violations


def is_valid_selector(
    selector: str,
    kind: DeclarationKind = DeclarationKind.UNKNOWN,
    config: LintConfig | None = None,
) -> bool:
    return not check_selector(selector, kind, config)
