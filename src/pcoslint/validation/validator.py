"""Registry validator: runs every rule over a ProjectRegistry."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Callable

from pcoslint.config import LintConfig
from pcoslint.model.diagnostic import Diagnostic
from pcoslint.model.registry import ProjectRegistry
from pcoslint.validation.rules import ALL_RULES

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised by :func:`validate_or_raise` when any rule reports an error."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        errors = [d for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(errors)} error(s): "
            + "; ".join(str(d) for d in errors)
        )


RuleFunc = Callable[[ProjectRegistry, LintConfig], list[Diagnostic]]


def validate(
    registry: ProjectRegistry,
    config: LintConfig | None = None,
    extra_rules: Iterable[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run the built-in rules, then *extra_rules*, against *registry*.

    Rules only read the registry, so the result depends on nothing but
    the registry contents and *config*.
    """
    config = config or LintConfig()
    diagnostics: list[Diagnostic] = []
    for rule in [*ALL_RULES, *(extra_rules or ())]:
        found = rule(registry, config)
        if found:
            logger.debug("%s: %d diagnostic(s)", rule.__name__, len(found))
        diagnostics.extend(found)
    return diagnostics


def validate_or_raise(
    registry: ProjectRegistry,
    config: LintConfig | None = None,
    extra_rules: Iterable[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Like :func:`validate`, but errors raise :class:`ValidationError`.

    Warnings and info diagnostics are returned when there are no errors.
    """
    diagnostics = validate(registry, config, extra_rules)
    if any(d.is_error for d in diagnostics):
        raise ValidationError([d for d in diagnostics if d.is_error])
    return diagnostics
