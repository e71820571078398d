"""Analysis engine: source texts in, ordered diagnostics out."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from pcoslint.config import LintConfig
from pcoslint.model.diagnostic import Diagnostic, Severity
from pcoslint.model.registry import ProjectRegistry
from pcoslint.registry import build_registry
from pcoslint.report import exit_code, sort_diagnostics
from pcoslint.validation import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one run produces."""

    diagnostics: tuple[Diagnostic, ...]
    registry: ProjectRegistry

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)

    def exit_code(self, fail_on: Severity = Severity.ERROR) -> int:
        return exit_code(self.diagnostics, fail_on)


def analyze(
    sources: Mapping[str, str],
    entries: Sequence[str] | None = None,
    config: LintConfig | None = None,
    cancel: threading.Event | None = None,
) -> AnalysisResult:
    """Analyze *sources* (file id to text) starting from *entries*.

    When *entries* is None every provided file is an entry, in mapping
    order. The core never touches the file system; callers read files.
    """
    config = config or LintConfig()
    if entries is None:
        entries = list(sources)
    registry, diagnostics = build_registry(sources, entries, config, cancel=cancel)
    diagnostics.extend(validate(registry, config))
    ordered = sort_diagnostics(diagnostics)
    logger.info(
        "Analyzed %d file(s): %d declaration(s), %d diagnostic(s)",
        len(registry.files),
        len(registry),
        len(ordered),
    )
    return AnalysisResult(diagnostics=tuple(ordered), registry=registry)
