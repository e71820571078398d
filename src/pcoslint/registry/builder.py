"""Symbol table builder: traverses import edges into a ProjectRegistry.

Files are parsed in breadth-first waves starting from the entry files.
Each wave is parsed on a thread pool; results are committed only after the
whole wave completes, in wave order, so traversal order (and therefore
first-seen-wins name resolution) is deterministic.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor

from pcoslint.config import LintConfig
from pcoslint.model.diagnostic import Diagnostic, Severity, SourceSpan
from pcoslint.model.registry import ProjectRegistry
from pcoslint.parser import ParsedFile, ParseError, parse_source
from pcoslint.registry.resolver import resolve_import

logger = logging.getLogger(__name__)


class AnalysisCancelled(Exception):
    """Raised when the caller's cancel event is set during a run."""


def _parse_one(file_id: str, text: str, report_orphans: bool) -> ParsedFile | ParseError:
    try:
        return parse_source(file_id, text, report_orphans=report_orphans)
    except ParseError as exc:
        return exc


def _parse_error(file_id: str, exc: ParseError) -> Diagnostic:
    return Diagnostic(
        code="parse-error",
        severity=Severity.ERROR,
        message=f"File excluded due to parse error: {exc.reason}.",
        span=SourceSpan(file_id, exc.line or 1, exc.column or 1),
    )


def _parse_wave(
    pool: ThreadPoolExecutor,
    wave: list[str],
    sources: Mapping[str, str],
    config: LintConfig,
    cancel: threading.Event | None,
) -> list[ParsedFile | ParseError]:
    futures: list[Future[ParsedFile | ParseError]] = [
        pool.submit(_parse_one, file_id, sources[file_id], config.report_orphan_comments)
        for file_id in wave
    ]
    results: list[ParsedFile | ParseError] = []
    for future in futures:
        if cancel is not None and cancel.is_set():
            for pending in futures:
                pending.cancel()
            raise AnalysisCancelled("Analysis cancelled before the registry was assembled")
        results.append(future.result())
    return results


def build_registry(
    sources: Mapping[str, str],
    entries: Sequence[str],
    config: LintConfig | None = None,
    cancel: threading.Event | None = None,
) -> tuple[ProjectRegistry, list[Diagnostic]]:
    """Parse every file reachable from *entries* and merge their declarations.

    Import cycles are allowed; each file is parsed at most once. A file
    with a parse error contributes a single ``parse-error`` diagnostic and
    no declarations. Duplicate names keep the first declaration seen.
    """
    config = config or LintConfig()
    registry = ProjectRegistry()
    diagnostics: list[Diagnostic] = []
    visited: set[str] = set()
    wave: list[str] = []

    for entry in entries:
        if entry not in sources:
            diagnostics.append(
                Diagnostic(
                    code="missing-entry",
                    severity=Severity.ERROR,
                    message=f"Entry file '{entry}' was not provided.",
                )
            )
        elif entry not in visited:
            visited.add(entry)
            wave.append(entry)

    with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
        while wave:
            logger.debug("Parsing %d file(s): %s", len(wave), ", ".join(wave))
            results = _parse_wave(pool, wave, sources, config, cancel)
            next_wave: list[str] = []
            for file_id, result in zip(wave, results):
                if isinstance(result, ParseError):
                    logger.debug("Parse error in %s: %s", file_id, result)
                    diagnostics.append(_parse_error(file_id, result))
                    continue
                registry.files[file_id] = result.source
                diagnostics.extend(result.diagnostics)
                for ref in result.source.imports:
                    target = resolve_import(ref.target, file_id, sources)
                    if target is None:
                        diagnostics.append(
                            Diagnostic(
                                code="unresolved-import",
                                severity=Severity.WARNING,
                                message=f"@{ref.keyword} target '{ref.target}' does not match any provided file.",
                                span=ref.span,
                            )
                        )
                    elif target not in visited:
                        visited.add(target)
                        next_wave.append(target)
            wave = next_wave

    for source in registry.files.values():
        for decl in source.declarations:
            if not decl.defines_name:
                continue
            first = registry.declarations.get(decl.name)
            if first is None:
                registry.declarations[decl.name] = decl
                continue
            diagnostics.append(
                Diagnostic(
                    code="duplicate-declaration",
                    severity=Severity.ERROR,
                    message=(
                        f"Duplicate declaration '{decl.name}': already declared at {first.span}."
                    ),
                    span=decl.span,
                    related=(first.span,),
                    fix=f"Rename or remove one of the '{decl.name}' declarations.",
                )
            )

    logger.debug(
        "Registry assembled: %d file(s), %d declaration(s)",
        len(registry.files),
        len(registry.declarations),
    )
    return registry, diagnostics
