"""Analyzer settings supplied by the caller as a plain record."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields

from pcoslint.model.diagnostic import Severity


class ConfigError(ValueError):
    """Raised when a settings mapping holds unknown keys or bad values."""


# camelCase spellings accepted from external callers.
_ALIASES = {
    "allowedPrefixes": "allowed_prefixes",
    "maxElementNestingDepth": "max_element_nesting_depth",
    "treatUnresolvedImplementsAsError": "treat_unresolved_implements_as_error",
    "typeMismatchSeverity": "type_mismatch_severity",
    "missingOptionalMemberSeverity": "missing_optional_member_severity",
    "ignoreSelectors": "ignore_selectors",
    "reportOrphanComments": "report_orphan_comments",
    "maxWorkers": "max_workers",
}


@dataclass(frozen=True)
class LintConfig:
    allowed_prefixes: frozenset[str] = frozenset({"c", "u"})
    max_element_nesting_depth: int = 1
    treat_unresolved_implements_as_error: bool = True
    type_mismatch_severity: Severity = Severity.WARNING
    missing_optional_member_severity: Severity = Severity.WARNING
    ignore_selectors: tuple[str, ...] = ()  # regexes matched against class names
    report_orphan_comments: bool = True
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if not self.allowed_prefixes:
            raise ConfigError("allowed_prefixes must not be empty")
        if self.max_element_nesting_depth < 0:
            raise ConfigError("max_element_nesting_depth must be >= 0")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError("max_workers must be >= 1")
        for pattern in self.ignore_selectors:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"Invalid ignore_selectors pattern {pattern!r}: {exc}") from exc

    @property
    def unresolved_implements_severity(self) -> Severity:
        if self.treat_unresolved_implements_as_error:
            return Severity.ERROR
        return Severity.WARNING

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> LintConfig:
        """Build a config from snake_case or camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, object] = {}
        for raw_key, value in mapping.items():
            key = _ALIASES.get(raw_key, raw_key)
            if key not in known:
                raise ConfigError(f"Unknown setting: {raw_key!r}")
            kwargs[key] = _coerce(key, value)
        return cls(**kwargs)  # type: ignore[arg-type]


def _coerce(key: str, value: object) -> object:
    """Coerce a loosely-typed setting to the type the dataclass expects."""
    try:
        if key == "allowed_prefixes":
            if isinstance(value, str):
                return frozenset({value})
            return frozenset(str(v) for v in value)  # type: ignore[union-attr]
        if key == "ignore_selectors":
            if isinstance(value, str):
                return (value,)
            return tuple(str(v) for v in value)  # type: ignore[union-attr]
        if key.endswith("_severity"):
            return Severity.parse(value)  # type: ignore[arg-type]
        if key in ("treat_unresolved_implements_as_error", "report_orphan_comments"):
            if isinstance(value, str):
                return value.lower() in ("true", "1", "yes")
            return bool(value)
        if key == "max_workers" and value is None:
            return None
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from exc


def prefixes(values: Iterable[str]) -> frozenset[str]:
    """Normalise prefixes given as ``c`` or ``c-``."""
    return frozenset(v.strip().rstrip("-") for v in values if v.strip())
