from pcoslint.registry.builder import AnalysisCancelled, build_registry
from pcoslint.registry.resolver import resolve_import

__all__ = ["AnalysisCancelled", "build_registry", "resolve_import"]
