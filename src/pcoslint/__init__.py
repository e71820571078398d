"""pcoslint: static analysis for PCOS-style component stylesheets."""

__version__ = "0.1.0"

from pcoslint.config import LintConfig  # noqa: E402
from pcoslint.engine import AnalysisResult, analyze  # noqa: E402

__all__ = ["__version__", "LintConfig", "AnalysisResult", "analyze"]
