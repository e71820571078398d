from pcoslint.report.reporter import (
    exit_code,
    format_json,
    format_text,
    registry_to_dict,
    sort_diagnostics,
    summarize,
)

__all__ = [
    "exit_code",
    "format_json",
    "format_text",
    "registry_to_dict",
    "sort_diagnostics",
    "summarize",
]
