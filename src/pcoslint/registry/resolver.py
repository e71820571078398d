"""Import target resolution against the caller-supplied file ids."""

from __future__ import annotations

import posixpath
from collections.abc import Container

EXTENSIONS = (".scss", ".sass", ".css")


def _candidates(path: str) -> list[str]:
    directory, base = posixpath.split(path)
    stems = [path]
    if not base.startswith("_"):
        stems.append(posixpath.join(directory, f"_{base}"))
    result: list[str] = []
    for stem in stems:
        result.append(stem)
        if not stem.endswith(EXTENSIONS):
            result.extend(stem + ext for ext in EXTENSIONS)
    if not path.endswith(EXTENSIONS):
        for index in ("index", "_index"):
            result.extend(posixpath.join(path, index + ext) for ext in EXTENSIONS)
    return result


def resolve_import(target: str, importer: str, known: Container[str]) -> str | None:
    """Find the file id an import *target* refers to, or None.

    Tries the path relative to the importing file first, then relative to
    the project root, each with Sass partial (``_name``), extension and
    ``index`` variants.
    """
    bases = [posixpath.dirname(importer), ""]
    seen: set[str] = set()
    for base in bases:
        joined = posixpath.normpath(posixpath.join(base, target) if base else target)
        if joined in seen:
            continue
        seen.add(joined)
        for candidate in _candidates(joined):
            if candidate in known:
                return candidate
    return None
