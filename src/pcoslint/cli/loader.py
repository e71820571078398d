"""File loading for the CLI: the core engine only ever sees texts."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import click

from pcoslint.registry.resolver import EXTENSIONS


def collect_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into stylesheet files, sorted and de-duplicated."""
    files: set[Path] = set()
    for path in paths:
        if path.is_dir():
            files.update(p.resolve() for p in path.rglob("*") if p.suffix in EXTENSIONS and p.is_file())
        else:
            files.add(path.resolve())
    return sorted(files)


def project_root(files: list[Path]) -> Path:
    if len(files) == 1:
        return files[0].parent
    return Path(os.path.commonpath([str(f.parent) for f in files]))


def load_sources(paths: Iterable[Path]) -> tuple[dict[str, str], Path]:
    """Read every stylesheet under *paths* keyed by root-relative POSIX id."""
    files = collect_files(paths)
    if not files:
        raise click.UsageError("No .scss, .sass or .css files found.")
    root = project_root(files)
    sources: dict[str, str] = {}
    for file in files:
        try:
            sources[file.relative_to(root).as_posix()] = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise click.FileError(str(file), hint=str(exc)) from exc
    return sources, root


def entry_ids(entries: Iterable[Path], root: Path) -> list[str]:
    ids: list[str] = []
    for entry in entries:
        try:
            ids.append(entry.resolve().relative_to(root).as_posix())
        except ValueError:
            raise click.BadParameter(f"{entry} is outside {root}", param_hint="--entry") from None
    return ids
