"""Tests for the cross-file registry builder and import resolution."""

import threading

import pytest

from pcoslint.config import LintConfig
from pcoslint.model.diagnostic import Severity
from pcoslint.registry import AnalysisCancelled, build_registry, resolve_import
from pcoslint.registry import builder as builder_module


# ---------------------------------------------------------------------------
# Import resolution
# ---------------------------------------------------------------------------


class TestResolveImport:
    KNOWN = {
        "main.scss",
        "objects/_theme.scss",
        "components/button.scss",
        "components/_card.scss",
        "tokens/_index.scss",
        "legacy.css",
    }

    @pytest.mark.parametrize(
        "target,importer,expected",
        [
            ("objects/theme", "main.scss", "objects/_theme.scss"),
            ("objects/_theme", "main.scss", "objects/_theme.scss"),
            ("objects/_theme.scss", "main.scss", "objects/_theme.scss"),
            ("button", "components/_card.scss", "components/button.scss"),
            ("card", "components/button.scss", "components/_card.scss"),
            ("../objects/theme", "components/button.scss", "objects/_theme.scss"),
            ("tokens", "main.scss", "tokens/_index.scss"),
            ("legacy", "main.scss", "legacy.css"),
            ("objects/theme", "components/button.scss", "objects/_theme.scss"),
        ],
    )
    def test_resolves(self, target, importer, expected):
        assert resolve_import(target, importer, self.KNOWN) == expected

    def test_unknown_target(self):
        assert resolve_import("missing", "main.scss", self.KNOWN) is None


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


class TestTraversal:
    def test_only_reachable_files_parsed(self):
        sources = {
            "main.scss": '@import "a";\n.c-main {}\n',
            "a.scss": ".c-a {}\n",
            "unused.scss": ".c-unused {}\n",
        }
        registry, diagnostics = build_registry(sources, ["main.scss"])
        assert list(registry.files) == ["main.scss", "a.scss"]
        assert "c-unused" not in registry
        assert diagnostics == []

    def test_import_cycle_terminates(self):
        sources = {
            "a.scss": '@import "b";\n.c-a {}\n',
            "b.scss": '@import "a";\n.c-b {}\n',
        }
        registry, diagnostics = build_registry(sources, ["a.scss"])
        assert list(registry.files) == ["a.scss", "b.scss"]
        assert set(registry.declarations) == {"c-a", "c-b"}
        assert diagnostics == []

    def test_each_file_parsed_once(self, monkeypatch):
        calls: list[str] = []
        real = builder_module.parse_source

        def counting(file_id, text, report_orphans=True):
            calls.append(file_id)
            return real(file_id, text, report_orphans=report_orphans)

        monkeypatch.setattr(builder_module, "parse_source", counting)
        sources = {
            "main.scss": '@import "a";\n@import "b";\n',
            "a.scss": '@import "shared";\n',
            "b.scss": '@import "shared";\n@import "main";\n',
            "shared.scss": ".c-shared {}\n",
        }
        build_registry(sources, ["main.scss", "a.scss"])
        assert sorted(calls) == ["a.scss", "b.scss", "main.scss", "shared.scss"]

    def test_breadth_first_order(self):
        sources = {
            "main.scss": '@import "a";\n@import "b";\n',
            "a.scss": '@import "deep";\n',
            "b.scss": "",
            "deep.scss": "",
        }
        registry, _ = build_registry(sources, ["main.scss"])
        assert list(registry.files) == ["main.scss", "a.scss", "b.scss", "deep.scss"]

    def test_unresolved_import(self):
        registry, diagnostics = build_registry({"main.scss": '\n@use "nowhere";\n'}, ["main.scss"])
        (diag,) = diagnostics
        assert diag.code == "unresolved-import"
        assert diag.severity == Severity.WARNING
        assert diag.span.line == 2
        assert "nowhere" in diag.message
        assert "main.scss" in registry.files

    def test_missing_entry(self):
        registry, diagnostics = build_registry({"a.scss": ".c-a {}"}, ["nope.scss", "a.scss"])
        (diag,) = diagnostics
        assert diag.code == "missing-entry"
        assert diag.severity == Severity.ERROR
        assert diag.span is None
        assert list(registry.files) == ["a.scss"]

    def test_max_workers_honoured(self):
        sources = {f"f{i}.scss": f".c-f{i} {{}}\n" for i in range(6)}
        registry, _ = build_registry(sources, list(sources), LintConfig(max_workers=1))
        assert list(registry.files) == list(sources)


# ---------------------------------------------------------------------------
# Parse errors and duplicates
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_broken_file_excluded(self):
        sources = {
            "main.scss": '@import "broken";\n.c-main {}\n',
            "broken.scss": ".c-broken {\n  color: red;\n",
        }
        registry, diagnostics = build_registry(sources, ["main.scss"])
        assert list(registry.files) == ["main.scss"]
        assert "c-broken" not in registry
        (diag,) = diagnostics
        assert diag.code == "parse-error"
        assert diag.severity == Severity.ERROR
        assert diag.span.file_id == "broken.scss"
        assert (diag.span.line, diag.span.column) == (1, 11)

    def test_broken_file_imports_not_followed(self):
        sources = {
            "main.scss": '@import "other";\n}\n',
            "other.scss": ".c-other {}\n",
        }
        registry, diagnostics = build_registry(sources, ["main.scss"])
        assert registry.files == {}
        assert [d.code for d in diagnostics] == ["parse-error"]


class TestDuplicates:
    def test_first_declaration_wins(self):
        sources = {
            "main.scss": '@import "one";\n@import "two";\n',
            "one.scss": ".c-button {}\n",
            "two.scss": "\n\n.c-button {}\n",
        }
        registry, diagnostics = build_registry(sources, ["main.scss"])
        assert registry.get("c-button").span.file_id == "one.scss"
        (diag,) = diagnostics
        assert diag.code == "duplicate-declaration"
        assert diag.severity == Severity.ERROR
        assert diag.span.file_id == "two.scss"
        assert diag.related == (registry.get("c-button").span,)

    def test_entry_order_decides_winner(self):
        sources = {"one.scss": ".c-button {}\n", "two.scss": ".c-button {}\n"}
        registry, diagnostics = build_registry(sources, ["two.scss", "one.scss"])
        assert registry.get("c-button").span.file_id == "two.scss"
        assert diagnostics[0].span.file_id == "one.scss"

    def test_plain_comments_do_not_create_duplicates(self):
        sources = {
            "a.scss": ".c-button {}\n\n/* Hover state */\n.c-button:hover {}\n/* reset */\nhtml {}\n",
            "b.scss": "/* reset */\nhtml {}\n",
        }
        registry, diagnostics = build_registry(sources, ["a.scss", "b.scss"])
        assert diagnostics == []
        assert list(registry.declarations) == ["c-button"]

    def test_compound_selectors_do_not_collide(self):
        sources = {"main.scss": ".c-button {}\n.c-button:hover {}\n.c-button.is-active {}\n"}
        _, diagnostics = build_registry(sources, ["main.scss"])
        assert diagnostics == []


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestCancellation:
    def test_cancelled_before_start(self):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(AnalysisCancelled):
            build_registry({"main.scss": ".c-a {}"}, ["main.scss"], cancel=cancel)

    def test_unset_event_runs_normally(self):
        registry, _ = build_registry(
            {"main.scss": ".c-a {}"}, ["main.scss"], cancel=threading.Event()
        )
        assert "c-a" in registry
