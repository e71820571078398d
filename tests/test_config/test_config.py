"""Tests for LintConfig construction and coercion."""

import pytest

from pcoslint.config import ConfigError, LintConfig, prefixes
from pcoslint.model.diagnostic import Severity


class TestDefaults:
    def test_defaults(self):
        config = LintConfig()
        assert config.allowed_prefixes == frozenset({"c", "u"})
        assert config.max_element_nesting_depth == 1
        assert config.treat_unresolved_implements_as_error is True
        assert config.type_mismatch_severity is Severity.WARNING
        assert config.missing_optional_member_severity is Severity.WARNING
        assert config.ignore_selectors == ()
        assert config.report_orphan_comments is True
        assert config.max_workers is None

    def test_unresolved_severity(self):
        assert LintConfig().unresolved_implements_severity is Severity.ERROR
        config = LintConfig(treat_unresolved_implements_as_error=False)
        assert config.unresolved_implements_severity is Severity.WARNING

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"allowed_prefixes": frozenset()},
            {"max_element_nesting_depth": -1},
            {"max_workers": 0},
            {"ignore_selectors": ("[",)},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigError):
            LintConfig(**kwargs)


class TestFromMapping:
    def test_camel_case_keys(self):
        config = LintConfig.from_mapping(
            {
                "allowedPrefixes": ["c", "u", "o"],
                "maxElementNestingDepth": "2",
                "treatUnresolvedImplementsAsError": "false",
                "typeMismatchSeverity": "ERROR",
                "ignoreSelectors": "^js-",
                "maxWorkers": 4,
            }
        )
        assert config.allowed_prefixes == frozenset({"c", "u", "o"})
        assert config.max_element_nesting_depth == 2
        assert config.treat_unresolved_implements_as_error is False
        assert config.type_mismatch_severity is Severity.ERROR
        assert config.ignore_selectors == ("^js-",)
        assert config.max_workers == 4

    def test_snake_case_keys(self):
        config = LintConfig.from_mapping(
            {"missing_optional_member_severity": "info", "report_orphan_comments": False}
        )
        assert config.missing_optional_member_severity is Severity.INFO
        assert config.report_orphan_comments is False

    def test_empty_mapping_gives_defaults(self):
        assert LintConfig.from_mapping({}) == LintConfig()

    def test_invalid_ignore_pattern_message(self):
        with pytest.raises(ConfigError, match="Invalid ignore_selectors pattern '\\['"):
            LintConfig(ignore_selectors=("[",))

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown setting: 'strict'"):
            LintConfig.from_mapping({"strict": True})

    @pytest.mark.parametrize(
        "mapping",
        [
            {"maxElementNestingDepth": "deep"},
            {"typeMismatchSeverity": "fatal"},
            {"allowedPrefixes": 3},
            {"ignoreSelectors": ["^js-", "(unclosed"]},
        ],
    )
    def test_bad_values(self, mapping):
        with pytest.raises(ConfigError):
            LintConfig.from_mapping(mapping)


def test_prefixes_normalised():
    assert prefixes(["c-", " u ", "", "l"]) == frozenset({"c", "u", "l"})
