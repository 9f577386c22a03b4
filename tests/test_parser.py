# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for rulechain.parser - rule expression grammar."""

from __future__ import annotations

from rulechain.parser import (
    InlineRule,
    NamedRule,
    format_rules,
    parse_rule,
    parse_rules,
    split_top_level,
)


def _check(ctx):
    return True


# =============================================================================
# Tests: parse_rule
# =============================================================================


class TestParseRule:
    """Tests for single-token parsing."""

    def test_name_only(self):
        """Token without brackets is a bare name."""
        spec = parse_rule("Required")
        assert spec == NamedRule(name="Required", raw="Required")
        assert spec.params == ()
        assert spec.kind == "named"

    def test_name_with_params(self):
        """Params between brackets are split on commas and trimmed."""
        spec = parse_rule("Between[10, 20]")
        assert spec.name == "Between"
        assert spec.params == ("10", "20")

    def test_single_param(self):
        spec = parse_rule("MinLength[5]")
        assert spec.name == "MinLength"
        assert spec.params == ("5",)

    def test_params_stay_strings(self):
        """Params are raw strings; coercion is each rule's job."""
        spec = parse_rule("Flag[true, 1.5]")
        assert spec.params == ("true", "1.5")

    def test_empty_brackets(self):
        spec = parse_rule("Rule[]")
        assert spec.name == "Rule"
        assert spec.params == ()

    def test_missing_closing_bracket(self):
        """Unbalanced bracket keeps everything after '['."""
        spec = parse_rule("MinLength[5")
        assert spec.name == "MinLength"
        assert spec.params == ("5",)

    def test_separator_characters_trimmed(self):
        spec = parse_rule("  |Required|  ")
        assert spec.name == "Required"

    def test_blank_token_discarded(self):
        assert parse_rule("   ") is None
        assert parse_rule("|||") is None

    def test_nameless_brackets_discarded(self):
        assert parse_rule("[1,2]") is None

    def test_nested_brackets_kept_together(self):
        """Commas inside nested brackets do not split params."""
        spec = parse_rule("OneOf[Email, Between[1,5]]")
        assert spec.name == "OneOf"
        assert spec.params == ("Email", "Between[1,5]")


# =============================================================================
# Tests: parse_rules
# =============================================================================


class TestParseRules:
    """Tests for full rule expression parsing."""

    def test_pipe_string(self):
        specs = parse_rules("Required|MinLength[2]|MaxLength[10]")
        assert [s.name for s in specs] == ["Required", "MinLength", "MaxLength"]
        assert specs[1].params == ("2",)

    def test_list_of_strings(self):
        specs = parse_rules(["Required", "MinLength[2]"])
        assert [s.name for s in specs] == ["Required", "MinLength"]

    def test_list_elements_are_split(self):
        """Each list element may itself be a pipe-joined string."""
        specs = parse_rules(["Required|Email", "MaxLength[5]"])
        assert [s.name for s in specs] == ["Required", "Email", "MaxLength"]

    def test_string_and_list_forms_equal(self):
        assert parse_rules("Required|MinLength[3]") == parse_rules(
            ["Required", "MinLength[3]"]
        )

    def test_callable(self):
        specs = parse_rules(_check)
        assert specs == [InlineRule(_check)]
        assert specs[0].kind == "inline"
        assert specs[0].name is None

    def test_mixed_list_preserves_order(self):
        specs = parse_rules(["Required", _check, "Email"])
        assert [s.kind for s in specs] == ["named", "inline", "named"]

    def test_mapping(self):
        """Mapping form: name -> params list or scalar."""
        specs = parse_rules({"Between": [1, 5], "MinLength": 3, "Required": None})
        assert specs == [
            NamedRule(name="Between", params=("1", "5"), raw="Between"),
            NamedRule(name="MinLength", params=("3",), raw="MinLength"),
            NamedRule(name="Required", params=(), raw="Required"),
        ]

    def test_no_deduplication(self):
        specs = parse_rules("MinLength[2]|MinLength[4]")
        assert [s.params for s in specs] == [("2",), ("4",)]

    def test_empty_inputs(self):
        assert parse_rules(None) == []
        assert parse_rules("") == []
        assert parse_rules([]) == []
        assert parse_rules("  |  | ") == []
        assert parse_rules(["", "|"]) == []

    def test_set_container(self):
        assert parse_rules({"Required"}) == [NamedRule(name="Required", raw="Required")]

    def test_generator_container(self):
        specs = parse_rules(r for r in ["Required|Email", _check])
        assert [s.kind for s in specs] == ["named", "named", "inline"]

    def test_unsupported_elements_skipped(self):
        assert [s.name for s in parse_rules(["Required", 42, None])] == ["Required"]

    def test_separator_inside_brackets(self):
        """Separators nested inside brackets belong to the param."""
        specs = parse_rules("Required|OneOf[Email, PhoneNumber|MinLength[8]]")
        assert len(specs) == 2
        assert specs[1].params == ("Email", "PhoneNumber|MinLength[8]")

    def test_custom_separator(self):
        specs = parse_rules("Required;MinLength[2]", separator=";")
        assert [s.name for s in specs] == ["Required", "MinLength"]

    def test_specs_pass_through(self):
        spec = NamedRule(name="Email")
        assert parse_rules([spec]) == [spec]
        assert parse_rules(spec) == [spec]


class TestHelpers:
    """Tests for split_top_level and format_rules."""

    def test_split_top_level(self):
        assert split_top_level("a|b[1|2]|c", "|") == ["a", "b[1|2]", "c"]

    def test_format_rules(self):
        specs = parse_rules(["Required", "Between[1, 5]", _check])
        assert format_rules(specs) == "Required|Between[1,5]|_check"
