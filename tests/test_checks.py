"""Tests for the built-in property checks, one value at a time."""

from datetime import date

import pytest

from fluentcheck.validators import InlineValidator, ValidatorConfigurationError


def _check(configure, value) -> bool:
    """Run a single rule against {"value": value} and report whether it passed."""
    validator = InlineValidator()
    configure(validator.rule_for("value"))
    return validator.validate({"value": value}).is_valid


class TestPresenceChecks:

    @pytest.mark.parametrize("value, expected", [(None, False), ("", True), ([], True), (0, True)])
    def test_not_null(self, value, expected):
        assert _check(lambda r: r.not_null(), value) is expected

    @pytest.mark.parametrize("value, expected", [(None, True), ("", False)])
    def test_null(self, value, expected):
        assert _check(lambda r: r.null(), value) is expected

    @pytest.mark.parametrize("value, expected", [
        (None, False), ("", False), ("   ", False), ([], False), ({}, False),
        (0, False), (False, False), ("x", True), ([0], True), (3, True),
    ])
    def test_not_empty(self, value, expected):
        assert _check(lambda r: r.not_empty(), value) is expected

    @pytest.mark.parametrize("value, expected", [(None, True), ("", True), (0, True), ("x", False), ([1], False)])
    def test_empty(self, value, expected):
        assert _check(lambda r: r.empty(), value) is expected


class TestComparisonChecks:

    @pytest.mark.parametrize("value, expected", [(5, True), (4, False), (None, False)])
    def test_equal(self, value, expected):
        assert _check(lambda r: r.equal(5), value) is expected

    def test_not_equal(self):
        assert _check(lambda r: r.not_equal(0), 1)
        assert not _check(lambda r: r.not_equal(0), 0)

    @pytest.mark.parametrize("method, value, expected", [
        ("greater_than", 10, False),
        ("greater_than", 11, True),
        ("greater_than_or_equal_to", 10, True),
        ("less_than", 10, False),
        ("less_than", 9, True),
        ("less_than_or_equal_to", 10, True),
        ("less_than_or_equal_to", 11, False),
    ])
    def test_ordering(self, method, value, expected):
        assert _check(lambda r: getattr(r, method)(10), value) is expected

    def test_ordering_passes_none(self):
        assert _check(lambda r: r.greater_than(10), None)

    def test_ordering_dates(self):
        assert _check(lambda r: r.greater_than(date(2000, 1, 1)), date(2001, 1, 1))

    def test_ordering_requires_orderable_value(self):
        with pytest.raises(ValidatorConfigurationError):
            InlineValidator().rule_for("value").greater_than(object())
        with pytest.raises(ValidatorConfigurationError):
            InlineValidator().rule_for("value").less_than(None)

    def test_inclusive_between(self):
        assert _check(lambda r: r.inclusive_between(1, 5), 1)
        assert _check(lambda r: r.inclusive_between(1, 5), 5)
        assert not _check(lambda r: r.inclusive_between(1, 5), 6)

    def test_inclusive_between_message(self):
        validator = InlineValidator()
        validator.rule_for("value").inclusive_between(1, 5)
        result = validator.validate({"value": 9})
        assert result.errors[0].error_message == "'Value' must be between 1 and 5. You entered 9."

    def test_inclusive_between_inverted_bounds(self):
        with pytest.raises(ValidatorConfigurationError):
            InlineValidator().rule_for("value").inclusive_between(5, 1)

    def test_greater_than_message(self):
        validator = InlineValidator()
        validator.rule_for("value").greater_than(0)
        assert validator.validate({"value": 0}).errors[0].error_message == "'Value' must be greater than '0'."


class TestLengthChecks:

    @pytest.mark.parametrize("value, expected", [("abcd", False), ("abcde", True), ("a" * 10, True), ("a" * 11, False)])
    def test_length(self, value, expected):
        assert _check(lambda r: r.length(5, 10), value) is expected

    def test_unbounded_maximum(self):
        assert _check(lambda r: r.length(2, -1), "a" * 1000)

    def test_length_passes_none(self):
        assert _check(lambda r: r.length(5, 10), None)

    def test_length_of_collection(self):
        assert not _check(lambda r: r.maximum_length(2), [1, 2, 3])

    def test_exact_length(self):
        assert _check(lambda r: r.exact_length(3), "abc")
        assert not _check(lambda r: r.exact_length(3), "ab")

    def test_minimum_length(self):
        assert not _check(lambda r: r.minimum_length(3), "ab")

    def test_length_message(self):
        validator = InlineValidator()
        validator.rule_for("value").length(5, 10)
        assert validator.validate({"value": "abc"}).errors[0].error_message == (
            "'Value' must be between 5 and 10 characters. You entered 3 characters."
        )

    @pytest.mark.parametrize("bounds", [(-1, 5), (5, 2), (1.5, 3), (1, "3")])
    def test_invalid_bounds(self, bounds):
        with pytest.raises(ValidatorConfigurationError):
            InlineValidator().rule_for("value").length(*bounds)


class TestPatternChecks:

    def test_matches_searches(self):
        assert _check(lambda r: r.matches(r"\d{3}"), "abc123def")
        assert not _check(lambda r: r.matches(r"^\d{3}$"), "abc123def")

    def test_matches_passes_none(self):
        assert _check(lambda r: r.matches(r"\d"), None)

    def test_invalid_pattern(self):
        with pytest.raises(ValidatorConfigurationError, match="Invalid regular expression"):
            InlineValidator().rule_for("value").matches("([a-z")


class TestCustomChecks:

    def test_must_arities(self):
        assert _check(lambda r: r.must(lambda v: v == 1), 1)
        assert _check(lambda r: r.must(lambda instance, v: instance["value"] == v), 1)
        assert _check(lambda r: r.must(lambda instance, v, context: context.property_path == "value"), 1)

    def test_must_default_message(self):
        validator = InlineValidator()
        validator.rule_for("value").must(lambda v: False)
        assert validator.validate({"value": 1}).errors[0].error_message == (
            "The specified condition was not met for 'Value'."
        )

    def test_custom_adds_several_failures(self):
        def check_range(value, context):
            if value < 0:
                context.add_failure("{PropertyName} is negative.")
            if value % 2:
                context.add_failure("Odd value.", error_code="ODD")

        validator = InlineValidator()
        validator.rule_for("value").custom(check_range)
        result = validator.validate({"value": -3})
        assert [f.error_message for f in result.errors] == ["Value is negative.", "Odd value."]
        assert result.errors[1].error_code == "ODD"
        assert result.errors[0].property_name == "value"

    def test_custom_failure_for_other_property(self):
        validator = InlineValidator()
        validator.rule_for("value").custom(lambda v, context: context.add_failure("bad", property_name="other"))
        assert validator.validate({"value": 1}).errors[0].property_name == "other"
