"""
Unit tests for numeric bounds and conditional rules.
"""

import pytest

from fieldrules.validation.rules import (
    GreaterThan,
    IntegerIf,
    LessThan,
    MinIf,
    MutuallyExclusiveWith,
    Negative,
    Positive,
)


class TestGreaterThan:

    @pytest.mark.unit
    def test_numeric_bound(self):
        rule = GreaterThan(parameters=["5"])
        assert rule.validate("6", "qty", {})
        assert rule.validate(5.01, "qty", {})
        assert not rule.validate(5, "qty", {})
        assert not rule.validate("4", "qty", {})

    @pytest.mark.unit
    def test_bound_from_other_field(self):
        rule = GreaterThan(parameters=["min_price"])
        data = {"min_price": "10", "price": 11}
        assert rule.validate(11, "price", data)
        assert not rule.validate(9, "price", data)

    @pytest.mark.unit
    def test_bound_from_nested_field(self):
        rule = GreaterThan(parameters=["limits.low"])
        assert rule.validate(3, "value", {"limits": {"low": 2}})

    @pytest.mark.unit
    def test_unknown_field_bound_fails(self):
        assert not GreaterThan(parameters=["missing"]).validate(100, "qty", {})

    @pytest.mark.unit
    def test_non_numeric_value_fails(self):
        assert not GreaterThan(parameters=["1"]).validate("lots", "qty", {})


class TestLessThan:

    @pytest.mark.unit
    def test_numeric_bound(self):
        rule = LessThan(parameters=["10"])
        assert rule.validate("9.99", "qty", {})
        assert not rule.validate("10", "qty", {})

    @pytest.mark.unit
    def test_bound_from_other_field(self):
        rule = LessThan(parameters=["max_price"])
        assert rule.validate(5, "price", {"max_price": 6})
        assert not rule.validate(7, "price", {"max_price": 6})


class TestSign:

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["-1", -0.5, "-3e2"])
    def test_negative(self, value):
        assert Negative().validate(value, "delta", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [0, "0", "1", "abc", None, True])
    def test_not_negative(self, value):
        assert not Negative().validate(value, "delta", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [0, "0", "0.0", "12", 3.5])
    def test_positive_includes_zero(self, value):
        assert Positive().validate(value, "amount", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["-0.1", -1, "abc", None, True])
    def test_not_positive(self, value):
        assert not Positive().validate(value, "amount", {})


class TestMinIf:

    @pytest.fixture
    def rule(self):
        return MinIf(parameters=["type", "2", "100"])

    @pytest.mark.unit
    def test_condition_met_enforces_minimum(self, rule):
        assert not rule.validate(50, "amount", {"type": "2", "amount": 50})
        assert rule.validate(150, "amount", {"type": "2", "amount": 150})
        assert rule.validate("100", "amount", {"type": "2", "amount": "100"})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [50, 150, "abc"])
    def test_condition_not_met_always_passes(self, rule, value):
        assert rule.validate(value, "amount", {"type": "1", "amount": value})

    @pytest.mark.unit
    def test_condition_compares_numbers_loosely(self, rule):
        assert not rule.validate(50, "amount", {"type": 2})

    @pytest.mark.unit
    def test_non_numeric_value_fails_when_condition_met(self, rule):
        assert not rule.validate("abc", "amount", {"type": "2"})

    @pytest.mark.unit
    def test_missing_parameters_is_caller_error(self):
        with pytest.raises(IndexError):
            MinIf(parameters=["type", "2"]).validate(1, "amount", {"type": "2"})


class TestIntegerIf:

    @pytest.fixture
    def rule(self):
        return IntegerIf(parameters=["unit", "pieces"])

    @pytest.mark.unit
    def test_condition_met_requires_digits(self, rule):
        assert rule.validate("12", "qty", {"unit": "pieces"})
        assert not rule.validate("1.5", "qty", {"unit": "pieces"})

    @pytest.mark.unit
    def test_condition_not_met_passes(self, rule):
        assert rule.validate("1.5", "qty", {"unit": "kg"})
        assert rule.validate("1.5", "qty", {})


class TestMutuallyExclusiveWith:

    @pytest.fixture
    def rule(self):
        return MutuallyExclusiveWith(parameters=["fax", "pager"])

    @pytest.mark.unit
    def test_others_empty_passes(self, rule):
        assert rule.validate("555", "phone", {"phone": "555", "fax": "", "pager": None})
        assert rule.validate("555", "phone", {"phone": "555"})

    @pytest.mark.unit
    def test_other_filled_fails(self, rule):
        assert not rule.validate("555", "phone", {"phone": "555", "pager": "123"})

    @pytest.mark.unit
    @pytest.mark.parametrize("fax", [0, "0", False, []])
    def test_zero_counts_as_not_filled(self, rule, fax):
        assert rule.validate("555", "phone", {"fax": fax})

    @pytest.mark.unit
    def test_blank_spaces_count_as_filled(self, rule):
        assert not rule.validate("555", "phone", {"fax": " "})
