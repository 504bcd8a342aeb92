"""
Unit tests for currency, phone and SSN formats.
"""

import pytest

from fieldrules.validation.rules import Currency, Phone, Ssn


class TestCurrency:

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "$1,234.56",
        "1234.56",
        "1,000",
        "-$5",
        "$-5",
        "-5.5",
        "($12.00)",
        "(1,000)",
        ".99",
        "0",
        "0.5",
        "$0.00",
    ])
    def test_valid_amounts(self, value):
        assert Currency().validate(value, "price", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "01",
        "1,23",
        "1,2345",
        "$1.234",
        "--5",
        "(5",
        "(-5)",
        "5$",
        "abc",
        "",
        "1 000",
    ])
    def test_invalid_amounts(self, value):
        assert not Currency().validate(value, "price", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        (12, True),
        (0, True),
        (-5, True),
        (12.5, True),
        (12.345, False),
        (True, False),
        (None, False),
        (["12"], False),
    ])
    def test_numbers_checked_as_text(self, value, expected):
        assert Currency().validate(value, "price", {}) is expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "$1\u0662\u0663",
        "\u0661,000",
        "\uff11\uff12",
        "(\u0967.50)",
    ])
    def test_non_ascii_digits_fail(self, value):
        assert not Currency().validate(value, "price", {})


class TestPhone:

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "555-123-4567",
        "(555) 123-4567",
        "[555]123-4567",
        "1-555-123-4567",
        "1 (555) 123-4567",
        "555 123 4567",
        "5551234567",
        15551234567,
    ])
    def test_valid_numbers(self, value):
        assert Phone().validate(value, "phone", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "555-1234",
        "555-123-45678",
        "555.123.4567",
        "phone",
        "",
        None,
        True,
    ])
    def test_invalid_numbers(self, value):
        assert not Phone().validate(value, "phone", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "\u0665\u0665\u0665\u0661\u0662\u0663\u0664\u0665\u0666\u0667",
        "(555) \u0661\u0662\u0663-4567",
        "\uff15\uff15\uff15-123-4567",
    ])
    def test_non_ascii_digits_fail(self, value):
        assert not Phone().validate(value, "phone", {})


class TestSsn:

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["123-45-6789", "123456789", "123 45 6789", "ssn: 123.45.6789", 123456789])
    def test_nine_digits_pass(self, value):
        assert Ssn().validate(value, "ssn", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["12345678", "1234567890", "123-45-678", "", "abc"])
    def test_other_digit_counts_fail(self, value):
        assert not Ssn().validate(value, "ssn", {})

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [
        "123-45-6789",
        "12-34-56-78-9",
        "12345678",
        "a1b2c3d4e5f6g7h8i9",
        "0000000000",
        "--",
    ])
    def test_passes_iff_nine_digits(self, value):
        digits = sum(char in "0123456789" for char in value)
        assert Ssn().validate(value, "ssn", {}) is (digits == 9)
