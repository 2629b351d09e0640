"""Tests for whole-string character class checks."""

import pytest

from ui_extensions.utils.text import (
    is_alphabetic_only,
    is_alphanumeric_only,
    is_digit_only,
)


class TestEmptyString:
    """Test that the empty string matches every class."""

    def test_empty_is_digit_only(self):
        assert is_digit_only("")

    def test_empty_is_alphabetic_only(self):
        assert is_alphabetic_only("")

    def test_empty_is_alphanumeric_only(self):
        assert is_alphanumeric_only("")


class TestDigitOnly:
    """Test is_digit_only function."""

    def test_digits(self):
        assert is_digit_only("0123456789")

    def test_mixed(self):
        """Test that a trailing letter fails."""
        assert not is_digit_only("12a")
        assert not is_digit_only("abc123")

    def test_sign_and_decimal_point(self):
        assert not is_digit_only("-12")
        assert not is_digit_only("1.5")

    def test_non_ascii_digits(self):
        """Test that Unicode digits outside 0-9 do not match."""
        assert not is_digit_only("١٢٣")  # Arabic-Indic digits
        assert not is_digit_only("１２３")  # fullwidth digits


class TestAlphabeticOnly:
    """Test is_alphabetic_only function."""

    def test_letters(self):
        assert is_alphabetic_only("abcXYZ")

    def test_mixed(self):
        assert not is_alphabetic_only("abc123")

    def test_whitespace(self):
        assert not is_alphabetic_only("abc def")

    def test_non_ascii_letters(self):
        """Test that accented letters do not match."""
        assert not is_alphabetic_only("café")
        assert not is_alphabetic_only("straße")


class TestAlphanumericOnly:
    """Test is_alphanumeric_only function."""

    def test_mixed(self):
        """Test letters and digits together."""
        assert is_alphanumeric_only("abc123")
        assert not is_alphabetic_only("abc123")
        assert not is_digit_only("abc123")

    def test_punctuation(self):
        assert not is_alphanumeric_only("abc_123")
        assert not is_alphanumeric_only("user@example")

    @pytest.mark.parametrize(
        "check,value",
        [
            (is_digit_only, "123\n"),
            (is_alphabetic_only, "abc\n"),
            (is_alphanumeric_only, "abc123\n"),
        ],
    )
    def test_trailing_newline_does_not_match(self, check, value):
        """Test that the whole string must match, including newlines."""
        assert not check(value)
