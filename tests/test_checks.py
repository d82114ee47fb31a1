"""
Tests for the built-in field checks.
"""

import re
from datetime import date, datetime, timezone

import pytest

from bodycheck import EMAIL_PATTERN, ErrorKind, optional, required, validate, validate_detailed


def kinds_for(value, node):
    return [e.kind for e in validate_detailed({"f": value}, {"f": node})]


class TestString:
    def test_valid(self):
        assert kinds_for("hello", required().is_string(min=1, max=10)) == []

    @pytest.mark.parametrize("value", [1, 1.5, None, [], {}, b"bytes"])
    def test_type(self, value):
        assert kinds_for(value, required().is_string()) == [ErrorKind.TYPE]

    def test_not_empty(self):
        assert validate({"f": ""}, {"f": required().is_string(not_empty=True)}) == [
            '"f" must not be empty'
        ]

    def test_bounds(self):
        node = required().is_string(min=2, max=4)
        assert validate({"f": "a"}, {"f": node}) == ['"f" must have at least 2 characters']
        assert validate({"f": "abcde"}, {"f": node}) == ['"f" must have at most 4 characters']
        assert validate({"f": "abcd"}, {"f": node}) == []

    def test_bounds_must_be_ordered(self):
        with pytest.raises(ValueError):
            required().is_string(min=5, max=1)

    def test_each(self):
        node = required().is_string(min=2, each=True)
        assert validate({"f": ["ab", 1, "c"]}, {"f": node}) == [
            '"f.1" must be a string',
            '"f.2" must have at least 2 characters',
        ]

    def test_each_non_array_reports_once(self):
        node = required().is_string(each=True)
        assert validate({"f": "abc"}, {"f": node}) == ['"f" must be an array']

    def test_each_accepts_empty_array(self):
        assert kinds_for([], required().is_string(each=True)) == []

    def test_each_accepts_tuple(self):
        assert kinds_for(("a", "b"), required().is_string(each=True)) == []


class TestEmail:
    @pytest.mark.parametrize("value", ["a@b.co", "ovidiu.podina@example.com"])
    def test_valid(self, value):
        assert kinds_for(value, required().is_email()) == []

    @pytest.mark.parametrize("value", ["ovidiu", "a@b", "a b@c.de", "@b.co", "a@b.co\n"])
    def test_format(self, value):
        assert kinds_for(value, required().is_email()) == [ErrorKind.FORMAT]

    def test_non_string_is_type_error(self):
        assert validate({"f": 42}, {"f": required().is_email()}) == ['"f" must be a string']

    def test_each(self):
        node = required().is_email(each=True)
        errors = validate_detailed({"f": ["a@b.co", "nope"]}, {"f": node})
        assert [(e.location, e.kind) for e in errors] == [("f.1", ErrorKind.FORMAT)]

    def test_default_pattern_is_constant(self):
        node = required().is_email()
        assert node.checks[1].pattern is EMAIL_PATTERN


class TestComplexPassword:
    @pytest.mark.parametrize("value", ["Test123!", "Abcdefg1@", "zZ9$zZ9$zZ9$"])
    def test_valid(self, value):
        assert kinds_for(value, required().is_complex_password()) == []

    @pytest.mark.parametrize(
        "value",
        [
            "123456",
            "Test12!",  # too short
            "test123!",  # no uppercase
            "TEST123!",  # no lowercase
            "Testabc!",  # no digit
            "Test1234",  # no symbol
            "Test 123!",  # space not allowed
        ],
    )
    def test_weak(self, value):
        assert kinds_for(value, required().is_complex_password()) == [ErrorKind.FORMAT]

    def test_non_string_is_type_error(self):
        assert kinds_for(12345678, required().is_complex_password()) == [ErrorKind.TYPE]

    def test_custom_pattern_is_searched(self):
        node = required().is_complex_password(pattern=r"[A-Z]\d")
        assert kinds_for("xxA1yy", node) == []
        assert kinds_for("A1", node) == []
        assert kinds_for("xxa1yy", node) == [ErrorKind.FORMAT]

    def test_anchored_custom_pattern(self):
        node = required().is_complex_password(pattern=r"^\d{4}$")
        assert kinds_for("1234", node) == []
        assert kinds_for("x1234", node) == [ErrorKind.FORMAT]

    def test_default_pattern_rejects_trailing_newline(self):
        assert kinds_for("Test123!\n", required().is_complex_password()) == [
            ErrorKind.FORMAT
        ]

    def test_custom_pattern_uses_neutral_message(self):
        node = required().is_complex_password(pattern=r"\d{4}")
        assert validate({"f": "abcd"}, {"f": node}) == [
            '"f" must match the required format'
        ]

    def test_custom_message(self):
        node = required().is_complex_password(pattern=r"\d{4}", message="needs a PIN")
        assert validate({"f": "abcd"}, {"f": node}) == ['"f" needs a PIN']

    def test_default_message_describes_policy(self):
        errors = validate({"f": "123456"}, {"f": required().is_complex_password()})
        assert errors[0].startswith('"f" must be a strong password (at least 8 characters')

    def test_compiled_pattern(self):
        node = required().is_complex_password(pattern=re.compile(r"[a-z]+", re.I))
        assert kinds_for("AbC", node) == []


class TestNumber:
    @pytest.mark.parametrize("value", [0, -3, 2.5, 10**400])
    def test_valid(self, value):
        assert kinds_for(value, required().is_number()) == []

    @pytest.mark.parametrize(
        "value", ["1", None, True, False, float("nan"), float("inf"), [1]]
    )
    def test_type(self, value):
        assert kinds_for(value, required().is_number()) == [ErrorKind.TYPE]

    def test_range(self):
        node = required().is_number(min=0, max=10)
        assert validate({"f": -1}, {"f": node}) == ['"f" must be at least 0']
        assert validate({"f": 11}, {"f": node}) == ['"f" must be at most 10']
        assert validate({"f": 0}, {"f": node}) == []
        assert validate({"f": 10}, {"f": node}) == []

    def test_each(self):
        node = optional().is_number(max=5, each=True)
        errors = validate_detailed({"f": [1, 6, "x"]}, {"f": node})
        assert [(e.location, e.kind) for e in errors] == [
            ("f.1", ErrorKind.RANGE),
            ("f.2", ErrorKind.TYPE),
        ]


class TestBoolean:
    def test_valid(self):
        assert kinds_for(True, required().is_boolean()) == []
        assert kinds_for(False, required().is_boolean()) == []

    @pytest.mark.parametrize("value", [0, 1, "true", None])
    def test_type(self, value):
        assert validate({"f": value}, {"f": required().is_boolean()}) == [
            '"f" must be true or false'
        ]


class TestDate:
    @pytest.mark.parametrize(
        "value",
        ["2024-01-15", "2024-01-15T10:30:00", "2024-01-15T10:30:00Z", "2024-01-15T10:30:00+02:00"],
    )
    def test_valid(self, value):
        assert kinds_for(value, required().is_date()) == []

    @pytest.mark.parametrize("value", ["not a date", "2024-13-01", "", 20240115, None])
    def test_format(self, value):
        assert validate({"f": value}, {"f": required().is_date()}) == [
            '"f" must be a valid ISO date string'
        ]

    def test_bounds(self):
        node = required().is_date(min=date(2024, 1, 1), max=date(2024, 12, 31))
        assert validate({"f": "2023-12-31"}, {"f": node}) == [
            '"f" must not be before 2024-01-01'
        ]
        assert validate({"f": "2025-01-01T00:00:00"}, {"f": node}) == [
            '"f" must not be after 2024-12-31'
        ]
        assert validate({"f": "2024-06-01"}, {"f": node}) == []

    def test_aware_value_against_naive_bound(self):
        node = required().is_date(min=datetime(2024, 1, 1))
        assert kinds_for("2024-01-15T10:30:00Z", node) == []
        assert kinds_for("2023-01-15T10:30:00Z", node) == [ErrorKind.RANGE]

    def test_naive_value_against_aware_bound(self):
        node = required().is_date(max=datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert kinds_for("2023-06-01T00:00:00", node) == []

    def test_bounds_must_be_ordered(self):
        with pytest.raises(ValueError):
            required().is_date(min=date(2024, 2, 1), max=date(2024, 1, 1))

    def test_each(self):
        node = required().is_date(each=True)
        assert validate({"f": ["2024-01-01", "x"]}, {"f": node}) == [
            '"f.1" must be a valid ISO date string'
        ]


class TestArray:
    def test_valid(self):
        assert kinds_for([1, "a"], required().is_array(min=1, max=3)) == []

    @pytest.mark.parametrize("value", ["abc", {"a": 1}, None, 3])
    def test_type(self, value):
        assert validate({"f": value}, {"f": required().is_array()}) == [
            '"f" must be an array'
        ]

    def test_item_bounds(self):
        node = required().is_array(min=1, max=2)
        assert validate({"f": []}, {"f": node}) == ['"f" must have at least 1 items']
        assert validate({"f": [1, 2, 3]}, {"f": node}) == ['"f" must have at most 2 items']

    def test_combined_with_each_object(self):
        node = required().is_array(min=1).is_object({"id": required()}, each=True)
        assert validate({"f": []}, {"f": node}) == ['"f" must have at least 1 items']


class TestCustom:
    def test_default_message(self):
        node = required().custom(lambda x: x == "yes")
        assert validate({"f": "no"}, {"f": node}) == ['"f" is invalid']

    def test_exception_is_reported(self):
        def explode(_):
            raise ValueError("boom")

        assert validate({"f": 1}, {"f": required().custom(explode)}) == [
            '"f" is invalid: boom'
        ]
