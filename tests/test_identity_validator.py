import pytest
from rosterguard.core.result_schema import ValidationResult
from rosterguard.identity.validator import (
    DENY_LIST,
    REASON_ALL_SAME,
    REASON_CHECKSUM,
    REASON_DENY_LIST,
    REASON_LEADING_DIGIT,
    REASON_LENGTH,
    REASON_NOT_DIGITS,
    REASON_REQUIRED,
    format_identity_number,
    validate_identity_number,
)
from rosterguard.identity.verhoeff import verhoeff_generate

KNOWN_GOOD = "234123412346"


def test_valid_number():
    result = validate_identity_number(KNOWN_GOOD)
    assert isinstance(result, ValidationResult)
    assert result.valid is True
    assert bool(result) is True
    assert result.to_dict() == {"valid": True, "reason": "Valid identity number"}

def test_whitespace_is_ignored():
    assert validate_identity_number("2341 2341 2346").valid is True
    assert validate_identity_number("  2341\t2341\n2346 ").valid is True

@pytest.mark.parametrize("raw", ["", "   ", None])
def test_empty_is_required(raw):
    result = validate_identity_number(raw)
    assert result.valid is False
    assert result.reason == REASON_REQUIRED
    assert "required" in result.reason

@pytest.mark.parametrize("raw", ["23412341234", "2341234123467", "2"])
def test_wrong_length(raw):
    assert validate_identity_number(raw).reason == REASON_LENGTH

@pytest.mark.parametrize("raw", ["23412341234a", "2341-2341-23", "２３４１２３４１２３４６"])
def test_non_digits(raw):
    assert validate_identity_number(raw).reason == REASON_NOT_DIGITS

@pytest.mark.parametrize("digit", list("0123456789"))
def test_all_same_digits_rejected(digit):
    result = validate_identity_number(digit * 12)
    assert result.valid is False
    assert result.reason == REASON_ALL_SAME

@pytest.mark.parametrize("raw", ["123456789012", "012345678901", "098765432109"])
def test_deny_list_rejected(raw):
    result = validate_identity_number(raw)
    assert result.valid is False
    assert result.reason == REASON_DENY_LIST

def test_deny_list_members_all_rejected():
    for raw in DENY_LIST:
        result = validate_identity_number(raw)
        assert result.valid is False
        assert result.reason in (REASON_ALL_SAME, REASON_DENY_LIST)

@pytest.mark.parametrize("body", ["0341234123", "1341234123", "0987654321", "1000000000"])
def test_leading_zero_or_one_rejected_even_with_valid_checksum(body):
    # pad to 11 digits and append a correct check digit
    body = body + "4"
    number = body + verhoeff_generate(body)
    result = validate_identity_number(number)
    assert result.valid is False
    assert result.reason == REASON_LEADING_DIGIT

def test_checksum_failure():
    result = validate_identity_number("234123412345")
    assert result.valid is False
    assert result.reason == REASON_CHECKSUM

def test_single_digit_changes_rejected():
    for pos in range(1, 12):
        digit = "7" if KNOWN_GOOD[pos] != "7" else "8"
        altered = KNOWN_GOOD[:pos] + digit + KNOWN_GOOD[pos + 1:]
        assert validate_identity_number(altered).valid is False

def test_reasons_are_distinct_and_never_echo_input():
    reasons = {
        REASON_REQUIRED, REASON_LENGTH, REASON_NOT_DIGITS, REASON_ALL_SAME,
        REASON_DENY_LIST, REASON_LEADING_DIGIT, REASON_CHECKSUM,
    }
    assert len(reasons) == 7
    assert "234123412345" not in validate_identity_number("234123412345").reason

def test_non_string_input_does_not_raise():
    assert validate_identity_number(234123412346).valid is True
    assert validate_identity_number(12.5).valid is False

def test_validation_is_idempotent():
    assert validate_identity_number(KNOWN_GOOD) == validate_identity_number(KNOWN_GOOD)

def test_validation_does_not_log_the_number(caplog):
    with caplog.at_level("DEBUG"):
        validate_identity_number("234123412345")
        validate_identity_number(KNOWN_GOOD)
    assert "2341234123" not in caplog.text

def test_format_identity_number():
    assert format_identity_number(KNOWN_GOOD) == "2341 2341 2346"
    assert format_identity_number(" 2341 23412346") == "2341 2341 2346"
    assert format_identity_number("12345") == "12345"
    assert format_identity_number(None) == ""
