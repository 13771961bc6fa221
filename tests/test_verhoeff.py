import pytest
from rosterguard.identity.verhoeff import D, P, INV, verhoeff_generate, verhoeff_validate

KNOWN_GOOD = "234123412346"


def test_table_shapes():
    assert len(D) == 10 and all(len(row) == 10 for row in D)
    assert len(P) == 8 and all(len(row) == 10 for row in P)
    assert len(INV) == 10
    # every element's inverse really is its inverse under D
    assert all(D[i][INV[i]] == 0 for i in range(10))

def test_known_short_example():
    # Textbook example: 236 -> check digit 3
    assert verhoeff_generate("236") == "3"
    assert verhoeff_validate("2363") is True
    assert verhoeff_validate("2364") is False

def test_known_good_identity_number():
    assert verhoeff_generate(KNOWN_GOOD[:-1]) == KNOWN_GOOD[-1]
    assert verhoeff_validate(KNOWN_GOOD) is True

@pytest.mark.parametrize("body", [
    "23412341234", "98765432101", "50000000001", "74125896302", "31415926535",
])
def test_generated_check_digit_validates(body):
    assert verhoeff_validate(body + verhoeff_generate(body)) is True

def test_every_single_digit_error_is_detected():
    for pos in range(len(KNOWN_GOOD)):
        for digit in "0123456789":
            if digit == KNOWN_GOOD[pos]:
                continue
            altered = KNOWN_GOOD[:pos] + digit + KNOWN_GOOD[pos + 1:]
            assert verhoeff_validate(altered) is False, (pos, digit)

def test_adjacent_transposition_is_detected():
    swapped = KNOWN_GOOD[:4] + KNOWN_GOOD[5] + KNOWN_GOOD[4] + KNOWN_GOOD[6:]
    assert swapped != KNOWN_GOOD
    assert verhoeff_validate(swapped) is False

@pytest.mark.parametrize("bad", ["", "12a4", "12 34", "١٢٣"])
def test_rejects_non_digit_input(bad):
    with pytest.raises(ValueError):
        verhoeff_validate(bad)
    with pytest.raises(ValueError):
        verhoeff_generate(bad)
