"""Tests for the OTP generator."""

from unittest.mock import patch

import pytest

from otp_service.exceptions import OTPGenerationError
from otp_service.services.otp_generator import generate_otp


@pytest.mark.parametrize("digits", [1, 4, 6, 8, 12])
def test_length_and_charset(digits):
    for _ in range(200):
        code = generate_otp(digits)
        assert len(code) == digits
        assert code.isascii() and code.isdigit()


def test_default_is_six_digits():
    assert len(generate_otp()) == 6


def test_small_values_are_zero_padded():
    with patch("otp_service.services.otp_generator.secrets.randbelow", return_value=42) as rb:
        assert generate_otp(6) == "000042"
    rb.assert_called_once_with(10**6)


def test_codes_vary():
    codes = {generate_otp(6) for _ in range(50)}
    assert len(codes) > 1


def test_random_source_failure_is_not_downgraded():
    with patch(
        "otp_service.services.otp_generator.secrets.randbelow",
        side_effect=OSError("no entropy"),
    ):
        with pytest.raises(OTPGenerationError):
            generate_otp(6)


@pytest.mark.parametrize("digits", [0, -3, True, 2.5])
def test_rejects_bad_digit_count(digits):
    with pytest.raises(ValueError):
        generate_otp(digits)
