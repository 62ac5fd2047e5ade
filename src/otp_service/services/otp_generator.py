"""OTP generator — cryptographically random fixed-length numeric codes."""

from __future__ import annotations

import secrets

from otp_service.exceptions import OTPGenerationError


def generate_otp(digits: int = 6) -> str:
    """Return a uniformly random code of exactly *digits* decimal digits.

    The value is drawn from ``[0, 10**digits)`` using the operating
    system's CSPRNG and zero-padded, so ``"000042"`` is as likely as any
    other code.  There is no fallback to a weaker source: if the OS
    cannot provide randomness, :class:`OTPGenerationError` is raised.
    """
    if not isinstance(digits, int) or isinstance(digits, bool) or digits < 1:
        raise ValueError(f"digits must be a positive integer, got {digits!r}")
    try:
        value = secrets.randbelow(10**digits)
    except (OSError, NotImplementedError) as exc:
        raise OTPGenerationError("secure random source unavailable") from exc
    return f"{value:0{digits}d}"
