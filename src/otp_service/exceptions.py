"""Error taxonomy for the OTP lifecycle.

``InvalidInputError`` is a client-side rejection; everything deriving from
``InternalError`` is an opaque server-side failure.  An OTP that is missing
or expired is *not* an error — it is a normal validation outcome.
"""


class OTPServiceError(Exception):
    """Base class for all errors raised by the OTP service."""


class InvalidInputError(OTPServiceError):
    """A required field is missing or empty."""


class InternalError(OTPServiceError):
    """An internal condition the caller cannot fix by changing its input."""


class StoreError(InternalError):
    """Communication with the expiring key-value store failed."""


class OTPGenerationError(InternalError):
    """The secure random source could not produce a code."""
