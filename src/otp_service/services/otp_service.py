"""OTP service — generate, store, validate and consume one-time passcodes."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass

from otp_service.exceptions import InvalidInputError, StoreError
from otp_service.services.otp_generator import generate_otp
from otp_service.stores.base import OTPStore

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_TTL_SECONDS = 300  # 5 minutes
DEFAULT_KEY_PREFIX = "otp:"

MSG_VALID = "otp valid"
MSG_INVALID = "invalid otp"
MSG_NOT_FOUND = "otp not found or expired"


@dataclass(frozen=True)
class GenerateResult:
    """Value object returned by :meth:`OTPService.generate`."""

    user_id: str
    otp: str
    expires_in_seconds: int


@dataclass(frozen=True)
class ValidateResult:
    """Value object returned by :meth:`OTPService.validate`."""

    valid: bool
    message: str


class OTPService:
    """Issues and consumes OTPs against an expiring key-value store.

    Lifecycle of a record
    ---------------------
    * ``generate`` writes ``prefix + user_id`` with a fixed TTL, replacing
      any earlier code for that user.
    * ``validate`` with the wrong code leaves the record in place so the
      user can retry until it expires.
    * ``validate`` with the right code deletes the record, so the same
      code cannot be replayed.

    The read-compare-delete sequence in ``validate`` is three separate
    store calls, not one atomic operation: two concurrent validations of
    the same correct code may both succeed.  This is accepted for a
    single-user OTP flow.

    The service keeps no state of its own beyond the injected store.
    """

    def __init__(
        self,
        store: OTPStore,
        *,
        digits: int = DEFAULT_DIGITS,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        if digits < 1:
            raise ValueError("digits must be positive")
        if ttl_seconds < 1:
            raise ValueError("ttl_seconds must be positive")
        self._store = store
        self._digits = digits
        self._ttl_seconds = ttl_seconds
        self._key_prefix = key_prefix

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def key_for(self, user_id: str) -> str:
        """Storage key holding the OTP for *user_id*."""
        return self._key_prefix + user_id

    async def generate(self, user_id: str) -> GenerateResult:
        """Issue a fresh OTP for *user_id*, invalidating any previous one.

        Raises
        ------
        InvalidInputError
            If *user_id* is empty.
        OTPGenerationError
            If the secure random source is unavailable.
        StoreError
            If the store write fails.
        """
        if not user_id:
            raise InvalidInputError("userId is required")

        code = generate_otp(self._digits)
        await self._store.set(self.key_for(user_id), code, self._ttl_seconds)
        logger.info("OTP issued for %s (ttl=%ss)", user_id, self._ttl_seconds)
        return GenerateResult(
            user_id=user_id, otp=code, expires_in_seconds=self._ttl_seconds
        )

    async def validate(self, user_id: str, otp: str) -> ValidateResult:
        """Check *otp* for *user_id* and consume it on success.

        A missing or expired record is a normal ``valid=False`` outcome.
        A failure to delete a matched record is logged and otherwise
        ignored: the code has been accepted, and the TTL will evict it.

        Raises
        ------
        InvalidInputError
            If *user_id* or *otp* is empty.
        StoreError
            If the store read fails.
        """
        if not user_id or not otp:
            raise InvalidInputError("userId and otp are required")

        key = self.key_for(user_id)
        stored = await self._store.get(key)
        if stored is None:
            logger.info("OTP for %s not found or expired", user_id)
            return ValidateResult(valid=False, message=MSG_NOT_FOUND)

        if not hmac.compare_digest(stored.encode("utf-8"), otp.encode("utf-8")):
            logger.info("OTP mismatch for %s", user_id)
            return ValidateResult(valid=False, message=MSG_INVALID)

        # Consume the OTP so it cannot be replayed
        try:
            await self._store.delete(key)
        except StoreError:
            logger.warning("Failed to delete consumed OTP for %s", user_id, exc_info=True)
        logger.info("OTP verified for %s", user_id)
        return ValidateResult(valid=True, message=MSG_VALID)
