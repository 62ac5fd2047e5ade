"""Base store — the expiring key-value contract the OTP service depends on."""

from abc import ABC, abstractmethod


class OTPStore(ABC):
    """Abstract expiring key-value store.

    Implementations enforce expiry themselves: once ``ttl_seconds`` have
    elapsed after a ``set``, ``get`` must behave as if the key was never
    written.  Any failure talking to the backend is raised as
    :class:`~otp_service.exceptions.StoreError`; a missing key is reported
    by returning ``None``, never by raising.
    """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write *value* under *key*, replacing any previous value."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the live value for *key*, or ``None`` if absent or expired."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*.  Deleting a missing key is not an error."""

    async def ping(self) -> None:
        """Check connectivity to the backend (no-op by default)."""

    async def close(self) -> None:
        """Release backend resources (no-op by default)."""
