"""OTP Service — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── HTTP server ───────────────────────────────────────
    addr: str = ":8080"

    # ── Expiring store ────────────────────────────────────
    store_backend: str = "redis"  # "redis" or "memory"
    redis_addr: str = "localhost:6379"
    redis_password: str = ""
    redis_db: int = 0
    redis_socket_timeout: float = 3.0

    # ── OTP policy ────────────────────────────────────────
    otp_digits: int = 6
    otp_ttl_seconds: int = 300
    otp_key_prefix: str = "otp:"

    # ── App ───────────────────────────────────────────────
    app_name: str = "OTP Service"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def split_addr(
    addr: str, default_port: int = 8080, default_host: str = "0.0.0.0"
) -> tuple[str, int]:
    """Split ``host:port`` (``[::1]:8080``, ``:8080``, ``localhost``) into parts.

    Brackets around an IPv6 host are stripped; a bare IPv6 address such as
    ``::1`` carries no port.  An empty host is returned as *default_host*.
    """
    if addr.count(":") > 1 and not addr.startswith("["):
        return addr, default_port
    host, sep, port = addr.rpartition(":")
    if not sep or "]" in port:
        return addr.strip("[]") or default_host, default_port
    host = host.strip("[]") or default_host
    return host, int(port)


def public_base_url(addr: str) -> str:
    """Return a user-friendly base URL for a listen address.

    Wildcard and empty hosts are mapped to ``localhost``; an address
    without a port is returned as-is behind ``http://``.
    """
    host, sep, port = addr.rpartition(":")
    if not sep or "]" in port:
        return f"http://{addr}"
    host = host.strip().lower()
    if host in ("", "0.0.0.0", "::", "[::]"):
        host = "localhost"
    elif ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"http://{host}:{port}"


# Singleton settings instance
settings = Settings()
