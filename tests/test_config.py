"""Tests for address helpers in the config module."""

import pytest

from otp_service.config import Settings, public_base_url, split_addr


@pytest.mark.parametrize(
    "addr,expected",
    [
        (":8080", "http://localhost:8080"),
        ("0.0.0.0:8080", "http://localhost:8080"),
        ("[::]:8080", "http://localhost:8080"),
        ("127.0.0.1:8080", "http://127.0.0.1:8080"),
        ("example.com", "http://example.com"),
    ],
)
def test_public_base_url(addr, expected):
    assert public_base_url(addr) == expected


@pytest.mark.parametrize(
    "addr,expected",
    [
        (":8080", ("0.0.0.0", 8080)),
        ("127.0.0.1:9000", ("127.0.0.1", 9000)),
        ("[::1]:8080", ("::1", 8080)),
        ("localhost", ("localhost", 8080)),
        ("::1", ("::1", 8080)),
        ("[::1]", ("::1", 8080)),
    ],
)
def test_split_addr(addr, expected):
    assert split_addr(addr) == expected


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("REDIS_ADDR", "redis:6379")
    monkeypatch.setenv("REDIS_DB", "3")
    monkeypatch.setenv("OTP_TTL_SECONDS", "120")
    cfg = Settings()
    assert cfg.redis_addr == "redis:6379"
    assert cfg.redis_db == 3
    assert cfg.otp_ttl_seconds == 120
    assert cfg.otp_digits == 6
