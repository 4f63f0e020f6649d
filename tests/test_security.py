from __future__ import annotations

import pytest

from auth import repository, security


def test_hash_never_equals_plaintext():
    hashed = security.hash_password("hunter22", rounds=4)
    assert hashed != "hunter22"
    assert hashed.startswith("$2")


def test_verify_accepts_only_the_hashed_password():
    hashed = security.hash_password("correct horse", rounds=4)
    assert security.verify_password("correct horse", hashed) is True
    assert security.verify_password("wrong horse", hashed) is False


def test_same_password_hashes_differently():
    # Salted: two hashes of one password differ but both verify.
    first = security.hash_password("abcdef", rounds=4)
    second = security.hash_password("abcdef", rounds=4)
    assert first != second
    assert security.verify_password("abcdef", first)
    assert security.verify_password("abcdef", second)


def test_verify_rejects_malformed_hash():
    assert security.verify_password("abcdef", "not-a-bcrypt-hash") is False
    assert security.verify_password("abcdef", "") is False
    assert security.verify_password("", security.hash_password("abcdef", rounds=4)) is False


def test_hash_rejects_empty_password():
    with pytest.raises(security.AuthSecurityError):
        security.hash_password("")


def test_rounds_follow_config(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "5")
    assert security.hash_password("abcdef").startswith("$2b$05$")


def test_normalize_email():
    assert repository.normalize_email("  Alice@Example.COM ") == "alice@example.com"
