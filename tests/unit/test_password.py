"""Unit tests for password hashing."""

import bcrypt

from src.us_gateway.auth.password import hash_password


def _matches(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8")[:72], hashed.encode("utf-8"))


def test_hash_is_not_plain():
    hashed = hash_password("ghost123")
    assert hashed != "ghost123"
    assert hashed.startswith("$2")


def test_hash_matches_original():
    assert _matches("ghost123", hash_password("ghost123")) is True


def test_hash_rejects_other_password():
    assert _matches("ghost124", hash_password("ghost123")) is False


def test_same_plain_produces_different_hashes():
    # bcrypt uses random salt each time
    assert hash_password("ghost123") != hash_password("ghost123")


def test_input_beyond_72_bytes_does_not_fail():
    long_password = "p" * 200
    assert _matches(long_password, hash_password(long_password)) is True
