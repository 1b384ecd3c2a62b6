"""Unit tests for password hashing."""

from __future__ import annotations

from argon2 import PasswordHasher

from app.core.security import PasswordService


def test_hash_and_verify_password() -> None:
    service = PasswordService(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))

    password_hash = service.hash_password("correct horse battery")

    assert password_hash != "correct horse battery"
    assert password_hash.startswith("$argon2")
    assert service.verify_password(password_hash, "correct horse battery")
    assert not service.verify_password(password_hash, "wrong")
    assert not service.verify_password("not-a-hash", "correct horse battery")
