"""Salted SHA-256 password hashing."""

from __future__ import annotations

import hashlib
import hmac
import secrets

SALT_BYTES = 16


def new_salt() -> str:
    """Return a random hex-encoded salt."""

    return secrets.token_hex(SALT_BYTES)


def hash_password(password: str, salt: str) -> str:
    """Hash ``password`` with the hex ``salt`` prepended to the digest input."""

    digest = hashlib.sha256()
    digest.update(bytes.fromhex(salt))
    digest.update(password.encode("utf-8"))
    return digest.hexdigest()


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    """Re-hash the candidate with the stored salt and compare in constant time."""

    candidate = hash_password(password, salt)
    return hmac.compare_digest(candidate, expected_hash)
