# edithub/core/security.py
"""
Password hashing for profile accounts.

Stored format: ``pbkdf2_sha256$<iterations>$<salt b64>$<hash b64>`` so the
iteration count can be raised without invalidating existing rows.

Access codes are NOT hashed: they are looked up by exact value.
"""
import base64
import hashlib
import hmac
import os

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 200_000


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = _derive(password, salt, ITERATIONS)
    return "$".join([
        ALGORITHM,
        str(ITERATIONS),
        base64.b64encode(salt).decode("ascii"),
        base64.b64encode(dk).decode("ascii"),
    ])


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt_b64, hash_b64 = (encoded or "").split("$")
        if algorithm != ALGORITHM:
            return False
        salt = base64.b64decode(salt_b64.encode("ascii"))
        expected = base64.b64decode(hash_b64.encode("ascii"))
        rounds = int(iterations)
    except ValueError:
        return False

    return hmac.compare_digest(_derive(password, salt, rounds), expected)
