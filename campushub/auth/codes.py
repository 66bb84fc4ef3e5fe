"""
Verification Code Hashing
One-time codes are stored hashed, never in plain text
"""

from passlib.context import CryptContext
import secrets
import string

# pbkdf2 keeps verification independent of the optional bcrypt backend
code_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_code(code: str) -> str:
    """
    Hash a one-time code

    Args:
        code: Plain code as sent to the user

    Returns:
        Hashed code
    """
    return code_context.hash(code)


def verify_code(plain_code: str, hashed_code: str) -> bool:
    """
    Verify a code against its hash

    Args:
        plain_code: Code typed by the user
        hashed_code: Stored hash

    Returns:
        True if the code matches, False otherwise
    """
    return code_context.verify(plain_code, hashed_code)


def generate_numeric_code(length: int = 6) -> str:
    """Random code of `length` decimal digits (leading zeros allowed)"""
    return ''.join(secrets.choice(string.digits) for _ in range(length))
