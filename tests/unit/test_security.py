"""Unit tests for password hashing."""
import pytest

from taskmanager.core.exceptions import InvalidPasswordError, InvalidPasswordHashError
from taskmanager.core.security import PasswordHasher


def test_encode_produces_bcrypt_hash(password_hasher: PasswordHasher):
    """Test that encoded passwords are bcrypt hashes, not the plaintext."""
    password_hash = password_hasher.encode("secret123")

    assert password_hash != "secret123"
    assert password_hash.startswith("$2b$")


def test_encode_is_salted(password_hasher: PasswordHasher):
    """Test that hashing the same password twice gives different hashes."""
    first = password_hasher.encode("secret123")
    second = password_hasher.encode("secret123")

    assert first != second
    assert password_hasher.matches("secret123", first)
    assert password_hasher.matches("secret123", second)


def test_matches_wrong_password(password_hasher: PasswordHasher):
    """Test that a different password does not match."""
    password_hash = password_hasher.encode("secret123")

    assert password_hasher.matches("secret124", password_hash) is False


def test_matches_unrecognised_hash(password_hasher: PasswordHasher):
    """Test that a stored value that is not a hash raises."""
    with pytest.raises(InvalidPasswordHashError):
        password_hasher.matches("secret123", "not-a-hash")


def test_rounds_come_from_settings(test_settings):
    """Test the work factor is taken from settings."""
    hasher = PasswordHasher.from_settings(test_settings)

    assert hasher.rounds == 4
    assert hasher.encode("secret123").startswith("$2b$04$")


def test_encode_rejects_nul_byte(password_hasher: PasswordHasher):
    """Test a password bcrypt cannot hash is an invalid password."""
    with pytest.raises(InvalidPasswordError):
        password_hasher.encode("abc\x00def")


def test_matches_rejects_nul_byte(password_hasher: PasswordHasher):
    """Test a bad candidate password is not blamed on a valid stored hash."""
    password_hash = password_hasher.encode("secret123")

    with pytest.raises(InvalidPasswordError):
        password_hasher.matches("abc\x00def", password_hash)
