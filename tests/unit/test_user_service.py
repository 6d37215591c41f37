"""Unit tests for the user service."""
import pytest

from taskmanager.core.exceptions import (
    EmailAlreadyExistsError,
    IllegalArgumentError,
    InvalidEmailFormatError,
    InvalidPasswordError,
)
from taskmanager.models import Task, User
from taskmanager.services import UserService


@pytest.fixture
def existing_user(user_service: UserService):
    return user_service.create("user1@example.com", "secret123", "secret123")


def test_create_user(user_service: UserService, user_repository, password_hasher):
    """Test creating a user stores a bcrypt hash, never the plaintext."""
    details = user_service.create("user1@example.com", "secret123", "secret123")

    assert details.user_id is not None
    assert details.email == "user1@example.com"
    assert details.jwt_token is None

    stored = user_repository.get_by_id(details.user_id)
    assert stored.password_hash != "secret123"
    assert password_hasher.matches("secret123", stored.password_hash)


@pytest.mark.parametrize(
    "email",
    ["not-an-email", "user@", "@example.com", "user@example", "user@example.c", "a b@example.com"],
)
def test_create_user_invalid_email(user_service: UserService, email):
    """Test malformed emails are rejected."""
    with pytest.raises(InvalidEmailFormatError):
        user_service.create(email, "secret123", "secret123")


def test_create_user_email_with_trailing_newline(user_service: UserService, db_session):
    """Test the whole address must match, including its end."""
    with pytest.raises(InvalidEmailFormatError):
        user_service.create("user@example.com\n", "secret123", "secret123")

    assert db_session.query(User).count() == 0


def test_create_user_accepts_dotted_and_dashed_email(user_service: UserService):
    """Test common email shapes are accepted."""
    details = user_service.create("first.last-name@my-host.info", "secret123", "secret123")

    assert details.email == "first.last-name@my-host.info"


def test_create_user_password_mismatch(user_service: UserService):
    """Test mismatched password confirmation is rejected."""
    with pytest.raises(InvalidPasswordError, match="Passwords do not match"):
        user_service.create("user1@example.com", "secret123", "secret124")


def test_create_user_blank_password(user_service: UserService):
    """Test blank passwords are rejected."""
    with pytest.raises(InvalidPasswordError):
        user_service.create("user1@example.com", "", "")


def test_create_user_short_password(user_service: UserService):
    """Test passwords below the minimum length are rejected."""
    with pytest.raises(InvalidPasswordError):
        user_service.create("user1@example.com", "abc", "abc")


def test_create_user_configurable_min_length(user_repository, password_hasher):
    """Test the minimum password length can be raised."""
    service = UserService(user_repository, password_hasher, password_min_length=12)

    with pytest.raises(InvalidPasswordError):
        service.create("user1@example.com", "secret123", "secret123")


def test_create_user_duplicate_email(user_service: UserService, existing_user):
    """Test registering an existing email is rejected."""
    with pytest.raises(EmailAlreadyExistsError, match="Email is already in use"):
        user_service.create("user1@example.com", "other-pass", "other-pass")


def test_create_user_duplicate_email_race(user_service: UserService, user_repository, existing_user, monkeypatch):
    """Test a unique-constraint violation is reported as an existing email."""
    monkeypatch.setattr(user_repository, "exists_by_email", lambda email: False)

    with pytest.raises(EmailAlreadyExistsError):
        user_service.create("user1@example.com", "other-pass", "other-pass")


def test_invalid_create_stores_nothing(user_service: UserService, db_session):
    """Test nothing is persisted when validation fails."""
    with pytest.raises(InvalidPasswordError):
        user_service.create("user1@example.com", "secret123", "nope")

    assert db_session.query(User).count() == 0


def test_get_user(user_service: UserService, existing_user):
    """Test getting a user by ID."""
    details = user_service.get(existing_user.user_id)

    assert details.email == "user1@example.com"


def test_get_missing_user(user_service: UserService):
    """Test getting an unknown user."""
    with pytest.raises(IllegalArgumentError, match="User not found"):
        user_service.get(999)


def test_update_password(user_service: UserService, user_repository, password_hasher, existing_user):
    """Test changing the password replaces the stored hash."""
    user_service.update_password(existing_user.user_id, "secret123", "newsecret", "newsecret")

    stored = user_repository.get_by_id(existing_user.user_id)
    assert password_hasher.matches("newsecret", stored.password_hash)
    assert not password_hasher.matches("secret123", stored.password_hash)


def test_update_password_wrong_current(user_service: UserService, existing_user):
    """Test the current password must be correct."""
    with pytest.raises(InvalidPasswordError, match="Current password is incorrect"):
        user_service.update_password(existing_user.user_id, "wrong-pass", "newsecret", "newsecret")


def test_update_password_same_as_current(user_service: UserService, existing_user):
    """Test the new password must differ from the current one."""
    with pytest.raises(InvalidPasswordError, match="cannot be the same"):
        user_service.update_password(existing_user.user_id, "secret123", "secret123", "secret123")


def test_update_password_confirmation_mismatch(user_service: UserService, existing_user):
    """Test the new password must be confirmed."""
    with pytest.raises(InvalidPasswordError, match="Passwords do not match"):
        user_service.update_password(existing_user.user_id, "secret123", "newsecret", "newsecreT")


def test_update_password_blank_field(user_service: UserService, existing_user):
    """Test blank fields are illegal arguments."""
    with pytest.raises(IllegalArgumentError, match="newPassword"):
        user_service.update_password(existing_user.user_id, "secret123", " ", "newsecret")


def test_update_password_unusable_hash(user_service: UserService, user_repository, existing_user):
    """Test an unreadable stored hash is reported as an invalid password."""
    stored = user_repository.get_by_id(existing_user.user_id)
    stored.password_hash = "not-a-hash"
    user_repository.save(stored)

    with pytest.raises(InvalidPasswordError, match="Matcher failed"):
        user_service.update_password(existing_user.user_id, "secret123", "newsecret", "newsecret")


def test_delete_user_cascades_tasks(user_service: UserService, db_session, existing_user):
    """Test deleting a user removes the user and all of their tasks."""
    db_session.add(Task(name="Task 1", description="a", user_id=existing_user.user_id))
    db_session.commit()

    user_service.delete(existing_user.user_id, "user1@example.com", "secret123")

    assert db_session.query(User).count() == 0
    assert db_session.query(Task).count() == 0


def test_delete_user_wrong_password(user_service: UserService, db_session, existing_user):
    """Test deletion requires the current password."""
    with pytest.raises(InvalidPasswordError, match="Invalid current password"):
        user_service.delete(existing_user.user_id, "user1@example.com", "wrong-pass")

    assert db_session.query(User).count() == 1


def test_delete_user_blank_fields(user_service: UserService, existing_user):
    """Test deletion requires email and password."""
    with pytest.raises(IllegalArgumentError):
        user_service.delete(existing_user.user_id, None, "secret123")
    with pytest.raises(IllegalArgumentError):
        user_service.delete(existing_user.user_id, "user1@example.com", "")


def test_delete_missing_user(user_service: UserService):
    """Test deleting an unknown user."""
    with pytest.raises(IllegalArgumentError, match="User not found"):
        user_service.delete(999, "user1@example.com", "secret123")


def test_create_user_password_with_nul(user_service: UserService, db_session):
    """Test a password bcrypt cannot hash is rejected as an invalid password."""
    with pytest.raises(InvalidPasswordError):
        user_service.create("user1@example.com", "abc\x00def", "abc\x00def")

    assert db_session.query(User).count() == 0


def test_deleted_user_has_no_task_list(user_service: UserService, task_service, existing_user):
    """Test listing tasks for a deleted user is an illegal argument."""
    task_service.create_task(existing_user.user_id, "Task 1", "a")

    user_service.delete(existing_user.user_id, "user1@example.com", "secret123")

    with pytest.raises(IllegalArgumentError, match="User not found"):
        task_service.get_all_tasks_for_user(existing_user.user_id)
