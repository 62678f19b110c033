"""Account creation, input validation and credential checks."""

import logging

from email_validator import EmailNotValidError, validate_email as _validate_email_syntax
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tripcast.core.database import transaction
from tripcast.core.errors import AuthFailure, ConstraintViolation, StorageFailure, ValidationError
from tripcast.core.security import (
    DUMMY_PASSWORD_HASH,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
    verify_password,
)
from tripcast.models import Role, User

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use."


def validate_email(email: str) -> str:
    """Return the normalized email or raise ValidationError. No DNS lookups."""
    try:
        result = _validate_email_syntax((email or "").strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("Please enter a valid email address.") from e
    return result.normalized


def validate_password(password: str) -> None:
    """Length must be within [PASSWORD_MIN_LEN, PASSWORD_MAX_LEN], both inclusive."""
    length = len(password or "")
    if length < PASSWORD_MIN_LEN:
        raise ValidationError(f"Password must be {PASSWORD_MIN_LEN} characters or more.")
    if length > PASSWORD_MAX_LEN:
        raise ValidationError(f"Password must be {PASSWORD_MAX_LEN} characters or less.")


def validate_name(value: str, label: str) -> str:
    stripped = (value or "").strip()
    if not stripped:
        raise ValidationError(f"{label} is required.")
    return stripped


def find_user_by_email(db: Session, email: str) -> User | None:
    try:
        return db.query(User).filter(User.email == email).first()
    except SQLAlchemyError as e:
        logger.exception("User lookup by email failed")
        raise StorageFailure() from e


def create_user(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: Role = Role.USER,
) -> User:
    """
    Validate input, hash the password and insert the user.

    Raises ValidationError for bad input and ConstraintViolation when the email is taken
    (checked up front for the common case; the unique index catches races).
    """
    email = validate_email(email)
    validate_password(password)
    first_name = validate_name(first_name, "First name")
    last_name = validate_name(last_name, "Last name")

    if find_user_by_email(db, email) is not None:
        raise ConstraintViolation(EMAIL_IN_USE)

    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    with transaction(db, conflict_message=EMAIL_IN_USE):
        db.add(user)
    db.refresh(user)
    logger.info("Account created", extra={"user_id": user.id, "role": user.role.value})
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the user whose email and password match, else raise AuthFailure.

    Unknown email and wrong password raise the same error after the same amount of
    bcrypt work, so callers cannot tell them apart.
    """
    try:
        normalized = validate_email(email)
    except ValidationError:
        normalized = None

    user = find_user_by_email(db, normalized) if normalized else None
    if user is None:
        verify_password(password or "", DUMMY_PASSWORD_HASH)
        raise AuthFailure()
    if not verify_password(password or "", user.password_hash):
        raise AuthFailure()
    return user
