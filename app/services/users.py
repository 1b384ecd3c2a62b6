"""Service helpers for user directory API operations."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import EnvelopeError
from app.core.errors import NotFoundError
from app.core.security import PasswordService
from app.db.models.user import User
from app.db.repository.roles import get_role
from app.db.repository.users import check_exist
from app.db.repository.users import create_user
from app.db.repository.users import delete_one_by_id
from app.db.repository.users import find_all
from app.db.repository.users import find_one_by_id
from app.db.repository.users import total_data
from app.db.repository.users import update_user
from app.response.constants import ErrorCode
from app.response.service import ResponseService
from app.schemas.user import User as UserSchema
from app.schemas.user import UserCreate
from app.schemas.user import UserUpdate
from app.schemas.user import UserWithRole

logger = logging.getLogger(__name__)


def safe_user(user: User, *, populate: bool = False) -> dict[str, Any]:
    """Return the public JSON payload for a user."""
    schema = UserWithRole if populate else UserSchema
    return schema.model_validate(user).model_dump(mode="json", by_alias=True)


def _raise_exist_errors(session: Session, responses: ResponseService, *, email: str, mobile_number: str) -> None:
    errors = check_exist(session, email=email, mobile_number=mobile_number)
    if errors:
        raise EnvelopeError(ErrorCode.USER_EXIST, errors=responses.resolve_field_errors(errors))


def create_user_service(
    session: Session,
    payload: UserCreate,
    *,
    responses: ResponseService,
    passwords: PasswordService,
) -> User:
    """Validate uniqueness, hash the password and persist a new user."""
    email = payload.email.lower()
    _raise_exist_errors(session, responses, email=email, mobile_number=payload.mobile_number)

    role = get_role(session, payload.role)
    if role is None or not role.is_active:
        raise EnvelopeError(ErrorCode.USER_ROLE_NOT_FOUND)

    try:
        user = create_user(
            session,
            first_name=payload.first_name.lower(),
            last_name=payload.last_name.lower() if payload.last_name else None,
            email=email,
            mobile_number=payload.mobile_number,
            password=passwords.hash_password(payload.password),
            role_id=role.id,
        )
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning("User insert raced a uniqueness constraint for email=%s", email)
        _raise_exist_errors(session, responses, email=email, mobile_number=payload.mobile_number)
        raise
    return user


def list_users_service(
    session: Session,
    *,
    skip: int = 0,
    limit: int | None = None,
    populate: bool = False,
) -> tuple[list[User], int]:
    """Return one page of users and the total count."""
    users = find_all(session, skip=skip, limit=limit, populate=populate)
    return users, total_data(session)


def get_user_service(session: Session, user_id: UUID, *, populate: bool = False) -> User:
    """Fetch a user or raise not found."""
    user = find_one_by_id(session, user_id, populate=populate)
    if user is None:
        raise NotFoundError(ErrorCode.USER_NOT_FOUND)
    return user


def update_user_service(session: Session, user_id: UUID, payload: UserUpdate) -> User:
    """Update the name fields of an existing user."""
    user = get_user_service(session, user_id)
    user = update_user(
        session,
        user,
        first_name=payload.first_name.lower(),
        last_name=payload.last_name.lower() if payload.last_name else None,
    )
    session.commit()
    return user


def delete_user_service(session: Session, user_id: UUID) -> None:
    """Delete a user and persist the change."""
    if not delete_one_by_id(session, user_id):
        raise NotFoundError(ErrorCode.USER_NOT_FOUND)
    session.commit()
