"""Repository primitives for directory users."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy import delete
from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm import selectinload

from app.db.models.role import Permission
from app.db.models.role import Role
from app.db.models.user import User
from app.response.constants import ErrorCode
from app.schemas.response import FieldErrorCode

FILTERABLE_FIELDS = frozenset({"id", "first_name", "last_name", "email", "mobile_number", "role_id"})


def _filter_clauses(filters: Mapping[str, Any] | None) -> list[Any]:
    clauses = []
    for field, value in (filters or {}).items():
        if field not in FILTERABLE_FIELDS:
            raise ValueError(f"Unsupported user filter: {field}")
        clauses.append(getattr(User, field) == value)
    return clauses


def _apply_filters(stmt: Select, filters: Mapping[str, Any] | None) -> Select:
    for clause in _filter_clauses(filters):
        stmt = stmt.where(clause)
    return stmt


def _with_role(stmt: Select) -> Select:
    """Populate the active role and its active permissions."""
    return stmt.options(
        selectinload(User.role.and_(Role.is_active.is_(True))).selectinload(
            Role.permissions.and_(Permission.is_active.is_(True))
        )
    )


def create_user(
    session: Session,
    *,
    first_name: str,
    email: str,
    mobile_number: str,
    password: str,
    role_id: UUID,
    last_name: str | None = None,
) -> User:
    """Create and return a user row."""
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        mobile_number=mobile_number,
        password=password,
        role_id=role_id,
    )
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def find_all(
    session: Session,
    *,
    filters: Mapping[str, Any] | None = None,
    skip: int = 0,
    limit: int | None = None,
    populate: bool = False,
) -> list[User]:
    """List users matching ``filters`` in creation order."""
    stmt = _apply_filters(select(User), filters)
    if populate:
        stmt = _with_role(stmt)
    stmt = stmt.order_by(User.created_at.asc(), User.email.asc()).offset(skip)
    if limit:
        stmt = stmt.limit(limit)
    return list(session.scalars(stmt))


def total_data(session: Session, filters: Mapping[str, Any] | None = None) -> int:
    """Count users matching ``filters``."""
    stmt = _apply_filters(select(func.count()).select_from(User), filters)
    return int(session.scalar(stmt) or 0)


def find_one(
    session: Session,
    filters: Mapping[str, Any] | None = None,
    *,
    populate: bool = False,
) -> User | None:
    """Fetch the first user matching ``filters``."""
    stmt = _apply_filters(select(User), filters)
    if populate:
        stmt = _with_role(stmt)
    return session.scalars(stmt.limit(1)).first()


def find_one_by_id(session: Session, user_id: UUID, *, populate: bool = False) -> User | None:
    """Fetch a user by id."""
    return find_one(session, {"id": user_id}, populate=populate)


def update_user(
    session: Session,
    user: User,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Update the mutable name fields of a user."""
    if first_name is not None:
        user.first_name = first_name
    if last_name is not None:
        user.last_name = last_name
    session.flush()
    session.refresh(user)
    return user


def delete_one_by_id(session: Session, user_id: UUID) -> bool:
    """Delete a user by id and report whether a row was removed."""
    result = session.execute(delete(User).where(User.id == user_id))
    return result.rowcount > 0


def delete_many(session: Session, filters: Mapping[str, Any] | None = None) -> int:
    """Delete users matching ``filters`` and return the number removed."""
    stmt = delete(User)
    for clause in _filter_clauses(filters):
        stmt = stmt.where(clause)
    return session.execute(stmt).rowcount


def check_exist(
    session: Session,
    *,
    email: str,
    mobile_number: str,
    exclude_user_id: UUID | None = None,
) -> list[FieldErrorCode]:
    """Return uniqueness violations for email and mobile number, email first."""

    def _taken(column, value: str) -> bool:
        stmt = select(User.id).where(column == value)
        if exclude_user_id is not None:
            stmt = stmt.where(User.id != exclude_user_id)
        return session.scalar(stmt.limit(1)) is not None

    errors: list[FieldErrorCode] = []
    if _taken(User.email, email):
        errors.append(FieldErrorCode(status_code=ErrorCode.USER_EMAIL_EXIST, property_name="email"))
    if _taken(User.mobile_number, mobile_number):
        errors.append(
            FieldErrorCode(status_code=ErrorCode.USER_MOBILE_NUMBER_EXIST, property_name="mobileNumber")
        )
    return errors
