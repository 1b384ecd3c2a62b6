"""Repository primitives for roles and permissions."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from app.db.models.role import Permission
from app.db.models.role import Role


def create_permission(session: Session, *, name: str, is_active: bool = True) -> Permission:
    """Create and return a permission row."""
    permission = Permission(name=name, is_active=is_active)
    session.add(permission)
    session.flush()
    session.refresh(permission)
    return permission


def create_role(
    session: Session,
    *,
    name: str,
    permissions: Sequence[Permission] = (),
    is_active: bool = True,
) -> Role:
    """Create and return a role row with its granted permissions."""
    role = Role(name=name, is_active=is_active, permissions=list(permissions))
    session.add(role)
    session.flush()
    session.refresh(role)
    return role


def get_role(session: Session, role_id: UUID) -> Role | None:
    """Fetch a role by id."""
    return session.get(Role, role_id)
