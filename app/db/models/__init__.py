"""Model module imports for SQLAlchemy relationship registration."""

from app.db.models.role import Permission
from app.db.models.role import Role
from app.db.models.user import User

__all__ = [
    "Permission",
    "Role",
    "User",
]
