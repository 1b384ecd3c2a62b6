"""User directory API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.config import AppSettings
from app.core.config import get_app_settings
from app.core.security import PasswordService
from app.core.security import get_password_service
from app.db.base import get_db_session
from app.response.constants import SuccessCode
from app.response.service import ResponseService
from app.response.service import get_response_service
from app.schemas.user import UserCreate
from app.schemas.user import UserUpdate
from app.services.users import create_user_service
from app.services.users import delete_user_service
from app.services.users import get_user_service
from app.services.users import list_users_service
from app.services.users import safe_user
from app.services.users import update_user_service

router = APIRouter(prefix="/api/v1", tags=["users"])


@router.post("/users", status_code=201)
def create_user_endpoint(
    payload: UserCreate,
    session: Session = Depends(get_db_session),
    responses: ResponseService = Depends(get_response_service),
    passwords: PasswordService = Depends(get_password_service),
) -> JSONResponse:
    """Create a user."""
    user = create_user_service(session, payload, responses=responses, passwords=passwords)
    envelope = responses.success(SuccessCode.USER_CREATE, safe_user(user))
    return JSONResponse(status_code=201, content=envelope.to_payload())


@router.get("/users")
def list_users_endpoint(
    skip: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1, le=100),
    populate: bool = False,
    session: Session = Depends(get_db_session),
    responses: ResponseService = Depends(get_response_service),
    settings: AppSettings = Depends(get_app_settings),
) -> JSONResponse:
    """List users with offset pagination."""
    page_size = limit or settings.default_page_size
    users, total = list_users_service(session, skip=skip, limit=page_size, populate=populate)
    data = {
        "totalData": total,
        "skip": skip,
        "limit": page_size,
        "items": [safe_user(user, populate=populate) for user in users],
    }
    return JSONResponse(content=responses.success(SuccessCode.USER_LIST, data).to_payload())


@router.get("/users/{user_id}")
def get_user_endpoint(
    user_id: UUID,
    populate: bool = False,
    session: Session = Depends(get_db_session),
    responses: ResponseService = Depends(get_response_service),
) -> JSONResponse:
    """Get a single user by id, optionally with role and permissions."""
    user = get_user_service(session, user_id, populate=populate)
    envelope = responses.success(SuccessCode.USER_GET, safe_user(user, populate=populate))
    return JSONResponse(content=envelope.to_payload())


@router.patch("/users/{user_id}")
def update_user_endpoint(
    user_id: UUID,
    payload: UserUpdate,
    session: Session = Depends(get_db_session),
    responses: ResponseService = Depends(get_response_service),
) -> JSONResponse:
    """Update a user's name."""
    user = update_user_service(session, user_id, payload)
    return JSONResponse(content=responses.success(SuccessCode.USER_UPDATE, safe_user(user)).to_payload())


@router.delete("/users/{user_id}")
def delete_user_endpoint(
    user_id: UUID,
    session: Session = Depends(get_db_session),
    responses: ResponseService = Depends(get_response_service),
) -> JSONResponse:
    """Delete a user."""
    delete_user_service(session, user_id)
    return JSONResponse(content=responses.success(SuccessCode.USER_DELETE).to_payload())
