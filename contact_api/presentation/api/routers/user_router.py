"""API router for user registration, login and the current session."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ....application.services.user_service import UserService
from ....core.dependencies import get_user_service
from ....domain.models import User
from ..dependencies import require_identity, resolve_request_context
from ..schemas.user_schemas import UserResponse
from ..schemas.web_schemas import WebResponse

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    dependencies=[Depends(resolve_request_context)],
)


@router.post("", response_model=WebResponse[UserResponse], response_model_exclude_none=True)
def register(
    payload: Any = Body(default=None),
    user_service: UserService = Depends(get_user_service),
) -> WebResponse[UserResponse]:
    user = user_service.register(payload)
    return WebResponse(data=UserResponse.from_user(user))


@router.post("/login", response_model=WebResponse[UserResponse], response_model_exclude_none=True)
def login(
    payload: Any = Body(default=None),
    user_service: UserService = Depends(get_user_service),
) -> WebResponse[UserResponse]:
    user = user_service.login(payload)
    return WebResponse(data=UserResponse.from_user(user, include_token=True))


@router.get("/current", response_model=WebResponse[UserResponse], response_model_exclude_none=True)
def get_current(
    user: User = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> WebResponse[UserResponse]:
    return WebResponse(data=UserResponse.from_user(user_service.get(user)))


@router.patch("/current", response_model=WebResponse[UserResponse], response_model_exclude_none=True)
def update_current(
    payload: Any = Body(default=None),
    user: User = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> WebResponse[UserResponse]:
    updated = user_service.update(user, payload)
    return WebResponse(data=UserResponse.from_user(updated))


@router.delete("/current", response_model=WebResponse[bool], response_model_exclude_none=True)
def logout(
    user: User = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> WebResponse[bool]:
    user_service.logout(user)
    return WebResponse(data=True)
