"""User API routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from users_api.services import get_user_service
from users_common.models.envelope import ErrorResponse, UserListResponse, UserResponse
from users_common.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


@router.get("", response_model=UserListResponse)
@router.get("/", response_model=UserListResponse)
async def list_users(service: UserService = Depends(get_user_service)) -> UserListResponse:
    return UserListResponse(data=service.list_users())


@router.get("/{user_id}", response_model=UserResponse, responses=NOT_FOUND)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserResponse:
    return UserResponse(data=service.get_user(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED, responses=BAD_REQUEST)
@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED, responses=BAD_REQUEST)
async def create_user(
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return UserResponse(data=service.create_user(payload))


@router.put("/{user_id}", response_model=UserResponse, responses={**NOT_FOUND, **BAD_REQUEST})
async def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Replace all fields of a user; every required field must be resent."""
    return UserResponse(data=service.update_user(user_id, payload))


@router.patch("/{user_id}", response_model=UserResponse, responses={**NOT_FOUND, **BAD_REQUEST})
async def patch_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update only the supplied fields of a user."""
    return UserResponse(data=service.patch_user(user_id, payload))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses=NOT_FOUND)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Response:
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
