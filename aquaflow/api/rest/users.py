from fastapi import APIRouter, Depends
from uuid import UUID

from aquaflow.api.rest.errors import unwrap
from aquaflow.core.context import RequestContext, get_request_context, require_user
from aquaflow.schemas.user import UserCreate, UserUpdate, UserResponse
from aquaflow.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
def create_user(user_data: UserCreate, ctx: RequestContext = Depends(get_request_context)):
    """Register a customer or vendor profile"""
    return unwrap(UserService.create_user(ctx, user_data))


@router.get("/me", response_model=UserResponse)
def get_current_user(ctx: RequestContext = Depends(require_user)):
    """Get the caller's profile"""
    return ctx.user


@router.get("/{user_pk}", response_model=UserResponse)
def get_user(user_pk: UUID, ctx: RequestContext = Depends(get_request_context)):
    """Get user by ID"""
    return unwrap(UserService.get_user(ctx, user_pk))


@router.patch("/{user_pk}", response_model=UserResponse)
def update_user(user_pk: UUID, user_data: UserUpdate, ctx: RequestContext = Depends(require_user)):
    """Update the caller's own profile"""
    return unwrap(UserService.update_user(ctx, user_pk, user_data))


@router.delete("/{user_pk}", status_code=204)
def delete_user(user_pk: UUID, ctx: RequestContext = Depends(require_user)):
    """Delete the caller's own account"""
    unwrap(UserService.delete_user(ctx, user_pk))
    return None
