"""Authentication endpoints. Sign-up and login live in the managed auth service."""

from fastapi import APIRouter, Depends

from storefront.core.dependencies import get_current_user
from storefront.models.user import User
from storefront.schemas.common import Envelope
from storefront.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=Envelope[UserResponse])
async def read_current_user(user: User = Depends(get_current_user)):
    """The signed-in user, provisioned locally on first request."""
    return Envelope(data=UserResponse.model_validate(user))
