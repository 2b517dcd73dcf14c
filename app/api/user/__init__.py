from fastapi import APIRouter, Depends

from app.models.user import User
from app.services.auth import get_current_user, require_role
from app.utils.base import RoleName


router = APIRouter()


@router.get("/me")
def me(current_user: User = Depends(get_current_user)) -> dict:
    """PROTECTED: Profile of the token's subject."""
    return current_user.to_output()


@router.get("", dependencies=[Depends(require_role(RoleName.ADMIN))])
def list_users() -> list[dict]:
    """ADMIN: Every registered profile, oldest first."""
    users: list[User] = User.objects.order_by("created_at")
    return [u.to_output() for u in users]
