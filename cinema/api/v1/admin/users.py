from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cinema.db.session import get_db
from cinema.api.deps import get_current_admin_user
from cinema.models.user import User
from cinema.schemas.user import User as UserSchema

router = APIRouter(prefix="/admin/users", tags=["Admin - Users"])


def _get_user_or_404(user_id: UUID, db: Session) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/", response_model=List[UserSchema])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Every user except the calling admin."""
    return (
        db.query(User)
        .filter(User.id != current_user.id)
        .order_by(User.created_at)
        .all()
    )


@router.patch("/{user_id}/deactivate", response_model=UserSchema)
def deactivate_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    user = _get_user_or_404(user_id, db)
    if user.role == "admin":
        raise HTTPException(status_code=400, detail="Cannot deactivate admin users")
    if user.id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot deactivate yourself")

    user.is_active = False
    db.commit()
    db.refresh(user)
    return user


@router.patch("/{user_id}/activate", response_model=UserSchema)
def activate_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    user = _get_user_or_404(user_id, db)
    user.is_active = True
    db.commit()
    db.refresh(user)
    return user


@router.patch("/{user_id}/make-admin", response_model=UserSchema)
def make_user_admin(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    user = _get_user_or_404(user_id, db)
    if user.role == "admin":
        raise HTTPException(status_code=400, detail="User is already an admin")

    user.role = "admin"
    db.commit()
    db.refresh(user)
    return user
