from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from src.database import get_db
from src.auth.dependencies import get_current_user_claims
from src.auth.schemas import TokenData, UserProfile
from src.auth.service import UserService
from src.exceptions import NotFoundError
from src.users.schemas import ProfileUpdate, MessageResponse

router = APIRouter()

@router.get("/profile", response_model=UserProfile)
def read_profile(
    claims: TokenData = Depends(get_current_user_claims),
    db: Session = Depends(get_db)
):
    """Get the authenticated user's profile"""
    user = UserService.get_user_by_id(db, claims.id)
    if not user:
        raise NotFoundError("User not found")
    return user

@router.put("/profile/update", response_model=MessageResponse)
def update_profile(
    profile_update: ProfileUpdate,
    claims: TokenData = Depends(get_current_user_claims),
    db: Session = Depends(get_db)
):
    """Update full name, phone and address of the authenticated user"""
    UserService.update_profile(db, user_id=claims.id, profile_update=profile_update)
    return MessageResponse(message="Profile updated successfully")
