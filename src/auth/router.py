import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from src.database import get_db
from src.auth.schemas import UserCreate, LoginRequest, AuthResponse, RegisterResponse, UserProfile
from src.auth.service import UserService
from src.auth.utils import create_access_token
from src.exceptions import AuthError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    db_user = UserService.create_user(db=db, user=user)
    return RegisterResponse(user_id=db_user.id)

@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a one-hour access token"""
    user = UserService.authenticate_user(db, login_data.email, login_data.password)
    if not user:
        logger.info("Failed login attempt for %s", login_data.email)
        raise AuthError("Invalid credentials")

    access_token = create_access_token(data={"id": user.id, "email": user.email})
    return AuthResponse(
        token=access_token,
        user=UserProfile.model_validate(user)
    )
