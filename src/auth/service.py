import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from src.models import User
from src.auth.schemas import UserCreate
from src.auth.utils import get_password_hash, verify_password
from src.exceptions import EmailAlreadyRegistered, NotFoundError
from src.users.schemas import ProfileUpdate
from typing import Optional
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

class UserService:
    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def create_user(db: Session, user: UserCreate) -> User:
        """Create a new user.

        The lookup is only a fast path for the common duplicate; the unique
        index on ``users.email`` decides when two registrations race.
        """
        if UserService.get_user_by_email(db, user.email):
            raise EmailAlreadyRegistered()

        db_user = User(
            full_name=user.full_name,
            email=user.email,
            password=get_password_hash(user.password),
            phone=user.phone,
            gender=user.gender,
            date_of_birth=user.date_of_birth,
        )

        try:
            db.add(db_user)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise EmailAlreadyRegistered()

        db.refresh(db_user)
        logger.info("Registered user id=%s", db_user.id)
        return db_user

    @staticmethod
    def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        user = UserService.get_user_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password):
            return None
        return user

    @staticmethod
    def update_profile(db: Session, user_id: int, profile_update: ProfileUpdate) -> User:
        """Apply a partial profile update; fields absent from the request are left alone"""
        db_user = UserService.get_user_by_id(db, user_id)
        if not db_user:
            raise NotFoundError("User not found")

        update_data = profile_update.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_user, field, value)
        db_user.updated_at = datetime.now(timezone.utc)

        db.commit()
        db.refresh(db_user)
        return db_user
