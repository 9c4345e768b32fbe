from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import date, datetime

class UserCreate(BaseModel):
    full_name: str = Field(..., alias="fullName", min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)
    phone: Optional[str] = Field(None, max_length=20)
    gender: Optional[str] = Field(None, max_length=20)
    date_of_birth: Optional[date] = Field(None, alias="dateOfBirth")

    class Config:
        populate_by_name = True

class UserProfile(BaseModel):
    """User as returned to clients; the password hash is never included"""
    id: int
    full_name: str
    email: EmailStr
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)

class AuthResponse(BaseModel):
    message: str = "Login successful"
    token: str
    user: UserProfile

class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "Registration successful"
    user_id: int = Field(..., alias="userId")

    class Config:
        populate_by_name = True

class TokenData(BaseModel):
    id: int
    email: str
