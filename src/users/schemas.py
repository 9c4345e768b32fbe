from pydantic import BaseModel, Field, validator
from typing import Optional

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None

    @validator('full_name')
    def validate_full_name(cls, v):
        # Omitting the field leaves the name alone; clearing it is not allowed
        if v is None:
            raise ValueError('Full name cannot be empty')
        return v

class MessageResponse(BaseModel):
    message: str
