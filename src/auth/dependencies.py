from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from src.auth.schemas import TokenData
from src.auth.utils import decode_access_token
from src.exceptions import AuthError

# auto_error=False so a missing header is reported as 401 rather than FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenData:
    """Resolve the caller's identity from ``Authorization: Bearer <token>``"""
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")

    return decode_access_token(credentials.credentials)
