"""
Pydantic schemas for admin authentication.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, EmailStr, Field

from partymap_admin.schemas.common import ApiModel


# Request schemas

class AdminLogin(BaseModel):
    """Schema for admin login."""
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: str = "admin"


# Response schemas

class AdminUser(ApiModel):
    """Schema for the logged-in admin."""
    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    name: Optional[str] = None
    email: str
    role: Optional[str] = None


class LoginResponse(ApiModel):
    """Schema for the login response."""
    token: str = Field(..., validation_alias=AliasChoices("token", "accessToken", "access_token"))
    user: AdminUser
