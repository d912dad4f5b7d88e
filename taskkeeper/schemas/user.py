"""
Registration and login payloads, and the user view handed back with a token.
The stored password hash has no field here, so it cannot leak into a response.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

# --- Input Schemas (Requests / Commands) ---


class RegisterRequest(BaseModel):
    """
    Schema for user registration. The password is hashed by the AuthService and
    never stored or returned as given.
    """

    username: str = Field(..., min_length=3, max_length=50, description="Unique display handle")
    email: EmailStr = Field(..., description="User's unique email address")
    password: str = Field(..., min_length=6, description="User's password (min 6 characters, will be hashed)")


class LoginRequest(BaseModel):
    """Email + password. No length rule on the password: a wrong one fails as bad credentials."""

    email: EmailStr = Field(..., description="Address the account was registered with")
    password: str = Field(..., description="Password to verify against the stored hash")


# --- Output Schemas ---


class PublicUser(BaseModel):
    """
    User information safe to hand to a client. Deliberately has no
    password_hash field, so mapping from the ORM object drops it.
    """

    model_config = {"from_attributes": True}

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="User's display handle")
    email: str = Field(..., description="User's email address")
    created_at: datetime = Field(..., description="Date and time of registration")


class AuthResponse(BaseModel):
    """Returned by both register and login."""

    user: PublicUser
    token: str = Field(..., description="Opaque bearer token naming the user")
