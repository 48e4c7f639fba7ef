"""
User schemas - Pydantic models for user-related API requests and responses.
These control what user data is exposed in API responses (never the password hash!).
"""

from pydantic import AliasChoices, BaseModel, Field

from app.models.user import User


class UserOut(BaseModel):
    """
    Public profile of a user.

    Built field by field from User in from_user(); the password hash and the
    refresh token itself are never copied in, only whether a Google grant
    exists.

    Example response:
    {
        "id": 42,
        "name": "Ana Souza",
        "email": "ana@acme.com",
        "company": "Acme",
        "phone": "+55 11 99999-0000",
        "avatar_url": null,
        "google_connected": false
    }
    """
    id: int
    name: str | None = None
    email: str | None = None
    company: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    google_connected: bool = False

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            company=user.company,
            phone=user.phone,
            avatar_url=user.avatar_url,
            google_connected=user.google_connected,
        )


class ProfileUpdate(BaseModel):
    """
    Schema for PATCH /users/{id}/profile.

    Only name, company and avatar_url can be changed; any other key in the
    body is ignored.
    """
    name: str | None = Field(None, validation_alias=AliasChoices("name", "nome"))
    company: str | None = Field(None, validation_alias=AliasChoices("company", "empresa"))
    avatar_url: str | None = Field(None, validation_alias=AliasChoices("avatar_url", "avatarUrl"))


class PasswordChange(BaseModel):
    """Schema for PATCH /users/{id}/password."""
    password: str | None = None


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserOut


class MessageResponse(BaseModel):
    success: bool = True
    message: str
