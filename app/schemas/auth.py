"""
Auth schemas - Pydantic models for signup/login request and response bodies.

Required fields are declared optional here on purpose: a missing field must
produce our own 400 ValidationError from the identity service, not
FastAPI's 422. The web app still sends the Portuguese names (nome, empresa,
telefone), so those are accepted as aliases.
"""

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.user import UserOut


class SignupRequest(BaseModel):
    """
    Schema for POST /auth/signup request body.

    Example request body:
    {
        "name": "Ana Souza",
        "company": "Acme",
        "phone": "+55 11 99999-0000",
        "email": "ana@acme.com",
        "password": "secret1"
    }
    """
    name: str | None = Field(None, validation_alias=AliasChoices("name", "nome"))
    company: str | None = Field(None, validation_alias=AliasChoices("company", "empresa"))
    phone: str | None = Field(None, validation_alias=AliasChoices("phone", "telefone"))
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """Schema for POST /auth/login request body."""
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    """
    Response for signup and login.

    No session token is issued; the web app keeps the returned profile and
    sends the user id on later calls.
    """
    success: bool = True
    user: UserOut
