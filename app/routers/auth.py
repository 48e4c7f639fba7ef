"""
Auth router - handles account signup and login endpoints.
These are public endpoints (no authentication required).
"""

from fastapi import APIRouter, Depends, status  # FastAPI components

from app.deps import get_identity_service  # Builds IdentityService per request
from app.schemas.auth import SignupRequest, LoginRequest, AuthResponse
from app.services.identity_service import IdentityService

# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
# - prefix="/auth": All routes here will be under /auth (e.g., /auth/login)
# - tags=["auth"]: Groups these endpoints together in the OpenAPI docs
router = APIRouter(prefix="/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# POST /auth/signup - Create a new account
# ---------------------------------------------------------------------------
@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    """
    Register a new recruiter account.

    Returns:
        AuthResponse with the public profile (never the password hash)

    Raises:
        400 Bad Request: name, email or password missing
        409 Conflict: email already registered, in any letter case
    """
    user = await identity.signup(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        company=payload.company,
        phone=payload.phone,
    )
    return AuthResponse(user=user)


# ---------------------------------------------------------------------------
# POST /auth/login - Check credentials and return the profile
# ---------------------------------------------------------------------------
@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    """
    Authenticate a user.

    Raises:
        400 Bad Request: email or password missing
        401 Unauthorized: unknown email or wrong password (same message for both,
            so the endpoint can't be used to find out which emails exist)
    """
    user = await identity.login(email=payload.email, password=payload.password)
    return AuthResponse(user=user)
