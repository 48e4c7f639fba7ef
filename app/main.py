"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn app.main:app --port 3001 --reload
"""

import logging

from fastapi import FastAPI, Request  # The FastAPI framework
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware  # Cross-Origin Resource Sharing
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings  # Application settings
from app.core.errors import GatewayError
from app.core.logging import configure_logging
from app.routers import auth, users, google_auth, google_calendar, schedules  # Route handlers

configure_logging()
logger = logging.getLogger("gateway.main")

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# Only the recruitment web app (and its www. variant) may call this API
# from a browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# ERROR HANDLERS
# ---------------------------------------------------------------------------
# Every error leaves the API as {"success": false, "error": "<message>"}.


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}",
            exc_info=exc.__cause__ is not None,
        )
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or wrong types; missing fields are handled by the services
    return _error_response(400, "Invalid request body")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(500, "Internal server error")


# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# auth.router: /auth/signup, /auth/login
# users.router: /users/{id}, /users/{id}/profile, /users/{id}/password
# google_auth.router: /google/auth/connect|callback|disconnect|status
# google_calendar.router: /google/calendar/create-event
# schedules.router: /schedules/{user_id}
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(google_auth.router)
app.include_router(google_calendar.router)
app.include_router(schedules.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Does NOT check Baserow or Google connectivity.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
