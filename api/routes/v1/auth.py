"""
api/routes/v1/auth.py -- Signup and signin endpoints.

Routes:
  POST /api/v1/auth/signup   -- create account; 201 + access token
  POST /api/v1/auth/signin   -- password login; 200 + access token

Security:
  Signin is rate-limited per client IP (SIGNIN_RATE_LIMIT, default 10/minute).
  AuthService.signin() provides timing equalization -- use it, never inline
  find_by_email() + verify().
  Unknown email and wrong password return the same body and status.
  Cache-Control: no-store on every response that carries a token.

Both handlers are plain `def`: FastAPI runs them in its threadpool, so the
Argon2 work does not block the event loop for unrelated requests.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.errors import http_error
from api.limiter import limiter, signin_limit
from api.models import AuthRequest, TokenResponse
from auth.models import AuthOutcome
from auth.service import AuthService

# Auth policy:
# - POST /api/v1/auth/signup: public
# - POST /api/v1/auth/signin: public, rate-limited
router = APIRouter()


def _token_response(request: Request, outcome: AuthOutcome, status_code: int) -> JSONResponse:
    if not outcome.ok:
        raise http_error(outcome.error)
    resp = JSONResponse(
        status_code=status_code,
        content=TokenResponse(
            access_token=outcome.token,
            expires_in=request.app.state.token_issuer.lifetime_seconds,
        ).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/auth/signup", response_model=TokenResponse, status_code=201)
def signup(request: Request, body: AuthRequest) -> JSONResponse:
    """Register a new account and return a session token.

    403 credentials_taken if the email is already registered.
    """
    auth_service: AuthService = request.app.state.auth_service
    outcome = auth_service.signup(body.email, body.password)
    return _token_response(request, outcome, 201)


@router.post("/auth/signin", response_model=TokenResponse)
# Closest to the function: the router must register the rate-limited wrapper.
@limiter.limit(signin_limit)
def signin(request: Request, body: AuthRequest) -> JSONResponse:
    """Authenticate with email and password and return a session token.

    403 credentials_mismatch for an unknown email or a wrong password.
    """
    auth_service: AuthService = request.app.state.auth_service
    outcome = auth_service.signin(body.email, body.password)
    return _token_response(request, outcome, 200)
