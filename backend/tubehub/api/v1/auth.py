"""Authentication endpoints: registration, login, logout, token refresh."""

from __future__ import annotations

from flask import Blueprint, request

from tubehub.api.deps import (
    REFRESH_COOKIE,
    api_response,
    build_account_service,
    build_token_service,
    clear_auth_cookies,
    current_account_id,
    require_auth,
    set_auth_cookies,
    timing,
    uploaded_file,
)
from tubehub.schemas import (
    AccountSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
)
from tubehub.services.accounts.dto import LoginIn, RegisterIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
account_schema = AccountSchema()
login_response_schema = LoginResponseSchema()
token_pair_schema = TokenPairSchema()


@bp.post("/register")
@timing
def register():
    """Create an account from multipart form fields plus avatar/cover files."""

    form = register_schema.load(request.form.to_dict())
    service = build_account_service()
    account = service.register(
        RegisterIn(
            email=form["email"],
            full_name=form["full_name"],
            username=form["username"],
            password=form["password"],
        ),
        avatar=uploaded_file("avatar"),
        cover_image=uploaded_file("coverImage"),
    )
    return api_response(
        account_schema.dump(account), status=201, message="User registered successfully"
    )


@bp.post("/login")
@timing
def login():
    """Authenticate credentials, then set both session cookies."""

    data = login_schema.load(request.get_json(silent=True) or {})
    service = build_account_service()
    result = service.login(
        LoginIn(email=data["email"], username=data["username"], password=data["password"])
    )
    body = login_response_schema.dump(
        {
            "user": result.account,
            "access_token": result.tokens.access_token,
            "refresh_token": result.tokens.refresh_token,
        }
    )
    response = api_response(body, message="User logged in successfully")
    return set_auth_cookies(response, result.tokens)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Invalidate the refresh session and clear both cookies."""

    build_account_service().logout(current_account_id())
    response = api_response({}, message="User logged out")
    return clear_auth_cookies(response)


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token from the cookie, or from the JSON body as fallback."""

    presented = request.cookies.get(REFRESH_COOKIE)
    if not presented:
        presented = refresh_schema.load(request.get_json(silent=True) or {})["refresh_token"]
    tokens = build_token_service().rotate(presented)
    response = api_response(token_pair_schema.dump(tokens), message="Access token refreshed")
    return set_auth_cookies(response, tokens)


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated account."""

    account = build_account_service().get_account(current_account_id())
    return api_response(account_schema.dump(account), message="User fetched successfully")
