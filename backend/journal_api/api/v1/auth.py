"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint

from journal_api.api.deps import (
    build_auth_service,
    build_registration_service,
    current_user_id,
    get_json_body,
    json_response,
    require_auth,
    timing,
)
from journal_api.schemas import (
    LoginSchema,
    RefreshTokenSchema,
    SignupSchema,
    TokenPairSchema,
    UserPublicSchema,
)
from journal_api.services import LoginIn, LogoutIn, RefreshIn, UserRegistrationIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_schema = SignupSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
token_schema = TokenPairSchema()
user_schema = UserPublicSchema()


@bp.post("/signup")
@timing
def signup():
    """Register a new user together with default notification settings."""

    payload = signup_schema.load(get_json_body())
    user = build_registration_service().register(UserRegistrationIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(get_json_body())
    pair = build_auth_service().login(LoginIn(user_id=data["user_id"], password=data["password"]))
    return json_response({"data": token_schema.dump(pair)})


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Exchange a stored refresh token for a new access token."""

    data = refresh_schema.load(get_json_body())
    pair = build_auth_service().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    return json_response({"data": token_schema.dump(pair)})


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the caller's refresh token."""

    build_auth_service().logout(LogoutIn(user_id=current_user_id()))
    return "", 204
