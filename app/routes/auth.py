import logging
from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    UpdateProfileRequest,
    ChangePasswordRequest,
)
from app.services.users import (
    InvalidCredentials,
    register_user,
    authenticate,
    update_profile,
    change_password,
)
from app.utils import (
    ok,
    error,
    auth_required,
    validate_schema,
    transactional,
    issue_tokens,
    decode_token,
    TokenError,
)
from models import db
from models.user import User

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")


@auth_bp.route("/register", methods=["POST"])
@validate_schema(RegisterRequest)
def register():
    data: RegisterRequest = request.validated_data
    with transactional("Failed to register user"):
        user = register_user(data)
    logger.info("Registered user %s role=%s country=%s", user.id, user.role, user.country)
    return ok({"user": user.to_dict(), **issue_tokens(user)},
              message="User registered successfully", status=201)


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many login attempts from this IP",
)
@validate_schema(LoginRequest)
def login():
    data: LoginRequest = request.validated_data
    try:
        user = authenticate(data.email, data.password)
    except InvalidCredentials as e:
        return error(str(e), status=401)
    return ok({"user": user.to_dict(), **issue_tokens(user)}, message="Login successful")


@auth_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refresh_token, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401)
    try:
        user = db.session.get(User, int(payload.get("sub")))
    except (TypeError, ValueError):
        user = None
    if user is None:
        return error("User not found", status=401)
    return ok(issue_tokens(user))


@auth_bp.route("/profile", methods=["GET"])
@auth_required
def get_profile():
    return ok({"user": request.user.to_dict()})


@auth_bp.route("/profile", methods=["PUT"])
@auth_required
@validate_schema(UpdateProfileRequest)
def put_profile():
    with transactional("Failed to update profile"):
        user = update_profile(request.user, request.validated_data)
    return ok({"user": user.to_dict()}, message="Profile updated successfully")


@auth_bp.route("/change-password", methods=["PUT"])
@auth_required
@validate_schema(ChangePasswordRequest)
def put_password():
    data: ChangePasswordRequest = request.validated_data
    with transactional("Failed to change password"):
        change_password(request.user, data.current_password, data.new_password)
    return ok(message="Password changed successfully")


@auth_bp.route("/logout", methods=["POST"])
@auth_required
def logout():
    # Tokens are stateless; the client discards them.
    return ok(message="Logged out")


@auth_bp.route("/verify", methods=["GET"])
@auth_required
def verify():
    return ok({"valid": True, "user": request.user.to_dict()})
