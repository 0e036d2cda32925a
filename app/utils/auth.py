import logging
from functools import wraps
from flask import request, g, current_app
from .responses import error
from .jwt import decode_token, TokenError
from app.auth.policy import Actor
from app.telemetry import tag_current_span
from models import db
from models.user import User

logger = logging.getLogger(__name__)


def _bearer_token():
    auth = request.headers.get("Authorization", "")
    if not auth:
        return None
    return auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth


def _load_actor(token):
    """Resolve a verified token to (user, actor); raises TokenError."""
    payload = decode_token(token, expected_type="access")
    try:
        user = db.session.get(User, int(payload["sub"]))
    except (KeyError, TypeError, ValueError):
        raise TokenError("invalid token")
    if user is None:
        raise TokenError("user not found")
    try:
        actor = Actor.from_user(user)
    except ValueError:
        logger.error("User %s has an incomplete identity", user.id)
        raise TokenError("invalid identity")
    return user, actor


def current_actor():
    return getattr(g, "actor", None)


def get_policy():
    return current_app.access_policy


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        g.pop("actor", None)
        token = _bearer_token()
        if not token:
            return error("Access token required", status=401)
        try:
            user, actor = _load_actor(token)
        except TokenError as e:
            return error(str(e), status=401)
        g.actor = actor
        tag_current_span(actor)
        request.user = user
        return func(*args, **kwargs)

    return wrapper


def optional_auth(func):
    """Attach the actor when a valid token is present, otherwise continue anonymously."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        g.pop("actor", None)
        token = _bearer_token()
        if token:
            try:
                user, actor = _load_actor(token)
            except TokenError as e:
                logger.debug("Optional auth failed: %s", e)
            else:
                g.actor = actor
                tag_current_span(actor)
                request.user = user
        return func(*args, **kwargs)

    return wrapper


def permission_required(action, allow_anonymous=False):
    """Gate a view on the permission catalog via the app's access policy."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            actor = current_actor()
            if actor is None:
                if allow_anonymous:
                    return fn(*args, **kwargs)
                return error("Authentication required", status=401)
            get_policy().require(actor, action)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
