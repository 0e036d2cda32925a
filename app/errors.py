import logging
from flask import Blueprint
from werkzeug.exceptions import HTTPException
from app.auth.policy import AccessDenied
from app.metrics import ACCESS_DENIED
from app.services import ServiceError
from app.utils.responses import error, internal_error_response

errors_bp = Blueprint("errors_bp", __name__)
logger = logging.getLogger(__name__)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(AccessDenied)
def handle_access_denied(e):
    # OutOfPartition renders exactly like the record's own not-found error
    ACCESS_DENIED.labels(e.reason.value).inc()
    logger.info("Access denied (%s): %s", e.reason.value, e)
    return error(str(e), status=e.status_code)


@errors_bp.app_errorhandler(ServiceError)
def handle_service_error(e):
    return error(str(e), status=e.status_code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return internal_error_response()
