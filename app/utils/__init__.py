from .responses import ok, error, validation_error_response, internal_error_response
from .auth import (
    auth_required,
    optional_auth,
    permission_required,
    current_actor,
    get_policy,
)
from .validation import validate_schema
from .db import transactional
from .jwt import (
    create_access_token,
    create_refresh_token,
    issue_tokens,
    decode_token,
    TokenError,
)
from .masking import mask_payment_details
from .pagination import page_args, paginate

__all__ = [
    'ok',
    'error',
    'validation_error_response',
    'internal_error_response',
    'auth_required',
    'optional_auth',
    'permission_required',
    'current_actor',
    'get_policy',
    'create_access_token',
    'create_refresh_token',
    'issue_tokens',
    'decode_token',
    'TokenError',
    'validate_schema',
    'transactional',
    'mask_payment_details',
    'page_args',
    'paginate',
]
