from flask import Blueprint, request, current_app
from app.version import API_PREFIX
from app.auth.permissions import Action
from app.schemas.payment import (
    PaymentMethodCreate,
    PaymentMethodUpdate,
    ProcessPaymentRequest,
)
from app.services import payments as svc
from app.utils import (
    ok,
    auth_required,
    permission_required,
    validate_schema,
    transactional,
    current_actor,
    get_policy,
    page_args,
    paginate,
)

payments_bp = Blueprint("payments", __name__, url_prefix=f"{API_PREFIX}/payments")


@payments_bp.before_request
@auth_required
def _require_login():
    """Every payment endpoint needs an authenticated actor."""
    return None


@payments_bp.route("/methods", methods=["GET"])
def list_methods():
    methods = svc.list_methods(current_actor())
    return ok({"payment_methods": [m.to_dict() for m in methods]})


@payments_bp.route("/methods", methods=["POST"])
@validate_schema(PaymentMethodCreate)
def add_method():
    with transactional("Failed to add payment method"):
        method = svc.add_method(current_actor(), request.validated_data)
    return ok({"payment_method": method.to_dict()},
              message="Payment method added successfully", status=201)


@payments_bp.route("/methods/<int:method_id>", methods=["PUT"])
@permission_required(Action.UPDATE_PAYMENT_METHOD)
@validate_schema(PaymentMethodUpdate)
def update_method(method_id):
    with transactional("Failed to update payment method"):
        method = svc.update_method(method_id, request.validated_data)
    return ok({"payment_method": method.to_dict()},
              message="Payment method updated successfully")


@payments_bp.route("/methods/<int:method_id>", methods=["DELETE"])
@permission_required(Action.UPDATE_PAYMENT_METHOD)
def delete_method(method_id):
    with transactional("Failed to delete payment method"):
        svc.delete_method(method_id)
    return ok(message="Payment method deleted successfully")


@payments_bp.route("/methods/<int:method_id>/default", methods=["PATCH"])
def set_default_method(method_id):
    with transactional("Failed to set default payment method"):
        svc.set_default_method(current_actor(), method_id)
    return ok(message="Default payment method updated successfully")


@payments_bp.route("/process", methods=["POST"])
@permission_required(Action.PLACE_ORDER)
@validate_schema(ProcessPaymentRequest)
def process_payment():
    payment = svc.process_payment(
        get_policy(),
        current_actor(),
        request.validated_data,
        currency=current_app.config["PAYMENT_CURRENCY"],
    )
    return ok({"payment": payment}, message="Payment processed successfully")


@payments_bp.route("/history", methods=["GET"])
def payment_history():
    page, limit = page_args()
    query = svc.payment_history_query(get_policy(), current_actor())
    items, pagination = paginate(query, page, limit)
    return ok({
        "payments": [svc.history_entry(o) for o in items],
        "pagination": pagination,
    })
