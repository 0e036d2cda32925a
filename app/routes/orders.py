from datetime import datetime
from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.auth.permissions import Action
from app.schemas.order import OrderCreate, PlaceOrderRequest, OrderStatusUpdate
from app.services import orders as svc
from app.utils import (
    ok,
    error,
    auth_required,
    permission_required,
    validate_schema,
    transactional,
    current_actor,
    get_policy,
    page_args,
    paginate,
)

orders_bp = Blueprint("orders", __name__, url_prefix=f"{API_PREFIX}/orders")


@orders_bp.before_request
@auth_required
def _require_login():
    """Every order endpoint needs an authenticated actor."""
    return None


def _date_arg(name):
    value = request.args.get(name)
    if not value:
        return None
    return datetime.fromisoformat(value)


@orders_bp.route("", methods=["GET"])
def list_orders():
    page, limit = page_args()
    try:
        start_date, end_date = _date_arg("start_date"), _date_arg("end_date")
    except ValueError:
        return error("Dates must be ISO 8601", status=400)
    query = svc.list_orders_query(
        get_policy(),
        current_actor(),
        status=request.args.get("status"),
        restaurant_id=request.args.get("restaurant_id", type=int),
        start_date=start_date,
        end_date=end_date,
    )
    items, pagination = paginate(query, page, limit)
    return ok({
        "orders": [o.to_dict() for o in items],
        "pagination": pagination,
    })


@orders_bp.route("/<int:order_id>", methods=["GET"])
def get_order(order_id):
    order = svc.get_own_order(get_policy(), current_actor(), order_id)
    return ok({"order": order.to_dict()})


@orders_bp.route("", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@permission_required(Action.CREATE_ORDER)
@validate_schema(OrderCreate)
def create_order():
    with transactional("Order creation failed"):
        order = svc.create_order(get_policy(), current_actor(), request.validated_data)
    return ok({"order": order.to_dict()}, message="Order created successfully", status=201)


@orders_bp.route("/<int:order_id>/place", methods=["POST"])
@permission_required(Action.PLACE_ORDER)
@validate_schema(PlaceOrderRequest)
def place_order(order_id):
    data: PlaceOrderRequest = request.validated_data
    with transactional("Failed to place order"):
        order, payment = svc.place_order(
            get_policy(),
            current_actor(),
            order_id,
            payment_method_id=data.payment_method_id,
            currency=current_app.config["PAYMENT_CURRENCY"],
        )
    return ok({"order": order.to_dict(), "payment": payment},
              message="Order placed successfully")


@orders_bp.route("/<int:order_id>", methods=["DELETE"])
@permission_required(Action.CANCEL_ORDER)
def cancel_order(order_id):
    with transactional("Failed to cancel order"):
        order = svc.cancel_order(get_policy(), current_actor(), order_id)
    return ok({"order": order.to_dict()}, message="Order cancelled successfully")


@orders_bp.route("/<int:order_id>/status", methods=["PUT"])
@validate_schema(OrderStatusUpdate)
def update_status(order_id):
    data: OrderStatusUpdate = request.validated_data
    with transactional("Failed to update order status"):
        order = svc.update_order_status(get_policy(), current_actor(), order_id, data.status)
    return ok({"order": order.to_dict()}, message="Order status updated successfully")
