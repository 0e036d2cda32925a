import time
import uuid
from datetime import datetime
from models import db
from models.order import Order
from models.payment import PaymentMethod
from . import NotFound, get_own_order, scoped


def simulate_payment(amount, payment_method_id=None, currency="USD") -> dict:
    """Stand-in for a payment gateway; always succeeds."""
    return {
        "success": True,
        "transaction_id": f"txn_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}",
        "amount": round(float(amount), 2),
        "currency": currency,
        "payment_method_id": payment_method_id if payment_method_id is not None else "default",
        "processed_at": datetime.utcnow().isoformat(),
        "status": "completed",
    }


def _own_methods(user_id: int):
    return PaymentMethod.query.filter_by(user_id=user_id)


def list_methods(actor):
    return (
        _own_methods(int(actor.id))
        .order_by(PaymentMethod.is_default.desc(), PaymentMethod.created_at.desc())
        .all()
    )


def _clear_default(user_id: int, keep_id=None):
    query = _own_methods(user_id).filter(PaymentMethod.is_default.is_(True))
    if keep_id is not None:
        query = query.filter(PaymentMethod.id != keep_id)
    for method in query.all():
        method.is_default = False


def add_method(actor, data) -> PaymentMethod:
    user_id = int(actor.id)
    existing = _own_methods(user_id).count()
    if data.is_default:
        _clear_default(user_id)
    method = PaymentMethod(
        user_id=user_id,
        type=data.type.value,
        details=data.details,
        is_default=data.is_default or existing == 0,
    )
    db.session.add(method)
    return method


def _get_method(method_id: int) -> PaymentMethod:
    method = db.session.get(PaymentMethod, method_id)
    if method is None:
        raise NotFound("Payment method not found")
    return method


def update_method(method_id: int, data) -> PaymentMethod:
    method = _get_method(method_id)
    if data.is_default:
        _clear_default(method.user_id, keep_id=method.id)
    if data.details:
        method.details = data.details
    if data.is_default is not None:
        method.is_default = data.is_default
    method.updated_at = datetime.utcnow()
    return method


def delete_method(method_id: int) -> None:
    method = _get_method(method_id)
    was_default = method.is_default
    user_id = method.user_id
    db.session.delete(method)
    db.session.flush()
    if was_default:
        replacement = (
            _own_methods(user_id).order_by(PaymentMethod.created_at.asc()).first()
        )
        if replacement is not None:
            replacement.is_default = True


def set_default_method(actor, method_id: int) -> PaymentMethod:
    user_id = int(actor.id)
    method = _own_methods(user_id).filter(PaymentMethod.id == method_id).first()
    if method is None:
        raise NotFound("Payment method not found")
    _clear_default(user_id, keep_id=method.id)
    method.is_default = True
    method.updated_at = datetime.utcnow()
    return method


def process_payment(policy, actor, data, currency="USD") -> dict:
    get_own_order(policy, actor, data.order_id)
    if data.payment_method_id is not None:
        method = _own_methods(int(actor.id)).filter(
            PaymentMethod.id == data.payment_method_id
        ).first()
        if method is None:
            raise NotFound("Payment method not found")
    return simulate_payment(data.amount, data.payment_method_id, data.currency or currency)


def payment_history_query(policy, actor):
    query = Order.query.filter(
        Order.user_id == int(actor.id),
        Order.payment_details.isnot(None),
    )
    query = scoped(query, policy, actor)
    return query.order_by(Order.created_at.desc(), Order.id.desc())


def history_entry(order: Order) -> dict:
    return {
        "order_id": order.id,
        "restaurant_name": order.restaurant.name if order.restaurant else "Unknown Restaurant",
        "amount": order.total_amount,
        "payment_details": order.payment_details,
        "order_status": order.status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }
