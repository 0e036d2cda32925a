from models import db
from models.order import Order


class ServiceError(Exception):
    status_code = 400


class ValidationError(ServiceError):
    pass


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409


def scoped(query, policy, actor):
    """Merge the actor's partition filter into a query on a partitioned model."""
    if actor is None:
        return query
    return query.filter_by(**policy.scope_filter(actor))


def get_own_order(policy, actor, order_id: int, statuses=None,
                  message: str = "Order not found") -> Order:
    """Fetch one of the actor's orders; foreign or missing orders look alike."""
    order = db.session.get(Order, order_id)
    if order is None or order.user_id != int(actor.id):
        raise NotFound(message)
    policy.ensure_partition(actor, order.country, message)
    if statuses is not None and order.status not in statuses:
        raise NotFound(message)
    return order


__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFound",
    "Conflict",
    "scoped",
    "get_own_order",
]
